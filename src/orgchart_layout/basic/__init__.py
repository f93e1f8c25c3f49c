"""
Basic layout algorithms.

This module provides simple placements that ignore edges:
- GridLayout: Row-major grid of node boxes
"""

from .grid import GridLayout

__all__ = ["GridLayout"]
