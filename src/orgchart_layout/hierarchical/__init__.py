"""
Hierarchical layout for reporting graphs.

This module provides:
- LayeredLayout: Sugiyama-style ranks with barycenter crossing reduction
"""

from .layered import GraphStructureWarning, LayeredLayout

__all__ = [
    "LayeredLayout",
    "GraphStructureWarning",
]
