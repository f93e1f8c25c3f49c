"""
Layered (Sugiyama-style) org chart layout.

Based on the framework from:
"Methods for Visual Understanding of Hierarchical System Structures"
by Sugiyama, Tagawa, and Toda (1981)

Phases:
1. Cycle removal (if needed)
2. Layer assignment by longest path from the sources
3. Crossing minimization (barycenter sweeps)
4. Coordinate assignment on a fixed grid of node boxes
"""

from __future__ import annotations

import warnings
from typing import Any, Callable, Optional, Sequence

from ..base import DEFAULT_NODE_HEIGHT, DEFAULT_NODE_WIDTH, DEFAULT_ORIGIN, StaticLayout
from ..preprocessing import (
    assign_layers_longest_path,
    detect_cycle,
    minimize_crossings_barycenter,
    remove_cycles,
)
from ..types import EdgeLike, Event, NodeLike, Position
from ..validation import validate_direction, validate_non_negative

DEFAULT_NODE_SEPARATION = 20.0
DEFAULT_RANK_SEPARATION = 70.0
DEFAULT_CROSSING_ITERATIONS = 24


class GraphStructureWarning(UserWarning):
    """Warning issued when graph structure doesn't match algorithm assumptions."""

    pass


class LayeredLayout(StaticLayout):
    """
    Layered layout for reporting hierarchies.

    Managers sit in earlier ranks than their reports. Ranks flow left to
    right (``"horizontal"``) or top to bottom (``"vertical"``); every rank is
    centred on the widest one and the drawing's top-left corner is
    ``origin``.

    Example:
        layout = LayeredLayout(
            nodes=graph.nodes,
            edges=graph.edges,
            direction="vertical",
        )
        layout.run()
        layout.positions["1"]
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        edges: Optional[Sequence[EdgeLike]] = None,
        node_size: Sequence[float] = (DEFAULT_NODE_WIDTH, DEFAULT_NODE_HEIGHT),
        origin: Sequence[float] = DEFAULT_ORIGIN,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
        # Layered-specific parameters
        direction: str = "horizontal",
        node_separation: float = DEFAULT_NODE_SEPARATION,
        rank_separation: float = DEFAULT_RANK_SEPARATION,
        crossing_iterations: int = DEFAULT_CROSSING_ITERATIONS,
    ) -> None:
        """
        Initialize layered layout.

        Args:
            nodes: Nodes to place
            edges: Manager -> report edges
            node_size: Node box as (width, height)
            origin: Top-left corner of the drawing
            on_start: Callback for start event
            on_end: Callback for end event
            direction: 'horizontal' (alias 'LR') or 'vertical' (alias 'TB').
            node_separation: Gap between neighbouring boxes in one rank.
            rank_separation: Gap between consecutive ranks.
            crossing_iterations: Number of barycenter sweeps.
        """
        super().__init__(
            nodes=nodes,
            edges=edges,
            node_size=node_size,
            origin=origin,
            on_start=on_start,
            on_end=on_end,
        )

        self._direction: str = validate_direction(direction)
        self._node_separation: float = validate_non_negative("node_separation", node_separation)
        self._rank_separation: float = validate_non_negative("rank_separation", rank_separation)
        self._crossing_iterations: int = max(1, int(crossing_iterations))

        # Internal state
        self._layers: list[list[int]] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def direction(self) -> str:
        """Get flow direction ('horizontal' or 'vertical')."""
        return self._direction

    @direction.setter
    def direction(self, value: str) -> None:
        """Set flow direction; 'LR' and 'TB' are accepted."""
        self._direction = validate_direction(value)

    @property
    def node_separation(self) -> float:
        """Get gap between boxes in the same rank."""
        return self._node_separation

    @node_separation.setter
    def node_separation(self, value: float) -> None:
        """Set gap between boxes in the same rank."""
        self._node_separation = validate_non_negative("node_separation", value)

    @property
    def rank_separation(self) -> float:
        """Get gap between consecutive ranks."""
        return self._rank_separation

    @rank_separation.setter
    def rank_separation(self, value: float) -> None:
        """Set gap between consecutive ranks."""
        self._rank_separation = validate_non_negative("rank_separation", value)

    @property
    def crossing_iterations(self) -> int:
        """Get number of crossing minimization sweeps."""
        return self._crossing_iterations

    @crossing_iterations.setter
    def crossing_iterations(self, value: int) -> None:
        """Set number of crossing minimization sweeps."""
        self._crossing_iterations = max(1, int(value))

    @property
    def layers(self) -> list[list[str]]:
        """Node ids per rank, in drawing order, from the last run()."""
        return [[self._nodes[i].id for i in layer] for layer in self._layers]

    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------

    def _acyclic_pairs(self) -> list[tuple[int, int]]:
        """Edge index pairs with any cycle broken by edge reversal."""
        pairs = self._index_pairs()
        cycle = detect_cycle(len(self._nodes), pairs)
        if cycle is not None:
            names = " -> ".join(self._nodes[i].id for i in cycle)
            warnings.warn(
                f"Reporting cycle found ({names}). "
                "Edges closing cycles are reversed for ranking.",
                GraphStructureWarning,
                stacklevel=4,
            )
            pairs, _ = remove_cycles(len(self._nodes), pairs)
        return pairs

    def _assign_coordinates(self) -> None:
        """Place each rank on a fixed pitch, centred on the widest rank."""
        width, height = self._node_size
        if self._direction == "horizontal":
            rank_pitch = width + self._rank_separation
            slot_pitch = height + self._node_separation
        else:
            rank_pitch = height + self._rank_separation
            slot_pitch = width + self._node_separation

        widest = max(len(layer) for layer in self._layers)
        span = widest * slot_pitch
        ox, oy = self._origin

        for rank, layer in enumerate(self._layers):
            offset = (span - len(layer) * slot_pitch) / 2
            along = rank * rank_pitch
            for slot, node_idx in enumerate(layer):
                across = offset + slot * slot_pitch
                if self._direction == "horizontal":
                    pos = Position(ox + along, oy + across)
                else:
                    pos = Position(ox + across, oy + along)
                self._positions[self._nodes[node_idx].id] = pos

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def _compute(self, **kwargs: Any) -> None:
        """Compute layered layout."""
        self._layers = []
        n = len(self._nodes)
        if n == 0:
            return

        pairs = self._acyclic_pairs()
        layers = assign_layers_longest_path(n, pairs)
        self._layers = minimize_crossings_barycenter(layers, pairs, self._crossing_iterations)
        self._assign_coordinates()


__all__ = [
    "LayeredLayout",
    "GraphStructureWarning",
    "DEFAULT_NODE_SEPARATION",
    "DEFAULT_RANK_SEPARATION",
    "DEFAULT_CROSSING_ITERATIONS",
]
