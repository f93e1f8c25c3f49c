"""
Base classes for org chart layouts.

This module provides abstract base classes that define the common interface
and shared functionality for the layout algorithms:

- BaseLayout: Abstract base with event system, node/edge management
- StaticLayout: For single-pass layouts (layered, grid)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

import numpy as np

if TYPE_CHECKING:
    from typing_extensions import Self

from .types import (
    EdgeLike,
    Event,
    EventType,
    GraphEdge,
    GraphNode,
    NodeLike,
    Position,
)
from .validation import validate_edge_endpoints, validate_node_size

DEFAULT_NODE_WIDTH = 246.0
DEFAULT_NODE_HEIGHT = 80.0
DEFAULT_ORIGIN: tuple[float, float] = (50.0, 50.0)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box around a set of node boxes."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        """Get box width."""
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        """Get box height."""
        return self.max_y - self.min_y


class BaseLayout(ABC):
    """
    Abstract base class for org chart layouts.

    Provides shared infrastructure:
    - Event system (start/end events)
    - Node/edge normalization via properties
    - Node size and origin management
    - Position bookkeeping keyed by node id

    Example:
        layout = SomeLayout(nodes=graph.nodes, edges=graph.edges)
        layout.run()

        for node_id, pos in layout.positions.items():
            print(f"{node_id}: ({pos.x}, {pos.y})")
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
    ) -> None:
        """
        Initialize layout with configuration.

        Args:
            nodes: Nodes to place (GraphNode objects or dicts)
            edges: Edges between them (GraphEdge objects or dicts)
            node_size: Node box as (width, height)
            origin: Top-left corner of the layout's bounding box
            on_start: Callback for start event
            on_end: Callback for end event
        """
        self._nodes: list[GraphNode] = []
        self._edges: list[GraphEdge] = []
        self._node_size: tuple[float, float] = (DEFAULT_NODE_WIDTH, DEFAULT_NODE_HEIGHT)
        self._origin: tuple[float, float] = DEFAULT_ORIGIN
        self._positions: dict[str, Position] = {}
        self._events: dict[EventType, Callable[[Optional[Event]], None]] = {}

        if nodes is not None:
            self.nodes = nodes
        if edges is not None:
            self.edges = edges
        self.node_size = node_size
        self.origin = origin

        if on_start:
            self._events[EventType.start] = on_start
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> list[GraphNode]:
        """Get the list of nodes."""
        return self._nodes

    @nodes.setter
    def nodes(self, value: Sequence[NodeLike]) -> None:
        """Set nodes from GraphNode objects or dicts; repeated ids keep the first."""
        self._nodes = []
        seen: set[str] = set()
        for node_data in value:
            node = node_data if isinstance(node_data, GraphNode) else GraphNode.from_dict(node_data)
            if node.id in seen:
                continue
            seen.add(node.id)
            self._nodes.append(node)

    @property
    def edges(self) -> list[GraphEdge]:
        """Get the list of edges."""
        return self._edges

    @edges.setter
    def edges(self, value: Sequence[EdgeLike]) -> None:
        """Set edges from GraphEdge objects or dicts."""
        self._edges = [e if isinstance(e, GraphEdge) else GraphEdge.from_dict(e) for e in value]

    @property
    def node_size(self) -> tuple[float, float]:
        """Get node box size as (width, height)."""
        return self._node_size

    @node_size.setter
    def node_size(self, value: Sequence[float]) -> None:
        """
        Set node box size.

        Raises:
            InvalidLayoutConfigError: If width or height is not positive.
        """
        self._node_size = validate_node_size(value)

    @property
    def origin(self) -> tuple[float, float]:
        """Get the top-left corner of the layout."""
        return self._origin

    @origin.setter
    def origin(self, value: Sequence[float]) -> None:
        """Set the top-left corner of the layout."""
        self._origin = (float(value[0]), float(value[1]))

    @property
    def positions(self) -> dict[str, Position]:
        """Get positions assigned by the last run(), keyed by node id."""
        return self._positions

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: Callable[[Optional[Event]], None]) -> Self:
        """
        Subscribe to a layout event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """Trigger an event, calling the registered callback."""
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> Self:
        """
        Check that every edge endpoint is one of the nodes.

        Layouts tolerate dangling edges; call this for fail-fast behavior.

        Returns:
            self (for chaining)

        Raises:
            InvalidEdgeError: If any edge references an unknown node id.
        """
        if self._edges:
            validate_edge_endpoints(self._edges, {n.id for n in self._nodes}, strict=True)
        return self

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Returns:
            self (for chaining)
        """
        pass

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _index_pairs(self) -> list[tuple[int, int]]:
        """Edges as node index pairs, dropping self-loops and dangling edges."""
        index = {node.id: i for i, node in enumerate(self._nodes)}
        pairs: list[tuple[int, int]] = []
        for edge in self._edges:
            src = index.get(edge.source_id)
            tgt = index.get(edge.target_id)
            if src is None or tgt is None or src == tgt:
                continue
            pairs.append((src, tgt))
        return pairs

    def bounding_box(self) -> Optional[BoundingBox]:
        """
        Box around every placed node, including node size.

        Returns:
            BoundingBox, or None before run() or for an empty layout
        """
        if not self._positions:
            return None
        corners = np.array([(p.x, p.y) for p in self._positions.values()], dtype=float)
        width, height = self._node_size
        min_x, min_y = corners.min(axis=0)
        max_x, max_y = corners.max(axis=0)
        return BoundingBox(float(min_x), float(min_y), float(max_x + width), float(max_y + height))

    def apply(self) -> list[GraphNode]:
        """
        Copies of the nodes with their assigned positions.

        Nodes without a position (not placed by this layout) are copied
        unchanged.
        """
        placed: list[GraphNode] = []
        for node in self._nodes:
            pos = self._positions.get(node.id, node.position)
            placed.append(replace(node, position=pos))
        return placed


class StaticLayout(BaseLayout):
    """
    Base class for single-pass layouts.

    These layouts compute positions in one pass without iteration.

    Example:
        layout = GridLayout(nodes=nodes, columns=3)
        layout.run()
    """

    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Fires start event, computes positions, fires end event.

        Args:
            **kwargs: Additional arguments passed to _compute()

        Returns:
            self (for chaining)
        """
        self._positions = {}
        self.trigger({"type": EventType.start, "node_count": len(self._nodes)})

        # Subclasses implement _compute()
        self._compute(**kwargs)

        self.trigger({"type": EventType.end, "node_count": len(self._positions)})
        return self

    @abstractmethod
    def _compute(self, **kwargs: Any) -> None:
        """
        Compute node positions.

        Subclasses must fill ``self._positions`` for every node they place.
        """
        pass


__all__ = [
    "DEFAULT_NODE_WIDTH",
    "DEFAULT_NODE_HEIGHT",
    "DEFAULT_ORIGIN",
    "BoundingBox",
    "BaseLayout",
    "StaticLayout",
]
