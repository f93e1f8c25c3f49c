"""
Org chart layout engine.

Positions every node of an OrgGraph:
1. Partition nodes into connected (touched by an edge) and orphaned
2. Lay out the connected subgraph with LayeredLayout
3. Place orphans on a GridLayout, to the left of the hierarchy when there is
   one, otherwise at the origin
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Union

from .base import DEFAULT_NODE_HEIGHT, DEFAULT_NODE_WIDTH, DEFAULT_ORIGIN, BoundingBox
from .basic.grid import (
    DEFAULT_COLUMN_WIDTH,
    DEFAULT_GRID_COLUMNS,
    DEFAULT_ROW_HEIGHT,
    GridLayout,
)
from .hierarchical.layered import (
    DEFAULT_CROSSING_ITERATIONS,
    DEFAULT_NODE_SEPARATION,
    DEFAULT_RANK_SEPARATION,
    LayeredLayout,
)
from .preprocessing import partition_connected
from .types import EdgeLike, GraphEdge, GraphNode, NodeLike, OrgGraph, Position
from .validation import (
    InvalidLayoutConfigError,
    validate_direction,
    validate_non_negative,
    validate_positive,
)

logger = logging.getLogger(__name__)

DEFAULT_ORPHAN_MARGIN = 100.0


@dataclass(frozen=True)
class LayoutConfig:
    """
    Geometry of an org chart layout.

    Attributes:
        direction: 'horizontal' (ranks left to right) or 'vertical'
            (ranks top to bottom); 'LR' and 'TB' are accepted
        node_width: Node box width
        node_height: Node box height
        node_separation: Gap between boxes in one rank
        rank_separation: Gap between consecutive ranks
        crossing_iterations: Barycenter sweeps
        grid_columns: Orphan grid cells per row
        grid_column_width: Orphan grid horizontal pitch
        grid_row_height: Orphan grid vertical pitch
        origin: Top-left corner of the hierarchy (or of the grid when alone)
        orphan_margin: Gap between the orphan grid and the hierarchy
    """

    direction: str = "horizontal"
    node_width: float = DEFAULT_NODE_WIDTH
    node_height: float = DEFAULT_NODE_HEIGHT
    node_separation: float = DEFAULT_NODE_SEPARATION
    rank_separation: float = DEFAULT_RANK_SEPARATION
    crossing_iterations: int = DEFAULT_CROSSING_ITERATIONS
    grid_columns: int = DEFAULT_GRID_COLUMNS
    grid_column_width: float = DEFAULT_COLUMN_WIDTH
    grid_row_height: float = DEFAULT_ROW_HEIGHT
    origin: tuple[float, float] = DEFAULT_ORIGIN
    orphan_margin: float = DEFAULT_ORPHAN_MARGIN

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", validate_direction(self.direction))
        validate_positive("node_width", self.node_width)
        validate_positive("node_height", self.node_height)
        validate_non_negative("node_separation", self.node_separation)
        validate_non_negative("rank_separation", self.rank_separation)
        validate_non_negative("orphan_margin", self.orphan_margin)
        validate_positive("grid_column_width", self.grid_column_width)
        validate_positive("grid_row_height", self.grid_row_height)
        for name in ("crossing_iterations", "grid_columns"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise InvalidLayoutConfigError(f"{name} must be an integer >= 1, got {value!r}")
        if len(self.origin) != 2:
            raise InvalidLayoutConfigError(f"origin must be (x, y), got {self.origin!r}")
        object.__setattr__(self, "origin", (float(self.origin[0]), float(self.origin[1])))

    @property
    def node_size(self) -> tuple[float, float]:
        """Node box as (width, height)."""
        return (float(self.node_width), float(self.node_height))


def _unique_nodes(nodes: Sequence[NodeLike]) -> list[GraphNode]:
    """GraphNode objects in input order; a repeated id keeps the first."""
    result: list[GraphNode] = []
    seen: set[str] = set()
    for item in nodes:
        node = item if isinstance(item, GraphNode) else GraphNode.from_dict(item)
        if node.id in seen:
            continue
        seen.add(node.id)
        result.append(node)
    return result


class LayoutEngine:
    """
    Assigns positions to org chart nodes.

    The engine holds only its configuration and may be shared between
    threads working on independent graphs.

    Example:
        engine = LayoutEngine(LayoutConfig(direction="vertical"))
        positioned = engine.layout(graph.nodes, graph.edges)
        positioned.node("1").position
    """

    def __init__(self, config: Optional[LayoutConfig] = None) -> None:
        """
        Initialize engine.

        Args:
            config: Layout geometry; defaults to LayoutConfig()
        """
        self._config = config if config is not None else LayoutConfig()

    @property
    def config(self) -> LayoutConfig:
        """Get the layout geometry."""
        return self._config

    def layout(
        self,
        nodes: Sequence[NodeLike],
        edges: Sequence[EdgeLike],
        direction: Optional[str] = None,
    ) -> OrgGraph:
        """
        Position every node.

        Args:
            nodes: Nodes to place (GraphNode objects or dicts)
            edges: Manager -> report edges (GraphEdge objects or dicts)
            direction: Overrides config.direction for this call

        Returns:
            OrgGraph of positioned node copies, in input order, and the edges

        Raises:
            InvalidDirectionError: If direction is unknown

        Warns:
            GraphStructureWarning: If the connected subgraph has a cycle
        """
        cfg = self._config
        flow = validate_direction(direction) if direction is not None else cfg.direction

        unique = _unique_nodes(nodes)
        edge_list = [e if isinstance(e, GraphEdge) else GraphEdge.from_dict(e) for e in edges]

        connected_ids, orphan_ids = partition_connected([n.id for n in unique], edge_list)
        by_id = {n.id: n for n in unique}

        positions: dict[str, Position] = {}
        bbox: Optional[BoundingBox] = None
        if connected_ids:
            layered = LayeredLayout(
                nodes=[by_id[i] for i in connected_ids],
                edges=edge_list,
                node_size=cfg.node_size,
                origin=cfg.origin,
                direction=flow,
                node_separation=cfg.node_separation,
                rank_separation=cfg.rank_separation,
                crossing_iterations=cfg.crossing_iterations,
            ).run()
            positions.update(layered.positions)
            bbox = layered.bounding_box()

        if orphan_ids:
            grid = GridLayout(
                nodes=[by_id[i] for i in orphan_ids],
                node_size=cfg.node_size,
                columns=cfg.grid_columns,
                column_width=cfg.grid_column_width,
                row_height=cfg.grid_row_height,
            )
            grid.origin = self._orphan_origin(grid, len(orphan_ids), bbox)
            positions.update(grid.run().positions)

        logger.debug(
            "Laid out %d nodes (%d connected, %d orphaned), direction=%s",
            len(unique),
            len(connected_ids),
            len(orphan_ids),
            flow,
        )
        placed = [replace(node, position=positions[node.id]) for node in unique]
        return OrgGraph(nodes=placed, edges=edge_list)

    def _orphan_origin(
        self, grid: GridLayout, count: int, bbox: Optional[BoundingBox]
    ) -> tuple[float, float]:
        """Grid origin: the config origin alone, else left of the hierarchy."""
        if bbox is None:
            return self._config.origin
        grid_width, _ = grid.extent(count)
        return (bbox.min_x - self._config.orphan_margin - grid_width, bbox.min_y)


def layout_graph(
    graph_or_nodes: Union[OrgGraph, Sequence[NodeLike]],
    edges: Optional[Sequence[EdgeLike]] = None,
    direction: str = "horizontal",
) -> OrgGraph:
    """
    Lay out a graph with a default LayoutEngine.

    Args:
        graph_or_nodes: An OrgGraph, or a node sequence used with ``edges``
        edges: Edges when nodes are passed separately
        direction: 'horizontal' or 'vertical'
    """
    if isinstance(graph_or_nodes, OrgGraph):
        nodes: Sequence[NodeLike] = graph_or_nodes.nodes
        edge_seq: Sequence[EdgeLike] = graph_or_nodes.edges if edges is None else edges
    else:
        nodes = graph_or_nodes
        edge_seq = edges if edges is not None else []
    return LayoutEngine().layout(nodes, edge_seq, direction)


__all__ = [
    "LayoutConfig",
    "LayoutEngine",
    "layout_graph",
    "DEFAULT_ORPHAN_MARGIN",
]
