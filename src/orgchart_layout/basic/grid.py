"""
Grid layout algorithm.

Places nodes row by row on a fixed grid, ignoring edges. The org chart
engine uses it for people with no reporting relations.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from ..base import DEFAULT_NODE_HEIGHT, DEFAULT_NODE_WIDTH, DEFAULT_ORIGIN, StaticLayout
from ..types import EdgeLike, Event, NodeLike, Position
from ..validation import validate_positive

DEFAULT_GRID_COLUMNS = 3
DEFAULT_COLUMN_WIDTH = 300.0
DEFAULT_ROW_HEIGHT = 120.0


class GridLayout(StaticLayout):
    """
    Grid layout - row-major placement on fixed cells.

    Node ``i`` (in input order) goes to column ``i % columns`` and row
    ``i // columns``; its top-left corner is
    ``origin + (column * column_width, row * row_height)``.

    Example:
        layout = GridLayout(nodes=orphans, columns=3)
        layout.run()
        layout.positions["7"]  # Position(x=50.0, y=50.0)
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
        # Grid-specific parameters
        columns: int = DEFAULT_GRID_COLUMNS,
        column_width: float = DEFAULT_COLUMN_WIDTH,
        row_height: float = DEFAULT_ROW_HEIGHT,
    ) -> None:
        """
        Initialize Grid layout.

        Args:
            nodes: List of nodes
            edges: List of edges (not used for positioning)
            node_size: Node box as (width, height)
            origin: Top-left corner of the first cell
            on_start: Callback for start event
            on_end: Callback for end event
            columns: Cells per row
            column_width: Horizontal pitch between cells
            row_height: Vertical pitch between rows
        """
        super().__init__(
            nodes=nodes,
            edges=edges,
            node_size=node_size,
            origin=origin,
            on_start=on_start,
            on_end=on_end,
        )

        self._columns: int = int(validate_positive("columns", columns))
        self._column_width: float = validate_positive("column_width", column_width)
        self._row_height: float = validate_positive("row_height", row_height)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def columns(self) -> int:
        """Get number of cells per row."""
        return self._columns

    @columns.setter
    def columns(self, value: int) -> None:
        """Set number of cells per row."""
        self._columns = int(validate_positive("columns", value))

    @property
    def column_width(self) -> float:
        """Get horizontal cell pitch."""
        return self._column_width

    @column_width.setter
    def column_width(self, value: float) -> None:
        """Set horizontal cell pitch."""
        self._column_width = validate_positive("column_width", value)

    @property
    def row_height(self) -> float:
        """Get vertical cell pitch."""
        return self._row_height

    @row_height.setter
    def row_height(self, value: float) -> None:
        """Set vertical cell pitch."""
        self._row_height = validate_positive("row_height", value)

    def extent(self, count: int) -> tuple[float, float]:
        """
        Width and height covered by ``count`` node boxes on this grid.

        Returns:
            (width, height); (0, 0) when count is 0
        """
        if count <= 0:
            return (0.0, 0.0)
        cols = min(self._columns, count)
        rows = (count + self._columns - 1) // self._columns
        width, height = self._node_size
        return (
            (cols - 1) * self._column_width + width,
            (rows - 1) * self._row_height + height,
        )

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def _compute(self, **kwargs: Any) -> None:
        """Compute grid positions."""
        ox, oy = self._origin
        for i, node in enumerate(self._nodes):
            row, col = divmod(i, self._columns)
            self._positions[node.id] = Position(
                ox + col * self._column_width,
                oy + row * self._row_height,
            )


__all__ = [
    "GridLayout",
    "DEFAULT_GRID_COLUMNS",
    "DEFAULT_COLUMN_WIDTH",
    "DEFAULT_ROW_HEIGHT",
]
