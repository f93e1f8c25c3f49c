"""
DOT (Graphviz) export for org charts.

Generates a digraph carrying the node and edge styling, so the chart can be
rendered with ``dot`` or, with positions pinned, ``neato -n``.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..base import DEFAULT_NODE_HEIGHT, DEFAULT_NODE_WIDTH
from ..types import GraphEdge, GraphNode, OrgGraph, StrokeWidthClass
from ..validation import validate_direction

_PENWIDTHS = {
    StrokeWidthClass.NORMAL: "1.0",
    StrokeWidthClass.OVERLAPPING: "2.5",
}


def to_dot(
    graph: OrgGraph,
    *,
    name: str = "OrgChart",
    direction: str = "horizontal",
    include_positions: bool = True,
    node_width: float = DEFAULT_NODE_WIDTH,
    node_height: float = DEFAULT_NODE_HEIGHT,
    graph_attrs: Optional[dict[str, str]] = None,
    get_node_label: Optional[Callable[[GraphNode], str]] = None,
) -> str:
    """
    Export an org chart to DOT (Graphviz) format.

    Args:
        graph: OrgGraph, positioned or not
        name: Name of the graph (default "OrgChart")
        direction: 'horizontal' (rankdir=LR) or 'vertical' (rankdir=TB)
        include_positions: Emit pinned ``pos`` attributes for positioned nodes
        node_width: Card width in pixels (converted at 72 dpi)
        node_height: Card height in pixels (converted at 72 dpi)
        graph_attrs: Additional graph-level attributes
        get_node_label: Callable(node) -> str for custom node labels

    Returns:
        DOT format string representation of the chart
    """
    rankdir = "LR" if validate_direction(direction) == "horizontal" else "TB"

    lines = [f"digraph {_quote_id(name)} {{"]

    all_graph_attrs: dict[str, str] = {"rankdir": rankdir}
    if graph_attrs:
        all_graph_attrs.update(graph_attrs)
    lines.append(_format_attrs_block("graph", all_graph_attrs))
    lines.append(
        _format_attrs_block(
            "node",
            {
                "shape": "box",
                "style": "rounded,filled",
                "fillcolor": "#FFFFFF",
                "width": f"{node_width / 72:.2f}",
                "height": f"{node_height / 72:.2f}",
                "fixedsize": "true",
            },
        )
    )
    lines.append("")

    for node in graph.nodes:
        node_data: dict[str, str] = {
            "label": get_node_label(node) if get_node_label else _default_label(node),
        }
        if node.border_color:
            node_data["color"] = node.border_color
        if node.fill_color:
            node_data["fillcolor"] = node.fill_color
        if include_positions and node.position is not None:
            # Graphviz pos is the centre, in points, with y pointing up
            cx = node.position.x + node_width / 2
            cy = node.position.y + node_height / 2
            node_data["pos"] = f"{cx:.2f},{-cy:.2f}!"
        lines.append(f"  {_quote_id(node.id)}{_format_attrs(node_data)};")

    lines.append("")

    for edge in graph.edges:
        lines.append(
            f"  {_quote_id(edge.source_id)} -> {_quote_id(edge.target_id)}"
            f"{_format_attrs(_edge_attrs(edge))};"
        )

    lines.append("}")

    return "\n".join(lines)


def _default_label(node: GraphNode) -> str:
    if node.immediate_child_count:
        return f"{node.display_name}\n{node.role} ({node.immediate_child_count})"
    return f"{node.display_name}\n{node.role}"


def _edge_attrs(edge: GraphEdge) -> dict[str, str]:
    attrs: dict[str, str] = {"id": edge.id}
    if edge.stroke_color:
        attrs["color"] = edge.stroke_color
    if edge.dashed:
        attrs["style"] = "dashed"
    attrs["penwidth"] = _PENWIDTHS[edge.stroke_width_class]
    return attrs


def _escape(s: str) -> str:
    return s.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _quote_id(s: str) -> str:
    """Quote a DOT identifier if necessary."""
    if not s:
        return '""'

    # Simple identifiers don't need quoting
    if s.isidentifier() or s.isdigit():
        return s

    return f'"{_escape(s)}"'


def _format_attrs(attrs: dict[str, str]) -> str:
    """Format attributes as DOT attribute list."""
    if not attrs:
        return ""
    return " [" + ", ".join(f'{key}="{_escape(value)}"' for key, value in attrs.items()) + "]"


def _format_attrs_block(element: str, attrs: dict[str, str]) -> str:
    """Format a default attributes block."""
    parts = ", ".join(f'{key}="{_escape(value)}"' for key, value in attrs.items())
    return f"  {element} [{parts}];"


__all__ = ["to_dot"]
