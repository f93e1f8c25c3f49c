"""
SVG export for positioned org charts.

Draws each node as a card (border and fill colours, name, role and a
direct-report badge) and each edge as an arrow carrying its stroke colour,
dash pattern and overlap weight.
"""

from __future__ import annotations

from typing import Optional
from xml.sax.saxutils import escape

from ..base import DEFAULT_NODE_HEIGHT, DEFAULT_NODE_WIDTH
from ..types import GraphEdge, GraphNode, OrgGraph, Position, StrokeWidthClass
from ..validation import UnpositionedNodeError

_STROKE_WIDTHS = {
    StrokeWidthClass.NORMAL: 1.5,
    StrokeWidthClass.OVERLAPPING: 3.0,
}


def to_svg(
    graph: OrgGraph,
    *,
    node_width: float = DEFAULT_NODE_WIDTH,
    node_height: float = DEFAULT_NODE_HEIGHT,
    node_stroke_width: float = 2.0,
    default_fill: str = "#FFFFFF",
    label_color: str = "#212121",
    font_size: float = 13.0,
    font_family: str = "sans-serif",
    padding: float = 40.0,
    background: Optional[str] = None,
    show_badges: bool = True,
) -> str:
    """
    Export a positioned org chart to SVG.

    Args:
        graph: OrgGraph returned by LayoutEngine.layout()
        node_width: Card width (should match the layout's node width)
        node_height: Card height (should match the layout's node height)
        node_stroke_width: Card border width
        default_fill: Card background when a node has no fill colour
        label_color: Text colour
        font_size: Name font size; the role line is drawn smaller
        font_family: Font family for all text
        padding: Padding around the chart (default 40)
        background: Background color (default None for transparent)
        show_badges: Draw the direct-report count on managers

    Returns:
        SVG string representation of the chart

    Raises:
        UnpositionedNodeError: If a node has no position
    """
    nodes = graph.nodes
    if not nodes:
        return _empty_svg(100, 100, background)

    positions = _positions(nodes)
    min_x = min(p.x for p in positions.values())
    min_y = min(p.y for p in positions.values())
    max_x = max(p.x for p in positions.values()) + node_width
    max_y = max(p.y for p in positions.values()) + node_height

    width = max_x - min_x + 2 * padding
    height = max_y - min_y + 2 * padding
    offset_x = padding - min_x
    offset_y = padding - min_y

    svg_parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{width:.1f}" height="{height:.1f}" '
        f'viewBox="0 0 {width:.1f} {height:.1f}">'
    ]

    # One arrow-head per marker colour
    marker_colors = sorted({e.marker_color for e in graph.edges if e.marker_color})
    if marker_colors:
        svg_parts.append("  <defs>")
        for color in marker_colors:
            svg_parts.append(_render_marker(color))
        svg_parts.append("  </defs>")

    if background:
        svg_parts.append(f'  <rect width="100%" height="100%" fill="{escape(background)}"/>')

    svg_parts.append('  <g class="edges">')
    for edge in graph.edges:
        edge_svg = _render_edge(edge, positions, offset_x, offset_y, node_width, node_height)
        if edge_svg:
            svg_parts.append(edge_svg)
    svg_parts.append("  </g>")

    svg_parts.append('  <g class="nodes">')
    for node in nodes:
        svg_parts.append(
            _render_node(
                node,
                positions[node.id],
                offset_x,
                offset_y,
                node_width,
                node_height,
                node_stroke_width,
                default_fill,
                label_color,
                font_size,
                font_family,
                show_badges,
            )
        )
    svg_parts.append("  </g>")

    svg_parts.append("</svg>")

    return "\n".join(svg_parts)


def _positions(nodes: list[GraphNode]) -> dict[str, Position]:
    positions: dict[str, Position] = {}
    for node in nodes:
        if node.position is None:
            raise UnpositionedNodeError(
                f"Node {node.id!r} has no position; run LayoutEngine.layout() first"
            )
        positions.setdefault(node.id, node.position)
    return positions


def _empty_svg(width: float, height: float, background: Optional[str]) -> str:
    """Generate an empty SVG."""
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{width}" height="{height}" viewBox="0 0 {width} {height}">'
    ]
    if background:
        parts.append(f'  <rect width="100%" height="100%" fill="{escape(background)}"/>')
    parts.append("</svg>")
    return "\n".join(parts)


def _marker_id(color: str) -> str:
    return "arrow-" + color.lstrip("#").lower()


def _render_marker(color: str) -> str:
    return (
        f'    <marker id="{_marker_id(color)}" viewBox="0 0 10 10" refX="10" refY="5" '
        f'markerWidth="8" markerHeight="8" orient="auto-start-reverse">'
        f'<path d="M 0 0 L 10 5 L 0 10 z" fill="{escape(color)}"/></marker>'
    )


def _anchor_points(
    src: Position, tgt: Position, width: float, height: float
) -> tuple[float, float, float, float]:
    """Attach to facing sides: left/right when mostly horizontal, else top/bottom."""
    dx = tgt.x - src.x
    dy = tgt.y - src.y
    if abs(dx) >= abs(dy):
        x1 = src.x + (width if dx >= 0 else 0.0)
        x2 = tgt.x + (0.0 if dx >= 0 else width)
        return x1, src.y + height / 2, x2, tgt.y + height / 2
    y1 = src.y + (height if dy >= 0 else 0.0)
    y2 = tgt.y + (0.0 if dy >= 0 else height)
    return src.x + width / 2, y1, tgt.x + width / 2, y2


def _render_edge(
    edge: GraphEdge,
    positions: dict[str, Position],
    offset_x: float,
    offset_y: float,
    node_width: float,
    node_height: float,
) -> Optional[str]:
    """Render a single edge as an arrow; None for dangling or self edges."""
    src = positions.get(edge.source_id)
    tgt = positions.get(edge.target_id)
    if src is None or tgt is None or edge.source_id == edge.target_id:
        return None

    x1, y1, x2, y2 = _anchor_points(src, tgt, node_width, node_height)
    attrs = [
        f'x1="{x1 + offset_x:.1f}" y1="{y1 + offset_y:.1f}"',
        f'x2="{x2 + offset_x:.1f}" y2="{y2 + offset_y:.1f}"',
        f'stroke="{escape(edge.stroke_color or "#000000")}"',
        f'stroke-width="{_STROKE_WIDTHS[edge.stroke_width_class]}"',
    ]
    if edge.dashed:
        attrs.append('stroke-dasharray="6,4"')
    if edge.marker_color:
        attrs.append(f'marker-end="url(#{_marker_id(edge.marker_color)})"')

    return f'    <line id="{escape(edge.id)}" {" ".join(attrs)}/>'


def _render_node(
    node: GraphNode,
    pos: Position,
    offset_x: float,
    offset_y: float,
    width: float,
    height: float,
    stroke_width: float,
    default_fill: str,
    label_color: str,
    font_size: float,
    font_family: str,
    show_badge: bool,
) -> str:
    """Render a node card with its labels."""
    x = pos.x + offset_x
    y = pos.y + offset_y
    cx = x + width / 2
    fill = node.fill_color or default_fill
    stroke = node.border_color or "#000000"
    text_style = (
        f'fill="{escape(label_color)}" font-family="{escape(font_family)}" text-anchor="middle"'
    )

    parts = [
        f'    <g class="node" id="node-{escape(node.id)}">',
        f'      <rect x="{x:.1f}" y="{y:.1f}" width="{width:.1f}" height="{height:.1f}" '
        f'fill="{escape(fill)}" stroke="{escape(stroke)}" '
        f'stroke-width="{stroke_width}" rx="6"/>',
        f'      <text x="{cx:.1f}" y="{y + height * 0.4:.1f}" {text_style} '
        f'font-size="{font_size}" font-weight="bold">{escape(node.display_name)}</text>',
        f'      <text x="{cx:.1f}" y="{y + height * 0.7:.1f}" {text_style} '
        f'font-size="{font_size * 0.85:.1f}">{escape(node.role)}</text>',
    ]

    if show_badge and node.immediate_child_count > 0:
        bx = x + width - 14
        by = y + 14
        parts.append(
            f'      <circle cx="{bx:.1f}" cy="{by:.1f}" r="10" fill="{escape(stroke)}"/>'
        )
        parts.append(
            f'      <text x="{bx:.1f}" y="{by:.1f}" fill="#FFFFFF" '
            f'font-family="{escape(font_family)}" font-size="{font_size * 0.8:.1f}" '
            f'text-anchor="middle" dominant-baseline="central">'
            f"{node.immediate_child_count}</text>"
        )

    parts.append("    </g>")
    return "\n".join(parts)


__all__ = ["to_svg"]
