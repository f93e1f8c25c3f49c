"""
End-to-end chart pipeline: people -> styled graph -> positioned graph.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

from .builder import GraphBuilder
from .engine import LayoutEngine
from .types import OrgGraph, PersonLike, ViewMode


def build_org_chart(
    people: Sequence[PersonLike],
    mode: Union[ViewMode, str] = ViewMode.ORGANIZATIONAL,
    direction: str = "horizontal",
    *,
    builder: Optional[GraphBuilder] = None,
    engine: Optional[LayoutEngine] = None,
) -> OrgGraph:
    """
    Build the graph for ``mode`` and lay it out.

    Args:
        people: Top-level person records or wire-shape dicts
        mode: Active view mode
        direction: 'horizontal' or 'vertical'
        builder: Builder to use (shares its colour cache across calls)
        engine: Engine to use (its config supplies everything but direction)

    Returns:
        Positioned OrgGraph

    Example:
        chart = build_org_chart(people, "departmental", "vertical")
    """
    builder = builder if builder is not None else GraphBuilder()
    engine = engine if engine is not None else LayoutEngine()
    graph = builder.build(people, mode)
    return engine.layout(graph.nodes, graph.edges, direction)


def _visual(item: Any) -> dict[str, Any]:
    data = item.to_dict()
    data.pop("position", None)
    return data


def chart_changed(current: OrgGraph, previous: Optional[OrgGraph]) -> bool:
    """
    Whether ``current`` differs visually from ``previous``.

    Positions are ignored: the layout is a function of the rest. True when
    there is no previous chart, the node or edge counts differ, an id is new,
    or a node or edge payload changed.
    """
    if previous is None:
        return True
    if len(current.nodes) != len(previous.nodes) or len(current.edges) != len(previous.edges):
        return True

    old_nodes = {n.id: n for n in previous.nodes}
    for node in current.nodes:
        old = old_nodes.get(node.id)
        if old is None or _visual(old) != _visual(node):
            return True

    old_edges = {e.id: e for e in previous.edges}
    for edge in current.edges:
        old_edge = old_edges.get(edge.id)
        if old_edge is None or _visual(old_edge) != _visual(edge):
            return True

    return False


__all__ = ["build_org_chart", "chart_changed"]
