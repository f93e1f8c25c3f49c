"""
Reporting structure -> styled graph.

GraphBuilder walks a list of people whose managers are nested person
records, emits one node per distinct id and one edge per manager relation,
and styles both according to the active view mode:

1. Direct-report index (one pass over the top-level list)
2. Visited-set walk creating nodes and edges
3. Overlap darkening of primary/secondary edges joining the same pair
"""

from __future__ import annotations

import logging
import warnings
from collections import defaultdict
from typing import Iterator, Optional, Sequence, Union

from .colors import ChartStyle, ColorAssigner
from .types import (
    EdgeKind,
    GraphEdge,
    GraphNode,
    OrgGraph,
    PersonLike,
    PersonRecord,
    StrokeWidthClass,
    ViewMode,
    coerce_person,
    edge_id,
)
from .validation import MalformedRecordWarning
from .views import ViewPolicy, policy_for

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


def display_name_of(person: PersonRecord) -> str:
    """``full_name`` if set, else first and last name joined (may be empty)."""
    if person.full_name:
        return person.full_name
    return f"{person.first_name} {person.last_name}".strip()


def index_direct_reports(
    people: Sequence[PersonRecord], policy: ViewPolicy
) -> dict[str, set[str]]:
    """
    Map each manager key to the keys of its direct reports.

    Only the top-level records are scanned. Secondary managers count when the
    policy says so; a report related both ways is counted once, and a person
    never counts as their own report.
    """
    reports: dict[str, set[str]] = defaultdict(set)
    for person in people:
        key = person.key
        if key is None:
            continue
        managers = list(person.primary_managers)
        if policy.count_secondary_as_children:
            managers.extend(person.secondary_managers)
        for manager in managers:
            manager_key = manager.key
            if manager_key is not None and manager_key != key:
                reports[manager_key].add(key)
    return reports


class GraphBuilder:
    """
    Builds an OrgGraph from nested person records.

    Example:
        builder = GraphBuilder()
        graph = builder.build(
            [
                {"id": 1, "fullName": "Ada"},
                {"id": 2, "fullName": "Bob", "primaryManagers": [{"id": 1}]},
            ],
            ViewMode.ORGANIZATIONAL,
        )
        [e.id for e in graph.edges]  # ['reporting-1-2']
    """

    def __init__(
        self,
        *,
        color_assigner: Optional[ColorAssigner] = None,
        style: Optional[ChartStyle] = None,
    ) -> None:
        """
        Initialize builder.

        Args:
            color_assigner: Department colour source. A fresh assigner with
                its own cache is created when omitted.
            style: Non-categorical colours (default border, edge colours)
        """
        self._colors = color_assigner if color_assigner is not None else ColorAssigner()
        self._style = style if style is not None else ChartStyle()

    @property
    def color_assigner(self) -> ColorAssigner:
        """Get the department colour source."""
        return self._colors

    @property
    def style(self) -> ChartStyle:
        """Get the non-categorical colours."""
        return self._style

    def build(
        self,
        people: Sequence[PersonLike],
        mode: Union[ViewMode, str] = ViewMode.ORGANIZATIONAL,
    ) -> OrgGraph:
        """
        Build the styled graph for one view mode.

        Args:
            people: Top-level records (PersonRecord or wire-shape dicts)
            mode: Active view mode

        Returns:
            OrgGraph with unpositioned nodes, in walk order

        Warns:
            MalformedRecordWarning: For each record or manager without an id
        """
        policy = policy_for(mode)
        records = [coerce_person(p) for p in people]
        reports = index_direct_reports(records, policy)

        walk = _Walk(self, policy, reports)
        for record in records:
            if record.key is None:
                warnings.warn(
                    f"Skipping person without an id: {record!r}",
                    MalformedRecordWarning,
                    stacklevel=2,
                )
                continue
            walk.visit(record)

        for message in walk.malformed:
            warnings.warn(message, MalformedRecordWarning, stacklevel=2)

        if policy.include_secondary_edges:
            self._darken_overlaps(walk.edges)

        logger.debug(
            "Built %s graph: %d nodes, %d edges from %d records",
            ViewMode(mode).value,
            len(walk.nodes),
            len(walk.edges),
            len(records),
        )
        return OrgGraph(nodes=walk.nodes, edges=walk.edges)

    # -------------------------------------------------------------------------
    # Styling
    # -------------------------------------------------------------------------

    def _make_node(
        self, person: PersonRecord, policy: ViewPolicy, child_count: int
    ) -> GraphNode:
        department = person.department or NOT_AVAILABLE
        if policy.color_by_department:
            pair = self._colors.color_pair_for(department)
            border, fill = pair.border, pair.fill
        else:
            border, fill = self._style.default_border_color, None

        return GraphNode(
            id=str(person.key),
            display_name=display_name_of(person),
            role=person.role or NOT_AVAILABLE,
            department=department,
            immediate_child_count=child_count,
            border_color=border,
            fill_color=fill,
        )

    def _make_edge(
        self, kind: EdgeKind, manager_key: str, report: PersonRecord, policy: ViewPolicy
    ) -> GraphEdge:
        report_key = str(report.key)
        if kind is EdgeKind.SECONDARY:
            color = self._style.secondary_edge_color
        elif policy.color_by_department:
            color = self._colors.color_pair_for(report.department).border
        else:
            color = self._style.default_edge_color

        return GraphEdge(
            id=edge_id(kind, manager_key, report_key),
            source_id=manager_key,
            target_id=report_key,
            kind=kind,
            stroke_color=color,
            marker_color=color,
            dashed=kind is EdgeKind.SECONDARY,
        )

    def _darken_overlaps(self, edges: list[GraphEdge]) -> None:
        """Recolour primary/secondary edge pairs that join the same two nodes."""
        groups: dict[frozenset[str], list[GraphEdge]] = defaultdict(list)
        for edge in edges:
            groups[frozenset((edge.source_id, edge.target_id))].append(edge)

        color = self._style.overlap_edge_color
        for group in groups.values():
            kinds = {edge.kind for edge in group}
            if len(kinds) < 2:
                continue
            for edge in group:
                edge.stroke_color = color
                edge.marker_color = color
                edge.stroke_width_class = StrokeWidthClass.OVERLAPPING


class _Walk:
    """State of one visited-set traversal."""

    def __init__(
        self, builder: GraphBuilder, policy: ViewPolicy, reports: dict[str, set[str]]
    ) -> None:
        self.builder = builder
        self.policy = policy
        self.reports = reports
        self.visited: set[str] = set()
        self.edge_ids: set[str] = set()
        self.nodes: list[GraphNode] = []
        self.edges: list[GraphEdge] = []
        self.malformed: list[str] = []

    def visit(self, root: PersonRecord) -> None:
        """
        Depth-first walk from ``root`` through nested managers.

        A node is emitted on first visit, and each manager edge is emitted
        just before that manager is entered. The explicit stack keeps this
        order for reporting chains of any depth.
        """
        if not self._enter(root):
            return

        stack: list[tuple[PersonRecord, Iterator[tuple[EdgeKind, PersonRecord]]]] = [
            (root, self._relations(root))
        ]
        while stack:
            person, relations = stack[-1]
            for kind, manager in relations:
                manager_key = manager.key
                if manager_key is None:
                    self.malformed.append(
                        f"Skipping {kind.value} manager without an id for person {person.key}"
                    )
                    continue

                edge = self.builder._make_edge(kind, manager_key, person, self.policy)
                if edge.id not in self.edge_ids:
                    self.edge_ids.add(edge.id)
                    self.edges.append(edge)

                if self._enter(manager):
                    stack.append((manager, self._relations(manager)))
                    break
            else:
                stack.pop()

    def _enter(self, person: PersonRecord) -> bool:
        key = person.key
        if key is None or key in self.visited:
            return False
        self.visited.add(key)

        child_count = len(self.reports.get(key, ()))
        self.nodes.append(self.builder._make_node(person, self.policy, child_count))
        return True

    def _relations(self, person: PersonRecord) -> Iterator[tuple[EdgeKind, PersonRecord]]:
        for manager in person.primary_managers:
            yield EdgeKind.PRIMARY, manager
        if self.policy.include_secondary_edges:
            for manager in person.secondary_managers:
                yield EdgeKind.SECONDARY, manager


def build_graph(
    people: Sequence[PersonLike],
    mode: Union[ViewMode, str] = ViewMode.ORGANIZATIONAL,
) -> OrgGraph:
    """Build a graph with a default GraphBuilder."""
    return GraphBuilder().build(people, mode)


__all__ = [
    "GraphBuilder",
    "build_graph",
    "display_name_of",
    "index_direct_reports",
    "NOT_AVAILABLE",
]
