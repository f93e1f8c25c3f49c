"""
Common types for org chart graphs.

This module provides the fundamental types shared by the builder, the
layouts and the exporters:
- PersonRecord: One person from the reporting structure, with nested managers
- ViewMode: Presentation mode selecting edges, colours and counts
- GraphNode: Styled vertex derived from a person
- GraphEdge: Styled manager -> report edge
- OrgGraph: Node/edge container returned by builder and layout
- EventType / Event: Layout lifecycle events
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Callable, Optional, TypedDict, Union


class EventType(IntEnum):
    """
    Layout lifecycle events.

    - start: Layout computation has begun
    - end: All positions are assigned
    """

    start = 0
    end = 1


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    node_count: int
    listener: Optional[Callable[[], None]]


class ViewMode(Enum):
    """Which relations and colours an org chart shows."""

    ORGANIZATIONAL = "organizational"
    DEPARTMENTAL = "departmental"
    DOTTED_LINE = "dottedLine"

    @classmethod
    def _missing_(cls, value: object) -> Optional[ViewMode]:
        if isinstance(value, str):
            normalized = value.replace("-", "").replace("_", "").lower()
            for member in cls:
                if member.value.lower() == normalized:
                    return member
        return None


class EdgeKind(Enum):
    """Relation an edge represents."""

    PRIMARY = "primary"
    SECONDARY = "secondary"

    @property
    def id_prefix(self) -> str:
        """Prefix used in edge identifiers."""
        return "reporting" if self is EdgeKind.PRIMARY else "dotted"


class StrokeWidthClass(Enum):
    """Stroke weight of an edge."""

    NORMAL = "normal"
    OVERLAPPING = "overlapping"


@dataclass(frozen=True)
class Position:
    """Top-left corner of a node box."""

    x: float
    y: float


# Keys accepted by PersonRecord.from_dict, first match wins
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "first_name": ("firstName", "first_name"),
    "last_name": ("lastName", "last_name"),
    "full_name": ("fullName", "full_name"),
    "role": ("role", "designation"),
    "department": ("department",),
    "primary_managers": ("primaryManagers", "primary_managers", "reportingManager"),
    "secondary_managers": ("secondaryManagers", "secondary_managers", "dottedProjectManager"),
}


def _lookup(data: dict[str, Any], name: str) -> Any:
    for key in _FIELD_ALIASES[name]:
        if data.get(key) is not None:
            return data[key]
    return None


@dataclass(eq=False)
class PersonRecord:
    """
    One person in the reporting structure.

    Manager entries are full records themselves, so the same person can be
    reachable from many places. ``key`` is the only identity that matters.

    Attributes:
        id: Unique person id (int; str ids are keyed by their string form)
        first_name: Given name
        last_name: Family name
        full_name: Preferred display name, may be empty
        role: Job title, None when unknown
        department: Category label, None when unknown
        primary_managers: Formal reporting managers, in order
        secondary_managers: Dotted-line / project managers, in order
    """

    id: Optional[Union[int, str]]
    first_name: str = ""
    last_name: str = ""
    full_name: str = ""
    role: Optional[str] = None
    department: Optional[str] = None
    primary_managers: list[PersonRecord] = field(default_factory=list)
    secondary_managers: list[PersonRecord] = field(default_factory=list)

    @property
    def key(self) -> Optional[str]:
        """String identity used for nodes and edges, None if id is missing."""
        if self.id is None:
            return None
        return str(self.id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PersonRecord:
        """
        Build a record from the camelCase shape used by the data layer.

        Nested manager dicts are converted with an explicit work list, so
        reporting chains of any depth are fine. A dict object reached more
        than once is converted once, so self-referencing input terminates.

        Args:
            data: Mapping with ``id``, ``firstName``, ``primaryManagers`` etc.

        Returns:
            New PersonRecord
        """
        memo: dict[int, PersonRecord] = {}
        pending: list[tuple[dict[str, Any], PersonRecord]] = []

        def convert(raw: dict[str, Any]) -> PersonRecord:
            cached = memo.get(id(raw))
            if cached is None:
                cached = cls._from_fields(raw)
                memo[id(raw)] = cached
                pending.append((raw, cached))
            return cached

        root = convert(data)
        while pending:
            raw, record = pending.pop()
            record.primary_managers = [
                m if isinstance(m, PersonRecord) else convert(m)
                for m in _lookup(raw, "primary_managers") or []
            ]
            record.secondary_managers = [
                m if isinstance(m, PersonRecord) else convert(m)
                for m in _lookup(raw, "secondary_managers") or []
            ]
        return root

    @classmethod
    def _from_fields(cls, data: dict[str, Any]) -> PersonRecord:
        """Scalar fields only; manager lists are filled in by from_dict."""
        return cls(
            id=data.get("id"),
            first_name=_lookup(data, "first_name") or "",
            last_name=_lookup(data, "last_name") or "",
            full_name=_lookup(data, "full_name") or "",
            role=_lookup(data, "role"),
            department=_lookup(data, "department"),
        )

    def __repr__(self) -> str:
        return f"PersonRecord(id={self.id!r}, name={self.full_name or self.first_name!r})"


PersonLike = Union[PersonRecord, dict[str, Any]]
"""Input type for people: PersonRecord objects or wire-shape dicts."""


def coerce_person(value: PersonLike) -> PersonRecord:
    """Return ``value`` as a PersonRecord, converting dicts."""
    if isinstance(value, PersonRecord):
        return value
    return PersonRecord.from_dict(value)


@dataclass
class GraphNode:
    """
    Styled org chart vertex.

    Attributes:
        id: String form of the person id
        display_name: Name shown on the card, may be empty
        role: Job title or "N/A"
        department: Department or "N/A"
        immediate_child_count: Direct reports under the active view mode
        border_color: Card border colour
        fill_color: Card background (departmental view only)
        position: Top-left corner, None until laid out
    """

    id: str
    display_name: str = ""
    role: str = "N/A"
    department: str = "N/A"
    immediate_child_count: int = 0
    border_color: str = ""
    fill_color: Optional[str] = None
    position: Optional[Position] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase dict consumed by renderers."""
        data: dict[str, Any] = {
            "id": self.id,
            "displayName": self.display_name,
            "role": self.role,
            "department": self.department,
            "immediateChildCount": self.immediate_child_count,
            "borderColor": self.border_color,
        }
        if self.fill_color is not None:
            data["fillColor"] = self.fill_color
        if self.position is not None:
            data["position"] = {"x": self.position.x, "y": self.position.y}
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GraphNode:
        """Inverse of to_dict(); snake_case keys are accepted too."""
        pos = data.get("position")
        position = None
        if isinstance(pos, Position):
            position = pos
        elif pos is not None:
            position = Position(float(pos["x"]), float(pos["y"]))
        return cls(
            id=str(data["id"]),
            display_name=data.get("displayName", data.get("display_name", "")),
            role=data.get("role", "N/A"),
            department=data.get("department", "N/A"),
            immediate_child_count=int(
                data.get("immediateChildCount", data.get("immediate_child_count", 0))
            ),
            border_color=data.get("borderColor", data.get("border_color", "")),
            fill_color=data.get("fillColor", data.get("fill_color")),
            position=position,
        )


def edge_id(kind: EdgeKind, source_id: str, target_id: str) -> str:
    """Deterministic edge identifier for a relation."""
    return f"{kind.id_prefix}-{source_id}-{target_id}"


@dataclass
class GraphEdge:
    """
    Styled manager -> report edge.

    Attributes:
        id: ``"<prefix>-<source>-<target>"``, unique per kind and pair
        source_id: Manager node id
        target_id: Report node id
        kind: Primary or secondary relation
        stroke_color: Line colour
        marker_color: Arrow-head colour
        dashed: Whether the line is dashed
        stroke_width_class: Normal or overlap-darkened weight
    """

    id: str
    source_id: str
    target_id: str
    kind: EdgeKind = EdgeKind.PRIMARY
    stroke_color: str = ""
    marker_color: str = ""
    dashed: bool = False
    stroke_width_class: StrokeWidthClass = StrokeWidthClass.NORMAL

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase dict consumed by renderers."""
        return {
            "id": self.id,
            "source": self.source_id,
            "target": self.target_id,
            "kind": self.kind.value,
            "strokeColor": self.stroke_color,
            "markerColor": self.marker_color,
            "dashed": self.dashed,
            "strokeWidthClass": self.stroke_width_class.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GraphEdge:
        """Inverse of to_dict(); ``source_id``/``target_id`` keys are accepted too."""
        source = str(data.get("source", data.get("source_id")))
        target = str(data.get("target", data.get("target_id")))
        kind = EdgeKind(data.get("kind", EdgeKind.PRIMARY.value))
        stroke = data.get("strokeColor", data.get("stroke_color", ""))
        return cls(
            id=data.get("id") or edge_id(kind, source, target),
            source_id=source,
            target_id=target,
            kind=kind,
            stroke_color=stroke,
            marker_color=data.get("markerColor", data.get("marker_color", stroke)),
            dashed=bool(data.get("dashed", False)),
            stroke_width_class=StrokeWidthClass(
                data.get("strokeWidthClass", data.get("stroke_width_class", "normal"))
            ),
        )

    def __repr__(self) -> str:
        return f"GraphEdge({self.source_id} -> {self.target_id}, {self.kind.value})"


@dataclass
class OrgGraph:
    """Nodes and edges of one org chart."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def node(self, node_id: str) -> Optional[GraphNode]:
        """Find a node by id."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def edge(self, edge_id: str) -> Optional[GraphEdge]:
        """Find an edge by id."""
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to ``{"nodes": [...], "edges": [...]}``."""
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


# Type aliases for Pythonic API
NodeLike = Union[GraphNode, dict[str, Any]]
"""Input type for layout nodes: GraphNode objects or dicts."""

EdgeLike = Union[GraphEdge, dict[str, Any]]
"""Input type for layout edges: GraphEdge objects or dicts."""


__all__ = [
    "EventType",
    "Event",
    "ViewMode",
    "EdgeKind",
    "StrokeWidthClass",
    "Position",
    "PersonRecord",
    "PersonLike",
    "coerce_person",
    "GraphNode",
    "GraphEdge",
    "OrgGraph",
    "edge_id",
    "NodeLike",
    "EdgeLike",
]
