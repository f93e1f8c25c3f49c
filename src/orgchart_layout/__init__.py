"""
orgchart-layout: reporting structures to styled, positioned org charts.

This package turns nested person records into a directed graph styled per
view mode, then positions every node.

Components:
- builder: People -> OrgGraph for the organizational, departmental and
  dotted-line views
- colors: Stable department colours (border plus blended fill)
- engine: Layered layout of the hierarchy plus a grid for orphans
- export: SVG and Graphviz DOT output
"""

__version__ = "0.1.0"

# Base classes for building layouts
from .base import (
    BaseLayout,
    BoundingBox,
    StaticLayout,
)

# Grid layout
from .basic import GridLayout

# Graph building
from .builder import GraphBuilder, build_graph

# End-to-end pipeline
from .chart import build_org_chart, chart_changed

# Colours
from .colors import (
    DEFAULT_PALETTE,
    ChartStyle,
    ColorAssigner,
    ColorCache,
    ColorPair,
    hash_label,
    mix_with_white,
)

# Layout engine
from .engine import LayoutConfig, LayoutEngine, layout_graph

# Layered layout
from .hierarchical import GraphStructureWarning, LayeredLayout

# Preprocessing utilities
from .preprocessing import (
    assign_layers_longest_path,
    count_crossings,
    detect_cycle,
    has_cycle,
    minimize_crossings_barycenter,
    partition_connected,
    remove_cycles,
)
from .types import (
    EdgeKind,
    EdgeLike,
    Event,
    EventType,
    GraphEdge,
    GraphNode,
    NodeLike,
    OrgGraph,
    PersonLike,
    PersonRecord,
    Position,
    StrokeWidthClass,
    ViewMode,
)

# Validation utilities
from .validation import (
    InvalidColorError,
    InvalidDirectionError,
    InvalidEdgeError,
    InvalidLayoutConfigError,
    MalformedRecordWarning,
    UnpositionedNodeError,
    ValidationError,
)
from .views import ViewPolicy, policy_for

__all__ = [
    # Version
    "__version__",
    # Shared types
    "PersonRecord",
    "GraphNode",
    "GraphEdge",
    "OrgGraph",
    "Position",
    "ViewMode",
    "EdgeKind",
    "StrokeWidthClass",
    "EventType",
    "Event",
    # Type aliases for API
    "PersonLike",
    "NodeLike",
    "EdgeLike",
    # Building
    "GraphBuilder",
    "build_graph",
    "ViewPolicy",
    "policy_for",
    # Colours
    "DEFAULT_PALETTE",
    "ColorAssigner",
    "ColorCache",
    "ColorPair",
    "ChartStyle",
    "hash_label",
    "mix_with_white",
    # Layout
    "BaseLayout",
    "StaticLayout",
    "BoundingBox",
    "LayeredLayout",
    "GridLayout",
    "GraphStructureWarning",
    "LayoutConfig",
    "LayoutEngine",
    "layout_graph",
    # Pipeline
    "build_org_chart",
    "chart_changed",
    # Validation
    "ValidationError",
    "InvalidColorError",
    "InvalidDirectionError",
    "InvalidLayoutConfigError",
    "InvalidEdgeError",
    "UnpositionedNodeError",
    "MalformedRecordWarning",
    # Preprocessing
    "partition_connected",
    "detect_cycle",
    "has_cycle",
    "remove_cycles",
    "assign_layers_longest_path",
    "minimize_crossings_barycenter",
    "count_crossings",
]
