"""
Per-view-mode graph policies.

Each ViewMode maps to one immutable ViewPolicy, selected once per build, so
the builder never compares mode values itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .types import ViewMode


@dataclass(frozen=True)
class ViewPolicy:
    """
    What a view mode changes in the built graph.

    Attributes:
        include_secondary_edges: Emit dotted-line edges (and darken overlaps)
        count_secondary_as_children: Dotted-line reports count as children
        color_by_department: Nodes and primary edges take department colours
    """

    include_secondary_edges: bool = False
    count_secondary_as_children: bool = False
    color_by_department: bool = False


_POLICIES: dict[ViewMode, ViewPolicy] = {
    ViewMode.ORGANIZATIONAL: ViewPolicy(),
    ViewMode.DEPARTMENTAL: ViewPolicy(color_by_department=True),
    ViewMode.DOTTED_LINE: ViewPolicy(
        include_secondary_edges=True,
        count_secondary_as_children=True,
    ),
}


def policy_for(mode: Union[ViewMode, str]) -> ViewPolicy:
    """
    Get the policy of a view mode.

    Args:
        mode: ViewMode or its string value ("dotted-line" is accepted)

    Raises:
        ValueError: If the mode is unknown
    """
    return _POLICIES[ViewMode(mode)]


__all__ = ["ViewPolicy", "policy_for"]
