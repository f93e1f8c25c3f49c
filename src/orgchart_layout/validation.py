"""
Input validation utilities for org chart building and layout.

Provides centralized validation functions for colours, directions, layout
dimensions and edge endpoints. Raises descriptive exceptions on invalid
configuration; malformed *data* is reported through warnings instead.
"""

from __future__ import annotations

import math
import re
from typing import Any, Collection, Sequence


class ValidationError(ValueError):
    """Base exception for validation errors."""

    pass


class InvalidColorError(ValidationError):
    """Raised when a colour string or palette is malformed."""

    pass


class InvalidDirectionError(ValidationError):
    """Raised when a layout direction is unknown."""

    pass


class InvalidLayoutConfigError(ValidationError):
    """Raised when layout dimensions or spacing are invalid."""

    pass


class InvalidEdgeError(ValidationError):
    """Raised when an edge references unknown nodes."""

    pass


class UnpositionedNodeError(ValidationError):
    """Raised when an operation needs positions that were never assigned."""

    pass


class MalformedRecordWarning(UserWarning):
    """Warning issued when a person record cannot be used (e.g. missing id)."""

    pass


_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

DIRECTION_ALIASES: dict[str, str] = {
    "horizontal": "horizontal",
    "lr": "horizontal",
    "left-to-right": "horizontal",
    "vertical": "vertical",
    "tb": "vertical",
    "top-to-bottom": "vertical",
}


def validate_color(color: str) -> str:
    """
    Validate a ``#RGB`` or ``#RRGGBB`` colour.

    Args:
        color: Colour string

    Returns:
        The colour, unchanged

    Raises:
        InvalidColorError: If the colour is not a hex colour
    """
    if not isinstance(color, str) or not _HEX_COLOR.match(color):
        raise InvalidColorError(f"Expected a #RGB or #RRGGBB colour, got {color!r}")
    return color


def validate_palette(palette: Sequence[str]) -> tuple[str, ...]:
    """
    Validate a categorical palette.

    Args:
        palette: Ordered colours

    Returns:
        Palette as a tuple

    Raises:
        InvalidColorError: If the palette is empty or holds a bad colour
    """
    if len(palette) == 0:
        raise InvalidColorError("Palette must contain at least one colour")
    return tuple(validate_color(c) for c in palette)


def validate_blend_factor(factor: float) -> float:
    """
    Validate a mix-toward-white factor.

    Raises:
        ValidationError: If factor not in [0, 1]
    """
    if not 0.0 <= factor <= 1.0:
        raise ValidationError(f"blend factor must be in [0, 1], got {factor}")
    return float(factor)


def validate_direction(direction: str) -> str:
    """
    Validate and normalise a layout direction.

    Accepts ``"horizontal"``/``"LR"`` and ``"vertical"``/``"TB"``.

    Returns:
        ``"horizontal"`` or ``"vertical"``

    Raises:
        InvalidDirectionError: If the direction is unknown
    """
    normalized = DIRECTION_ALIASES.get(str(direction).lower())
    if normalized is None:
        raise InvalidDirectionError(
            f"direction must be 'horizontal' or 'vertical' (or 'LR'/'TB'), got {direction!r}"
        )
    return normalized


def validate_positive(name: str, value: float) -> float:
    """
    Validate a strictly positive, finite dimension.

    Raises:
        InvalidLayoutConfigError: If value <= 0 or not finite
    """
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidLayoutConfigError(f"{name} must be positive, got {value}")
    return value


def validate_non_negative(name: str, value: float) -> float:
    """
    Validate a non-negative, finite spacing.

    Raises:
        InvalidLayoutConfigError: If value < 0 or not finite
    """
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise InvalidLayoutConfigError(f"{name} must be >= 0, got {value}")
    return value


def validate_node_size(size: Sequence[float]) -> tuple[float, float]:
    """
    Validate node box dimensions.

    Args:
        size: [width, height] sequence

    Returns:
        Validated (width, height) tuple

    Raises:
        InvalidLayoutConfigError: If dimensions are invalid
    """
    if len(size) < 2:
        raise InvalidLayoutConfigError(
            f"Node size must have 2 elements [width, height], got {len(size)}"
        )
    return validate_positive("node width", size[0]), validate_positive("node height", size[1])


def validate_edge_endpoints(
    edges: Sequence[Any],
    node_ids: Collection[str],
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that every edge endpoint names a known node.

    Args:
        edges: Sequence of GraphEdge objects
        node_ids: Ids of the nodes in the graph
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (edge_index, issue_description) tuples

    Raises:
        InvalidEdgeError: If strict=True and dangling edges found
    """
    issues: list[tuple[int, str]] = []

    for i, edge in enumerate(edges):
        if edge.source_id not in node_ids:
            issues.append((i, f"Edge {edge.id}: unknown source {edge.source_id!r}"))
        if edge.target_id not in node_ids:
            issues.append((i, f"Edge {edge.id}: unknown target {edge.target_id!r}"))

    if strict and issues:
        msg = "Invalid edge endpoints:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidEdgeError(msg)

    return issues


__all__ = [
    "ValidationError",
    "InvalidColorError",
    "InvalidDirectionError",
    "InvalidLayoutConfigError",
    "InvalidEdgeError",
    "UnpositionedNodeError",
    "MalformedRecordWarning",
    "DIRECTION_ALIASES",
    "validate_color",
    "validate_palette",
    "validate_blend_factor",
    "validate_direction",
    "validate_positive",
    "validate_non_negative",
    "validate_node_size",
    "validate_edge_endpoints",
]
