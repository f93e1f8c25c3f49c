"""
Categorical colour assignment for org chart nodes and edges.

Department labels are hashed into a fixed palette to get a stable border
colour; the card fill is the border mixed toward white. Results are cached
per label in an injectable ColorCache.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import numpy as np

from .validation import validate_blend_factor, validate_color, validate_palette

DEFAULT_PALETTE: tuple[str, ...] = (
    "#E53935",
    "#D81B60",
    "#8E24AA",
    "#5E35B1",
    "#3949AB",
    "#1E88E5",
    "#039BE5",
    "#00ACC1",
    "#00897B",
    "#43A047",
    "#7CB342",
    "#C0CA33",
    "#FDD835",
    "#FFB300",
    "#FB8C00",
    "#F4511E",
    "#6D4C41",
    "#757575",
    "#546E7A",
    "#AD1457",
)

FILL_BLEND_FACTOR = 0.85
DEFAULT_CATEGORY_COLOR = "#9E9E9E"
SENTINEL_LABELS: frozenset[str] = frozenset({"N/A", "Default"})

DEFAULT_BORDER_COLOR = "#1565C0"
DEFAULT_EDGE_COLOR = "#78909C"
SECONDARY_EDGE_COLOR = "#B0BEC5"
OVERLAP_EDGE_COLOR = "#263238"


def hash_label(label: str) -> int:
    """
    Order-sensitive 32-bit string hash.

    Computes ``h = h * 31 + ord(ch)`` wrapped to a signed 32-bit integer,
    the same value as the classic ``(h << 5) - h + c`` string hash.
    """
    h = 0
    for ch in label:
        h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def _hex_to_rgb(color: str) -> np.ndarray:
    digits = validate_color(color)[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return np.array([int(digits[i : i + 2], 16) for i in (0, 2, 4)], dtype=float)


def mix_with_white(color: str, factor: float = FILL_BLEND_FACTOR) -> str:
    """
    Blend a colour toward white.

    Each channel becomes ``base + (255 - base) * factor``, rounded half up.

    Args:
        color: ``#RGB`` or ``#RRGGBB`` colour
        factor: 0 keeps the colour, 1 gives white

    Returns:
        ``#RRGGBB`` colour
    """
    factor = validate_blend_factor(factor)
    base = _hex_to_rgb(color)
    mixed = np.floor(base + (255.0 - base) * factor + 0.5).clip(0, 255).astype(int)
    r, g, b = mixed.tolist()
    return f"#{r:02X}{g:02X}{b:02X}"


@dataclass(frozen=True)
class ColorPair:
    """Border colour and the fill derived from it."""

    border: str
    fill: str


class ColorCache:
    """
    Thread-safe label -> ColorPair store.

    Append-only; a cache should only be shared between assigners that use
    the same palette and blend factor.
    """

    def __init__(self) -> None:
        self._pairs: dict[str, ColorPair] = {}
        self._lock = threading.Lock()

    def get_or_create(self, label: str, factory: Callable[[str], ColorPair]) -> ColorPair:
        """Return the cached pair for ``label``, computing it on first use."""
        with self._lock:
            pair = self._pairs.get(label)
            if pair is None:
                pair = factory(label)
                self._pairs[label] = pair
            return pair

    def __contains__(self, label: object) -> bool:
        return label in self._pairs

    def __len__(self) -> int:
        return len(self._pairs)

    def clear(self) -> None:
        """Drop every cached pair."""
        with self._lock:
            self._pairs.clear()


class ColorAssigner:
    """
    Deterministic label -> ColorPair mapping.

    Example:
        assigner = ColorAssigner()
        pair = assigner.color_pair_for("Engineering")
        pair.border, pair.fill
    """

    def __init__(
        self,
        *,
        palette: Sequence[str] = DEFAULT_PALETTE,
        default_pair: Optional[ColorPair] = None,
        blend_factor: float = FILL_BLEND_FACTOR,
        cache: Optional[ColorCache] = None,
    ) -> None:
        """
        Initialize the assigner.

        Args:
            palette: Ordered border colours labels are hashed into
            default_pair: Pair for unset and sentinel labels. Defaults to
                DEFAULT_CATEGORY_COLOR and its blended fill.
            blend_factor: Fill mix toward white
            cache: Label cache, a fresh one when omitted

        Raises:
            InvalidColorError: If the palette or default pair is malformed
            ValidationError: If blend_factor is outside [0, 1]
        """
        self._palette = validate_palette(palette)
        self._blend_factor = validate_blend_factor(blend_factor)
        if default_pair is None:
            default_pair = ColorPair(
                DEFAULT_CATEGORY_COLOR, mix_with_white(DEFAULT_CATEGORY_COLOR, blend_factor)
            )
        else:
            validate_color(default_pair.border)
            validate_color(default_pair.fill)
        self._default_pair = default_pair
        self._cache = cache if cache is not None else ColorCache()

    @property
    def palette(self) -> tuple[str, ...]:
        """Get the categorical palette."""
        return self._palette

    @property
    def default_pair(self) -> ColorPair:
        """Get the pair used for unset and sentinel labels."""
        return self._default_pair

    @property
    def cache(self) -> ColorCache:
        """Get the label cache."""
        return self._cache

    def color_pair_for(self, label: Optional[str]) -> ColorPair:
        """
        Resolve a label to its colour pair.

        Empty, None, "N/A" and "Default" resolve to the default pair. Never
        raises for any label.
        """
        if not label or label in SENTINEL_LABELS:
            return self._default_pair
        return self._cache.get_or_create(label, self._make_pair)

    def _make_pair(self, label: str) -> ColorPair:
        border = self._palette[abs(hash_label(label)) % len(self._palette)]
        return ColorPair(border, mix_with_white(border, self._blend_factor))


@dataclass(frozen=True)
class ChartStyle:
    """Colours that do not depend on a category label."""

    default_border_color: str = DEFAULT_BORDER_COLOR
    default_edge_color: str = DEFAULT_EDGE_COLOR
    secondary_edge_color: str = SECONDARY_EDGE_COLOR
    overlap_edge_color: str = OVERLAP_EDGE_COLOR

    def __post_init__(self) -> None:
        validate_color(self.default_border_color)
        validate_color(self.default_edge_color)
        validate_color(self.secondary_edge_color)
        validate_color(self.overlap_edge_color)


__all__ = [
    "DEFAULT_PALETTE",
    "FILL_BLEND_FACTOR",
    "DEFAULT_CATEGORY_COLOR",
    "SENTINEL_LABELS",
    "DEFAULT_BORDER_COLOR",
    "DEFAULT_EDGE_COLOR",
    "SECONDARY_EDGE_COLOR",
    "OVERLAP_EDGE_COLOR",
    "hash_label",
    "mix_with_white",
    "ColorPair",
    "ColorCache",
    "ColorAssigner",
    "ChartStyle",
]
