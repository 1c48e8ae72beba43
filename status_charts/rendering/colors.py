"""
Status to color mapping for benchmark zones and timeline cells.

Status labels form a closed set (Red, Amber, Green and the confidence ratings
High, Moderate, Low) plus the combined labels RedAmber and AmberGreen, which
fold onto Red and Green. Every lookup is total: any other input, including
None, NaN and numbers, resolves to an explicit default color.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import matplotlib.colors as mcolors
import pandas as pd

from ..constants import (
    BACKGROUND_COLORS,
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_FILL_COLOR,
    DEFAULT_OUTLINE_COLOR,
    FILL_COLORS,
    NA_STRINGS,
    OUTLINE_COLORS,
    STATUS_ALIASES
)

logger = logging.getLogger("status_charts.rendering.colors")


class Status(enum.Enum):
    """Canonical status and confidence labels."""

    RED = "Red"
    AMBER = "Amber"
    GREEN = "Green"
    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"

    @classmethod
    def parse(cls, label: Any) -> Optional["Status"]:
        """Return the canonical status for ``label``, or None if unrecognised."""
        if not isinstance(label, str):
            return None
        key = label.strip().lower()
        key = STATUS_ALIASES.get(key, key).lower()
        for status in cls:
            if status.value.lower() == key:
                return status
        return None


def _palette(colors: Mapping[str, str]) -> Mapping[Status, str]:
    return {Status(name): color for name, color in colors.items()}


def status_label(value: Any) -> Optional[str]:
    """Normalise a table cell to a status string; None for missing cells."""
    if value is None:
        return None
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    text = str(value).strip()
    if text.lower() in NA_STRINGS:
        return None
    return text


@dataclass(frozen=True)
class StatusColorMap:
    """
    Outline, fill and background colors per status.
    
    Attributes:
        outline: Cell outline colors in the timeline grid.
        fill: Cell fill colors in the timeline grid.
        background: Benchmark zone shading behind metric charts.
        default_outline: Outline for unrecognised labels.
        default_fill: Fill for unrecognised labels.
        default_background: Background for unrecognised labels.
    """

    outline: Mapping[Status, str] = field(default_factory=lambda: _palette(OUTLINE_COLORS))
    fill: Mapping[Status, str] = field(default_factory=lambda: _palette(FILL_COLORS))
    background: Mapping[Status, str] = field(default_factory=lambda: _palette(BACKGROUND_COLORS))
    default_outline: str = DEFAULT_OUTLINE_COLOR
    default_fill: str = DEFAULT_FILL_COLOR
    default_background: str = DEFAULT_BACKGROUND_COLOR

    def __post_init__(self):
        for name in ("default_outline", "default_fill", "default_background"):
            color = getattr(self, name)
            if not mcolors.is_color_like(color):
                raise ValueError(f"{name} is not a valid color: {color!r}")

    @staticmethod
    def _lookup(palette: Mapping[Status, str], status: Any, default: str) -> str:
        parsed = Status.parse(status)
        if parsed is None:
            return default
        return palette.get(parsed, default)

    def outline_color(self, status: Any) -> str:
        return self._lookup(self.outline, status, self.default_outline)

    def fill_color(self, status: Any) -> str:
        return self._lookup(self.fill, status, self.default_fill)

    def background_color(self, status: Any) -> str:
        return self._lookup(self.background, status, self.default_background)

    def cell_code(self, status: Any) -> str:
        """Single upper-case character drawn inside a timeline cell."""
        label = status_label(status)
        if label is None:
            return ""
        return label[0].upper()


DEFAULT_COLOR_MAP = StatusColorMap()


def outline_color(status: Any) -> str:
    """Outline color for ``status`` from the default palette."""
    return DEFAULT_COLOR_MAP.outline_color(status)


def fill_color(status: Any) -> str:
    """Fill color for ``status`` from the default palette."""
    return DEFAULT_COLOR_MAP.fill_color(status)


def background_color(status: Any) -> str:
    """Zone background color for ``status`` from the default palette."""
    return DEFAULT_COLOR_MAP.background_color(status)
