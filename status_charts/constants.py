"""
Constants and fixed parameters for StatusCharts package.

This module defines the status color palettes, axis unit suffixes, the default
timeline metric rows, and layout constants used throughout the package.
"""

# ============================================================================
# Status Colors
# ============================================================================

# Cell outlines in the timeline grid. Keys are canonical status names.
OUTLINE_COLORS = {
    "Red": "#ff3030",       # firebrick1
    "Amber": "orange",
    "Green": "green",
    "High": "darkblue",
    "Moderate": "darkblue",
    "Low": "darkblue",
}
DEFAULT_OUTLINE_COLOR = "darkgrey"

# Cell fills in the timeline grid
FILL_COLORS = {
    "Red": "#f28b82",
    "Amber": "#fdd663",
    "Green": "#81c995",
    "High": "#aecbfa",
    "Moderate": "#d2e3fc",
    "Low": "#e8f0fe",
}
DEFAULT_FILL_COLOR = "#e0e0e0"

# Benchmark zone shading behind metric charts
BACKGROUND_COLORS = {
    "Red": "#fce8e6",
    "Amber": "#fef7e0",
    "Green": "#e6f4ea",
    "High": "#eef3fd",
    "Moderate": "#eef3fd",
    "Low": "#eef3fd",
}
DEFAULT_BACKGROUND_COLOR = "#f5f5f5"

# Label aliases folded onto a canonical status
STATUS_ALIASES = {
    "redamber": "Red",
    "ambergreen": "Green",
}

# ============================================================================
# Axis Scaling
# ============================================================================

# (divisor, suffix) from largest to smallest
UNIT_SCALES = [
    (1e9, "billions"),
    (1e6, "millions"),
    (1e3, "thousands"),
]

# Clamp for zero and negative values on log-scale charts
LOG_FLOOR = 1e-3

DEFAULT_YEAR_GRANULARITY = 5
DEFAULT_CYCLE_LENGTH = 4

# ============================================================================
# Timeline Metrics
# ============================================================================

# Rows of the timeline grid, most important first. Column names follow the
# metric table produced by the status scanner's data manager.
DEFAULT_TIMELINE_METRICS = [
    {"label": "RelAbd", "dataCol": "RelLBM.Status"},
    {"label": "AbsAbd", "dataCol": "AbsLBM.Status"},
    {"label": "LongTrend", "dataCol": "LongTrend.Status"},
    {"label": "PercChange", "dataCol": "PercChange.Status"},
    {"label": "RapidStatus", "dataCol": "RapidStatus.Status", "font": "bold"},
    {"label": "ConfRating", "dataCol": "RapidStatus.Confidence"},
    {"label": "IntStatus", "dataCol": "IntStatusRaw.Status"},
]

YEAR_COLUMN = "Year"

# Column of the abundance table plotted in the abundance charts
ABUNDANCE_COLUMN = "Escapement_Wild"
LONG_TREND_COLUMN = "LongTrend"
PERCENT_CHANGE_COLUMN = "PercChange"

# Data quality indicator meaning the abundance series holds absolute counts
ABSOLUTE_ABUNDANCE_QUALITY = "Abs_Abd"

# Strings treated as missing when coercing thresholds and attributes
NA_STRINGS = frozenset({"", "na", "nan", "n/a", "null", "none"})

# ============================================================================
# Layout
# ============================================================================

TIMELINE_ROW_PADDING = 0.3
TIMELINE_CELL_SIZE = 0.8
SUMMARY_TITLE_FONT_SIZE = 20
SUMMARY_TITLE_COLOR = "darkblue"
