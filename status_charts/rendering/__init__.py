"""
Rendering subsystem for StatusCharts.

This module turns status metrics into drawing instructions. The renderers
decide what to draw and where; a ``DrawingSurface`` performs the drawing, so
the same renderer can target Matplotlib or a recording surface in tests.

Main Classes:
    MetricChartRenderer: Time series chart with benchmark zones, reference
        lines, moving average and dominant cycle highlighting
    TimelineGridRenderer: Grid of colored, lettered status cells per year
    StatusColorMap: Total mapping from status labels to colors
    MatplotlibSurface / MatplotlibPanelLayout: Matplotlib drawing backend

Layer Order (metric charts):
    frame, axes, zone shading, reference lines, metric line, moving average,
    dominant cycle markers, title

Example:
    >>> import matplotlib.pyplot as plt
    >>> from status_charts.rendering import MatplotlibSurface, render_metric_chart
    >>> 
    >>> fig, ax = plt.subplots()
    >>> render_metric_chart(
    ...     MatplotlibSurface(ax),
    ...     data={2000: 120, 2001: 180, 2002: 90},
    ...     zones=(100, 150),
    ...     title="Relative Abundance Metric",
    ... )
    >>> fig.savefig("chart.png")
"""

from .colors import (
    DEFAULT_COLOR_MAP,
    Status,
    StatusColorMap,
    background_color,
    fill_color,
    outline_color
)
from .surface import (
    DrawingSurface,
    MatplotlibPanelLayout,
    MatplotlibSurface,
    PanelLayout,
    single_panel
)
from .metric_chart import (
    ChartGeometry,
    MetricChartRenderer,
    MetricChartRequest,
    render_metric_chart
)
from .timeline import (
    TimelineGridRenderer,
    render_timeline_grid,
    resolve_font
)
from .panel import (
    log_absolute_abundance_chart,
    log_relative_abundance_chart,
    long_term_trend_chart,
    metric_summary_pane,
    percent_change_chart,
    relative_abundance_chart
)

__all__ = [
    "DEFAULT_COLOR_MAP",
    "Status",
    "StatusColorMap",
    "background_color",
    "fill_color",
    "outline_color",
    "DrawingSurface",
    "MatplotlibPanelLayout",
    "MatplotlibSurface",
    "PanelLayout",
    "single_panel",
    "ChartGeometry",
    "MetricChartRenderer",
    "MetricChartRequest",
    "render_metric_chart",
    "TimelineGridRenderer",
    "render_timeline_grid",
    "resolve_font",
    "log_absolute_abundance_chart",
    "log_relative_abundance_chart",
    "long_term_trend_chart",
    "metric_summary_pane",
    "percent_change_chart",
    "relative_abundance_chart",
]
