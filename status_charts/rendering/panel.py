"""
Multi-panel status summary.

Chart presets turn a unit's attributes into metric chart requests, and
``metric_summary_pane`` arranges four of them in a 2x2 grid with an optional
full-width timeline grid underneath:

    +--------------------------+---------------------------------------+
    | Relative abundance       | Log absolute / log relative abundance |
    +--------------------------+---------------------------------------+
    | Long-term trend          | Percent change                        |
    +--------------------------+---------------------------------------+
    | Timeline: metrics & status (optional)                            |
    +------------------------------------------------------------------+
"""

import logging
import math
from typing import Any, Mapping, Optional, Sequence, Union

from ..calculations.series import SeriesLike, as_time_series, coerce_number, finite_values, get_ts
from ..config import Config
from ..constants import (
    ABSOLUTE_ABUNDANCE_QUALITY,
    ABUNDANCE_COLUMN,
    DEFAULT_TIMELINE_METRICS,
    LONG_TREND_COLUMN,
    PERCENT_CHANGE_COLUMN,
    SUMMARY_TITLE_COLOR,
    SUMMARY_TITLE_FONT_SIZE,
    YEAR_COLUMN
)
from ..exceptions import ConfigurationError
from ..models import UnitAttributes
from ..styles import PlotStyle, StyleOverrides
from .metric_chart import MetricChartRenderer, MetricChartRequest
from .surface import MatplotlibPanelLayout, PanelLayout
from .timeline import MetricSpec, TimelineGridRenderer, as_table

logger = logging.getLogger("status_charts.rendering.panel")


AttributesLike = Union[UnitAttributes, Mapping[str, Any]]

ABUNDANCE_LABEL = "Wild Spn"


def as_attributes(attributes: AttributesLike) -> UnitAttributes:
    if isinstance(attributes, UnitAttributes):
        return attributes
    return UnitAttributes.from_mapping(attributes)


def _abundance_extras(attributes: UnitAttributes) -> dict:
    # Cyclic units highlight dominant years instead of showing a generational average
    if attributes.is_cyclic:
        return {"dom_cycle_first_year": attributes.dom_cycle_year}
    return {"moving_average_window": attributes.av_gen}


def relative_abundance_chart(
    data: SeriesLike,
    attributes: AttributesLike,
    year_range: Any = None
) -> MetricChartRequest:
    """Relative abundance with Red/Amber/Green benchmark bands."""
    attributes = as_attributes(attributes)
    return MetricChartRequest(
        data=data,
        zones=attributes.rel_abd_zones,
        x_range=year_range,
        y_range=[0],
        x_tick_step=5,
        title="Relative Abundance Metric",
        series_label=ABUNDANCE_LABEL,
        **_abundance_extras(attributes),
    )


def log_relative_abundance_chart(
    data: SeriesLike,
    attributes: AttributesLike,
    year_range: Any = None
) -> MetricChartRequest:
    """Full abundance index on a log scale, without benchmark bands."""
    attributes = as_attributes(attributes)
    return MetricChartRequest(
        data=data,
        x_range=year_range,
        use_log=True,
        title="Relative Index of Abundance (Log Scale)",
        series_label=ABUNDANCE_LABEL,
        **_abundance_extras(attributes),
    )


def log_absolute_abundance_chart(
    data: SeriesLike,
    attributes: AttributesLike,
    year_range: Any = None
) -> MetricChartRequest:
    """Absolute abundance on a log scale with benchmark bands."""
    attributes = as_attributes(attributes)
    return MetricChartRequest(
        data=data,
        zones=attributes.abs_abd_zones,
        x_range=year_range,
        use_log=True,
        title="Absolute Abundance Metric (Log Scale)",
        series_label=ABUNDANCE_LABEL,
        **_abundance_extras(attributes),
    )


def long_term_trend_chart(
    data: SeriesLike,
    attributes: AttributesLike,
    year_range: Any = None
) -> MetricChartRequest:
    """
    Long-term trend as a ratio of current to long-term abundance.
    
    The input series is in percent and is divided by 100; benchmarks are
    already ratios.
    """
    attributes = as_attributes(attributes)
    ratio = as_time_series(data) / 100
    return MetricChartRequest(
        data=ratio,
        zones=attributes.long_trend_zones,
        h_ref_lines={
            "3/4": attributes.long_trend_upper,
            "Half": attributes.long_trend_lower,
            "Same": 1,
            "Double": 2,
        },
        x_range=year_range,
        title="Long-term Trend Metric",
        series_label="Ratio(Current/Long-term)",
    )


def percent_change_chart(
    data: SeriesLike,
    attributes: AttributesLike,
    year_range: Any = None
) -> MetricChartRequest:
    """Percent change over three generations."""
    attributes = as_attributes(attributes)
    return MetricChartRequest(
        data=data,
        zones=attributes.perc_change_zones,
        h_ref_lines={"Half": -50, "Same": 0, "Double": 100},
        x_range=year_range,
        y_range=[-55, 50],
        title="Percent Change Metric",
        series_label="% Change - 3 Gen",
    )


def default_year_bounds(years: Sequence[Any], granularity: int = 5) -> tuple:
    """Round the year span outward to multiples of ``granularity``."""
    usable = finite_values(years)
    if not usable:
        return None, None
    start = granularity * math.floor(min(usable) / granularity)
    end = granularity * math.ceil(max(usable) / granularity)
    return int(start), int(end)


def metric_summary_pane(
    metrics_table: Any,
    series_table: Any,
    attributes: AttributesLike,
    layout: Optional[PanelLayout] = None,
    metric_start_year: Any = None,
    metric_end_year: Any = None,
    metric_style: Union[StyleOverrides, PlotStyle] = None,
    timeline_metrics: Optional[Sequence[MetricSpec]] = DEFAULT_TIMELINE_METRICS,
    timeline_style: Union[StyleOverrides, PlotStyle] = None,
    config: Optional[Config] = None
) -> PanelLayout:
    """
    Draw the complete status summary for one unit.
    
    Args:
        metrics_table: Metric table with a ``Year`` column, the ``LongTrend``
            and ``PercChange`` series and the timeline status columns.
        series_table: Abundance table with ``Year`` and ``Escapement_Wild``.
        attributes: Unit attributes (``UnitAttributes`` or a flat record).
        layout: Panel layout to draw on; a Matplotlib layout is created when
            omitted.
        metric_start_year: First year of the timeline. When given, it is also
            marked with a vertical reference line on every metric chart.
        metric_end_year: Last year shown on the metric charts.
        metric_style: Style overrides for the metric charts.
        timeline_metrics: Timeline rows; None omits the timeline.
        timeline_style: Style overrides for the timeline grid.
        config: Configuration (granularity, padding, log floor, figure size).
        
    Returns:
        The layout that was drawn on.
        
    Raises:
        ConfigurationError: If ``metrics_table`` has no ``Year`` column.
    """
    config = config if config is not None else Config()
    attributes = as_attributes(attributes)
    metrics_table = as_table(metrics_table)
    series_table = as_table(series_table)
    
    if YEAR_COLUMN not in metrics_table.columns:
        raise ConfigurationError(f"Metrics table is missing required column '{YEAR_COLUMN}'")
    
    with_timeline = timeline_metrics is not None
    if layout is None:
        layout = MatplotlibPanelLayout(with_timeline=with_timeline, config=config)
    
    default_start, default_end = default_year_bounds(metrics_table[YEAR_COLUMN], config.year_granularity)
    start_marker = coerce_number(metric_start_year)
    start = start_marker if start_marker is not None else default_start
    end = coerce_number(metric_end_year)
    end = end if end is not None else default_end
    year_range = {"max": end}
    
    logger.info(f"Drawing summary pane for '{attributes.name}' ({start}-{end})")
    
    abundance = get_ts(ABUNDANCE_COLUMN, series_table) if YEAR_COLUMN in series_table.columns else as_time_series(None)
    if attributes.data_quality == ABSOLUTE_ABUNDANCE_QUALITY:
        abundance_log = log_absolute_abundance_chart(abundance, attributes, year_range)
    else:
        abundance_log = log_relative_abundance_chart(abundance, attributes, year_range)
    
    requests = [
        relative_abundance_chart(abundance, attributes, year_range),
        abundance_log,
        long_term_trend_chart(get_ts(LONG_TREND_COLUMN, metrics_table), attributes, year_range),
        percent_change_chart(get_ts(PERCENT_CHANGE_COLUMN, metrics_table), attributes, year_range),
    ]
    
    for index, request in enumerate(requests):
        if start_marker is not None:
            request.v_ref_lines = [start_marker]
        renderer = MetricChartRenderer(layout.surface(index), style=metric_style, config=config)
        renderer.render(request)
    
    if with_timeline:
        timeline = TimelineGridRenderer(layout.surface(len(requests)), style=timeline_style, config=config)
        timeline.render(metrics_table, metrics=timeline_metrics, start_year=start)
    
    layout.suptitle(
        attributes.display_title,
        fontsize=SUMMARY_TITLE_FONT_SIZE,
        color=SUMMARY_TITLE_COLOR,
    )
    return layout
