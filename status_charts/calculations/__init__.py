"""
Scale and series calculations for StatusCharts.

This package provides the numeric side of chart rendering:
- Pretty axis ranges and tick breaks
- Linear/log axis transforms and log-scale tick labels
- Y axis unit selection (thousands, millions, billions)
- Time series normalisation, moving averages and dominant cycle years

Example:
    >>> from status_charts.calculations import pretty_range, running_mean
    >>> pretty_range(None, [1993, 2018], nearest=5)
    (1990.0, 2020.0)
"""

from .series import (
    as_time_series,
    coerce_number,
    dominant_cycle_years,
    finite_values,
    get_ts,
    has_values,
    running_mean
)
from .scales import (
    AxisSpec,
    axis_specs,
    log_ticks,
    pretty_breaks,
    pretty_range,
    requested_bounds,
    to_axis_value
)

__all__ = [
    "AxisSpec",
    "as_time_series",
    "coerce_number",
    "dominant_cycle_years",
    "finite_values",
    "get_ts",
    "has_values",
    "running_mean",
    "axis_specs",
    "log_ticks",
    "pretty_breaks",
    "pretty_range",
    "requested_bounds",
    "to_axis_value",
]
