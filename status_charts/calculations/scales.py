"""
Axis and scale computations for metric charts.

Pure functions turning raw data ranges into pretty, log-aware plotting
coordinates. None of them raise on empty or missing input; they return an
empty or best-effort result instead.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from ..constants import DEFAULT_YEAR_GRANULARITY, LOG_FLOOR, UNIT_SCALES
from .series import coerce_number, finite_values

logger = logging.getLogger("status_charts.calculations.scales")


RequestedRange = Union[Mapping[str, Any], Sequence[Any], None]

# Candidate multipliers for pretty tick steps
_NICE_STEPS = (1.0, 2.0, 5.0, 10.0)


@dataclass(frozen=True)
class AxisSpec:
    """Y axis scaling: plotted values are ``raw / scale``."""

    max_value: float
    scale: float
    label: str


def requested_bounds(requested: RequestedRange) -> Tuple[Optional[float], Optional[float]]:
    """
    Read optional (min, max) overrides.
    
    Accepts a mapping with ``min``/``max`` entries, a (min, max) pair, or None.
    """
    if requested is None:
        return None, None
    if isinstance(requested, Mapping):
        return coerce_number(requested.get("min")), coerce_number(requested.get("max"))
    items = list(requested) if np.ndim(requested) == 1 else []
    if len(items) != 2:
        logger.debug(f"Ignoring range request {requested!r}; expected (min, max)")
        return None, None
    return coerce_number(items[0]), coerce_number(items[1])


def pretty_range(
    requested: RequestedRange,
    data_values: Iterable[Any],
    nearest: float = DEFAULT_YEAR_GRANULARITY
) -> Tuple[float, float]:
    """
    Range covering ``data_values`` rounded outward to multiples of ``nearest``.
    
    Requested ``min``/``max`` entries override the corresponding computed
    bound. Missing values are ignored; with no usable data the range starts at
    the requested minimum (or 0) and spans one granule.
    
    Example:
        >>> pretty_range(None, [1993, 2018], nearest=5)
        (1990.0, 2020.0)
        >>> pretty_range({"max": 2025}, [1993, 2018], nearest=5)
        (1990.0, 2025.0)
    """
    nearest = float(nearest) if nearest and nearest > 0 else 1.0
    req_min, req_max = requested_bounds(requested)
    values = finite_values(data_values)
    
    if values:
        lo = nearest * math.floor(min(values) / nearest)
        hi = nearest * math.ceil(max(values) / nearest)
    else:
        logger.debug("pretty_range called without usable data")
        lo = 0.0
        hi = nearest
    
    if req_min is not None:
        lo = req_min
    if req_max is not None:
        hi = req_max
    if not values and req_min is not None and req_max is None:
        hi = lo + nearest
    if hi <= lo:
        hi = lo + nearest
    
    return float(lo), float(hi)


def pretty_breaks(values: Iterable[Any], n: int = 5) -> List[float]:
    """
    Evenly spaced "nice" tick positions covering ``values``.
    
    The step is the multiple of 1, 2, 5 or 10 x 10^k closest to range / n,
    and the first and last breaks enclose all values.
    
    Example:
        >>> pretty_breaks([1995, 2021])
        [1995.0, 2000.0, 2005.0, 2010.0, 2015.0, 2020.0, 2025.0]
    """
    usable = finite_values(values)
    if not usable:
        return []
    lo, hi = min(usable), max(usable)
    if lo == hi:
        return [float(lo)]
    
    raw_step = (hi - lo) / max(int(n), 1)
    magnitude = 10.0 ** math.floor(math.log10(raw_step))
    step = min((m * magnitude for m in _NICE_STEPS), key=lambda s: abs(s - raw_step))
    
    start = step * math.floor(lo / step)
    end = step * math.ceil(hi / step)
    count = int(round((end - start) / step))
    decimals = max(0, -int(math.floor(math.log10(step))))
    return [round(start + i * step, decimals) for i in range(count + 1)]


def to_axis_value(raw: Any, use_log: bool, floor: float = LOG_FLOOR) -> Any:
    """
    Map raw values onto the plotting axis.
    
    Identity on a linear axis. On a log axis returns ``log10(max(raw, floor))``
    so zero and negative values land on the axis floor instead of being
    undefined. Works on scalars, sequences, numpy arrays and Series; missing
    values stay missing (None for scalars, NaN otherwise).
    
    Args:
        raw: Value(s) to transform.
        use_log: Whether the axis is logarithmic.
        floor: Positive clamp applied before taking log10.
    """
    if not use_log:
        return raw
    
    if isinstance(raw, pd.Series):
        return np.log10(raw.astype(float).clip(lower=floor))
    
    if raw is None or np.isscalar(raw):
        value = coerce_number(raw)
        if value is None:
            return None
        return math.log10(max(value, floor))
    
    values = np.asarray(raw, dtype=float)
    return np.log10(np.maximum(values, floor))


def axis_specs(max_value: Any, series_name: str, use_log: bool) -> AxisSpec:
    """
    Choose a y axis unit so labels stay compact.
    
    The divisor is the largest of 1e9, 1e6 and 1e3 not exceeding
    ``max_value``, so the displayed maximum stays below 1000. The axis label
    combines ``series_name`` with the unit word. Log axes always use divisor 1
    because their tick labels carry the magnitude.
    
    Example:
        >>> axis_specs(25000, "Wild Spn", False)
        AxisSpec(max_value=25000.0, scale=1000.0, label='Wild Spn (thousands)')
    """
    value = coerce_number(max_value)
    name = series_name or ""
    
    if use_log or value is None:
        return AxisSpec(max_value=value if value is not None else 0.0, scale=1.0, label=name)
    
    for divisor, suffix in UNIT_SCALES:
        if abs(value) >= divisor:
            label = f"{name} ({suffix})" if name else suffix.capitalize()
            return AxisSpec(max_value=value, scale=divisor, label=label)
    
    return AxisSpec(max_value=value, scale=1.0, label=name)


def _power_label(exponent: int) -> str:
    if exponent >= 0:
        return f"{10 ** exponent:,}"
    return f"{10.0 ** exponent:g}"


def log_ticks(max_value: Any, floor: float = LOG_FLOOR) -> Dict[float, str]:
    """
    Tick positions and labels for a log10 axis.
    
    Args:
        max_value: Top of the data range, already in log10 space.
        floor: The axis floor in raw units; the first tick sits at its power
            of ten.
            
    Returns:
        Mapping of log-space position to display label, one entry per power of
        ten from the floor up to ``max_value``.
        
    Example:
        >>> log_ticks(3.4, floor=1.0)
        {0.0: '1', 1.0: '10', 2.0: '100', 3.0: '1,000'}
    """
    low = math.floor(math.log10(floor)) if floor and floor > 0 else 0
    top = coerce_number(max_value)
    high = max(low, math.floor(top)) if top is not None else low
    return {float(k): _power_label(k) for k in range(low, high + 1)}
