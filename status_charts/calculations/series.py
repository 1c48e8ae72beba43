"""
Time series helpers for status metrics.

A time series is a pandas Series of floats indexed by integer year, sorted
ascending. Missing values are kept as NaN so they draw as gaps rather than
zeros.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

import numpy as np
import pandas as pd

from ..constants import DEFAULT_CYCLE_LENGTH, NA_STRINGS, YEAR_COLUMN
from ..exceptions import ConfigurationError

logger = logging.getLogger("status_charts.calculations.series")


SeriesLike = Union[pd.Series, Mapping[Any, Any], None]


def coerce_number(value: Any) -> Optional[float]:
    """
    Convert a threshold, attribute or reference value to a float.
    
    NA-like sentinels ("NA", "", "NaN", None), non-numeric strings and
    non-finite numbers all resolve to None. Never raises.
    
    Example:
        >>> coerce_number("12.5")
        12.5
        >>> coerce_number("NA") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, str) and value.strip().lower() in NA_STRINGS:
        return None
    try:
        number = pd.to_numeric(value, errors="coerce")
    except (TypeError, ValueError):
        return None
    if not np.isscalar(number):
        return None
    try:
        number = float(number)
    except (TypeError, ValueError):
        return None
    if not np.isfinite(number):
        return None
    return number


def finite_values(values: Iterable[Any]) -> List[float]:
    """Return the usable numbers from a mixed iterable."""
    result = []
    for value in values:
        number = coerce_number(value)
        if number is not None:
            result.append(number)
    return result


def as_time_series(data: SeriesLike) -> pd.Series:
    """
    Normalise a year -> value mapping into a sorted float Series.
    
    Keys that are not numeric years are dropped; values that are not numeric
    become NaN. A repeated year keeps its first value.
    
    Args:
        data: A pandas Series indexed by year, a dict keyed by year (ints or
            strings such as "1998"), or None.
            
    Returns:
        Series of float values indexed by int year, sorted ascending.
    """
    if data is None:
        return pd.Series(dtype=float, index=pd.Index([], dtype=int, name=YEAR_COLUMN))
    
    if isinstance(data, pd.Series):
        keys = list(data.index)
        raw_values = list(data.to_numpy())
    else:
        keys = list(data.keys())
        raw_values = list(data.values())
    
    years = pd.to_numeric(pd.Series(keys, dtype=object), errors="coerce").to_numpy(dtype=float)
    values = pd.to_numeric(pd.Series(raw_values, dtype=object), errors="coerce").to_numpy(dtype=float)
    keep = ~np.isnan(years)
    if not keep.all():
        logger.debug(f"Dropped {int((~keep).sum())} non-numeric year keys")
    
    series = pd.Series(
        values[keep],
        index=pd.Index(years[keep].astype(int), name=YEAR_COLUMN),
        dtype=float,
    )
    repeated = series.index.duplicated(keep="first")
    if repeated.any():
        logger.warning(
            f"Repeated years {sorted(set(series.index[repeated]))}; keeping the first value of each"
        )
        series = series[~repeated]
    return series.sort_index()


def has_values(series: pd.Series) -> bool:
    """True if at least one value is present."""
    return len(series) > 0 and bool(series.notna().any())


def get_ts(column: str, table: pd.DataFrame) -> pd.Series:
    """
    Extract one metric column of a table as a time series.
    
    Args:
        column: Name of the metric column.
        table: DataFrame with a ``Year`` column.
        
    Returns:
        Time series of the column; empty when the column is absent so the
        chart for that metric renders as an empty panel.
        
    Raises:
        ConfigurationError: If the table has no ``Year`` column.
    """
    if YEAR_COLUMN not in table.columns:
        raise ConfigurationError(f"Table is missing required column '{YEAR_COLUMN}'")
    if column not in table.columns:
        logger.info(f"Column '{column}' not found; treating series as empty")
        return as_time_series(None)
    return as_time_series(pd.Series(table[column].to_numpy(), index=table[YEAR_COLUMN].to_numpy()))


def running_mean(
    series: Union[pd.Series, Iterable[float]],
    window: Any
) -> Union[pd.Series, np.ndarray]:
    """
    Trailing moving average over ``window`` consecutive points.
    
    Output has the same length as the input. The first ``window - 1``
    positions, and any position whose window contains a missing value, are
    NaN.
    
    Args:
        series: Values in plotting order. A Series keeps its index.
        window: Window length; unusable values (None, "NA", < 1) give an
            all-NaN result.
            
    Returns:
        A Series when given a Series, otherwise a numpy array.
        
    Example:
        >>> running_mean([1, 2, 3, 4, 5], 3)
        array([nan, nan,  2.,  3.,  4.])
    """
    values = series.to_numpy(dtype=float) if isinstance(series, pd.Series) else np.asarray(list(series), dtype=float)
    size = coerce_number(window)
    
    if size is None or size < 1:
        logger.debug(f"Unusable moving average window {window!r}")
        averaged = np.full(values.shape, np.nan)
    else:
        averaged = (
            pd.Series(values)
            .rolling(window=int(size), min_periods=int(size))
            .mean()
            .to_numpy()
        )
    
    if isinstance(series, pd.Series):
        return pd.Series(averaged, index=series.index, name=series.name)
    return averaged


def dominant_cycle_years(
    years: Iterable[Any],
    first_year: Any,
    cycle_length: int = DEFAULT_CYCLE_LENGTH
) -> List[int]:
    """
    Years of ``years`` that fall on the dominant cycle.
    
    A year is a dominant year when it is ``first_year`` or a later year that
    differs from it by a multiple of ``cycle_length``. Only years present in
    ``years`` are returned, so the result always lies within the data's year
    range.
    
    Example:
        >>> dominant_cycle_years(range(1990, 2006), 1990)
        [1990, 1994, 1998, 2002]
    """
    first = coerce_number(first_year)
    if first is None or cycle_length < 1:
        return []
    first = int(round(first))
    present = sorted({int(y) for y in finite_values(years)})
    return [year for year in present if year >= first and (year - first) % cycle_length == 0]
