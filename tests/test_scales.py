"""
Tests for axis range, break, transform and tick calculations.

Run with: python -m pytest tests/test_scales.py
"""

import math

import numpy as np
import pandas as pd
import pytest

from status_charts.calculations import (
    AxisSpec,
    axis_specs,
    log_ticks,
    pretty_breaks,
    pretty_range,
    requested_bounds,
    to_axis_value
)


class TestPrettyRange:
    def test_rounds_outward(self):
        assert pretty_range(None, [1993, 2018], nearest=5) == (1990.0, 2020.0)

    def test_exact_multiples_kept(self):
        assert pretty_range(None, [1990, 2000], nearest=5) == (1990.0, 2000.0)

    def test_requested_max_overrides(self):
        assert pretty_range({"max": 2025}, [1993, 2018], nearest=5) == (1990.0, 2025.0)

    def test_requested_min_overrides(self):
        assert pretty_range({"min": 1985}, [1993, 2018], nearest=5) == (1985.0, 2020.0)

    def test_requested_pair(self):
        assert pretty_range((1980, 2030), [1993, 2018]) == (1980.0, 2030.0)

    def test_missing_values_ignored(self):
        assert pretty_range(None, [1993, float("nan"), None, "NA", 2001]) == (1990.0, 2005.0)

    def test_no_data_defaults(self):
        assert pretty_range(None, [], nearest=5) == (0.0, 5.0)

    def test_no_data_with_requested_min(self):
        assert pretty_range({"min": 2000}, [], nearest=5) == (2000.0, 2005.0)

    def test_no_data_with_requested_bounds(self):
        assert pretty_range({"min": 2000, "max": 2010}, [None]) == (2000.0, 2010.0)

    def test_single_value_spans_one_granule(self):
        lo, hi = pretty_range(None, [1990], nearest=5)
        assert lo == 1990.0
        assert hi == 1995.0

    def test_requested_none_entries_ignored(self):
        assert pretty_range({"min": None, "max": "NA"}, [1993, 2018]) == (1990.0, 2020.0)


class TestRequestedBounds:
    def test_none(self):
        assert requested_bounds(None) == (None, None)

    def test_mapping(self):
        assert requested_bounds({"max": 5}) == (None, 5.0)

    def test_bad_length_ignored(self):
        assert requested_bounds([1, 2, 3]) == (None, None)

    def test_scalar_ignored(self):
        assert requested_bounds(2010) == (None, None)
        assert requested_bounds("2010") == (None, None)


class TestPrettyBreaks:
    def test_years(self):
        assert pretty_breaks([1995, 2021]) == [1995.0, 2000.0, 2005.0, 2010.0, 2015.0, 2020.0, 2025.0]

    def test_breaks_enclose_values(self):
        values = [1993, 1997, 2004, 2018]
        breaks = pretty_breaks(values)
        assert breaks[0] <= min(values)
        assert breaks[-1] >= max(values)

    def test_even_spacing(self):
        breaks = pretty_breaks([0, 100])
        assert breaks == [0.0, 20.0, 40.0, 60.0, 80.0, 100.0]

    def test_fractional_step(self):
        assert pretty_breaks([0, 1]) == [0.0, 0.2, 0.4, 0.6, 0.8, 1.0]

    def test_empty(self):
        assert pretty_breaks([]) == []
        assert pretty_breaks([None, float("nan")]) == []

    def test_single_value(self):
        assert pretty_breaks([2001]) == [2001.0]


class TestToAxisValue:
    def test_linear_is_identity(self):
        assert to_axis_value(250, use_log=False) == 250
        assert to_axis_value(-3, use_log=False) == -3

    def test_log_scalar(self):
        assert to_axis_value(100, use_log=True) == pytest.approx(2.0)

    def test_log_clamps_zero_and_negative_to_floor(self):
        assert to_axis_value(0, use_log=True) == pytest.approx(-3.0)
        assert to_axis_value(-50, use_log=True) == pytest.approx(-3.0)

    def test_log_keeps_values_below_one_distinct(self):
        assert to_axis_value(0.2, use_log=True) < to_axis_value(0.8, use_log=True)
        assert to_axis_value(0.5, use_log=True) == pytest.approx(math.log10(0.5))

    def test_custom_floor(self):
        assert to_axis_value(0, use_log=True, floor=0.1) == pytest.approx(-1.0)

    def test_missing_scalar_stays_missing(self):
        assert to_axis_value(None, use_log=True) is None
        assert to_axis_value("NA", use_log=True) is None

    def test_array(self):
        result = to_axis_value(np.array([1, 10, 0, 1000]), use_log=True)
        np.testing.assert_allclose(result, [0.0, 1.0, -3.0, 3.0])

    def test_list(self):
        result = to_axis_value([10, 100], use_log=True)
        np.testing.assert_allclose(result, [1.0, 2.0])

    def test_series_keeps_index_and_gaps(self):
        series = pd.Series([10, np.nan, 1000], index=[2000, 2001, 2002])
        result = to_axis_value(series, use_log=True)
        assert list(result.index) == [2000, 2001, 2002]
        assert result[2000] == pytest.approx(1.0)
        assert math.isnan(result[2001])
        assert result[2002] == pytest.approx(3.0)


class TestAxisSpecs:
    def test_thousands(self):
        spec = axis_specs(25000, "Wild Spn", use_log=False)
        assert spec == AxisSpec(max_value=25000.0, scale=1000.0, label="Wild Spn (thousands)")

    def test_exact_thousand(self):
        assert axis_specs(1000, "Wild Spn", use_log=False).scale == 1000.0

    def test_millions_and_billions(self):
        assert axis_specs(2.5e6, "Wild Spn", use_log=False).label == "Wild Spn (millions)"
        assert axis_specs(3e9, "Wild Spn", use_log=False).scale == 1e9

    def test_small_values_unscaled(self):
        spec = axis_specs(999, "Wild Spn", use_log=False)
        assert spec.scale == 1.0
        assert spec.label == "Wild Spn"

    def test_displayed_max_below_thousand(self):
        for value in (1, 999, 1000, 45000, 7.2e6, 9.9e8, 4e9):
            spec = axis_specs(value, "x", use_log=False)
            assert value / spec.scale < 1000

    def test_log_forces_unit_divisor(self):
        spec = axis_specs(6.2, "Wild Spn", use_log=True)
        assert spec.scale == 1.0
        assert spec.label == "Wild Spn"

    def test_non_finite_max(self):
        assert axis_specs(float("nan"), "Wild Spn", use_log=False).scale == 1.0
        assert axis_specs(None, "Wild Spn", use_log=False).scale == 1.0


class TestLogTicks:
    def test_powers_of_ten(self):
        assert log_ticks(3.4, floor=1.0) == {0.0: "1", 1.0: "10", 2.0: "100", 3.0: "1,000"}

    def test_default_floor_starts_below_one(self):
        ticks = log_ticks(1.2)
        assert ticks[-3.0] == "0.001"
        assert list(ticks) == [-3.0, -2.0, -1.0, 0.0, 1.0]

    def test_large_labels_use_thousands_separator(self):
        assert log_ticks(6.2)[6.0] == "1,000,000"

    def test_at_least_floor_tick(self):
        assert log_ticks(-0.5, floor=1.0) == {0.0: "1"}
        assert log_ticks(None, floor=1.0) == {0.0: "1"}

    def test_fractional_floor(self):
        assert log_ticks(1.5, floor=0.01) == {-2.0: "0.01", -1.0: "0.1", 0.0: "1", 1.0: "10"}
