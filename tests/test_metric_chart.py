"""
Tests for the metric chart renderer.

Most tests draw on a RecordingSurface and assert on the sequence of drawing
primitives; a few draw on a real Matplotlib axes.

Run with: python -m pytest tests/test_metric_chart.py
"""

import math

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

from status_charts.config import Config
from status_charts.models import BenchmarkZones, ReferenceLine
from status_charts.rendering.colors import background_color
from status_charts.rendering.metric_chart import (
    MetricChartRenderer,
    MetricChartRequest,
    as_horizontal_refs,
    as_vertical_refs,
    as_zones,
    render_metric_chart
)
from status_charts.rendering.surface import MatplotlibSurface


DATA = {2000: 10, 2001: 12, 2002: 9}


def full_request(**overrides):
    options = dict(
        data=DATA,
        zones=(8, 11),
        moving_average_window=2,
        dom_cycle_first_year=2000,
        h_ref_lines={"Same": 10},
        v_ref_lines=2001,
        title="Relative Abundance Metric",
    )
    options.update(overrides)
    return MetricChartRequest(**options)


class TestPipeline:
    def test_layer_order(self, surface):
        MetricChartRenderer(surface).render(full_request())
        assert surface.methods == [
            "setup_frame",
            "axis", "axis",
            "fill_rect", "fill_rect", "fill_rect",
            "hline", "text",
            "vline",
            "lines", "lines", "lines",
            "title",
        ]

    def test_zones_drawn_before_lines_and_data(self, surface):
        MetricChartRenderer(surface).render(full_request())
        methods = surface.methods
        last_zone = max(i for i, m in enumerate(methods) if m == "fill_rect")
        first_line = min(i for i, m in enumerate(methods) if m in ("hline", "vline", "lines"))
        assert last_zone < first_line

    def test_title_is_last(self, surface):
        MetricChartRenderer(surface).render(full_request())
        assert surface.calls[-1] == ("title", ("Relative Abundance Metric",), {"fontsize": 15, "color": "darkblue"})

    def test_steps_callable_individually(self, surface):
        renderer = MetricChartRenderer(surface)
        request = full_request()
        geometry = renderer.compute_geometry(request)
        renderer.draw_zones(request, geometry)
        assert surface.methods == ["fill_rect"] * 3


class TestEmptyData:
    @pytest.mark.parametrize("data", [None, {}, {2000: None, 2001: "NA"}])
    def test_empty_series_draws_blank_panel_only(self, surface, data):
        result = MetricChartRenderer(surface).render(full_request(data=data))
        assert result is None
        assert surface.methods == ["blank_panel"]


class TestGeometry:
    def test_region_padded(self, surface):
        geometry = MetricChartRenderer(surface).render(full_request())
        assert geometry.x_range == (2000.0, 2005.0)
        assert geometry.y_range == (0.0, 12.0)
        assert geometry.region == pytest.approx((1999.8, 2005.2, -0.48, 12.48))
        assert surface.frame == pytest.approx((1999.8, 2005.2, -0.48, 12.48))

    def test_y_range_includes_thresholds_and_refs(self, surface):
        request = MetricChartRequest(data=DATA, zones=(5, 20), h_ref_lines={"Double": 30})
        geometry = MetricChartRenderer(surface).render(request)
        assert geometry.y_range == (0.0, 30.0)

    def test_y_range_extras(self, surface):
        request = MetricChartRequest(data={2000: -10, 2001: 20}, y_range=[-55, 50])
        geometry = MetricChartRenderer(surface).render(request)
        assert geometry.y_range == (-55.0, 50.0)

    def test_requested_x_max(self, surface):
        request = MetricChartRequest(data=DATA, x_range={"max": 2010})
        assert MetricChartRenderer(surface).render(request).x_range == (2000.0, 2010.0)

    def test_large_values_scaled(self, surface):
        request = MetricChartRequest(data={2000: 25000, 2001: 30000}, series_label="Wild Spn")
        MetricChartRenderer(surface).render(request)
        frame = surface.of("setup_frame")[0]
        assert frame[2]["ylabel"] == "Wild Spn (thousands)"
        metric = surface.of("lines")[0]
        assert metric[1][1] == [25.0, 30.0]

    def test_missing_values_kept_as_gaps(self, surface):
        request = MetricChartRequest(data={2000: 5, 2001: None, 2002: 7})
        MetricChartRenderer(surface).render(request)
        xs, ys = surface.of("lines")[0][1]
        assert xs == [2000.0, 2001.0, 2002.0]
        assert ys[0] == 5.0 and math.isnan(ys[1]) and ys[2] == 7.0


class TestZones:
    def test_band_order_and_colors(self, surface):
        MetricChartRenderer(surface).render(full_request())
        x0, x1, y0, y1 = surface.frame
        rects = surface.of("fill_rect")
        assert [r[1] for r in rects] == [
            (x0, 11.0, x1, y1),
            (x0, 8.0, x1, 11.0),
            (x0, y0, x1, 8.0),
        ]
        assert [r[2]["color"] for r in rects] == [
            background_color("Green"),
            background_color("Amber"),
            background_color("Red"),
        ]

    @pytest.mark.parametrize("zones", [None, (8, None), ("NA", 11), {"lower": 8}])
    def test_incomplete_zones_skipped(self, surface, zones):
        MetricChartRenderer(surface).render(full_request(zones=zones))
        assert surface.of("fill_rect") == []


class TestReferenceLines:
    def test_labelled_hline_at_right_edge(self, surface):
        MetricChartRenderer(surface).render(full_request(h_ref_lines={"Half": 5, "Double": "NA"}))
        assert [c[1] for c in surface.of("hline")] == [(5.0,)]
        text = surface.of("text")[0]
        assert text[1] == (surface.frame[1], 5.0, "Half")
        assert text[2]["ha"] == "right"

    def test_vertical_refs_in_year_units(self, surface):
        request = full_request(use_log=True, v_ref_lines=[2001, None])
        MetricChartRenderer(surface).render(request)
        assert [c[1] for c in surface.of("vline")] == [(2001.0,)]

    def test_no_vertical_refs(self, surface):
        MetricChartRenderer(surface).render(full_request(v_ref_lines=None))
        assert surface.of("vline") == []


class TestLogScale:
    def test_log_axis_ticks(self, surface):
        request = MetricChartRequest(data={2000: 0, 2001: 100, 2002: 2500}, use_log=True)
        MetricChartRenderer(surface).render(request)
        y_axis = surface.of("axis")[1]
        assert y_axis[1] == ("left",)
        assert y_axis[2]["at"] == [-3.0, -2.0, -1.0, 0.0, 1.0, 2.0, 3.0]
        assert y_axis[2]["labels"] == ["0.001", "0.01", "0.1", "1", "10", "100", "1,000"]

    def test_log_values_floor_clamped(self, surface):
        request = MetricChartRequest(data={2000: 0, 2001: 100, 2002: 2500}, use_log=True)
        MetricChartRenderer(surface).render(request)
        ys = surface.of("lines")[0][1][1]
        np.testing.assert_allclose(ys, [-3.0, 2.0, math.log10(2500)])

    def test_log_zones_and_refs_transformed(self, surface):
        request = MetricChartRequest(
            data={2000: 50, 2001: 5000},
            zones=(100, 1000),
            h_ref_lines={"Target": 10000},
            use_log=True,
        )
        MetricChartRenderer(surface).render(request)
        rects = surface.of("fill_rect")
        assert rects[1][1][1] == pytest.approx(2.0)
        assert rects[1][1][3] == pytest.approx(3.0)
        assert surface.of("hline")[0][1][0] == pytest.approx(4.0)

    def test_custom_log_floor(self, surface):
        request = MetricChartRequest(data={2000: 0, 2001: 10}, use_log=True)
        MetricChartRenderer(surface, config=Config(log_floor=0.1)).render(request)
        ys = surface.of("lines")[0][1][1]
        np.testing.assert_allclose(ys, [-1.0, 1.0])

    def test_values_below_one_stay_distinct(self, surface):
        request = MetricChartRequest(data={2000: 0.2, 2001: 0.8, 2002: 1.5}, use_log=True)
        MetricChartRenderer(surface).render(request)
        ys = surface.of("lines")[0][1][1]
        assert ys[0] < ys[1] < ys[2]
        np.testing.assert_allclose(ys, np.log10([0.2, 0.8, 1.5]))


class TestXAxis:
    def test_tick_step(self, surface):
        MetricChartRenderer(surface).render(full_request(x_tick_step=5))
        assert surface.of("axis")[0][2]["at"] == [2000.0, 2005.0]

    def test_automatic_ticks(self, surface):
        MetricChartRenderer(surface).render(full_request())
        x_axis = surface.of("axis")[0]
        assert x_axis[1] == ("bottom",)
        assert x_axis[2]["at"] is None


class TestMovingAverageAndCycles:
    def test_moving_average(self, surface):
        MetricChartRenderer(surface).render(full_request(dom_cycle_first_year=None))
        average = surface.of("lines")[1]
        ys = average[1][1]
        assert math.isnan(ys[0])
        assert ys[1:] == [11.0, 10.5]
        assert average[2]["color"] == "red"

    def test_no_moving_average_without_window(self, surface):
        MetricChartRenderer(surface).render(full_request(moving_average_window="NA", dom_cycle_first_year=None))
        assert len(surface.of("lines")) == 1

    def test_dominant_years(self, surface):
        data = {year: year - 1980 for year in range(1990, 2006)}
        request = MetricChartRequest(data=data, dom_cycle_first_year=1990)
        MetricChartRenderer(surface).render(request)
        dom = surface.of("lines")[1]
        assert dom[1][0] == [1990.0, 1994.0, 1998.0, 2002.0]
        assert dom[1][1] == [10.0, 14.0, 18.0, 22.0]
        assert dom[2]["markerfacecolor"] == "red"

    def test_dominant_years_skip_missing_values(self, surface):
        data = {year: 1.0 for year in range(1990, 2006)}
        data[1994] = None
        MetricChartRenderer(surface).render(MetricChartRequest(data=data, dom_cycle_first_year=1990))
        assert surface.of("lines")[1][1][0] == [1990.0, 1998.0, 2002.0]


class TestStyle:
    def test_style_override(self, surface):
        MetricChartRenderer(surface, style={"metric": {"color": "black"}}).render(full_request())
        assert surface.of("lines")[0][2]["color"] == "black"
        assert surface.of("lines")[0][2]["marker"] == "o"

    def test_config_style_override(self, surface):
        config = Config(metric_style={"hline": {"color": "purple"}})
        MetricChartRenderer(surface, config=config).render(full_request())
        assert surface.of("hline")[0][2]["color"] == "purple"


class TestNormalisers:
    def test_zones(self):
        assert as_zones({"Red": 1, "Amber": 2}) == BenchmarkZones(1, 2)
        assert as_zones([1, 2, 3]) == BenchmarkZones()

    def test_horizontal_refs(self):
        refs = as_horizontal_refs([("Half", 0.5), ReferenceLine(1, "Same")])
        assert [(r.label, r.value) for r in refs] == [("Half", 0.5), ("Same", 1.0)]

    def test_vertical_refs(self):
        assert [r.value for r in as_vertical_refs(2001)] == [2001.0]
        assert [r.value for r in as_vertical_refs([2001, "2005"])] == [2001.0, 2005.0]


class TestMatplotlibSurface:
    def test_renders_on_axes(self):
        fig, ax = plt.subplots()
        geometry = render_metric_chart(
            MatplotlibSurface(ax),
            data=DATA,
            zones=(8, 11),
            h_ref_lines={"Same": 10},
            title="Percent Change Metric",
        )
        assert ax.get_xlim() == pytest.approx(geometry.region[:2])
        assert ax.get_ylim() == pytest.approx(geometry.region[2:])
        assert len(ax.patches) == 3
        assert len(ax.lines) == 2
        assert ax.get_title() == "Percent Change Metric"
        assert ax.spines["bottom"].get_visible()
        assert not ax.spines["top"].get_visible()

    def test_blank_panel(self):
        fig, ax = plt.subplots()
        assert render_metric_chart(MatplotlibSurface(ax), data={}) is None
        assert not ax.axison


class TestLooseInputs:
    def test_scalar_y_range(self, surface):
        geometry = render_metric_chart(surface, {2000: 5, 2001: 6}, y_range=0.5)
        assert geometry.y_range == (0.0, 6.0)

    def test_scalar_y_range_extends_axis(self, surface):
        geometry = render_metric_chart(surface, {2000: 5, 2001: 6}, y_range=-20)
        assert geometry.y_range == (-20.0, 6.0)

    def test_scalar_x_range_ignored(self, surface):
        geometry = render_metric_chart(surface, {2001: 5, 2004: 6}, x_range=2010)
        assert geometry.x_range == (2000.0, 2005.0)

    def test_repeated_year_with_dominant_cycle(self, surface):
        data = pd.Series([1, 2, 3, 4], index=[1990, 1990, 1994, 1995])
        render_metric_chart(surface, data, dom_cycle_first_year=1990)
        metric, dom = surface.of("lines")
        assert metric[1][0] == [1990.0, 1994.0, 1995.0]
        assert dom[1] == ([1990.0, 1994.0], [1.0, 3.0])


class TestPlotRegion:
    def test_layers_span_surface_region(self, surface):
        renderer = MetricChartRenderer(surface)
        request = full_request(h_ref_lines={"Half": 5})
        geometry = renderer.compute_geometry(request)
        surface.frame = (1990.0, 2010.0, -5.0, 50.0)
        renderer.draw_zones(request, geometry)
        renderer.draw_horizontal_reference_lines(request, geometry)
        rects = surface.of("fill_rect")
        assert rects[0][1] == (1990.0, 11.0, 2010.0, 50.0)
        assert rects[2][1] == (1990.0, -5.0, 2010.0, 8.0)
        assert surface.of("text")[0][1] == (2010.0, 5.0, "Half")
