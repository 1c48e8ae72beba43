"""
Tests for the timeline status grid renderer.

Run with: python -m pytest tests/test_timeline.py
"""

import matplotlib.pyplot as plt
import pandas as pd
import pytest

from status_charts.constants import DEFAULT_TIMELINE_METRICS
from status_charts.exceptions import ConfigurationError, InvalidParameterError
from status_charts.models import FontStyle, StatusCell, TimelineMetric
from status_charts.rendering.colors import fill_color, outline_color
from status_charts.rendering.surface import MatplotlibSurface
from status_charts.rendering.timeline import (
    TimelineGridRenderer,
    render_timeline_grid,
    resolve_font
)


TABLE = {
    "Year": [2000, 2001, 2002],
    "A": ["Red", "Amber", None],
    "B": ["High", "NA", "Low"],
}

METRICS = [
    {"label": "RelAbd", "dataCol": "A"},
    {"label": "Conf", "dataCol": "B", "font": "bold"},
    {"label": "Missing", "dataCol": "Z"},
]


def render(surface, table=TABLE, metrics=METRICS, **kwargs):
    kwargs.setdefault("start_year", 2000)
    kwargs.setdefault("end_year", 2002)
    return TimelineGridRenderer(surface).render(table, metrics=metrics, **kwargs)


class TestTimelineGrid:
    def test_call_sequence(self, surface):
        render(surface)
        assert surface.methods == [
            "setup_frame", "axis", "title",
            "text", "fill_rect", "text", "fill_rect", "text",
            "text", "fill_rect", "text", "fill_rect", "text",
            "text",
        ]

    def test_frame(self, surface):
        render(surface)
        frame = surface.of("setup_frame")[0]
        assert frame[1][0] == (1999.5, 2002.5)
        assert frame[1][1] == pytest.approx((-3.3, 0))
        assert frame[2]["aspect"] == "equal"

    def test_cells_returned(self, surface):
        cells = render(surface)
        assert cells == [
            StatusCell("RelAbd", 2000, "Red"),
            StatusCell("RelAbd", 2001, "Amber"),
            StatusCell("Conf", 2000, "High", FontStyle.BOLD),
            StatusCell("Conf", 2002, "Low", FontStyle.BOLD),
        ]

    def test_cell_geometry_and_colors(self, surface):
        render(surface)
        rect = surface.of("fill_rect")[0]
        assert rect[1] == pytest.approx((1999.6, -1.4, 2000.4, -0.6))
        assert rect[2]["color"] == fill_color("Red")
        assert rect[2]["edgecolor"] == outline_color("Red")

    def test_cell_codes(self, surface):
        render(surface)
        codes = [c[1][2] for c in surface.of("text") if c[2].get("ha") == "center"]
        assert codes == ["R", "A", "H", "L"]

    def test_row_labels_left_of_grid(self, surface):
        render(surface)
        labels = [c for c in surface.of("text") if c[2].get("ha") == "right"]
        assert [c[1] for c in labels] == [
            (1999.5, -1, "RelAbd"),
            (1999.5, -2, "Conf"),
            (1999.5, -3, "Missing"),
        ]

    def test_row_font(self, surface):
        render(surface)
        bold = [c for c in surface.of("text") if c[2]["fontweight"] == "bold"]
        assert [c[1][2] for c in bold] == ["Conf", "H", "L"]

    def test_missing_column_draws_label_only(self, surface):
        cells = render(surface, metrics=[{"label": "Missing", "dataCol": "Z"}])
        assert cells == []
        assert surface.methods == ["setup_frame", "axis", "title", "text"]

    def test_years_outside_range_skipped(self, surface):
        cells = render(surface, start_year=2001)
        assert [(c.row_label, c.year) for c in cells] == [("RelAbd", 2001), ("Conf", 2002)]

    def test_duplicate_years_drawn_once(self, surface):
        table = {"Year": [2000, 2000], "A": ["Red", "Green"]}
        cells = render(surface, table=table, metrics=METRICS[:1], end_year=2000)
        assert [c.status for c in cells] == ["Red"]

    def test_title(self, surface):
        render(surface, title="Status Timeline")
        assert surface.of("title")[0][1] == ("Status Timeline",)

    def test_default_years(self, surface):
        table = {"Year": [1993, 2018], "A": ["Red", "Green"]}
        TimelineGridRenderer(surface).render(table, metrics=METRICS[:1])
        frame = surface.of("setup_frame")[0]
        assert frame[1][0] == (1992.5, 2020.5)
        assert surface.of("axis")[0][2]["at"] == [1995.0, 2000.0, 2005.0, 2010.0, 2015.0, 2020.0]

    def test_dataframe_and_metric_objects(self, surface):
        metrics = [TimelineMetric("RelAbd", "A")]
        cells = render(surface, table=pd.DataFrame(TABLE), metrics=metrics)
        assert len(cells) == 2

    def test_style_override(self, surface):
        TimelineGridRenderer(surface, style={"label": {"fontsize": 8}}).render(
            TABLE, metrics=METRICS[:1], start_year=2000, end_year=2002
        )
        assert surface.of("text")[0][2]["fontsize"] == 8


class TestTimelineErrors:
    def test_missing_year_column(self, surface):
        with pytest.raises(ConfigurationError):
            TimelineGridRenderer(surface).render({"A": ["Red"]}, metrics=METRICS)
        assert surface.calls == []

    def test_invalid_metric_entry(self, surface):
        with pytest.raises(ConfigurationError):
            render(surface, metrics=[{"label": "RelAbd"}])

    def test_end_before_start(self, surface):
        with pytest.raises(InvalidParameterError):
            render(surface, start_year=2002, end_year=2000)

    def test_nullable_string_column(self, surface):
        table = pd.DataFrame({"Year": [2000, 2001], "A": ["Red", None]}).convert_dtypes()
        cells = render(surface, table=table, metrics=METRICS[:1], end_year=2001)
        assert [(c.year, c.status) for c in cells] == [(2000, "Red")]

    def test_no_years_draws_blank_panel(self, surface):
        cells = TimelineGridRenderer(surface).render({"Year": [], "A": []}, metrics=METRICS)
        assert cells == []
        assert surface.methods == ["blank_panel"]


class TestDefaultMetrics:
    def test_scanner_table(self, surface, metrics_table):
        cells = render_timeline_grid(surface, metrics_table, start_year=1995)
        assert len(cells) == 42
        labels = [c[1][2] for c in surface.of("text") if c[2].get("ha") == "right"]
        assert labels == [m["label"] for m in DEFAULT_TIMELINE_METRICS]
        rapid = {c.font for c in cells if c.row_label == "RapidStatus"}
        assert rapid == {FontStyle.BOLD}

    def test_matplotlib_surface(self, metrics_table):
        fig, ax = plt.subplots()
        cells = render_timeline_grid(MatplotlibSurface(ax), metrics_table)
        assert len(ax.patches) == len(cells)
        assert len(ax.texts) == len(cells) + len(DEFAULT_TIMELINE_METRICS)
        assert ax.get_title() == "Metrics & Status"


class TestResolveFont:
    @pytest.mark.parametrize("font,expected", [
        (None, FontStyle.PLAIN),
        ("plain", FontStyle.PLAIN),
        ("Bold", FontStyle.BOLD),
        ("italic", FontStyle.ITALIC),
        ("bold-italic", FontStyle.BOLD_ITALIC),
        ("Bold_Italic", FontStyle.BOLD_ITALIC),
        (2, FontStyle.BOLD),
        ("3", FontStyle.ITALIC),
        (FontStyle.ITALIC, FontStyle.ITALIC),
        (5, FontStyle.PLAIN),
        ("heavy", FontStyle.PLAIN),
        (float("nan"), FontStyle.PLAIN),
    ])
    def test_resolve(self, font, expected):
        assert resolve_font(font) is expected
