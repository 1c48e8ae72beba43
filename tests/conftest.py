"""
Shared fixtures for the status_charts tests.

Run with: python -m pytest tests/
"""

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd
import pytest

from status_charts.rendering.surface import DrawingSurface


class RecordingSurface(DrawingSurface):
    """Drawing surface that records every primitive call instead of drawing."""

    def __init__(self):
        self.calls = []
        self.frame = (0.0, 1.0, 0.0, 1.0)

    def _record(self, method, *args, **kwargs):
        self.calls.append((method, args, kwargs))

    def blank_panel(self):
        self._record("blank_panel")

    def setup_frame(self, xlim, ylim, xlabel="", ylabel="", **options):
        self.frame = (xlim[0], xlim[1], ylim[0], ylim[1])
        self._record("setup_frame", xlim, ylim, xlabel=xlabel, ylabel=ylabel, **options)

    def plot_region(self):
        return self.frame

    def axis(self, side, at=None, labels=None, **options):
        self._record("axis", side, at=at, labels=labels, **options)

    def fill_rect(self, x0, y0, x1, y1, color, edgecolor=None, **options):
        self._record("fill_rect", x0, y0, x1, y1, color=color, edgecolor=edgecolor, **options)

    def hline(self, y, **options):
        self._record("hline", y, **options)

    def vline(self, x, **options):
        self._record("vline", x, **options)

    def lines(self, x, y, **options):
        self._record("lines", list(x), list(y), **options)

    def text(self, x, y, label, **options):
        self._record("text", x, y, label, **options)

    def title(self, text, **options):
        self._record("title", text, **options)

    # Helpers for assertions

    @property
    def methods(self):
        return [call[0] for call in self.calls]

    def of(self, method):
        return [call for call in self.calls if call[0] == method]


class RecordingLayout:
    """Panel layout handing out recording surfaces."""

    def __init__(self, count=5):
        self.surfaces = [RecordingSurface() for _ in range(count)]
        self.titles = []

    def surface(self, index):
        return self.surfaces[index]

    def suptitle(self, text, **options):
        self.titles.append((text, options))


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def layout():
    return RecordingLayout()


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def abundance_table():
    years = list(range(1990, 2006))
    values = [1200, 800, 15000, 950, 1500, 700, 18000, 1100,
              1800, 650, 21000, 1300, 2100, 600, 16000, 1250]
    return pd.DataFrame({"Year": years, "Escapement_Wild": values})


@pytest.fixture
def metrics_table():
    years = list(range(1995, 2006))
    statuses = ["Red", "Red", "Amber", "Amber", "Green", None,
                "Green", "Amber", "RedAmber", "AmberGreen", "Green"]
    return pd.DataFrame({
        "Year": years,
        "LongTrend": [60, 55, 70, 80, 95, 110, 120, 90, 85, 100, 105],
        "PercChange": [-40, -35, -20, -10, 5, 15, 30, 10, -5, 0, 12],
        "RelLBM.Status": statuses,
        "AbsLBM.Status": ["Amber"] * 11,
        "RapidStatus.Status": statuses,
        "RapidStatus.Confidence": ["High", "High", "Moderate", "Low", "High", "High",
                                   "Moderate", "Moderate", "Low", "High", "High"],
    })


@pytest.fixture
def attributes():
    return {
        "CU_Name": "Chilko Lake",
        "RelAbd_LBM": 1000,
        "RelAbd_UBM": 4000,
        "AbsAbd_LBM": 1500,
        "AbsAbd_UBM": 10000,
        "LongTrend_LBM": 0.5,
        "LongTrend_UBM": 0.75,
        "PercChange_LBM": -25,
        "PercChange_UBM": -15,
        "AvGen": 4,
        "DomCycleYear": "NA",
        "DataQualkIdx": "Abs_Abd",
    }
