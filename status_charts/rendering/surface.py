"""
Drawing surface abstraction.

The renderers decide what to draw and where; a ``DrawingSurface`` turns each
request into an actual primitive. ``MatplotlibSurface`` draws on one
Matplotlib axes, and ``MatplotlibPanelLayout`` arranges several surfaces on a
figure for the multi-panel summary.

Drawing options are Matplotlib keyword arguments passed through unvalidated.
"""

import abc
import logging
from typing import Any, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
from matplotlib.gridspec import GridSpec
from matplotlib.patches import Rectangle

from ..config import Config

logger = logging.getLogger("status_charts.rendering.surface")


Region = Tuple[float, float, float, float]

# Sides accepted by DrawingSurface.axis
AXIS_SIDES = ("bottom", "left", "top", "right")


class DrawingSurface(abc.ABC):
    """Primitive drawing operations used by the chart renderers."""

    @abc.abstractmethod
    def blank_panel(self) -> None:
        """Leave an empty panel (no axes, no data)."""

    @abc.abstractmethod
    def setup_frame(
        self,
        xlim: Tuple[float, float],
        ylim: Tuple[float, float],
        xlabel: str = "",
        ylabel: str = "",
        **options: Any
    ) -> None:
        """Set the plot region and axis titles without drawing any axis."""

    @abc.abstractmethod
    def plot_region(self) -> Region:
        """Return the current (x0, x1, y0, y1) plot region."""

    @abc.abstractmethod
    def axis(
        self,
        side: str,
        at: Optional[Sequence[float]] = None,
        labels: Optional[Sequence[str]] = None,
        **options: Any
    ) -> None:
        """Draw an axis with ticks; automatic tick positions when ``at`` is None."""

    @abc.abstractmethod
    def fill_rect(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        color: str,
        edgecolor: Optional[str] = None,
        **options: Any
    ) -> None:
        """Draw a filled rectangle."""

    @abc.abstractmethod
    def hline(self, y: float, **options: Any) -> None:
        """Draw a horizontal line across the plot region."""

    @abc.abstractmethod
    def vline(self, x: float, **options: Any) -> None:
        """Draw a vertical line across the plot region."""

    @abc.abstractmethod
    def lines(self, x: Sequence[float], y: Sequence[float], **options: Any) -> None:
        """Draw a connected line and/or point markers."""

    @abc.abstractmethod
    def text(self, x: float, y: float, label: str, **options: Any) -> None:
        """Draw text at data coordinates."""

    @abc.abstractmethod
    def title(self, text: str, **options: Any) -> None:
        """Set the panel title."""


class MatplotlibSurface(DrawingSurface):
    """
    Drawing surface backed by a single Matplotlib axes.
    
    Frames start with every spine and tick hidden; each ``axis`` call reveals
    one side, so only the axes the renderer asks for appear.
    
    Example:
        >>> fig, ax = plt.subplots()
        >>> surface = MatplotlibSurface(ax)
        >>> surface.setup_frame((1990, 2020), (0, 10), xlabel="Year")
        >>> surface.axis("bottom")
    """

    def __init__(self, ax: plt.Axes):
        self.ax = ax

    @property
    def figure(self) -> plt.Figure:
        return self.ax.figure

    def blank_panel(self) -> None:
        self.ax.cla()
        self.ax.set_axis_off()

    def setup_frame(self, xlim, ylim, xlabel="", ylabel="", **options):
        aspect = options.pop("aspect", None)
        ax = self.ax
        ax.cla()
        ax.set_xlim(*xlim)
        ax.set_ylim(*ylim)
        ax.set_xlabel(xlabel, **options)
        ax.set_ylabel(ylabel, **options)
        if aspect is not None:
            ax.set_aspect(aspect)
        for spine in ax.spines.values():
            spine.set_visible(False)
        ax.tick_params(
            bottom=False, top=False, left=False, right=False,
            labelbottom=False, labeltop=False, labelleft=False, labelright=False,
        )

    def plot_region(self) -> Region:
        x0, x1 = self.ax.get_xlim()
        y0, y1 = self.ax.get_ylim()
        return float(x0), float(x1), float(y0), float(y1)

    def axis(self, side, at=None, labels=None, **options):
        if side not in AXIS_SIDES:
            raise ValueError(f"Unknown axis side '{side}'. Use one of {AXIS_SIDES}")
        ax = self.ax
        horizontal = side in ("bottom", "top")
        target = ax.xaxis if horizontal else ax.yaxis
        
        if at is None:
            target.set_major_locator(mticker.MaxNLocator(integer=horizontal))
        elif labels is None:
            target.set_ticks(list(at))
        else:
            target.set_ticks(list(at), labels=list(labels))
        
        params = {side: True, f"label{side}": True}
        params.update(options)
        ax.spines[side].set_visible(True)
        ax.tick_params(axis="x" if horizontal else "y", **params)

    def fill_rect(self, x0, y0, x1, y1, color, edgecolor=None, **options):
        patch = Rectangle(
            (min(x0, x1), min(y0, y1)),
            abs(x1 - x0),
            abs(y1 - y0),
            facecolor=color,
            edgecolor=edgecolor if edgecolor is not None else color,
            **options,
        )
        self.ax.add_patch(patch)

    def hline(self, y, **options):
        self.ax.axhline(y, **options)

    def vline(self, x, **options):
        self.ax.axvline(x, **options)

    def lines(self, x, y, **options):
        self.ax.plot(list(x), list(y), **options)

    def text(self, x, y, label, **options):
        self.ax.text(x, y, label, **options)

    def title(self, text, **options):
        self.ax.set_title(text, **options)


class PanelLayout(abc.ABC):
    """A fixed arrangement of drawing surfaces on one page."""

    @abc.abstractmethod
    def surface(self, index: int) -> DrawingSurface:
        """Surface for panel ``index`` in reading order."""

    @abc.abstractmethod
    def suptitle(self, text: str, **options: Any) -> None:
        """Overall title above all panels."""


class MatplotlibPanelLayout(PanelLayout):
    """
    Summary page: a 2x2 grid of metric charts, optionally followed by one
    full-width timeline row.
    
    Attributes:
        fig: The Matplotlib figure holding all panels.
        surfaces: One surface per panel, charts first then the timeline.
    """

    def __init__(self, with_timeline: bool = True, config: Optional[Config] = None):
        self.config = config if config is not None else Config()
        rows = 3 if with_timeline else 2
        height = self.config.figure_height if with_timeline else self.config.figure_height * 2 / 3
        
        self.fig = plt.figure(
            figsize=(self.config.figure_width, height),
            facecolor=self.config.background_color,
        )
        grid = GridSpec(rows, 2, figure=self.fig, hspace=0.45, wspace=0.25, top=0.92)
        
        cells = [grid[0, 0], grid[0, 1], grid[1, 0], grid[1, 1]]
        if with_timeline:
            cells.append(grid[2, :])
        self.surfaces: List[MatplotlibSurface] = [
            MatplotlibSurface(self.fig.add_subplot(cell)) for cell in cells
        ]
        logger.debug(f"Created panel layout with {len(self.surfaces)} panels")

    def surface(self, index: int) -> MatplotlibSurface:
        return self.surfaces[index]

    def suptitle(self, text: str, **options: Any) -> None:
        self.fig.suptitle(text, **options)


def single_panel(
    config: Optional[Config] = None,
    height: Optional[float] = None
) -> Tuple[plt.Figure, MatplotlibSurface]:
    """Create a figure with one surface, sized from ``config``."""
    config = config if config is not None else Config()
    fig, ax = plt.subplots(
        figsize=(config.figure_width, height if height is not None else config.figure_height / 3),
        facecolor=config.background_color,
    )
    return fig, MatplotlibSurface(ax)
