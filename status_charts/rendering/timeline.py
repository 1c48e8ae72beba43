"""
Timeline status grids.

A timeline grid summarises status metrics as a row of colored, lettered cells
per metric, one column per year. Cell colors come from the status color map
and each row may use its own font face (e.g., bold for the headline status).
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

import pandas as pd

from ..calculations.scales import pretty_breaks
from ..calculations.series import coerce_number, finite_values
from ..config import Config
from ..constants import (
    DEFAULT_TIMELINE_METRICS,
    TIMELINE_CELL_SIZE,
    TIMELINE_ROW_PADDING,
    YEAR_COLUMN
)
from ..exceptions import ConfigurationError, InvalidParameterError
from ..models import FontStyle, StatusCell, TimelineMetric
from ..styles import TIMELINE_PLOT_STYLE, PlotStyle, StyleOverrides, resolve_style
from .colors import DEFAULT_COLOR_MAP, StatusColorMap, status_label
from .surface import DrawingSurface

logger = logging.getLogger("status_charts.rendering.timeline")


MetricSpec = Union[TimelineMetric, Mapping[str, Any]]

_FONT_NAMES = {
    "plain": FontStyle.PLAIN,
    "normal": FontStyle.PLAIN,
    "bold": FontStyle.BOLD,
    "italic": FontStyle.ITALIC,
    "bold italic": FontStyle.BOLD_ITALIC,
    "bolditalic": FontStyle.BOLD_ITALIC,
}


def resolve_font(font: Any) -> FontStyle:
    """
    Resolve a row font.
    
    Accepts a ``FontStyle``, one of the names 'plain', 'bold', 'italic',
    'bold italic' (also 'bold-italic' / 'bold_italic'), or the numeric codes
    1-4. Anything else falls back to plain.
    """
    if font is None:
        return FontStyle.PLAIN
    if isinstance(font, FontStyle):
        return font
    if isinstance(font, str):
        key = font.strip().lower().replace("-", " ").replace("_", " ")
        if key in _FONT_NAMES:
            return _FONT_NAMES[key]
    code = coerce_number(font)
    if code is not None and code in (1, 2, 3, 4):
        return FontStyle(int(code))
    logger.debug(f"Unknown font {font!r}; using plain")
    return FontStyle.PLAIN


def as_table(table: Any) -> pd.DataFrame:
    """Accept a DataFrame or anything DataFrame() understands (e.g., dict of columns)."""
    if isinstance(table, pd.DataFrame):
        return table
    return pd.DataFrame(table)


class TimelineGridRenderer:
    """
    Draw timeline status grids on a drawing surface.
    
    Rows are stacked top to bottom in the order of the metric specification.
    A row whose data column is missing from the table shows its label only.
    
    Attributes:
        surface: Target drawing surface.
        color_map: Status colors for cell fill and outline.
        style: Per-layer drawing options (defaults merged with overrides).
    """

    def __init__(
        self,
        surface: DrawingSurface,
        color_map: Optional[StatusColorMap] = None,
        style: Union[StyleOverrides, PlotStyle] = None,
        config: Optional[Config] = None
    ):
        self.surface = surface
        self.config = config if config is not None else Config()
        self.color_map = color_map if color_map is not None else DEFAULT_COLOR_MAP
        self.style = resolve_style(TIMELINE_PLOT_STYLE.merged(self.config.timeline_style), style)

    def render(
        self,
        table: Any,
        metrics: Sequence[MetricSpec] = DEFAULT_TIMELINE_METRICS,
        title: str = "Metrics & Status",
        start_year: Any = None,
        end_year: Any = None
    ) -> List[StatusCell]:
        """
        Draw the grid.
        
        Args:
            table: Status table with a ``Year`` column and one column per metric.
            metrics: Row specifications (label, data column, optional font).
            title: Grid title.
            start_year: First year shown; defaults to the earliest year in the table.
            end_year: Last year shown; defaults to the last pretty break after
                the latest year.
                
        Returns:
            The status cells drawn, in drawing order.
            
        Raises:
            ConfigurationError: If the table has no ``Year`` column or a metric
                entry lacks a label or data column.
            InvalidParameterError: If ``end_year`` precedes ``start_year``.
        """
        table = as_table(table)
        if YEAR_COLUMN not in table.columns:
            raise ConfigurationError(
                f"Timeline table is missing required column '{YEAR_COLUMN}'. "
                f"Found columns: {list(table.columns)}"
            )
        try:
            rows = [TimelineMetric.from_spec(spec) for spec in metrics]
        except KeyError as e:
            raise ConfigurationError(f"Invalid timeline metric specification: {e}") from e
        
        years = finite_values(table[YEAR_COLUMN])
        if not years:
            logger.info("Timeline table has no years; drawing empty panel")
            self.surface.blank_panel()
            return []
        
        breaks = pretty_breaks(years)
        start = coerce_number(start_year)
        end = coerce_number(end_year)
        start = min(years) if start is None else start
        end = max(breaks) if end is None else end
        if end < start:
            raise InvalidParameterError(f"end_year {end:g} precedes start_year {start:g}")
        
        x0, x1 = start - 0.5, end + 0.5
        self.surface.setup_frame(
            (x0, x1),
            (-len(rows) - TIMELINE_ROW_PADDING, 0),
            **self.style.layer("main"),
        )
        self.surface.axis(
            "top",
            at=[b for b in breaks if x0 <= b <= x1],
            **self.style.layer("x_axis"),
        )
        self.surface.title(title, **self.style.layer("title"))
        
        cells: List[StatusCell] = []
        for index, metric in enumerate(rows, start=1):
            font = resolve_font(metric.font)
            y = -index
            self.surface.text(
                x0, y, metric.label,
                **self.style.options("label", ha="right", va="center", clip_on=False, **font.text_options),
            )
            if metric.data_col not in table.columns:
                logger.debug(f"Column '{metric.data_col}' not in table; row '{metric.label}' left empty")
                continue
            cells.extend(self.draw_metric_row(y, metric, table, start, end, font))
        
        logger.debug(f"Timeline '{title}' drew {len(cells)} cells in {len(rows)} rows")
        return cells

    def draw_metric_row(
        self,
        y: float,
        metric: TimelineMetric,
        table: pd.DataFrame,
        start: float,
        end: float,
        font: FontStyle = FontStyle.PLAIN
    ) -> List[StatusCell]:
        """Draw one cell per year in [start, end] that has a status value."""
        half = TIMELINE_CELL_SIZE / 2
        cells = []
        seen = set()
        for raw_year, raw_status in zip(table[YEAR_COLUMN], table[metric.data_col]):
            year = coerce_number(raw_year)
            status = status_label(raw_status)
            if year is None or status is None or not (start <= year <= end):
                continue
            year = int(year)
            if year in seen:
                continue
            seen.add(year)
            
            self.surface.fill_rect(
                year - half, y - half, year + half, y + half,
                color=self.color_map.fill_color(status),
                edgecolor=self.color_map.outline_color(status),
                **self.style.layer("metric_cell"),
            )
            self.surface.text(
                year, y, self.color_map.cell_code(status),
                **self.style.options("metric_text", ha="center", va="center", **font.text_options),
            )
            cells.append(StatusCell(row_label=metric.label, year=year, status=status, font=font))
        return cells


def render_timeline_grid(
    surface: DrawingSurface,
    table: Any,
    metrics: Sequence[MetricSpec] = DEFAULT_TIMELINE_METRICS,
    title: str = "Metrics & Status",
    start_year: Any = None,
    end_year: Any = None,
    style_overrides: Union[StyleOverrides, PlotStyle] = None,
    color_map: Optional[StatusColorMap] = None,
    config: Optional[Config] = None
) -> List[StatusCell]:
    """Draw one timeline grid (convenience wrapper around ``TimelineGridRenderer``)."""
    renderer = TimelineGridRenderer(surface, color_map=color_map, style=style_overrides, config=config)
    return renderer.render(table, metrics=metrics, title=title, start_year=start_year, end_year=end_year)
