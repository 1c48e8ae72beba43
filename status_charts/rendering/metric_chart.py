"""
Metric time series charts.

A metric chart shows one status metric over the years with optional benchmark
zone shading, horizontal and vertical reference lines, a moving average and
highlighted dominant cycle years. Layers are drawn as an ordered pipeline so
background shading never hides lines or data:

    frame -> x axis -> y axis -> zones -> horizontal reference lines
    -> vertical reference lines -> metric -> moving average
    -> dominant cycle years -> title

Each pipeline step is a public ``draw_*`` method taking the request and the
computed ``ChartGeometry``, so steps can be exercised on their own.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from ..calculations.scales import (
    AxisSpec,
    RequestedRange,
    axis_specs,
    log_ticks,
    pretty_range,
    to_axis_value
)
from ..calculations.series import (
    SeriesLike,
    as_time_series,
    coerce_number,
    dominant_cycle_years,
    finite_values,
    has_values,
    running_mean
)
from ..config import Config
from ..constants import LOG_FLOOR
from ..models import BenchmarkZones, ReferenceLine
from ..styles import METRIC_PLOT_STYLE, PlotStyle, StyleOverrides, resolve_style
from .colors import DEFAULT_COLOR_MAP, StatusColorMap
from .surface import DrawingSurface, Region

logger = logging.getLogger("status_charts.rendering.metric_chart")


ZonesLike = Union[BenchmarkZones, Mapping[str, Any], Sequence[Any], None]
HorizontalRefs = Union[Mapping[str, Any], Iterable[Union[ReferenceLine, Tuple[str, Any]]], None]
VerticalRefs = Union[Any, Iterable[Any], None]


def as_zones(zones: ZonesLike) -> BenchmarkZones:
    """
    Normalise benchmark zones.
    
    Accepts ``BenchmarkZones``, a mapping with ``lower``/``upper`` (or the
    legacy ``Red``/``Amber`` keys giving the upper edge of each band), or a
    (lower, upper) pair.
    """
    if zones is None:
        return BenchmarkZones()
    if isinstance(zones, BenchmarkZones):
        return zones
    if isinstance(zones, Mapping):
        lower = zones.get("lower", zones.get("Red"))
        upper = zones.get("upper", zones.get("Amber"))
        return BenchmarkZones(lower, upper)
    items = list(zones)
    if len(items) != 2:
        logger.warning(f"Ignoring benchmark zones {zones!r}; expected (lower, upper)")
        return BenchmarkZones()
    return BenchmarkZones(items[0], items[1])


def as_horizontal_refs(refs: HorizontalRefs) -> List[ReferenceLine]:
    """Normalise labelled horizontal reference lines, keeping their order."""
    if refs is None:
        return []
    if isinstance(refs, Mapping):
        return [ReferenceLine(value, str(label)) for label, value in refs.items()]
    lines = []
    for ref in refs:
        if isinstance(ref, ReferenceLine):
            lines.append(ref)
        else:
            label, value = ref
            lines.append(ReferenceLine(value, str(label)))
    return lines


def as_vertical_refs(refs: VerticalRefs) -> List[ReferenceLine]:
    """Normalise vertical reference lines given as one year or several."""
    if refs is None:
        return []
    if isinstance(refs, ReferenceLine):
        return [refs]
    if isinstance(refs, (str, bytes)) or np.isscalar(refs):
        return [ReferenceLine(refs)]
    return [ref if isinstance(ref, ReferenceLine) else ReferenceLine(ref) for ref in refs]


@dataclass
class MetricChartRequest:
    """
    Everything needed to draw one metric chart.
    
    Attributes:
        data: Year -> value series; missing values are drawn as gaps.
        zones: Lower and upper benchmarks; bands are drawn only when both are
            defined.
        moving_average_window: Window (years) of the trailing moving average.
        dom_cycle_first_year: First dominant cycle year of a cyclic unit.
        h_ref_lines: Labelled horizontal reference lines (label -> value).
        x_range: Optional ``min``/``max`` overrides for the year axis.
        y_range: Extra value(s) the y axis must include; a scalar is accepted.
        x_tick_step: Force year tick marks to this spacing.
        use_log: Draw values on a log10 axis.
        title: Chart title.
        series_label: Name of the series, used in the y axis label.
        v_ref_lines: Year(s) marked with vertical reference lines.
    """

    data: SeriesLike = None
    zones: ZonesLike = None
    moving_average_window: Any = None
    dom_cycle_first_year: Any = None
    h_ref_lines: HorizontalRefs = None
    x_range: RequestedRange = None
    y_range: Optional[Sequence[Any]] = None
    x_tick_step: Any = None
    use_log: bool = False
    title: str = ""
    series_label: str = ""
    v_ref_lines: VerticalRefs = None


@dataclass
class ChartGeometry:
    """Plotting coordinates derived from a request."""

    series: pd.Series
    values: np.ndarray
    axis: AxisSpec
    x_range: Tuple[float, float]
    y_range: Tuple[float, float]
    region: Region
    zones: BenchmarkZones
    h_refs: List[ReferenceLine] = field(default_factory=list)
    v_refs: List[ReferenceLine] = field(default_factory=list)
    use_log: bool = False
    log_floor: float = LOG_FLOOR
    log_max: Optional[float] = None

    @property
    def years(self) -> np.ndarray:
        return self.series.index.to_numpy(dtype=float)

    def transform(self, raw: Any) -> Optional[float]:
        """Raw value -> plotting coordinate (None when undefined)."""
        value = to_axis_value(coerce_number(raw), self.use_log, self.log_floor)
        if value is None:
            return None
        return value / self.axis.scale


class MetricChartRenderer:
    """
    Draw metric charts on a drawing surface.
    
    Attributes:
        surface: Target drawing surface.
        style: Per-layer drawing options (defaults merged with overrides).
        color_map: Status colors used for zone shading.
        config: Axis padding, log floor, year granularity and cycle length.
        
    Example:
        >>> renderer = MetricChartRenderer(surface)
        >>> renderer.render(MetricChartRequest(
        ...     data={2000: 10, 2001: 12, 2002: 9},
        ...     zones=(8, 11),
        ...     title="Relative Abundance Metric",
        ... ))
    """

    PIPELINE = (
        "frame",
        "x_axis",
        "y_axis",
        "zones",
        "horizontal_reference_lines",
        "vertical_reference_lines",
        "metric",
        "moving_average",
        "dominant_cycle",
        "title",
    )

    def __init__(
        self,
        surface: DrawingSurface,
        style: Union[StyleOverrides, PlotStyle] = None,
        color_map: Optional[StatusColorMap] = None,
        config: Optional[Config] = None
    ):
        self.surface = surface
        self.config = config if config is not None else Config()
        self.style = resolve_style(METRIC_PLOT_STYLE.merged(self.config.metric_style), style)
        self.color_map = color_map if color_map is not None else DEFAULT_COLOR_MAP

    def compute_geometry(self, request: MetricChartRequest) -> Optional[ChartGeometry]:
        """
        Derive axis ranges and plotting values.
        
        Returns:
            The chart geometry, or None when the series has no values.
        """
        series = as_time_series(request.data)
        if not has_values(series):
            return None
        
        use_log = bool(request.use_log)
        floor = self.config.log_floor
        zones = as_zones(request.zones)
        h_refs = as_horizontal_refs(request.h_ref_lines)
        v_refs = as_vertical_refs(request.v_ref_lines)
        
        # Every value the y axis has to show, in raw units
        candidates = [0.0]
        candidates += finite_values(series.to_numpy())
        candidates += [v for v in (zones.lower, zones.upper) if v is not None]
        candidates += [ref.value for ref in h_refs if ref.is_defined]
        if request.y_range is not None:
            candidates += finite_values(np.atleast_1d(np.asarray(request.y_range, dtype=object)))
        
        axis_values = [to_axis_value(v, use_log, floor) for v in candidates]
        y_min, y_max = min(axis_values), max(axis_values)
        axis = axis_specs(y_max, request.series_label, use_log)
        
        y_lo, y_hi = y_min / axis.scale, y_max / axis.scale
        if y_hi <= y_lo:
            y_hi = y_lo + 1.0
        
        x_lo, x_hi = pretty_range(
            request.x_range,
            series.index.to_numpy(),
            nearest=self.config.year_granularity,
        )
        
        pad = self.config.axis_padding
        x_pad = (x_hi - x_lo) * pad
        y_pad = (y_hi - y_lo) * pad
        region = (x_lo - x_pad, x_hi + x_pad, y_lo - y_pad, y_hi + y_pad)
        
        values = np.asarray(to_axis_value(series, use_log, floor), dtype=float) / axis.scale
        
        return ChartGeometry(
            series=series,
            values=values,
            axis=axis,
            x_range=(x_lo, x_hi),
            y_range=(y_lo, y_hi),
            region=region,
            zones=zones,
            h_refs=h_refs,
            v_refs=v_refs,
            use_log=use_log,
            log_floor=floor,
            log_max=y_max if use_log else None,
        )

    def render(self, request: MetricChartRequest) -> Optional[ChartGeometry]:
        """
        Draw a complete chart.
        
        Returns:
            The geometry used for drawing, or None when an empty panel was
            drawn because the series has no values.
        """
        geometry = self.compute_geometry(request)
        if geometry is None:
            logger.info(f"No data for '{request.title}'; drawing empty panel")
            self.surface.blank_panel()
            return None
        
        logger.debug(
            f"Rendering '{request.title}': {len(geometry.series)} years, "
            f"x={geometry.x_range}, y={geometry.y_range}, log={geometry.use_log}"
        )
        for step in self.PIPELINE:
            getattr(self, f"draw_{step}")(request, geometry)
        return geometry

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def draw_frame(self, request: MetricChartRequest, geometry: ChartGeometry) -> None:
        x0, x1, y0, y1 = geometry.region
        self.surface.setup_frame(
            (x0, x1),
            (y0, y1),
            xlabel="Year",
            ylabel=geometry.axis.label,
            **self.style.layer("main"),
        )

    def draw_x_axis(self, request: MetricChartRequest, geometry: ChartGeometry) -> None:
        step = coerce_number(request.x_tick_step)
        options = self.style.layer("x_axis")
        if step is None or step <= 0:
            self.surface.axis("bottom", **options)
            return
        lo, hi = geometry.x_range
        first = step * math.ceil(lo / step)
        last = step * math.floor(hi / step)
        count = int(round((last - first) / step))
        ticks = [first + i * step for i in range(count + 1)]
        self.surface.axis("bottom", at=ticks, **options)

    def draw_y_axis(self, request: MetricChartRequest, geometry: ChartGeometry) -> None:
        options = self.style.layer("y_axis")
        if not geometry.use_log:
            self.surface.axis("left", **options)
            return
        _, _, y0, y1 = geometry.region
        ticks = {
            pos: label
            for pos, label in log_ticks(geometry.log_max, geometry.log_floor).items()
            if y0 <= pos <= y1
        }
        self.surface.axis("left", at=list(ticks), labels=list(ticks.values()), **options)

    def draw_zones(self, request: MetricChartRequest, geometry: ChartGeometry) -> None:
        zones = geometry.zones
        if not zones.is_complete:
            return
        x0, x1, y0, y1 = self.surface.plot_region()
        lower = geometry.transform(zones.lower)
        upper = geometry.transform(zones.upper)
        options = self.style.layer("zones")
        
        bands = (
            ("Green", upper, y1),
            ("Amber", lower, upper),
            ("Red", y0, lower),
        )
        for status, bottom, top in bands:
            color = self.color_map.background_color(status)
            self.surface.fill_rect(x0, bottom, x1, top, color=color, edgecolor=color, **options)

    def draw_horizontal_reference_lines(self, request: MetricChartRequest, geometry: ChartGeometry) -> None:
        _, x1, _, _ = self.surface.plot_region()
        for ref in geometry.h_refs:
            y = geometry.transform(ref.value)
            if y is None:
                continue
            self.surface.hline(y, **self.style.layer("hline"))
            if ref.label:
                self.surface.text(
                    x1, y, ref.label,
                    **self.style.options("hline_text", ha="right", va="bottom", clip_on=False),
                )

    def draw_vertical_reference_lines(self, request: MetricChartRequest, geometry: ChartGeometry) -> None:
        for ref in geometry.v_refs:
            if ref.is_defined:
                self.surface.vline(ref.value, **self.style.layer("vline"))

    def draw_metric(self, request: MetricChartRequest, geometry: ChartGeometry) -> None:
        self.surface.lines(geometry.years, geometry.values, **self.style.layer("metric"))

    def draw_moving_average(self, request: MetricChartRequest, geometry: ChartGeometry) -> None:
        window = coerce_number(request.moving_average_window)
        if window is None:
            return
        averaged = running_mean(geometry.values, window)
        self.surface.lines(geometry.years, averaged, **self.style.layer("average"))

    def draw_dominant_cycle(self, request: MetricChartRequest, geometry: ChartGeometry) -> None:
        if coerce_number(request.dom_cycle_first_year) is None:
            return
        defined = geometry.series.index[~np.isnan(geometry.values)]
        years = dominant_cycle_years(defined, request.dom_cycle_first_year, self.config.cycle_length)
        if not years:
            return
        on_cycle = geometry.series.index.isin(years)
        self.surface.lines(
            geometry.years[on_cycle],
            geometry.values[on_cycle],
            **self.style.layer("dom"),
        )

    def draw_title(self, request: MetricChartRequest, geometry: ChartGeometry) -> None:
        self.surface.title(request.title, **self.style.layer("title"))


def render_metric_chart(
    surface: DrawingSurface,
    data: SeriesLike,
    zones: ZonesLike = None,
    moving_average_window: Any = None,
    dom_cycle_first_year: Any = None,
    h_ref_lines: HorizontalRefs = None,
    x_range: RequestedRange = None,
    y_range: Optional[Sequence[Any]] = None,
    x_tick_step: Any = None,
    use_log: bool = False,
    title: str = "",
    series_label: str = "",
    v_ref_lines: VerticalRefs = None,
    style_overrides: Union[StyleOverrides, PlotStyle] = None,
    color_map: Optional[StatusColorMap] = None,
    config: Optional[Config] = None
) -> Optional[ChartGeometry]:
    """
    Draw one metric chart (convenience wrapper around ``MetricChartRenderer``).
    
    Returns:
        Chart geometry, or None when an empty panel was drawn.
    """
    request = MetricChartRequest(
        data=data,
        zones=zones,
        moving_average_window=moving_average_window,
        dom_cycle_first_year=dom_cycle_first_year,
        h_ref_lines=h_ref_lines,
        x_range=x_range,
        y_range=y_range,
        x_tick_step=x_tick_step,
        use_log=use_log,
        title=title,
        series_label=series_label,
        v_ref_lines=v_ref_lines,
    )
    renderer = MetricChartRenderer(surface, style=style_overrides, color_map=color_map, config=config)
    return renderer.render(request)
