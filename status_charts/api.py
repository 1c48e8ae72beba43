"""
Main API module for StatusCharts package.

This module provides simplified user-facing functions that create the
Matplotlib figure, run the renderers, and either save the result or hand the
figure back for interactive use.

Example:
    >>> from status_charts import create_summary_panel
    >>> 
    >>> # Save a summary panel
    >>> create_summary_panel(
    ...     metrics_table=metrics_df,
    ...     series_table=abundance_df,
    ...     attributes={"CU_Name": "Chilko", "RelAbd_LBM": 2000, "RelAbd_UBM": 8000},
    ...     output_path="chilko_summary.png"
    ... )
    
    >>> # Interactive use (returns the figure)
    >>> fig = create_summary_panel(metrics_df, abundance_df, attributes)
    >>> plt.show()
"""

import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Optional, Sequence, Union

import matplotlib.pyplot as plt

from .config import Config, get_default_config
from .constants import DEFAULT_TIMELINE_METRICS
from .exceptions import InvalidParameterError, RenderError, StatusChartsError
from .rendering import (
    MatplotlibPanelLayout,
    MetricChartRequest,
    metric_summary_pane,
    render_metric_chart,
    render_timeline_grid,
    single_panel
)
from .rendering.panel import AttributesLike
from .rendering.timeline import MetricSpec
from .styles import PlotStyle, StyleOverrides

logger = logging.getLogger(__name__)


def _check_output_format(fig: plt.Figure, output_path: Path) -> None:
    suffix = output_path.suffix.lstrip(".").lower()
    supported = fig.canvas.get_supported_filetypes()
    if suffix not in supported:
        plt.close(fig)
        raise InvalidParameterError(
            f"Unsupported output format '{output_path.suffix}'. "
            f"Supported: {', '.join(sorted(supported))}"
        )


def _save_or_return(
    fig: plt.Figure,
    output_path: Optional[Union[str, Path]],
    config: Config
) -> Union[str, plt.Figure]:
    """Save ``fig`` when a path is given (closing it), else return it."""
    if output_path is None:
        logger.info("Returning figure for interactive use")
        return fig
    
    output_path = Path(output_path)
    _check_output_format(fig, output_path)
    logger.info(f"Saving chart to {output_path}")
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=config.default_dpi, facecolor=fig.get_facecolor())
    except Exception as e:
        raise RenderError(f"Failed to save chart to {output_path}: {e}") from e
    finally:
        # Free the figure so repeated calls don't accumulate pyplot state
        plt.close(fig)
    
    logger.info(f"Chart saved successfully to {output_path}")
    return str(output_path)


def create_summary_panel(
    metrics_table: Any,
    series_table: Any,
    attributes: AttributesLike,
    output_path: Optional[Union[str, Path]] = None,
    config: Optional[Config] = None,
    metric_start_year: Any = None,
    metric_end_year: Any = None,
    timeline_metrics: Optional[Sequence[MetricSpec]] = DEFAULT_TIMELINE_METRICS,
    metric_style: Union[StyleOverrides, PlotStyle] = None,
    timeline_style: Union[StyleOverrides, PlotStyle] = None
) -> Union[str, plt.Figure]:
    """
    Create the multi-panel status summary for one unit.
    
    Args:
        metrics_table: Metric table (``Year``, ``LongTrend``, ``PercChange``
            and the timeline status columns).
        series_table: Abundance table (``Year``, ``Escapement_Wild``).
        attributes: Unit attributes (``UnitAttributes`` or a flat record).
        output_path: Output file path; if None, returns the figure.
        config: Optional Config object; if None, uses default configuration.
        metric_start_year: First timeline year, also marked on metric charts.
        metric_end_year: Last year shown on the metric charts.
        timeline_metrics: Timeline rows; None omits the timeline.
        metric_style: Style overrides for the metric charts.
        timeline_style: Style overrides for the timeline grid.
        
    Returns:
        If output_path provided: path to saved file.
        If output_path is None: the Matplotlib figure.
        
    Raises:
        ConfigurationError: If the metrics table has no ``Year`` column.
        InvalidParameterError: If the output format is not supported.
        RenderError: If drawing or saving fails.
    """
    if config is None:
        config = get_default_config()
        logger.debug("Using default configuration")
    
    layout = MatplotlibPanelLayout(with_timeline=timeline_metrics is not None, config=config)
    try:
        metric_summary_pane(
            metrics_table,
            series_table,
            attributes,
            layout=layout,
            metric_start_year=metric_start_year,
            metric_end_year=metric_end_year,
            metric_style=metric_style,
            timeline_metrics=timeline_metrics,
            timeline_style=timeline_style,
            config=config,
        )
    except StatusChartsError:
        plt.close(layout.fig)
        raise
    except Exception as e:
        plt.close(layout.fig)
        raise RenderError(f"Failed to render summary panel: {e}") from e
    
    logger.info("Summary panel rendering complete")
    return _save_or_return(layout.fig, output_path, config)


def create_timeline_chart(
    table: Any,
    metrics: Sequence[MetricSpec] = DEFAULT_TIMELINE_METRICS,
    title: str = "Metrics & Status",
    start_year: Any = None,
    end_year: Any = None,
    output_path: Optional[Union[str, Path]] = None,
    config: Optional[Config] = None,
    style: Union[StyleOverrides, PlotStyle] = None
) -> Union[str, plt.Figure]:
    """
    Create a standalone timeline status grid.
    
    Returns:
        Path to the saved file, or the figure when ``output_path`` is None.
        
    Raises:
        ConfigurationError: If the table has no ``Year`` column.
        RenderError: If drawing or saving fails.
    """
    config = config if config is not None else Config()
    fig, surface = single_panel(config, height=config.timeline_height)
    try:
        render_timeline_grid(
            surface, table,
            metrics=metrics,
            title=title,
            start_year=start_year,
            end_year=end_year,
            style_overrides=style,
            config=config,
        )
    except StatusChartsError:
        plt.close(fig)
        raise
    except Exception as e:
        plt.close(fig)
        raise RenderError(f"Failed to render timeline: {e}") from e
    
    return _save_or_return(fig, output_path, config)


def create_metric_chart(
    data: Any,
    output_path: Optional[Union[str, Path]] = None,
    config: Optional[Config] = None,
    style: Union[StyleOverrides, PlotStyle] = None,
    **chart_options: Any
) -> Union[str, plt.Figure]:
    """
    Create a standalone metric chart.
    
    Args:
        data: Year -> value series.
        output_path: Output file path; if None, returns the figure.
        config: Optional Config object.
        style: Style overrides for the metric chart layers.
        **chart_options: Any ``MetricChartRequest`` field (zones, h_ref_lines,
            use_log, title, ...).
            
    Returns:
        Path to the saved file, or the figure when ``output_path`` is None.
    """
    unknown = set(chart_options) - {f.name for f in fields(MetricChartRequest)}
    if unknown:
        raise InvalidParameterError(f"Unknown chart options: {sorted(unknown)}")
    
    config = config if config is not None else Config()
    fig, surface = single_panel(config)
    try:
        render_metric_chart(surface, data, style_overrides=style, config=config, **chart_options)
    except StatusChartsError:
        plt.close(fig)
        raise
    except Exception as e:
        plt.close(fig)
        raise RenderError(f"Failed to render metric chart: {e}") from e
    
    return _save_or_return(fig, output_path, config)
