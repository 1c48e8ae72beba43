"""
StatusCharts - Status assessment charts for biological monitoring units.

This package draws the charts used to review a monitored unit's status: time
series metric charts with Red/Amber/Green benchmark zones, a timeline grid of
annual status calls, and a multi-chart summary panel combining both.

Quick Start:
    >>> from status_charts import create_summary_panel
    >>> 
    >>> # Save one unit's summary panel
    >>> create_summary_panel(
    ...     metrics_table=metrics_df,
    ...     series_table=abundance_df,
    ...     attributes={"CU_Name": "Chilko", "RelAbd_LBM": 2000, "RelAbd_UBM": 8000},
    ...     output_path="chilko_summary.png"
    ... )
    
    >>> # Many units at once
    >>> from status_charts import BatchPanelGenerator
    >>> 
    >>> batch = BatchPanelGenerator(all_metrics, all_abundance, attributes_by_unit, "panels/")
    >>> result = batch.generate()

Advanced Usage:
    >>> # Direct access to components
    >>> import matplotlib.pyplot as plt
    >>> from status_charts import Config, MatplotlibSurface, MetricChartRenderer
    >>> from status_charts import MetricChartRequest
    >>> 
    >>> config = Config(log_floor=1.0, axis_padding=0.04)
    >>> fig, ax = plt.subplots()
    >>> renderer = MetricChartRenderer(MatplotlibSurface(ax), config=config)
    >>> renderer.render(MetricChartRequest(data=series, zones=(100, 150), use_log=True))
"""

__version__ = "0.1.0"

# Initialize logging with default settings
from .logging_config import setup_logging
setup_logging()

# Core constants and configuration
from .constants import DEFAULT_TIMELINE_METRICS, LOG_FLOOR
from .config import Config

# Domain records
from .models import (
    BenchmarkZones,
    FontStyle,
    ReferenceLine,
    StatusCell,
    TimelineMetric,
    UnitAttributes
)
from .styles import METRIC_PLOT_STYLE, TIMELINE_PLOT_STYLE, PlotStyle

# Rendering components
from .rendering import (
    DEFAULT_COLOR_MAP,
    DrawingSurface,
    MatplotlibPanelLayout,
    MatplotlibSurface,
    MetricChartRenderer,
    MetricChartRequest,
    Status,
    StatusColorMap,
    TimelineGridRenderer,
    metric_summary_pane,
    render_metric_chart,
    render_timeline_grid
)

# Calculations
from . import calculations

# User-facing API
from .api import create_metric_chart, create_summary_panel, create_timeline_chart

# Batch processing
from .batch import BatchPanelGenerator

# Exceptions
from .exceptions import (
    StatusChartsError,
    ConfigurationError,
    DataLoadError,
    RenderError,
    InvalidParameterError
)

__all__ = [
    # Version info
    "__version__",
    
    # Constants and config
    "DEFAULT_TIMELINE_METRICS",
    "LOG_FLOOR",
    "Config",
    
    # Domain records and styles
    "BenchmarkZones",
    "FontStyle",
    "ReferenceLine",
    "StatusCell",
    "TimelineMetric",
    "UnitAttributes",
    "METRIC_PLOT_STYLE",
    "TIMELINE_PLOT_STYLE",
    "PlotStyle",
    
    # Core components
    "DEFAULT_COLOR_MAP",
    "DrawingSurface",
    "MatplotlibPanelLayout",
    "MatplotlibSurface",
    "MetricChartRenderer",
    "MetricChartRequest",
    "Status",
    "StatusColorMap",
    "TimelineGridRenderer",
    "metric_summary_pane",
    "render_metric_chart",
    "render_timeline_grid",
    "calculations",
    
    # User-facing API
    "create_metric_chart",
    "create_summary_panel",
    "create_timeline_chart",
    
    # Batch
    "BatchPanelGenerator",
    
    # Exceptions
    "StatusChartsError",
    "ConfigurationError",
    "DataLoadError",
    "RenderError",
    "InvalidParameterError",
]
