"""
Batch processing module for generating summary panels for many units.

This module provides the BatchPanelGenerator class for creating one summary
panel image per monitored unit from combined metric and abundance tables that
carry a unit id column. Panels are rendered one after another; each uses its
own figure, which is closed as soon as it is saved.

Example:
    >>> from status_charts import BatchPanelGenerator
    >>> 
    >>> batch = BatchPanelGenerator(
    ...     metrics_table=all_metrics,
    ...     series_table=all_abundance,
    ...     attributes=attributes_by_unit,
    ...     output_dir="panels/"
    ... )
    >>> result = batch.generate()
    >>> print(f"Generated {len(result['successful_panels'])} panels")
"""

import logging
import re
import time
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from .api import create_summary_panel
from .config import Config
from .constants import DEFAULT_TIMELINE_METRICS
from .exceptions import InvalidParameterError, StatusChartsError

logger = logging.getLogger(__name__)

# Optional tqdm import for progress bars
try:
    from tqdm import tqdm
    TQDM_AVAILABLE = True
except ImportError:
    TQDM_AVAILABLE = False
    logger.debug("tqdm not available, progress bars disabled")


DEFAULT_UNIT_COLUMN = "CU_ID"


def _safe_filename(unit_id: str) -> str:
    return re.sub(r"[^A-Za-z0-9._-]+", "_", unit_id).strip("_") or "unit"


class BatchPanelGenerator:
    """
    Generate summary panels for several units.
    
    Attributes:
        metrics_table: Metric table for all units, with a unit id column.
        series_table: Abundance table for all units, with a unit id column.
        attributes: Mapping of unit id to attribute record.
        output_dir: Directory for generated panels.
        config: Configuration object.
        unit_column: Name of the unit id column in both tables.
        
    Example:
        >>> batch = BatchPanelGenerator(metrics, series, attributes, "panels/")
        >>> result = batch.generate(["CU-101", "CU-102"])
    """
    
    def __init__(
        self,
        metrics_table: pd.DataFrame,
        series_table: pd.DataFrame,
        attributes: Mapping[str, Mapping[str, Any]],
        output_dir: Optional[Union[str, Path]] = None,
        config: Optional[Config] = None,
        unit_column: str = DEFAULT_UNIT_COLUMN,
        image_format: str = "png",
        timeline_metrics: Optional[List[Any]] = DEFAULT_TIMELINE_METRICS
    ):
        config = config if config is not None else Config()
        if output_dir is not None:
            config = replace(config, output_dir=Path(output_dir))
        self.config = config
        self.output_dir = config.output_dir
        self.unit_column = unit_column
        self.image_format = image_format.lstrip(".")
        self.timeline_metrics = timeline_metrics
        
        for name, table in (("metrics_table", metrics_table), ("series_table", series_table)):
            if unit_column not in table.columns:
                raise InvalidParameterError(f"{name} is missing unit column '{unit_column}'")
        
        self.metrics_table = metrics_table
        self.series_table = series_table
        self.attributes = {str(k): v for k, v in attributes.items()}
        self._generated: List[Path] = []
        
        logger.info(
            f"Initialized BatchPanelGenerator: {len(self.attributes)} units, "
            f"output={self.output_dir}"
        )
    
    def unit_ids(self) -> List[str]:
        """Units that have attributes, in attribute order."""
        return list(self.attributes)
    
    def _unit_rows(self, table: pd.DataFrame, unit_id: str) -> pd.DataFrame:
        return table[table[self.unit_column].astype(str) == unit_id]
    
    def generate_panel(self, unit_id: str) -> Optional[str]:
        """
        Render and save the panel for one unit.
        
        Returns:
            Path of the saved panel, or None if rendering failed.
        """
        unit_id = str(unit_id)
        if unit_id not in self.attributes:
            raise InvalidParameterError(f"No attributes for unit '{unit_id}'")
        
        output_path = self.output_dir / f"panel_{_safe_filename(unit_id)}.{self.image_format}"
        try:
            saved = create_summary_panel(
                self._unit_rows(self.metrics_table, unit_id),
                self._unit_rows(self.series_table, unit_id),
                self.attributes[unit_id],
                output_path=output_path,
                config=self.config,
                timeline_metrics=self.timeline_metrics,
            )
        except StatusChartsError as e:
            logger.error(f"Failed to generate panel for unit '{unit_id}': {e}")
            return None
        
        self._generated.append(Path(saved))
        return saved
    
    def generate(
        self,
        unit_ids: Optional[Iterable[str]] = None,
        show_progress: bool = True
    ) -> Dict[str, Any]:
        """
        Generate panels for ``unit_ids`` (default: every unit with attributes).
        
        Args:
            unit_ids: Units to render.
            show_progress: Show a tqdm progress bar when tqdm is installed.
        
        Returns:
            Dictionary with keys:
                - 'successful_panels': list of saved file paths
                - 'failed_units': list of unit ids that failed
                - 'total_time': elapsed seconds
                
        Raises:
            InvalidParameterError: If a requested unit has no attributes.
        """
        ids = [str(u) for u in unit_ids] if unit_ids is not None else self.unit_ids()
        unknown = [u for u in ids if u not in self.attributes]
        if unknown:
            raise InvalidParameterError(f"No attributes for units: {unknown}")
        self.config.ensure_directories()
        
        start = time.time()
        successful, failed = [], []
        
        if TQDM_AVAILABLE:
            units_iter = tqdm(
                ids,
                desc="Generating panels",
                unit="panel",
                disable=not show_progress,
            )
        else:
            units_iter = ids
        
        for unit_id in units_iter:
            logger.debug(f"Generating panel for unit '{unit_id}'")
            saved = self.generate_panel(unit_id)
            if saved is None:
                failed.append(unit_id)
            else:
                successful.append(saved)
        
        elapsed = time.time() - start
        logger.info(
            f"Batch complete: {len(successful)}/{len(ids)} panels in {elapsed:.1f}s"
        )
        if failed:
            logger.warning(f"Failed units: {failed}")
        
        return {
            "successful_panels": successful,
            "failed_units": failed,
            "total_time": elapsed,
        }
    
    def cleanup(self) -> int:
        """Delete panels generated by this instance; returns how many were removed."""
        deleted = 0
        for path in self._generated:
            if path.exists():
                path.unlink()
                deleted += 1
        self._generated.clear()
        return deleted
