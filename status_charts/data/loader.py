"""
Loading of status tables and unit attributes from files.

The rendering core works on in-memory tables; these helpers exist for the
command-line interface and batch generation. Tables are CSV files read with
pandas; attributes are YAML or JSON records, or a CSV with one row per unit.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import pandas as pd
import yaml

from ..exceptions import DataLoadError

logger = logging.getLogger("status_charts.data.loader")


PathLike = Union[str, Path]


def load_table(path: PathLike) -> pd.DataFrame:
    """
    Read a CSV table.
    
    Status columns are kept as text and "NA" cells become missing.
    
    Raises:
        DataLoadError: If the file is missing or cannot be parsed.
    """
    path = Path(path)
    if not path.exists():
        raise DataLoadError(f"Table not found: {path}")
    try:
        table = pd.read_csv(path)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DataLoadError(f"Failed to read table {path}: {e}") from e
    logger.info(f"Loaded {len(table)} rows x {len(table.columns)} columns from {path}")
    return table


def load_attributes(path: PathLike) -> Dict[str, Any]:
    """
    Read one unit's attribute record from YAML or JSON.
    
    Raises:
        DataLoadError: If the file is missing, unsupported or not a mapping.
    """
    path = Path(path)
    if not path.exists():
        raise DataLoadError(f"Attributes file not found: {path}")
    try:
        with open(path, "r") as f:
            if path.suffix in (".yaml", ".yml"):
                record = yaml.safe_load(f)
            elif path.suffix == ".json":
                record = json.load(f)
            else:
                raise DataLoadError(
                    f"Unsupported attributes format: {path.suffix}. Use .yaml, .yml, or .json"
                )
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise DataLoadError(f"Failed to parse attributes {path}: {e}") from e
    
    if not isinstance(record, Mapping):
        raise DataLoadError(f"Attributes file {path} must contain a mapping")
    return dict(record)


def load_attribute_table(path: PathLike, unit_column: str) -> Dict[str, Dict[str, Any]]:
    """
    Read attributes for many units from a CSV with one row per unit.
    
    Returns:
        Mapping of unit id (as text) to its attribute record.
        
    Raises:
        DataLoadError: If the table lacks ``unit_column``.
    """
    table = load_table(path)
    return attribute_records(table, unit_column)


def attribute_records(table: pd.DataFrame, unit_column: str) -> Dict[str, Dict[str, Any]]:
    """Split an attribute table into per-unit records keyed by unit id."""
    if unit_column not in table.columns:
        raise DataLoadError(f"Attribute table is missing unit column '{unit_column}'")
    records = {}
    for record in table.to_dict(orient="records"):
        unit_id = str(record[unit_column])
        if unit_id in records:
            logger.warning(f"Duplicate attributes for unit '{unit_id}'; keeping the first")
            continue
        records[unit_id] = record
    return records
