"""
File loading for StatusCharts.

Provides CSV table loading and YAML/JSON attribute loading used by the
command-line interface and batch generation.
"""

from .loader import attribute_records, load_attribute_table, load_attributes, load_table

__all__ = [
    "attribute_records",
    "load_attribute_table",
    "load_attributes",
    "load_table",
]
