"""
Custom exceptions for StatusCharts package.

This module defines exception classes for better error handling and messaging
across the package. Missing data is never an error: charts for units lacking a
metric degrade to empty panels. Exceptions are reserved for structural problems
with the inputs and for failures of the drawing backend itself.
"""


class StatusChartsError(Exception):
    """Base exception class for all StatusCharts errors."""
    pass


class ConfigurationError(StatusChartsError):
    """
    Raised when inputs are structurally unusable.
    
    This covers tables lacking a required column (e.g., the ``Year`` column
    of a timeline table), unreadable configuration files and invalid
    configuration values. It is raised before anything is drawn.
    """
    pass


class DataLoadError(StatusChartsError):
    """
    Raised when an input table or attribute file cannot be read.
    
    Only the CLI and batch helpers load files; the rendering core works on
    in-memory tables.
    """
    pass


class RenderError(StatusChartsError):
    """
    Raised when chart rendering fails.
    
    This wraps unexpected matplotlib errors during drawing or saving. A failed
    draw call is a defect, so it is reported rather than retried.
    """
    pass


class InvalidParameterError(StatusChartsError):
    """
    Raised for invalid user inputs.
    
    This exception is used for parameter validation failures such as unknown
    unit identifiers, inverted year ranges or unsupported output formats.
    """
    pass
