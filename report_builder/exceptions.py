"""
exceptions.py — Error types raised by the report builder core.
"""


class ReportBuilderError(Exception):
    """Base exception for all report builder errors."""

    pass


class EmptyDatasetError(ReportBuilderError):
    """Raised when an export is requested before any rows were generated."""

    pass


class ConfigError(ReportBuilderError):
    """Raised when a configuration value has the wrong type or shape."""

    pass
