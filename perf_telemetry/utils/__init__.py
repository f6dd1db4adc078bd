"""
Utility functions and helpers.
"""

from .exceptions import TelemetryError, ConfigurationError, InvalidMetricError

__all__ = [
    "TelemetryError",
    "ConfigurationError",
    "InvalidMetricError",
]
