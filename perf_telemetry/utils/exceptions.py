"""Custom exceptions for the telemetry engine."""


class TelemetryError(Exception):
    """Base exception for the telemetry engine."""
    pass


class ConfigurationError(TelemetryError):
    """Raised when there's a configuration issue."""
    pass


class InvalidMetricError(TelemetryError, ValueError):
    """Raised when a metric sample fails validation at ingest."""

    def __init__(self, message: str, field: str = None, value=None):
        super().__init__(message)
        self.field = field
        self.value = value
