"""
Configuration package for the telemetry engine.
"""

from .settings import TelemetrySettings, LogLevel, get_settings, configure_settings, override_settings

__all__ = ["TelemetrySettings", "LogLevel", "get_settings", "configure_settings", "override_settings"]
