"""
Engine configuration settings.
"""
from enum import Enum
from typing import Any, Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.exceptions import ConfigurationError


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class TelemetrySettings(BaseSettings):
    # Application
    app_name: str = "Performance Telemetry Engine"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: LogLevel = LogLevel.INFO
    log_file: Optional[str] = None

    # Metric store
    buffer_capacity: int = Field(default=100, gt=0)

    # Analysis
    analysis_history_size: int = Field(default=20, gt=0)
    trend_stable_threshold: float = Field(default=5.0, ge=0)
    trend_confidence_reference: float = Field(default=50.0, gt=0)
    trend_polarity_aware: bool = False

    # Bottleneck detection
    bottleneck_window_seconds: float = Field(default=300.0, gt=0)
    bottleneck_table_size: int = Field(default=200, gt=0)

    # UX score and reports
    ux_window_seconds: float = Field(default=60.0, gt=0)
    report_window_hours: float = Field(default=24.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="PERF_TELEMETRY_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def report_window_seconds(self) -> float:
        return self.report_window_hours * 3600


_settings: Optional[TelemetrySettings] = None


def get_settings() -> TelemetrySettings:
    """Get global settings instance."""
    global _settings
    if _settings is None:
        _settings = TelemetrySettings()
    return _settings


def configure_settings(**overrides: Any) -> TelemetrySettings:
    """Replace the global settings, applying keyword overrides on top of the environment."""
    global _settings
    try:
        _settings = TelemetrySettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid telemetry settings: {e}") from e
    return _settings


def override_settings(settings: TelemetrySettings, **overrides: Any) -> TelemetrySettings:
    """Return a validated copy of settings with keyword overrides applied."""
    try:
        return TelemetrySettings.model_validate({**settings.model_dump(), **overrides})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid telemetry settings: {e}") from e
