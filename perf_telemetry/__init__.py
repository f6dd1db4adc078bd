"""
In-process performance telemetry engine.

Ingests performance samples, keeps bounded per-category history, scores
application health, detects trends and bottlenecks, and produces
recommendations and reports.
"""

from .config.settings import TelemetrySettings, get_settings, configure_settings
from .core.engine import PerformanceEngine, create_performance_engine
from .core.environment import EnvironmentProvider, StaticEnvironmentProvider
from .core.models import (
    Metric,
    MetricUnit,
    MetricCategory,
    Bottleneck,
    BottleneckType,
    Severity,
    TrendDirection,
    TrendResult,
    Analysis,
    Recommendation,
    Priority,
    Complexity,
    Report,
    TimeRange,
    DeviceInfo,
    AppInfo,
    AppEnvironment,
    ScreenSize,
)
from .utils.exceptions import TelemetryError, ConfigurationError, InvalidMetricError

__version__ = "1.0.0"

__all__ = [
    "PerformanceEngine",
    "create_performance_engine",
    "TelemetrySettings",
    "get_settings",
    "configure_settings",
    "EnvironmentProvider",
    "StaticEnvironmentProvider",
    "Metric",
    "MetricUnit",
    "MetricCategory",
    "Bottleneck",
    "BottleneckType",
    "Severity",
    "TrendDirection",
    "TrendResult",
    "Analysis",
    "Recommendation",
    "Priority",
    "Complexity",
    "Report",
    "TimeRange",
    "DeviceInfo",
    "AppInfo",
    "AppEnvironment",
    "ScreenSize",
    "TelemetryError",
    "ConfigurationError",
    "InvalidMetricError",
]
