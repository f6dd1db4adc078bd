"""
Core state of the telemetry engine: data model, metric store, subscriber
registry and environment descriptors.
"""

from .models import (
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
from .metric_store import MetricStore
from .subscriptions import SubscriptionBus
from .environment import EnvironmentProvider, StaticEnvironmentProvider

__all__ = [
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
    "MetricStore",
    "SubscriptionBus",
    "EnvironmentProvider",
    "StaticEnvironmentProvider",
]
