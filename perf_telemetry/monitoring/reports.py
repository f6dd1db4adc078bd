"""
Report assembly.

A report is a pure composition of an analysis, a bottleneck scan and the raw
samples of the same window, together with host-supplied descriptors.
"""

from typing import List, Optional, Sequence, Tuple

from ..core.environment import EnvironmentProvider
from ..core.models import (
    AppInfo,
    Analysis,
    Bottleneck,
    DeviceInfo,
    Metric,
    Report,
    TimeRange,
)
from ..utils.exceptions import ConfigurationError


def report_time_range(now: float, window_seconds: float) -> TimeRange:
    return TimeRange(start=now - window_seconds, end=now)


def metrics_in_range(metrics: Sequence[Metric], time_range: TimeRange) -> List[Metric]:
    """Samples inside the range, oldest first."""
    return sorted(
        (m for m in metrics if time_range.contains(m.timestamp)),
        key=lambda m: m.timestamp,
    )


def resolve_environment(
    device_info: Optional[DeviceInfo],
    app_info: Optional[AppInfo],
    provider: Optional[EnvironmentProvider],
) -> Tuple[DeviceInfo, AppInfo]:
    """Explicit descriptors win; missing ones come from the provider."""
    if device_info is None:
        if provider is None:
            raise ConfigurationError("device_info is required when no environment provider is configured")
        device_info = provider.get_device_info()
    if app_info is None:
        if provider is None:
            raise ConfigurationError("app_info is required when no environment provider is configured")
        app_info = provider.get_app_info()
    return device_info, app_info


def assemble_report(
    time_range: TimeRange,
    analysis: Analysis,
    bottlenecks: List[Bottleneck],
    metrics: Sequence[Metric],
    device_info: DeviceInfo,
    app_info: AppInfo,
) -> Report:
    return Report(
        id=f"report_{int(time_range.end * 1000)}",
        generated_at=time_range.end,
        time_range=time_range,
        analysis=analysis,
        bottlenecks=bottlenecks,
        metrics=metrics_in_range(metrics, time_range),
        device_info=device_info,
        app_info=app_info,
    )
