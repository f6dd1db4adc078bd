"""Pytest configuration and shared fixtures for telemetry engine tests."""

from typing import List

import pytest
from loguru import logger

from perf_telemetry.config.settings import TelemetrySettings
from perf_telemetry.core.engine import PerformanceEngine
from perf_telemetry.core.environment import StaticEnvironmentProvider
from perf_telemetry.core.models import (
    AppEnvironment,
    AppInfo,
    DeviceInfo,
    Metric,
    MetricCategory,
    MetricUnit,
    ScreenSize,
)

BASE_TIME = 1_700_000_000.0


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, start: float = BASE_TIME):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


def _make_metric(
    name: str,
    value: float,
    category: MetricCategory = MetricCategory.CUSTOM,
    timestamp: float = BASE_TIME,
    unit: MetricUnit = MetricUnit.COUNT,
    metric_id: str = None,
) -> Metric:
    """Build a sample directly, bypassing the store."""
    return Metric(
        id=metric_id or f"metric_test_{name}_{timestamp}",
        name=name,
        value=float(value),
        unit=unit,
        category=category,
        timestamp=timestamp,
    )


@pytest.fixture
def make_metric():
    """Factory for samples built without going through a store."""
    return _make_metric


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> TelemetrySettings:
    """Default settings, isolated from any .env file."""
    return TelemetrySettings(_env_file=None)


@pytest.fixture
def device_info() -> DeviceInfo:
    return DeviceInfo(
        os="iOS",
        os_version="17.2",
        screen_size=ScreenSize(width=390, height=844),
        model="iPhone 15",
        connection_type="wifi",
    )


@pytest.fixture
def app_info() -> AppInfo:
    return AppInfo(version="2.3.0", build_number="118", environment=AppEnvironment.STAGING)


@pytest.fixture
def environment_provider(device_info, app_info) -> StaticEnvironmentProvider:
    return StaticEnvironmentProvider(device_info, app_info)


@pytest.fixture
def engine(settings, clock, environment_provider) -> PerformanceEngine:
    """Engine driven by the fake clock."""
    return PerformanceEngine(settings=settings, environment_provider=environment_provider, clock=clock)


@pytest.fixture
def log_records() -> List[dict]:
    """Capture loguru records emitted during the test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
