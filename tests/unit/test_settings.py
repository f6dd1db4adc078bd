"""Unit tests for engine settings."""

import pytest

from perf_telemetry.config import settings as settings_module
from perf_telemetry.config.settings import (
    LogLevel,
    TelemetrySettings,
    configure_settings,
    get_settings,
    override_settings,
)
from perf_telemetry.config.thresholds import get_thresholds
from perf_telemetry.core.models import MetricCategory
from perf_telemetry.utils.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def reset_global_settings(monkeypatch):
    """Keep the module-level settings instance isolated per test."""
    monkeypatch.setattr(settings_module, "_settings", None)


class TestTelemetrySettings:
    """Test cases for TelemetrySettings."""

    @pytest.mark.unit
    def test_defaults(self, settings):
        assert settings.buffer_capacity == 100
        assert settings.analysis_history_size == 20
        assert settings.bottleneck_window_seconds == 300
        assert settings.ux_window_seconds == 60
        assert settings.report_window_seconds == 24 * 3600
        assert settings.trend_polarity_aware is False
        assert settings.log_level is LogLevel.INFO

    @pytest.mark.unit
    def test_environment_overrides(self, monkeypatch):
        """Test values are read from PERF_TELEMETRY_ variables."""
        monkeypatch.setenv("PERF_TELEMETRY_BUFFER_CAPACITY", "250")
        monkeypatch.setenv("PERF_TELEMETRY_TREND_POLARITY_AWARE", "true")

        settings = TelemetrySettings(_env_file=None)

        assert settings.buffer_capacity == 250
        assert settings.trend_polarity_aware is True

    @pytest.mark.unit
    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    @pytest.mark.unit
    def test_configure_settings_replaces_global(self):
        configured = configure_settings(buffer_capacity=10, _env_file=None)

        assert configured.buffer_capacity == 10
        assert get_settings() is configured

    @pytest.mark.unit
    def test_configure_settings_rejects_invalid_values(self):
        """Test invalid overrides surface as ConfigurationError."""
        with pytest.raises(ConfigurationError):
            configure_settings(buffer_capacity=0, _env_file=None)

    @pytest.mark.unit
    def test_override_settings_returns_validated_copy(self, settings):
        updated = override_settings(settings, buffer_capacity="250", trend_polarity_aware=True)

        assert updated.buffer_capacity == 250
        assert updated.trend_polarity_aware is True
        assert settings.buffer_capacity == 100

    @pytest.mark.unit
    def test_override_settings_rejects_invalid_values(self, settings):
        with pytest.raises(ConfigurationError):
            override_settings(settings, analysis_history_size=0)


class TestThresholds:
    """Test cases for the threshold table."""

    @pytest.mark.unit
    def test_poor_thresholds(self):
        assert get_thresholds(MetricCategory.RENDERING).poor.get("fps") == 30
        assert get_thresholds(MetricCategory.MEMORY).poor.get("usage") == 85
        assert get_thresholds(MetricCategory.NETWORK).poor.get("latency") == 1000

    @pytest.mark.unit
    def test_tiers_are_ordered(self):
        rendering = get_thresholds(MetricCategory.RENDERING)
        assert rendering.excellent.get("fps") > rendering.good.get("fps") > rendering.poor.get("fps")
