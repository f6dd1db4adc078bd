"""
Performance telemetry engine.

The engine owns every piece of mutable state: the metric store, the
subscriber registry, the analysis history and the bottleneck table. Scoring,
trend, bottleneck, UX and report components only ever see snapshots taken
from it, so several engines can live side by side in one process.
"""

import threading
import time
from collections import OrderedDict, deque
from typing import Any, Callable, Deque, Dict, Iterable, List, Mapping, Optional, Union

from loguru import logger

from ..config.settings import TelemetrySettings, get_settings, override_settings
from ..monitoring.analysis import build_analysis
from ..monitoring.bottleneck_detector import BottleneckDetector
from ..monitoring.recommendations import generate_recommendations
from ..monitoring.reports import assemble_report, metrics_in_range, report_time_range, resolve_environment
from ..monitoring.trends import TrendAnalyzer
from ..monitoring.ux_score import calculate_ux_score
from ..utils.logging import TelemetryLogger
from .environment import EnvironmentProvider
from .metric_store import MetricStore
from .models import (
    AppInfo,
    Analysis,
    Bottleneck,
    DeviceInfo,
    Metric,
    MetricCategory,
    MetricUnit,
    Recommendation,
    Report,
    Severity,
)
from .subscriptions import MetricSubscriber, SubscriptionBus


class PerformanceEngine:
    """Main performance telemetry engine"""

    def __init__(
        self,
        settings: Optional[TelemetrySettings] = None,
        environment_provider: Optional[EnvironmentProvider] = None,
        clock: Callable[[], float] = time.time,
        bottleneck_detector: Optional[BottleneckDetector] = None,
        trend_analyzer: Optional[TrendAnalyzer] = None,
    ):
        """Initialize the engine.

        Args:
            settings: Engine settings, the global settings when omitted
            environment_provider: Source of device/app descriptors for reports
            clock: Wall clock in seconds since the epoch
            bottleneck_detector: Detector override, mainly for custom rules
            trend_analyzer: Trend analyzer override
        """
        self.settings = settings or get_settings()
        self.environment_provider = environment_provider
        self._clock = clock

        self.store = MetricStore(capacity=self.settings.buffer_capacity, clock=clock)
        self.bus = SubscriptionBus()
        self.bottleneck_detector = bottleneck_detector or BottleneckDetector()
        self.trend_analyzer = trend_analyzer or TrendAnalyzer(
            stable_threshold=self.settings.trend_stable_threshold,
            confidence_reference=self.settings.trend_confidence_reference,
            polarity_aware=self.settings.trend_polarity_aware,
        )

        self._history: Deque[Analysis] = deque(maxlen=self.settings.analysis_history_size)
        self._history_lock = threading.Lock()
        self._bottlenecks: "OrderedDict[str, Bottleneck]" = OrderedDict()
        self._bottleneck_lock = threading.Lock()

    # Ingestion

    def ingest(
        self,
        category: Union[MetricCategory, str],
        name: str,
        value: float,
        unit: Union[MetricUnit, str],
        metadata: Optional[Mapping[str, Any]] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> str:
        """Record a sample and notify subscribers. Returns the new sample id.

        Raises:
            InvalidMetricError: value not finite, unknown category or unit, empty name
        """
        metric = self.store.add(category, name, value, unit, metadata=metadata, tags=tags)
        logger.debug(f"Performance metric tracked: {metric.name} = {metric.value}{metric.unit.value}")

        # Dispatch happens outside the store lock
        self.bus.publish(metric)
        return metric.id

    def subscribe(self, callback: MetricSubscriber) -> Callable[[], None]:
        """Register an observer of new samples; returns its unsubscribe function."""
        return self.bus.subscribe(callback)

    # Analysis

    def analyze(self, window_seconds: Optional[float] = None) -> Analysis:
        """Score the samples of the last window_seconds, or all samples when None."""
        now = self._clock()
        since = now - window_seconds if window_seconds is not None else None
        return self._analyze_snapshot(self.store.snapshot(since=since), now, window_seconds)

    def detect_bottlenecks(self, window_seconds: Optional[float] = None) -> List[Bottleneck]:
        """Scan recent samples for bottlenecks and record them in the lookup table."""
        if window_seconds is None:
            window_seconds = self.settings.bottleneck_window_seconds
        now = self._clock()
        return self._scan_snapshot(self.store.snapshot(since=now - window_seconds), now, window_seconds)

    def _analyze_snapshot(self, metrics: List[Metric], now: float, window_seconds: Optional[float]) -> Analysis:
        with TelemetryLogger("analyze", {"window_seconds": window_seconds}) as op:
            analysis = build_analysis(metrics, self.trend_analyzer, generated_at=now)
            op.update_metadata(sample_count=len(metrics), overall_score=analysis.overall_score)

        if metrics:
            with self._history_lock:
                self._history.append(analysis)

        return analysis

    def _scan_snapshot(self, metrics: List[Metric], now: float, window_seconds: float) -> List[Bottleneck]:
        with TelemetryLogger("detect_bottlenecks", {"window_seconds": window_seconds}) as op:
            bottlenecks = self.bottleneck_detector.detect(metrics, now)
            op.update_metadata(detected=len(bottlenecks))

        with self._bottleneck_lock:
            for bottleneck in bottlenecks:
                self._bottlenecks.pop(bottleneck.id, None)
                self._bottlenecks[bottleneck.id] = bottleneck
            while len(self._bottlenecks) > self.settings.bottleneck_table_size:
                self._bottlenecks.popitem(last=False)

        return bottlenecks

    def compute_ux_score(self) -> int:
        """Weighted UX score over the most recent minute of samples."""
        return calculate_ux_score(
            self.store.snapshot(),
            now=self._clock(),
            window_seconds=self.settings.ux_window_seconds,
        )

    def recommendations(self) -> List[Recommendation]:
        """Prioritized optimizations from a fresh all-time analysis.

        Also refreshes the bottleneck table over the default scan window.
        """
        analysis = self.analyze()
        self.detect_bottlenecks()
        return generate_recommendations(analysis.category_scores)

    def generate_report(
        self,
        device_info: Optional[DeviceInfo] = None,
        app_info: Optional[AppInfo] = None,
    ) -> Report:
        """Bundle analysis, bottlenecks and raw samples of one report window.

        The clock is read once and a single snapshot feeds the analysis, the
        bottleneck scan and the sample list.

        Raises:
            ConfigurationError: descriptors missing and no environment provider configured
        """
        device_info, app_info = resolve_environment(device_info, app_info, self.environment_provider)

        window = self.settings.report_window_seconds
        time_range = report_time_range(self._clock(), window)

        with TelemetryLogger("generate_report", {"window_seconds": window}):
            metrics = metrics_in_range(self.store.snapshot(since=time_range.start), time_range)
            analysis = self._analyze_snapshot(metrics, time_range.end, window)
            bottlenecks = self._scan_snapshot(metrics, time_range.end, window)
            report = assemble_report(
                time_range=time_range,
                analysis=analysis,
                bottlenecks=bottlenecks,
                metrics=metrics,
                device_info=device_info,
                app_info=app_info,
            )

        logger.info(f"Performance report generated: {report.analysis.summary}")
        return report

    def summary(self) -> Dict[str, Any]:
        """Get current performance summary"""
        return {
            "ux_score": self.compute_ux_score(),
            "last_analysis": self.last_analysis,
            "critical_bottleneck_count": sum(
                1 for b in self.bottlenecks if b.severity is Severity.CRITICAL
            ),
            "total_metrics": self.store.total_count(),
            "categories": [c.value for c in self.store.categories()],
        }

    # Accessors

    @property
    def last_analysis(self) -> Optional[Analysis]:
        with self._history_lock:
            return self._history[-1] if self._history else None

    @property
    def analysis_history(self) -> List[Analysis]:
        with self._history_lock:
            return list(self._history)

    @property
    def bottlenecks(self) -> List[Bottleneck]:
        """Bottleneck table contents, oldest insertion first."""
        with self._bottleneck_lock:
            return list(self._bottlenecks.values())

    @property
    def subscriber_failures(self) -> int:
        return self.bus.failure_count

    def get_metrics(self, category: Optional[Union[MetricCategory, str]] = None) -> List[Metric]:
        """Buffered samples, for one category or all of them."""
        if category is None:
            return self.store.snapshot()
        return self.store.category_snapshot(category)

    def reset(self) -> None:
        """Drop samples, analysis history and detected bottlenecks. Subscribers stay registered."""
        self.store.clear()
        with self._history_lock:
            self._history.clear()
        with self._bottleneck_lock:
            self._bottlenecks.clear()
        logger.info("Performance engine state reset")


# Factory functions
def create_performance_engine(
    settings: Optional[TelemetrySettings] = None,
    environment_provider: Optional[EnvironmentProvider] = None,
    **overrides: Any,
) -> PerformanceEngine:
    """Factory function to create a performance engine.

    Keyword overrides are validated and applied on top of the given (or
    global) settings.

    Raises:
        ConfigurationError: an override fails validation
    """
    settings = settings or get_settings()
    if overrides:
        settings = override_settings(settings, **overrides)
    return PerformanceEngine(settings=settings, environment_provider=environment_provider)
