"""
Trend classification for individual metrics.

A series is split into an earlier and a later half and the relative change
of their means decides the direction. By default the sign of the change is
read literally: a rising value is "improving" whatever the metric. With
polarity enabled, metrics where lower values are better have the direction
flipped so that rising latency reads as "degrading".
"""

from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..core.models import Metric, TrendDirection, TrendResult
from .scoring import calculate_average

# Metrics for which a decrease is the desirable direction
LOWER_IS_BETTER: FrozenSet[str] = frozenset({
    "latency",
    "interaction_latency",
    "network_latency",
    "request_time",
    "render_time",
    "load_time",
    "startup_time",
    "usage_percentage",
    "memory_usage",
    "memory_leaks",
    "gc_frequency",
    "bundle_size",
    "error_rate",
})


class TrendAnalyzer:
    """Classifies metric trajectories as stable, improving or degrading."""

    def __init__(
        self,
        stable_threshold: float = 5.0,
        confidence_reference: float = 50.0,
        polarity_aware: bool = False,
        lower_is_better: Optional[Iterable[str]] = None,
    ):
        """Initialize trend analyzer.

        Args:
            stable_threshold: Absolute percent change below which a series is stable
            confidence_reference: Percent change that maps to full confidence
            polarity_aware: Flip the direction for lower-is-better metrics
            lower_is_better: Metric names where lower values are better
        """
        self.stable_threshold = stable_threshold
        self.confidence_reference = confidence_reference
        self.polarity_aware = polarity_aware
        self.lower_is_better = frozenset(lower_is_better) if lower_is_better is not None else LOWER_IS_BETTER

    def calculate_trend(
        self,
        values: Sequence[float],
        metric_name: Optional[str] = None,
    ) -> Tuple[TrendDirection, float, float]:
        """Return (direction, percent change, confidence) for a chronological series."""
        if len(values) < 2:
            return TrendDirection.STABLE, 0.0, 0.0

        split = len(values) // 2
        first_avg = calculate_average(values[:split])
        second_avg = calculate_average(values[split:])

        change = _percent_change(first_avg, second_avg)
        abs_change = abs(change)

        if abs_change < self.stable_threshold:
            direction = TrendDirection.STABLE
        elif change > 0:
            direction = TrendDirection.IMPROVING
        else:
            direction = TrendDirection.DEGRADING

        if (
            self.polarity_aware
            and metric_name in self.lower_is_better
            and direction is not TrendDirection.STABLE
        ):
            direction = (
                TrendDirection.DEGRADING
                if direction is TrendDirection.IMPROVING
                else TrendDirection.IMPROVING
            )

        confidence = min(100.0, max(0.0, (abs_change / self.confidence_reference) * 100))

        return direction, change, confidence

    def analyze_metric(self, metrics: Iterable[Metric], name: str) -> TrendResult:
        """Trend of a single metric name over the given samples."""
        series = sorted((m for m in metrics if m.name == name), key=lambda m: m.timestamp)
        direction, change, confidence = self.calculate_trend([m.value for m in series], name)
        return TrendResult(metric=name, trend=direction, change=change, confidence=confidence)

    def analyze_trends(self, metrics: Sequence[Metric]) -> List[TrendResult]:
        """Trend per metric name, skipping names with fewer than two samples."""
        by_name: Dict[str, List[Metric]] = {}
        for metric in metrics:
            by_name.setdefault(metric.name, []).append(metric)

        trends = []
        for name, series in by_name.items():
            if len(series) < 2:
                continue
            trends.append(self.analyze_metric(series, name))
        return trends


def _percent_change(first_avg: float, second_avg: float) -> float:
    # A zero baseline has no relative scale; report a full-scale move instead
    if first_avg == 0:
        if second_avg == 0:
            return 0.0
        return 100.0 if second_avg > 0 else -100.0
    return ((second_avg - first_avg) / first_avg) * 100
