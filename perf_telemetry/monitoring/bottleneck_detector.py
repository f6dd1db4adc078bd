"""
Threshold-based bottleneck detection.

Each rule averages one metric of one category over the scan window and
compares it against the category's "poor" threshold. A rule whose metric
has no samples in the window stays silent.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from loguru import logger

from ..config.thresholds import PERFORMANCE_THRESHOLDS, CategoryThresholds
from ..core.models import Bottleneck, BottleneckType, Metric, MetricCategory, Severity
from .scoring import average_named


@dataclass(frozen=True)
class BottleneckRule:
    """Detection rule for one category/metric pair."""
    key: str
    category: MetricCategory
    metric_name: str
    threshold_key: str
    higher_is_worse: bool
    critical_value: float
    escalated_severity: Severity
    bottleneck_type: BottleneckType
    describe: Callable[[float], str]
    impact: Callable[[float], float]
    affected_metrics: tuple
    suggested_fix: str
    estimated_improvement: float

    def exceeds(self, average: float, threshold: float) -> bool:
        return average > threshold if self.higher_is_worse else average < threshold

    def severity(self, average: float) -> Severity:
        critical = average > self.critical_value if self.higher_is_worse else average < self.critical_value
        return Severity.CRITICAL if critical else self.escalated_severity


DEFAULT_RULES: List[BottleneckRule] = [
    BottleneckRule(
        key="rendering_fps",
        category=MetricCategory.RENDERING,
        metric_name="fps",
        threshold_key="fps",
        higher_is_worse=False,
        critical_value=20,
        escalated_severity=Severity.HIGH,
        bottleneck_type=BottleneckType.COMPONENT,
        describe=lambda avg: f"Low FPS detected: average {avg:.1f} fps",
        impact=lambda avg: max(0.0, 100 - (avg / 60) * 100),
        affected_metrics=("fps", "render_time"),
        suggested_fix="Optimize component render cycles, reduce complexity, use memoization",
        estimated_improvement=30,
    ),
    BottleneckRule(
        key="memory_usage",
        category=MetricCategory.MEMORY,
        metric_name="usage_percentage",
        threshold_key="usage",
        higher_is_worse=True,
        critical_value=95,
        escalated_severity=Severity.HIGH,
        bottleneck_type=BottleneckType.MEMORY,
        describe=lambda avg: f"High memory usage: {avg:.1f}%",
        impact=lambda avg: max(0.0, avg - 50),
        affected_metrics=("memory_usage", "memory_leaks"),
        suggested_fix="Clear unused caches, fix memory leaks, optimize image usage",
        estimated_improvement=40,
    ),
    BottleneckRule(
        key="network_latency",
        category=MetricCategory.NETWORK,
        metric_name="latency",
        threshold_key="latency",
        higher_is_worse=True,
        critical_value=3000,
        escalated_severity=Severity.MEDIUM,
        bottleneck_type=BottleneckType.NETWORK,
        describe=lambda avg: f"High network latency: {avg:.0f}ms",
        impact=lambda avg: min(100.0, (avg / 1000) * 20),
        affected_metrics=("network_latency", "request_time"),
        suggested_fix="Implement caching, reduce payload sizes, optimize API calls",
        estimated_improvement=50,
    ),
]


class BottleneckDetector:
    """Detects performance bottlenecks based on windowed metric averages"""

    def __init__(
        self,
        thresholds: Optional[Dict[MetricCategory, CategoryThresholds]] = None,
        rules: Optional[List[BottleneckRule]] = None,
    ):
        # Custom tables override the default per category
        self.thresholds = {**PERFORMANCE_THRESHOLDS, **(thresholds or {})}
        self.rules = rules if rules is not None else list(DEFAULT_RULES)

    def detect(self, metrics: Sequence[Metric], now: float) -> List[Bottleneck]:
        """Scan the windowed samples and return the bottlenecks found."""
        bottlenecks = []
        for rule in self.rules:
            bottleneck = self._apply_rule(rule, metrics, now)
            if bottleneck is not None:
                bottlenecks.append(bottleneck)

        for bottleneck in bottlenecks:
            if bottleneck.severity is Severity.CRITICAL:
                logger.critical(f"Critical bottleneck detected: {bottleneck.description}")
            else:
                logger.warning(f"Bottleneck detected ({bottleneck.severity.value}): {bottleneck.description}")

        return bottlenecks

    def _apply_rule(self, rule: BottleneckRule, metrics: Sequence[Metric], now: float) -> Optional[Bottleneck]:
        category_metrics = [m for m in metrics if m.category == rule.category]
        average = average_named(category_metrics, rule.metric_name)
        if average is None:
            return None

        category_thresholds = self.thresholds.get(rule.category)
        if category_thresholds is None or rule.threshold_key not in category_thresholds.poor.values:
            return None

        threshold = category_thresholds.poor.get(rule.threshold_key)
        if not rule.exceeds(average, threshold):
            return None

        return Bottleneck(
            id=f"{rule.key}_{int(now * 1000)}",
            type=rule.bottleneck_type,
            severity=rule.severity(average),
            description=rule.describe(average),
            impact=rule.impact(average),
            affected_metrics=list(rule.affected_metrics),
            detected_at=now,
            suggested_fix=rule.suggested_fix,
            estimated_improvement=rule.estimated_improvement,
        )
