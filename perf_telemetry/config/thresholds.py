"""
Performance thresholds used for scoring and bottleneck detection.

Each category carries a three-tier table (excellent / good / poor). Only the
values consumed by the scoring and detection rules are read at runtime; the
remaining entries document the intended bands for the category.
"""

from dataclasses import dataclass, field
from typing import Dict

from ..core.models import MetricCategory


@dataclass(frozen=True)
class ThresholdTier:
    """Threshold values for one quality tier, keyed by measurement."""
    values: Dict[str, float] = field(default_factory=dict)

    def get(self, key: str, default: float = 0.0) -> float:
        return self.values.get(key, default)


@dataclass(frozen=True)
class CategoryThresholds:
    """Excellent / good / poor tiers for a category."""
    excellent: ThresholdTier
    good: ThresholdTier
    poor: ThresholdTier


PERFORMANCE_THRESHOLDS: Dict[MetricCategory, CategoryThresholds] = {
    MetricCategory.RENDERING: CategoryThresholds(
        excellent=ThresholdTier({"fps": 58, "render_time": 16}),
        good=ThresholdTier({"fps": 45, "render_time": 22}),
        poor=ThresholdTier({"fps": 30, "render_time": 33}),
    ),
    MetricCategory.MEMORY: CategoryThresholds(
        excellent=ThresholdTier({"usage": 50, "leaks": 0}),
        good=ThresholdTier({"usage": 70, "leaks": 1}),
        poor=ThresholdTier({"usage": 85, "leaks": 3}),
    ),
    MetricCategory.NETWORK: CategoryThresholds(
        excellent=ThresholdTier({"latency": 100, "error_rate": 0.01}),
        good=ThresholdTier({"latency": 300, "error_rate": 0.05}),
        poor=ThresholdTier({"latency": 1000, "error_rate": 0.1}),
    ),
    MetricCategory.BUNDLE: CategoryThresholds(
        excellent=ThresholdTier({"size": 1024 * 1024, "load_time": 500}),
        good=ThresholdTier({"size": 2 * 1024 * 1024, "load_time": 1000}),
        poor=ThresholdTier({"size": 5 * 1024 * 1024, "load_time": 3000}),
    ),
}


def get_thresholds(category: MetricCategory) -> CategoryThresholds:
    """Get the threshold table for a category."""
    return PERFORMANCE_THRESHOLDS[category]
