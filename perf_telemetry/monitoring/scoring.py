"""
Category health scoring.

Converts a set of same-category samples into a 0-100 score. Rendering,
memory and network each average one key metric; other categories get a flat
default score.
"""

import math
from typing import Dict, Iterable, List, Optional, Sequence, Union

import numpy as np

from ..core.metric_store import coerce_category
from ..core.models import Metric, MetricCategory

DEFAULT_CATEGORY_SCORE = 75.0
NO_DATA_SCORE = 100.0

# Metric name each category's formula reads
SCORING_METRICS: Dict[MetricCategory, str] = {
    MetricCategory.RENDERING: "fps",
    MetricCategory.MEMORY: "usage_percentage",
    MetricCategory.NETWORK: "latency",
}


def calculate_average(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def values_named(metrics: Iterable[Metric], name: str) -> List[float]:
    return [m.value for m in metrics if m.name == name]


def average_named(metrics: Iterable[Metric], name: str) -> Optional[float]:
    """Mean of the samples called name, or None when there are none."""
    values = values_named(metrics, name)
    if not values:
        return None
    return calculate_average(values)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounding up."""
    return int(math.floor(value + 0.5))


def fps_score(avg_fps: float) -> float:
    return min(100.0, (avg_fps / 60) * 100)


def memory_score(avg_usage: float) -> float:
    return max(0.0, 100 - avg_usage)


def network_score(avg_latency_ms: float) -> float:
    return max(0.0, 100 - (avg_latency_ms / 1000) * 20)


def interaction_score(avg_latency_ms: float) -> float:
    return max(0.0, 100 - (avg_latency_ms / 200) * 100)


_FORMULAS = {
    MetricCategory.RENDERING: fps_score,
    MetricCategory.MEMORY: memory_score,
    MetricCategory.NETWORK: network_score,
}


def score_category(category: Union[MetricCategory, str], metrics: Sequence[Metric]) -> float:
    """Score one category's samples on a 0-100 scale.

    An empty sample set scores 100. A scored category whose samples contain
    none of the metric its formula reads also scores 100, since there is no
    evidence of degradation.
    """
    category = coerce_category(category)
    if not metrics:
        return NO_DATA_SCORE

    formula = _FORMULAS.get(category)
    if formula is None:
        return DEFAULT_CATEGORY_SCORE

    average = average_named(metrics, SCORING_METRICS[category])
    if average is None:
        return NO_DATA_SCORE
    return formula(average)


def score_categories(metrics: Sequence[Metric]) -> Dict[str, float]:
    """Score every category present in metrics, in first-seen order."""
    grouped: Dict[MetricCategory, List[Metric]] = {}
    for metric in metrics:
        grouped.setdefault(metric.category, []).append(metric)

    return {
        category.value: score_category(category, category_metrics)
        for category, category_metrics in grouped.items()
    }


def overall_score(category_scores: Dict[str, float]) -> float:
    """Unweighted mean of the category scores present, 100 when there are none."""
    if not category_scores:
        return NO_DATA_SCORE
    return calculate_average(list(category_scores.values()))
