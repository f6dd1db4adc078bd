"""
Instantaneous user-experience score.

Weighted composite of recent frame rate, memory, network and interaction
health. Components without samples drop out of both the weighted sum and
the weight total.
"""

from typing import Callable, Dict, Sequence, Tuple

from ..core.models import Metric
from .scoring import (
    average_named,
    fps_score,
    interaction_score,
    memory_score,
    network_score,
    round_half_up,
)

UX_WEIGHTS: Dict[str, float] = {
    "fps": 0.30,
    "memory": 0.20,
    "network": 0.25,
    "interaction": 0.25,
}

# component -> (metric name, sub-score formula)
UX_COMPONENTS: Dict[str, Tuple[str, Callable[[float], float]]] = {
    "fps": ("fps", fps_score),
    "memory": ("usage_percentage", memory_score),
    "network": ("latency", network_score),
    "interaction": ("interaction_latency", interaction_score),
}


def ux_sub_scores(metrics: Sequence[Metric]) -> Dict[str, float]:
    """Sub-score per component that has samples."""
    scores = {}
    for component, (metric_name, formula) in UX_COMPONENTS.items():
        average = average_named(metrics, metric_name)
        if average is not None:
            scores[component] = formula(average)
    return scores


def calculate_ux_score(metrics: Sequence[Metric], now: float, window_seconds: float = 60.0) -> int:
    """Weighted UX score over samples strictly newer than now - window_seconds."""
    cutoff = now - window_seconds
    recent = [m for m in metrics if m.timestamp > cutoff]
    if not recent:
        return 100

    sub_scores = ux_sub_scores(recent)
    total_weight = sum(UX_WEIGHTS[component] for component in sub_scores)
    if total_weight <= 0:
        return 100

    weighted = sum(score * UX_WEIGHTS[component] for component, score in sub_scores.items())
    return round_half_up(weighted / total_weight)
