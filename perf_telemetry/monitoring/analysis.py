"""
Analysis of a window of samples: scores, trends, text hints, critical issues
and a one-line summary.
"""

from typing import Dict, List, Optional, Sequence

from ..core.models import Analysis, Metric, TrendDirection, TrendResult
from .scoring import overall_score, round_half_up, score_categories
from .trends import TrendAnalyzer

NO_DATA_RECOMMENDATION = "Start tracking performance metrics to get insights"
NO_DATA_SUMMARY = "No performance data available for analysis"

CRITICAL_SCORE = 50
ATTENTION_SCORE = 70
CRITICAL_ISSUE_SCORE = 30
DEGRADING_CONFIDENCE = 70
CRITICAL_FPS = 20
CRITICAL_MEMORY_USAGE = 95


def empty_analysis(generated_at: Optional[float] = None) -> Analysis:
    return Analysis(
        overall_score=100,
        category_scores={},
        trends=[],
        recommendations=[NO_DATA_RECOMMENDATION],
        critical_issues=[],
        summary=NO_DATA_SUMMARY,
        generated_at=generated_at,
        sample_count=0,
    )


def build_analysis(
    metrics: Sequence[Metric],
    trend_analyzer: TrendAnalyzer,
    generated_at: Optional[float] = None,
) -> Analysis:
    """Score and describe a snapshot of samples."""
    if not metrics:
        return empty_analysis(generated_at)

    category_scores = score_categories(metrics)
    score = round_half_up(overall_score(category_scores))
    trends = trend_analyzer.analyze_trends(metrics)
    critical_issues = identify_critical_issues(metrics, category_scores)

    return Analysis(
        overall_score=score,
        category_scores=category_scores,
        trends=trends,
        recommendations=generate_hints(category_scores, trends),
        critical_issues=critical_issues,
        summary=generate_summary(score, critical_issues),
        generated_at=generated_at,
        sample_count=len(metrics),
    )


def generate_hints(category_scores: Dict[str, float], trends: List[TrendResult]) -> List[str]:
    """Plain-text optimization hints for weak categories and confident degradations."""
    hints = []

    for category, score in category_scores.items():
        if score < CRITICAL_SCORE:
            hints.append(f"Critical: Improve {category} performance (score: {_fmt(score)})")
        elif score < ATTENTION_SCORE:
            hints.append(f"Consider optimizing {category} performance (score: {_fmt(score)})")

    for trend in trends:
        if trend.trend is TrendDirection.DEGRADING and trend.confidence > DEGRADING_CONFIDENCE:
            hints.append(f"Monitor {trend.metric} - performance is degrading ({trend.change:.1f}%)")

    return hints


def identify_critical_issues(metrics: Sequence[Metric], category_scores: Dict[str, float]) -> List[str]:
    issues = []

    for category, score in category_scores.items():
        if score < CRITICAL_ISSUE_SCORE:
            issues.append(f"Critical {category} performance issue (score: {_fmt(score)})")

    low_fps = sum(1 for m in metrics if m.name == "fps" and m.value < CRITICAL_FPS)
    if low_fps:
        issues.append(f"Critical: FPS dropped below {CRITICAL_FPS} ({low_fps} times)")

    high_memory = sum(1 for m in metrics if m.name == "usage_percentage" and m.value > CRITICAL_MEMORY_USAGE)
    if high_memory:
        issues.append(f"Critical: Memory usage exceeded {CRITICAL_MEMORY_USAGE}% ({high_memory} times)")

    return issues


def generate_summary(score: int, critical_issues: List[str]) -> str:
    if critical_issues:
        return (
            f"Performance needs immediate attention (score: {score}). "
            f"{len(critical_issues)} critical issues detected."
        )

    if score >= 80:
        return f"Excellent performance (score: {score}). Keep up the good work!"
    elif score >= 60:
        return f"Good performance (score: {score}) with room for improvement."
    else:
        return f"Performance issues detected (score: {score}). Optimization recommended."


def _fmt(score: float) -> str:
    return f"{score:.1f}".rstrip("0").rstrip(".")
