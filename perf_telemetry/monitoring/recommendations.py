"""
Optimization recommendations derived from category scores.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from ..core.models import Complexity, MetricCategory, Priority, Recommendation

RECOMMENDATION_THRESHOLD = 70


@dataclass(frozen=True)
class RecommendationTemplate:
    """Fixed recommendation content for one category."""
    category: MetricCategory
    title: str
    description: str
    estimated_impact: float
    complexity: Complexity
    base_priority: Priority
    steps: tuple
    related_metrics: tuple
    critical_below: Optional[float] = None

    def priority_for(self, score: float) -> Priority:
        if self.critical_below is not None and score < self.critical_below:
            return Priority.CRITICAL
        return self.base_priority

    def build(self, score: float) -> Recommendation:
        return Recommendation(
            priority=self.priority_for(score),
            category=self.category.value,
            title=self.title,
            description=self.description,
            estimated_impact=self.estimated_impact,
            implementation_complexity=self.complexity,
            steps=list(self.steps),
            related_metrics=list(self.related_metrics),
        )


RECOMMENDATION_TEMPLATES: List[RecommendationTemplate] = [
    RecommendationTemplate(
        category=MetricCategory.RENDERING,
        title="Optimize Component Rendering",
        description="Your app has rendering performance issues that affect user experience",
        estimated_impact=85,
        complexity=Complexity.MEDIUM,
        base_priority=Priority.HIGH,
        critical_below=50,
        steps=(
            "Memoize expensive components",
            "Implement virtualized lists for long content",
            "Optimize image rendering and caching",
            "Reduce component re-renders by caching derived values and callbacks",
            "Profile render cycles to find hot components",
        ),
        related_metrics=("fps", "render_time", "component_updates"),
    ),
    RecommendationTemplate(
        category=MetricCategory.MEMORY,
        title="Optimize Memory Usage",
        description="High memory usage detected - risk of crashes on low-end devices",
        estimated_impact=75,
        complexity=Complexity.MEDIUM,
        base_priority=Priority.HIGH,
        critical_below=40,
        steps=(
            "Release resources when components unmount",
            "Clear image caches periodically",
            "Fix memory leaks in subscriptions",
            "Optimize data structures and caching",
            "Use lazy loading for non-critical components",
        ),
        related_metrics=("memory_usage", "memory_leaks", "gc_frequency"),
    ),
    RecommendationTemplate(
        category=MetricCategory.NETWORK,
        title="Optimize Network Performance",
        description="Network requests are slow and affecting user experience",
        estimated_impact=70,
        complexity=Complexity.EASY,
        base_priority=Priority.HIGH,
        steps=(
            "Implement request caching and deduplication",
            "Use compression for API responses",
            "Implement proper retry logic with exponential backoff",
            "Preload critical data",
            "Optimize payload sizes",
        ),
        related_metrics=("network_latency", "request_time", "error_rate"),
    ),
    RecommendationTemplate(
        category=MetricCategory.BUNDLE,
        title="Optimize Bundle Size",
        description="Large bundle size is affecting app startup time",
        estimated_impact=60,
        complexity=Complexity.HARD,
        base_priority=Priority.MEDIUM,
        steps=(
            "Implement code splitting by route",
            "Use lazy loading for non-critical components",
            "Analyze and remove unused dependencies",
            "Optimize import statements for tree shaking",
            "Compress and minify assets",
        ),
        related_metrics=("bundle_size", "load_time", "startup_time"),
    ),
]


def sort_recommendations(recommendations: List[Recommendation]) -> List[Recommendation]:
    """Order by priority rank, then by estimated impact descending."""
    return sorted(recommendations, key=lambda r: (r.priority.rank, -r.estimated_impact))


def generate_recommendations(
    category_scores: Dict[str, float],
    templates: Optional[List[RecommendationTemplate]] = None,
) -> List[Recommendation]:
    """One recommendation per scored category below the attention threshold."""
    recommendations = []
    for template in templates if templates is not None else RECOMMENDATION_TEMPLATES:
        score = category_scores.get(template.category.value)
        if score is None or score >= RECOMMENDATION_THRESHOLD:
            continue
        recommendations.append(template.build(score))

    return sort_recommendations(recommendations)
