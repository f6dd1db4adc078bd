"""
Analytics over metric snapshots: scoring, trends, bottleneck detection,
recommendations, UX score and report assembly.
"""

from .scoring import score_category, score_categories, overall_score
from .trends import TrendAnalyzer
from .analysis import build_analysis
from .bottleneck_detector import BottleneckDetector, BottleneckRule
from .recommendations import generate_recommendations
from .ux_score import calculate_ux_score

__all__ = [
    "score_category",
    "score_categories",
    "overall_score",
    "TrendAnalyzer",
    "build_analysis",
    "BottleneckDetector",
    "BottleneckRule",
    "generate_recommendations",
    "calculate_ux_score",
]
