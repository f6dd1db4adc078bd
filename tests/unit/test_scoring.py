"""Unit tests for category scoring."""

import pytest

from perf_telemetry.core.models import MetricCategory
from perf_telemetry.monitoring.scoring import (
    calculate_average,
    overall_score,
    round_half_up,
    score_categories,
    score_category,
)
from perf_telemetry.utils.exceptions import InvalidMetricError


class TestScoreCategory:
    """Test cases for score_category."""

    @pytest.mark.unit
    def test_rendering_score_from_average_fps(self, make_metric):
        """Test rendering score = avg fps / 60 * 100."""
        metrics = [make_metric("fps", v, MetricCategory.RENDERING) for v in (30, 42)]

        assert score_category(MetricCategory.RENDERING, metrics) == pytest.approx(60.0)

    @pytest.mark.unit
    def test_rendering_score_clamped_to_100(self, make_metric):
        """Test that fps above 60 does not push the score past 100."""
        metrics = [make_metric("fps", 90, MetricCategory.RENDERING)]

        assert score_category("rendering", metrics) == 100.0

    @pytest.mark.unit
    def test_memory_score(self, make_metric):
        """Test memory score = 100 - avg usage."""
        metrics = [make_metric("usage_percentage", v, MetricCategory.MEMORY) for v in (60, 80)]

        assert score_category("memory", metrics) == pytest.approx(30.0)

    @pytest.mark.unit
    def test_memory_score_floor_at_zero(self, make_metric):
        """Test that usage above 100 does not go negative."""
        metrics = [make_metric("usage_percentage", 120, MetricCategory.MEMORY)]

        assert score_category("memory", metrics) == 0.0

    @pytest.mark.unit
    def test_network_score(self, make_metric):
        """Test network score = 100 - avg latency / 1000 * 20."""
        metrics = [make_metric("latency", 1500, MetricCategory.NETWORK)]

        assert score_category("network", metrics) == pytest.approx(70.0)

    @pytest.mark.unit
    def test_network_score_floor_at_zero(self, make_metric):
        """Test very slow networks bottom out at zero."""
        metrics = [make_metric("latency", 9000, MetricCategory.NETWORK)]

        assert score_category("network", metrics) == 0.0

    @pytest.mark.unit
    @pytest.mark.parametrize("category", ["user_interaction", "bundle", "custom"])
    def test_other_categories_default_to_75(self, make_metric, category):
        """Test the flat default score for categories without a formula."""
        metrics = [make_metric("anything", 1, MetricCategory(category))]

        assert score_category(category, metrics) == 75.0

    @pytest.mark.unit
    @pytest.mark.parametrize("category", list(MetricCategory))
    def test_empty_category_scores_100(self, category):
        """Test that absence of samples is treated as healthy."""
        assert score_category(category, []) == 100.0

    @pytest.mark.unit
    def test_scored_category_without_key_metric_scores_100(self, make_metric):
        """Test that rendering samples without fps carry no evidence."""
        metrics = [make_metric("render_time", 40, MetricCategory.RENDERING)]

        assert score_category("rendering", metrics) == 100.0

    @pytest.mark.unit
    def test_only_key_metric_is_averaged(self, make_metric):
        """Test that other names in the category are ignored."""
        metrics = [
            make_metric("fps", 30, MetricCategory.RENDERING),
            make_metric("render_time", 500, MetricCategory.RENDERING),
        ]

        assert score_category("rendering", metrics) == pytest.approx(50.0)

    @pytest.mark.unit
    @pytest.mark.parametrize("with_samples", [True, False])
    def test_unknown_category_rejected(self, make_metric, with_samples):
        metrics = [make_metric("gpu_time", 4)] if with_samples else []

        with pytest.raises(InvalidMetricError):
            score_category("gpu", metrics)


class TestOverallScore:
    """Test cases for score aggregation."""

    @pytest.mark.unit
    def test_score_categories_groups_by_category(self, make_metric):
        """Test one score per category present."""
        metrics = [
            make_metric("fps", 60, MetricCategory.RENDERING),
            make_metric("usage_percentage", 40, MetricCategory.MEMORY),
            make_metric("fps", 60, MetricCategory.RENDERING),
        ]

        scores = score_categories(metrics)

        assert scores == {"rendering": pytest.approx(100.0), "memory": pytest.approx(60.0)}
        assert list(scores) == ["rendering", "memory"]

    @pytest.mark.unit
    def test_overall_is_unweighted_mean(self):
        """Test overall score averages category scores."""
        assert overall_score({"rendering": 100.0, "memory": 60.0, "custom": 75.0}) == pytest.approx(235 / 3)

    @pytest.mark.unit
    def test_overall_without_categories(self):
        """Test overall score with nothing to average."""
        assert overall_score({}) == 100.0

    @pytest.mark.unit
    def test_calculate_average_empty(self):
        assert calculate_average([]) == 0.0

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [(49.5, 50), (50.4, 50), (78.333, 78), (0.5, 1), (99.99, 100)])
    def test_round_half_up(self, value, expected):
        """Test halves round up rather than to even."""
        assert round_half_up(value) == expected
