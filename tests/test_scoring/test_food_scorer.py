"""
Tests for venue_audit/scoring/food.py.

What we test
------------
score_food():
  - Six sub-scores with weights summing to 1.0.
  - fast_casual with actual food cost 40% -> "Food Cost % vs Benchmark"
    scores 10, POOR, HIGH-priority recommendation.
  - AvT gap drives score and a revenue-sized saving.
  - Food Waste targets a fixed 3% regardless of venue type.
  - Prep Accuracy is a flat 30 when prep lists are not used.
  - Missing inputs are tagged ESTIMATED and lower data completeness.
  - Demo snapshot module score and trend against its previous score.
"""

from __future__ import annotations

import pytest

from venue_audit.models.audit_input import AuditInput, FoodInput
from venue_audit.scoring.food import score_food
from venue_audit.taxonomy.audit_taxonomy import (
    AuditSource,
    DataSource,
    Priority,
    Status,
    Trend,
)


def _food(venue_type: str = "casual_dining", source=AuditSource.INTERNAL, **fields):
    return score_food(AuditInput(venue_type=venue_type, source=source, food=FoodInput(**fields)))


def _sub(result, name):
    return next(s for s in result.sub_scores if s.name == name)


# ── Structure ─────────────────────────────────────────────────────────────────

class TestFoodStructure:
    def test_six_sub_scores(self):
        result = _food()
        assert len(result.sub_scores) == 6
        assert sum(s.weight for s in result.sub_scores) == pytest.approx(1.0)

    def test_module_metadata(self):
        result = _food()
        assert result.module == "food"
        assert result.label == "Food"
        assert result.weight == pytest.approx(0.15)


# ── Food cost vs benchmark ────────────────────────────────────────────────────

class TestFoodCostBenchmark:
    def test_fast_casual_end_to_end(self):
        result = _food(venue_type="fast_casual", actual_food_cost_pct=40.0)
        sub = _sub(result, "Food Cost % vs Benchmark")
        assert sub.score == 10
        assert sub.status is Status.POOR
        assert sub.data_source is DataSource.INTERNAL
        assert sub.recommendation is not None
        assert sub.recommendation.priority is Priority.HIGH

    def test_below_benchmark_no_recommendation(self):
        sub = _sub(_food(actual_food_cost_pct=25.0), "Food Cost % vs Benchmark")
        assert sub.score == 100
        assert sub.recommendation is None

    def test_small_overrun_is_medium_priority(self):
        sub = _sub(_food(actual_food_cost_pct=30.0), "Food Cost % vs Benchmark")
        assert sub.score == 70
        assert sub.recommendation.priority is Priority.MEDIUM

    def test_saving_sized_from_food_revenue(self):
        sub = _sub(
            _food(actual_food_cost_pct=30.0, monthly_food_revenue=50_000.0),
            "Food Cost % vs Benchmark",
        )
        assert sub.recommendation.savings_monthly == pytest.approx(1_000.0)


# ── AvT variance ──────────────────────────────────────────────────────────────

class TestAvtVariance:
    def test_gap_within_target(self):
        sub = _sub(
            _food(actual_food_cost_pct=29.0, theoretical_food_cost_pct=28.0), "AvT Variance"
        )
        assert sub.score == 100
        assert sub.recommendation is None

    def test_gap_above_target(self):
        sub = _sub(
            _food(actual_food_cost_pct=33.0, theoretical_food_cost_pct=28.0,
                  monthly_food_revenue=40_000.0),
            "AvT Variance",
        )
        assert sub.score == 30
        assert sub.recommendation.savings_monthly == pytest.approx(1_200.0)
        assert sub.recommendation.priority is Priority.HIGH

    def test_needs_both_costs(self):
        sub = _sub(_food(actual_food_cost_pct=33.0), "AvT Variance")
        assert sub.data_source is DataSource.ESTIMATED


# ── Food waste ────────────────────────────────────────────────────────────────

class TestFoodWaste:
    def test_cafe_above_fixed_target(self):
        sub = _sub(_food(venue_type="cafe", waste_pct=3.5), "Food Waste")
        assert sub.target == "≤ 3%"
        assert sub.recommendation is not None
        assert sub.recommendation.action == "Reduce waste from 3.5% to under 3%"
        assert sub.recommendation.priority is Priority.MEDIUM

    def test_bar_pub_below_fixed_target(self):
        sub = _sub(_food(venue_type="bar_pub", waste_pct=2.8), "Food Waste")
        assert sub.target == "≤ 3%"
        assert sub.recommendation is None

    def test_at_target_no_recommendation(self):
        assert _sub(_food(waste_pct=3.0), "Food Waste").recommendation is None


# ── Prep accuracy ─────────────────────────────────────────────────────────────

class TestPrepAccuracy:
    def test_no_prep_lists_is_flat_30(self):
        sub = _sub(_food(use_prep_lists=False, prep_completion_rate=99.0), "Prep Accuracy")
        assert sub.score == 30
        assert sub.recommendation is not None

    def test_completion_rate_is_the_score(self):
        sub = _sub(_food(use_prep_lists=True, prep_completion_rate=92.0), "Prep Accuracy")
        assert sub.score == 92
        assert sub.recommendation is None


# ── Data completeness ─────────────────────────────────────────────────────────

class TestFoodCompleteness:
    def test_empty_input_all_estimated(self):
        result = score_food(AuditInput())
        assert all(s.data_source is DataSource.ESTIMATED for s in result.sub_scores)
        assert result.data_completeness == pytest.approx(0.0)

    def test_external_source_tags_questionnaire(self):
        sub = _sub(_food(source=AuditSource.EXTERNAL, waste_pct=2.0), "Food Waste")
        assert sub.data_source is DataSource.QUESTIONNAIRE

    def test_demo_fully_supplied(self, demo_input):
        assert score_food(demo_input).data_completeness == pytest.approx(1.0)


# ── Demo snapshot ─────────────────────────────────────────────────────────────

class TestFoodDemo:
    def test_score(self, demo_input):
        assert score_food(demo_input).score == 67

    def test_trend_against_previous(self, demo_input):
        result = score_food(demo_input)
        assert result.prev_score == 79
        assert result.trend is Trend.DOWN

    def test_recommendations(self, demo_input):
        names = [s.name for s in score_food(demo_input).sub_scores if s.recommendation]
        assert names == ["AvT Variance", "Food Cost % vs Benchmark", "Food Waste", "Prep Accuracy"]
