"""
Tests for venue_audit/scoring/overhead.py.

What we test
------------
score_overhead():
  - Six sub-scores; data completeness is the reported P&L completeness / 100.
  - Rent recommendation priority escalates above 12%.
  - Net profit scored by score_net_profit() against the venue-type target.
  - Break-even day: banded when supplied, 70 and ESTIMATED when absent,
    never a recommendation.
  - Savings sized from monthly revenue.
"""

from __future__ import annotations

import pytest

from venue_audit.models.audit_input import AuditInput, OverheadInput
from venue_audit.scoring.overhead import score_overhead
from venue_audit.taxonomy.audit_taxonomy import AuditSource, DataSource, Priority


def _overhead(venue_type: str = "casual_dining", **fields):
    return score_overhead(
        AuditInput(venue_type=venue_type, source=AuditSource.INTERNAL, overhead=OverheadInput(**fields))
    )


def _sub(result, name):
    return next(s for s in result.sub_scores if s.name == name)


class TestOverheadStructure:
    def test_six_sub_scores(self):
        result = _overhead()
        assert len(result.sub_scores) == 6
        assert sum(s.weight for s in result.sub_scores) == pytest.approx(1.0)

    def test_completeness_from_pnl(self):
        assert _overhead(pnl_data_complete_pct=60.0).data_completeness == pytest.approx(0.6)

    def test_default_completeness(self):
        assert _overhead().data_completeness == pytest.approx(0.75)


class TestRent:
    def test_moderate_rent_is_medium_priority(self):
        result = _overhead(rent_pct=11.0, monthly_rent=9_000.0)
        rec = _sub(result, "Rent % of Revenue").recommendation
        assert rec.priority is Priority.MEDIUM
        assert rec.savings_monthly == pytest.approx(900.0)

    def test_high_rent_is_high_priority(self):
        sub = _sub(_overhead(rent_pct=13.0), "Rent % of Revenue")
        assert sub.score == 35
        assert sub.recommendation.priority is Priority.HIGH
        assert sub.recommendation.action == "Rent at 13%: structural challenge"

    def test_rent_at_target(self):
        assert _sub(_overhead(rent_pct=10.0), "Rent % of Revenue").recommendation is None


class TestNetProfit:
    def test_below_venue_target(self):
        rec = _sub(
            _overhead(net_profit_pct=7.5, monthly_revenue=80_000.0), "Net Profit %"
        ).recommendation
        assert rec.savings_monthly == pytest.approx(2_000.0)

    def test_target_differs_by_venue(self):
        # 12% meets the bar_pub target but not fast_casual's 15%.
        assert _sub(_overhead("bar_pub", net_profit_pct=12.0), "Net Profit %").recommendation is None
        assert _sub(
            _overhead("fast_casual", net_profit_pct=12.0), "Net Profit %"
        ).recommendation is not None

    def test_loss_making(self):
        assert _sub(_overhead(net_profit_pct=-4.0), "Net Profit %").score == 5


class TestBreakEven:
    def test_supplied_day(self):
        sub = _sub(_overhead(break_even_day_of_month=14), "Break-Even Trend")
        assert sub.score == 90
        assert sub.recommendation is None

    def test_previous_day_in_value(self):
        sub = _sub(
            _overhead(break_even_day_of_month=19, prev_break_even_day=21), "Break-Even Trend"
        )
        assert sub.value == "Day 19 (was day 21)"

    def test_absent_day(self):
        sub = _sub(_overhead(), "Break-Even Trend")
        assert sub.score == 70
        assert sub.data_source is DataSource.ESTIMATED


class TestOverheadDemo:
    def test_score(self, demo_input):
        assert score_overhead(demo_input).score == 59

    def test_prime_cost_saving(self, demo_input):
        rec = _sub(score_overhead(demo_input), "Prime Cost %").recommendation
        assert rec.savings_monthly == pytest.approx(800.0)
