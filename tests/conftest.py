"""
Shared pytest fixtures for the venue audit test suite.

Provides:
  - ``empty_input``: ``AuditInput()`` with every metric absent.
  - ``demo_input``: the built-in casual-dining demo snapshot.
  - ``good_input`` / ``good_input_for``: an internal snapshot that meets or
    beats every target (the factory takes a venue type).
  - ``demo_result`` / ``demo_summary``: the demo snapshot run through the engine.
  - ``make_recommendation``: factory for ad-hoc ``Recommendation`` objects.
"""

from __future__ import annotations

import pytest

from venue_audit.engine.aggregator import run_quiet_audit
from venue_audit.engine.recovery import build_recovery_summary
from venue_audit.models.audit_input import (
    AuditInput,
    BeverageInput,
    ComplianceInput,
    FoodInput,
    LabourInput,
    MarketingInput,
    OverheadInput,
    ServiceInput,
)
from venue_audit.models.audit_result import AuditResult, Recommendation, RecoverySummary
from venue_audit.samples import demo_audit_input
from venue_audit.taxonomy.audit_taxonomy import AuditSource, Difficulty, Priority


# ── Inputs ────────────────────────────────────────────────────────────────────

@pytest.fixture
def empty_input() -> AuditInput:
    """Snapshot with no metrics at all; every scorer falls back to defaults."""
    return AuditInput()


@pytest.fixture
def demo_input() -> AuditInput:
    return demo_audit_input()


def build_good_input(venue_type: str = "casual_dining") -> AuditInput:
    """Internal snapshot that meets or beats every target (no recommendations)."""
    return AuditInput(
        venue_type=venue_type,
        source=AuditSource.INTERNAL,
        food=FoodInput(
            actual_food_cost_pct=24.0, theoretical_food_cost_pct=23.5, waste_pct=1.5,
            menu_stars_pct=50.0, menu_plowhorse_pct=35.0, menu_dogs_count=0,
            menu_puzzles_count=1, supplier_count=4, supplier_price_compare=True,
            use_prep_lists=True, prep_completion_rate=97.0,
            monthly_food_revenue=50_000.0, monthly_food_purchases=12_000.0,
        ),
        beverage=BeverageInput(
            actual_bev_cost_pct=14.0, dead_stock_pct=2.0, stocktake_variance_pct=0.8,
            list_review_days=20, use_coravin=True, coravin_yield_pct=95.0,
            bev_revenue_mix_pct=65.0,
        ),
        labour=LabourInput(
            labour_cost_pct=20.0, overtime_hours_weekly=1.0, overtime_budget_hours=2.0,
            award_compliant=True, casual_loading_applied=True, casual_conversion_offered=True,
            super_rate=12.0, pays_super_on_time=True, staff_count=8, casual_count=2,
            covers_per_day=160.0, fatigue_compliant=True, break_compliant=True,
            monthly_labour_cost=20_000.0,
        ),
        overhead=OverheadInput(
            total_overhead_pct=17.0, rent_pct=6.0, prime_cost_pct=52.0, net_profit_pct=18.0,
            break_even_day_of_month=12, pnl_data_complete_pct=100.0,
            monthly_revenue=100_000.0, monthly_rent=6_000.0,
        ),
        service=ServiceInput(
            void_rate_pct=0.5, avg_service_minutes=10.0, payment_efficiency_score=95.0,
            discount_pct=1.5, cash_variance_pct=0.2,
        ),
        marketing=MarketingInput(
            campaigns_per_month=4, email_open_rate=32.0, roas=6.0, quiet_nights_targeted=True,
            repeat_customer_pct=62.0, database_size=5_000, monthly_marketing_spend=1_000.0,
        ),
        compliance=ComplianceInput(
            liquor_license_current=True, food_safety_cert_current=True, rsa_current=True,
            workers_comp_current=True, stp_phase2_compliant=True, payslip_compliant=True,
            right_to_disconnect_policy=True, induction_records_complete=True,
            record_retention_years=7.0, written_contracts=True,
        ),
    )


@pytest.fixture
def good_input() -> AuditInput:
    return build_good_input()


# ── Engine outputs ────────────────────────────────────────────────────────────

@pytest.fixture
def demo_result(demo_input: AuditInput) -> AuditResult:
    return run_quiet_audit(demo_input)


@pytest.fixture
def demo_summary(demo_result: AuditResult) -> RecoverySummary:
    return build_recovery_summary(demo_result)


# ── Factories ─────────────────────────────────────────────────────────────────

def build_recommendation(
    priority: Priority = Priority.MEDIUM,
    difficulty: Difficulty = Difficulty.MEDIUM,
    savings_monthly: float = 100.0,
    liability_reduction: float | None = None,
    module: str = "Food",
    action: str = "Do the thing",
) -> Recommendation:
    return Recommendation(
        action=action,
        how="Step one. Step two.",
        savings_monthly=savings_monthly,
        liability_reduction=liability_reduction,
        difficulty=difficulty,
        time_to_effect="1-2 weeks",
        priority=priority,
        module=module,
    )


@pytest.fixture
def make_recommendation():
    return build_recommendation


@pytest.fixture
def good_input_for():
    """Factory: ``good_input_for(venue_type)`` -> on-target snapshot for that venue type."""
    return build_good_input
