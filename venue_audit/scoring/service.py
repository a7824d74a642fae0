"""
Service module scorer.

Floor and till discipline: voids, speed of service, payment handling,
discounting and cash variance.  Discount and cash-variance savings are
sized from ``overhead.monthly_revenue`` since the service inputs carry no
revenue figure of their own.
"""

from __future__ import annotations

import logging

from venue_audit.benchmarks.thresholds import (
    CASH_VARIANCE_THRESHOLDS,
    DISCOUNT_THRESHOLDS,
    VOID_RATE_THRESHOLDS,
    score_from_thresholds,
)
from venue_audit.models.audit_input import AuditInput
from venue_audit.models.audit_result import ModuleResult, Recommendation, SubScore
from venue_audit.scoring.common import build_module_result, fmt_num, metric, sub_score
from venue_audit.taxonomy.audit_taxonomy import Difficulty, ModuleKey, Priority

logger = logging.getLogger(__name__)

MODULE = "Service"

DEFAULT_VOID_RATE_PCT = 1.8
DEFAULT_SERVICE_MINUTES = 18.0
DEFAULT_PAYMENT_EFFICIENCY = 88.0
DEFAULT_DISCOUNT_PCT = 3.5
DEFAULT_CASH_VARIANCE_PCT = 1.2
DEFAULT_MONTHLY_REVENUE = 80_000.0

VOID_TARGET_PCT = 2.0
SERVICE_TARGET_MINUTES = 15.0
DISCOUNT_TARGET_PCT = 3.0
DISCOUNT_HIGH_PRIORITY_PCT = 5.0
CASH_VARIANCE_TARGET_PCT = 0.5
CASH_VARIANCE_HIGH_PRIORITY_PCT = 1.5
# Cash share of takings used to size a cash-variance loss.
CASH_SHARE_OF_REVENUE = 0.15
VOID_SAVING = 200.0
SPEED_SAVING = 300.0

DATA_COMPLETENESS = 0.9


def _speed_score(minutes: float) -> int:
    if minutes <= 12:
        return 100
    if minutes <= 15:
        return 90
    if minutes <= 20:
        return 75
    if minutes <= 25:
        return 55
    return 30


def score_service(audit_input: AuditInput) -> ModuleResult:
    """Score the Service module for one snapshot."""
    d = audit_input.service
    src = audit_input.source
    revenue = (
        audit_input.overhead.monthly_revenue
        if audit_input.overhead.monthly_revenue is not None
        else DEFAULT_MONTHLY_REVENUE
    )
    items: list[SubScore] = []

    void_rate, void_src = metric(d.void_rate_pct, DEFAULT_VOID_RATE_PCT, src)
    items.append(sub_score(
        "Void Rate", 0.25,
        score_from_thresholds(void_rate, VOID_RATE_THRESHOLDS),
        f"{fmt_num(void_rate)}%", f"< {fmt_num(VOID_TARGET_PCT)}%", void_src,
        Recommendation(
            action=f"Reduce void rate from {fmt_num(void_rate)}% to under "
                   f"{fmt_num(VOID_TARGET_PCT)}%",
            how="Require manager sign-off on voids. Review void reasons weekly by staff member.",
            savings_monthly=VOID_SAVING,
            difficulty=Difficulty.LOW, time_to_effect="1-2 weeks",
            priority=Priority.MEDIUM, module=MODULE,
        ) if void_rate > VOID_TARGET_PCT else None,
    ))

    minutes, speed_src = metric(d.avg_service_minutes, DEFAULT_SERVICE_MINUTES, src)
    items.append(sub_score(
        "Speed of Service", 0.20,
        _speed_score(minutes),
        f"{fmt_num(minutes)} min", f"≤ {fmt_num(SERVICE_TARGET_MINUTES)} min", speed_src,
        Recommendation(
            action=f"Reduce service time from {fmt_num(minutes)} to "
                   f"{fmt_num(SERVICE_TARGET_MINUTES)} min",
            how="Re-sequence the pass. Pre-batch high-volume garnishes. Add a runner at peak.",
            savings_monthly=SPEED_SAVING,
            difficulty=Difficulty.MEDIUM, time_to_effect="2-4 weeks",
            priority=Priority.MEDIUM, module=MODULE,
        ) if minutes > SERVICE_TARGET_MINUTES else None,
    ))

    payment, payment_src = metric(d.payment_efficiency_score, DEFAULT_PAYMENT_EFFICIENCY, src)
    items.append(sub_score(
        "Payment Efficiency", 0.15, payment,
        f"{fmt_num(payment)}/100", "≥ 90", payment_src,
    ))

    discount, discount_src = metric(d.discount_pct, DEFAULT_DISCOUNT_PCT, src)
    items.append(sub_score(
        "Discount Control", 0.20,
        score_from_thresholds(discount, DISCOUNT_THRESHOLDS),
        f"{fmt_num(discount)}%", f"≤ {fmt_num(DISCOUNT_TARGET_PCT)}%", discount_src,
        Recommendation(
            action=f"Tighten discounting from {fmt_num(discount)}% to "
                   f"{fmt_num(DISCOUNT_TARGET_PCT)}%",
            how="Restrict discount keys to managers. Log a reason code for every comp.",
            savings_monthly=revenue * (discount - DISCOUNT_TARGET_PCT) / 100,
            difficulty=Difficulty.LOW, time_to_effect="1 week",
            priority=(
                Priority.HIGH if discount > DISCOUNT_HIGH_PRIORITY_PCT else Priority.MEDIUM
            ),
            module=MODULE,
        ) if discount > DISCOUNT_TARGET_PCT else None,
    ))

    cash_var, cash_src = metric(d.cash_variance_pct, DEFAULT_CASH_VARIANCE_PCT, src)
    items.append(sub_score(
        "Cash Variance", 0.20,
        score_from_thresholds(cash_var, CASH_VARIANCE_THRESHOLDS),
        f"{fmt_num(cash_var)}%", f"≤ {fmt_num(CASH_VARIANCE_TARGET_PCT)}%", cash_src,
        Recommendation(
            action=f"Reduce cash variance from {fmt_num(cash_var)}% to "
                   f"{fmt_num(CASH_VARIANCE_TARGET_PCT)}%",
            how="Blind cash-ups at close. One till per staff member. Daily reconciliation.",
            savings_monthly=revenue * CASH_SHARE_OF_REVENUE * cash_var / 100,
            difficulty=Difficulty.LOW, time_to_effect="1-2 weeks",
            priority=(
                Priority.HIGH if cash_var > CASH_VARIANCE_HIGH_PRIORITY_PCT else Priority.MEDIUM
            ),
            module=MODULE,
        ) if cash_var > CASH_VARIANCE_TARGET_PCT else None,
    ))

    result = build_module_result(
        ModuleKey.SERVICE, audit_input, items,
        data_completeness=DATA_COMPLETENESS,
        prev_offset=-2,
    )
    logger.debug("Service scored %d (%s)", result.score, result.band)
    return result
