"""
Marketing module scorer.

Campaign cadence, engagement, return on ad spend, demand filling and
retention.  Unlike the cost modules, several marketing recommendations
are *investments*: they carry a negative ``savings_monthly`` (proposed
spend) and are excluded from the found-money total.

Confidence is HIGH for internal data and LOW otherwise; questionnaire
answers about marketing performance are the least reliable input in the
audit.
"""

from __future__ import annotations

import logging

from venue_audit.models.audit_input import AuditInput
from venue_audit.models.audit_result import ModuleResult, Recommendation, SubScore
from venue_audit.scoring.common import (
    build_module_result,
    default_confidence,
    flag_source,
    fmt_num,
    metric,
    sub_score,
)
from venue_audit.taxonomy.audit_taxonomy import Confidence, Difficulty, ModuleKey, Priority

logger = logging.getLogger(__name__)

MODULE = "Marketing"

DEFAULT_CAMPAIGNS_PER_MONTH = 1
DEFAULT_EMAIL_OPEN_RATE = 22.0
DEFAULT_ROAS = 3.5
DEFAULT_REPEAT_CUSTOMER_PCT = 35.0
DEFAULT_MONTHLY_MARKETING_SPEND = 500.0

CAMPAIGNS_TARGET = 3
EMAIL_OPEN_TARGET = 25.0
ROAS_TARGET = 4.0
REPEAT_TARGET_PCT = 45.0
CAMPAIGN_INVESTMENT = -800.0
QUIET_NIGHT_INVESTMENT = -800.0
RETENTION_INVESTMENT = -200.0
# Share of spend recovered by reallocating to better-performing channels.
ROAS_REALLOCATION_SHARE = 0.2

DATA_COMPLETENESS = 0.7


def _campaign_score(per_month: float) -> int:
    if per_month >= 4:
        return 100
    if per_month >= 3:
        return 80
    if per_month >= 2:
        return 60
    if per_month >= 1:
        return 40
    return 15


def _email_score(open_rate: float) -> int:
    if open_rate >= 30:
        return 100
    if open_rate >= 25:
        return 80
    if open_rate >= 20:
        return 65
    if open_rate >= 15:
        return 45
    return 20


def _roas_score(roas: float) -> int:
    if roas >= 5:
        return 100
    if roas >= 4:
        return 85
    if roas >= 3:
        return 70
    if roas >= 2:
        return 50
    if roas >= 1:
        return 30
    return 10


def _retention_score(repeat_pct: float) -> int:
    if repeat_pct >= 60:
        return 100
    if repeat_pct >= 45:
        return 80
    if repeat_pct >= 30:
        return 55
    if repeat_pct >= 20:
        return 35
    return 15


def score_marketing(audit_input: AuditInput) -> ModuleResult:
    """Score the Marketing module for one snapshot."""
    d = audit_input.marketing
    src = audit_input.source
    spend = (
        d.monthly_marketing_spend
        if d.monthly_marketing_spend is not None
        else DEFAULT_MONTHLY_MARKETING_SPEND
    )
    items: list[SubScore] = []

    campaigns, campaigns_src = metric(d.campaigns_per_month, DEFAULT_CAMPAIGNS_PER_MONTH, src)
    items.append(sub_score(
        "Campaign Frequency", 0.20,
        _campaign_score(campaigns),
        f"{campaigns}/month", f"≥ {CAMPAIGNS_TARGET}/month", campaigns_src,
        Recommendation(
            action=f"Increase campaigns from {campaigns} to {CAMPAIGNS_TARGET}+ per month",
            how="Plan a monthly calendar: one offer, one event, one database send.",
            savings_monthly=CAMPAIGN_INVESTMENT,
            difficulty=Difficulty.LOW, time_to_effect="1-2 weeks",
            priority=Priority.MEDIUM, module=MODULE,
        ) if campaigns < CAMPAIGNS_TARGET else None,
    ))

    open_rate, email_src = metric(d.email_open_rate, DEFAULT_EMAIL_OPEN_RATE, src)
    db_note = f" ({d.database_size} contacts)" if d.database_size else ""
    items.append(sub_score(
        "Email/SMS Engagement", 0.20,
        _email_score(open_rate),
        f"{fmt_num(open_rate)}% open rate{db_note}", f"≥ {fmt_num(EMAIL_OPEN_TARGET)}%",
        email_src,
        Recommendation(
            action=f"Lift open rate from {fmt_num(open_rate)}% to {fmt_num(EMAIL_OPEN_TARGET)}%",
            how="Segment the database by visit frequency. Test subject lines. Clean bounces.",
            savings_monthly=0.0,
            difficulty=Difficulty.LOW, time_to_effect="2-4 weeks",
            priority=Priority.LOW, module=MODULE,
        ) if open_rate < EMAIL_OPEN_TARGET else None,
    ))

    roas, roas_src = metric(d.roas, DEFAULT_ROAS, src)
    items.append(sub_score(
        "ROAS", 0.25,
        _roas_score(roas),
        f"{fmt_num(roas)}x", f"≥ {fmt_num(ROAS_TARGET)}x", roas_src,
        Recommendation(
            action=f"Improve ROAS from {fmt_num(roas)}x to {fmt_num(ROAS_TARGET)}x",
            how="Shift spend from broad reach to retargeting and the owned database.",
            savings_monthly=spend * ROAS_REALLOCATION_SHARE,
            difficulty=Difficulty.MEDIUM, time_to_effect="4-8 weeks",
            priority=Priority.MEDIUM, module=MODULE,
        ) if roas < ROAS_TARGET else None,
    ))

    targeted = bool(d.quiet_nights_targeted)
    items.append(sub_score(
        "Demand Filling", 0.20, 80 if targeted else 35,
        "Quiet nights targeted" if targeted else "No quiet-night strategy",
        "Targeted offers on quiet nights",
        flag_source(d.quiet_nights_targeted, src),
        Recommendation(
            action="Launch a quiet-night demand program",
            how="Pick the two weakest nights. Run a set-menu or locals offer to the database.",
            savings_monthly=QUIET_NIGHT_INVESTMENT,
            difficulty=Difficulty.LOW, time_to_effect="1-2 weeks",
            priority=Priority.HIGH, module=MODULE,
        ) if not targeted else None,
    ))

    repeat_pct, repeat_src = metric(d.repeat_customer_pct, DEFAULT_REPEAT_CUSTOMER_PCT, src)
    items.append(sub_score(
        "Guest Retention", 0.15,
        _retention_score(repeat_pct),
        f"{fmt_num(repeat_pct)}% repeat", f"≥ {fmt_num(REPEAT_TARGET_PCT)}%", repeat_src,
        Recommendation(
            action=f"Grow repeat guests from {fmt_num(repeat_pct)}% to "
                   f"{fmt_num(REPEAT_TARGET_PCT)}%",
            how="Capture guest details at booking. Follow up after first visit with a return offer.",
            savings_monthly=RETENTION_INVESTMENT,
            difficulty=Difficulty.MEDIUM, time_to_effect="4-8 weeks",
            priority=Priority.MEDIUM, module=MODULE,
        ) if repeat_pct < REPEAT_TARGET_PCT else None,
    ))

    result = build_module_result(
        ModuleKey.MARKETING, audit_input, items,
        data_completeness=DATA_COMPLETENESS,
        prev_offset=-3,
        confidence=default_confidence(src, external=Confidence.LOW),
    )
    logger.debug("Marketing scored %d (%s)", result.score, result.band)
    return result
