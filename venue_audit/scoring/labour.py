"""
Labour module scorer.

Labour carries the largest single-line saving (wage % over benchmark) and
most of the payroll legal exposure.  Award, super, fatigue and casual
conversion failures produce recommendations with ``savings_monthly == 0``
and a one-off ``liability_reduction``: fixing them saves no money, it
removes a back-pay or penalty risk.

Boolean compliance flags are read as "not explicitly False": an absent
flag is assumed compliant (and tagged ESTIMATED), only an explicit False
is a breach.
"""

from __future__ import annotations

import logging

from venue_audit.benchmarks.registry import get_benchmarks
from venue_audit.models.audit_input import AuditInput
from venue_audit.models.audit_result import ModuleResult, Recommendation, SubScore
from venue_audit.scoring.common import (
    base_data_source,
    build_module_result,
    combined_source,
    flag_source,
    fmt_num,
    metric,
    sub_score,
)
from venue_audit.taxonomy.audit_taxonomy import DataSource, Difficulty, ModuleKey, Priority

logger = logging.getLogger(__name__)

MODULE = "Labour"

DEFAULT_LABOUR_COST_PCT = 29.0
DEFAULT_OVERTIME_HOURS = 4.5
DEFAULT_OVERTIME_BUDGET = 2.0
DEFAULT_COVERS_PER_STAFF = 12.0
DEFAULT_SUPER_RATE = 12.0
DEFAULT_MONTHLY_LABOUR_COST = 25_000.0

SUPER_GUARANTEE_RATE = 12.0
COVERS_PER_STAFF_TARGET = 12.0
WEEKS_PER_MONTH = 4.33
OVERTIME_HOURLY_COST = 35.0

AWARD_LIABILITY = 3_200.0
SUPER_LIABILITY = 3_200.0
FATIGUE_LIABILITY = 1_000.0
CASUAL_CONVERSION_LIABILITY = 500.0
ROSTER_SAVING = 500.0
CASUAL_CONVERSION_SAVING = 100.0

DATA_COMPLETENESS = 0.9


def _labour_cost_score(deviation: float) -> int:
    if deviation <= -2:
        return 100
    if deviation <= 0:
        return 90
    if deviation <= 2:
        return 70
    if deviation <= 5:
        return 50
    if deviation <= 8:
        return 30
    return 10


def _overtime_score(hours: float, budget: float) -> int:
    if hours <= budget:
        return 90
    if hours <= budget * 1.5:
        return 70
    if hours <= budget * 2:
        return 50
    if hours <= budget * 3:
        return 30
    return 10


def _roster_score(covers_per_staff: float) -> int:
    if covers_per_staff >= 15:
        return 90
    if covers_per_staff >= 12:
        return 75
    if covers_per_staff >= 9:
        return 55
    return 35


def _super_score(rate: float, on_time: bool) -> int:
    if rate >= SUPER_GUARANTEE_RATE and on_time:
        return 95
    if rate >= SUPER_GUARANTEE_RATE:
        return 70
    if rate >= 11:
        return 50
    return 20


def score_labour(audit_input: AuditInput) -> ModuleResult:
    """Score the Labour module for one snapshot."""
    d = audit_input.labour
    src = audit_input.source
    bench = get_benchmarks(audit_input.venue_type)
    items: list[SubScore] = []

    # 1. Labour cost % vs venue benchmark
    labour_pct, labour_src = metric(d.labour_cost_pct, DEFAULT_LABOUR_COST_PCT, src)
    labour_cost = (
        d.monthly_labour_cost if d.monthly_labour_cost is not None else DEFAULT_MONTHLY_LABOUR_COST
    )
    deviation = labour_pct - bench.labour_pct
    items.append(sub_score(
        "Labour Cost %", 0.20,
        _labour_cost_score(deviation),
        f"{fmt_num(labour_pct)}%", f"≤ {fmt_num(bench.labour_pct)}%", labour_src,
        Recommendation(
            action=f"Reduce labour from {fmt_num(labour_pct)}% to {fmt_num(bench.labour_pct)}%",
            how="Roster optimisation, cross-training, demand-based scheduling.",
            savings_monthly=labour_cost * deviation / 100,
            difficulty=Difficulty.HIGH, time_to_effect="4-8 weeks",
            priority=Priority.HIGH, module=MODULE,
        ) if deviation > 0 else None,
    ))

    # 2. Overtime
    ot_hours, ot_src = metric(d.overtime_hours_weekly, DEFAULT_OVERTIME_HOURS, src)
    ot_budget, budget_src = metric(d.overtime_budget_hours, DEFAULT_OVERTIME_BUDGET, src)
    items.append(sub_score(
        "Overtime Management", 0.15,
        _overtime_score(ot_hours, ot_budget),
        f"{fmt_num(ot_hours)} hrs/week", f"≤ {fmt_num(ot_budget)} hrs/week",
        combined_source(ot_src, budget_src),
        Recommendation(
            action=f"Reduce overtime from {fmt_num(ot_hours)} to {fmt_num(ot_budget)} hrs/week",
            how="Hire 1 casual for peak shifts. Cross-train existing staff.",
            savings_monthly=(ot_hours - ot_budget) * WEEKS_PER_MONTH * OVERTIME_HOURLY_COST,
            difficulty=Difficulty.MEDIUM, time_to_effect="2-4 weeks",
            priority=Priority.HIGH, module=MODULE,
        ) if ot_hours > ot_budget else None,
    ))

    # 3. Award compliance
    loading_ok = d.casual_loading_applied is not False
    award_ok = d.award_compliant is not False and loading_ok
    if award_ok:
        award_score = 95
    elif not loading_ok:
        award_score = 40
    else:
        award_score = 60
    items.append(sub_score(
        "Award Compliance", 0.20, award_score,
        "Compliant" if award_ok else "Issues found", "Full compliance",
        combined_source(
            flag_source(d.award_compliant, src), flag_source(d.casual_loading_applied, src)
        ),
        Recommendation(
            action="Rectify Award compliance issues immediately",
            how="Review all pay rates against the Hospitality Industry (General) Award "
                "MA000009. Apply 25% casual loading. Ensure penalty rates on weekends/PH.",
            savings_monthly=0.0,
            liability_reduction=AWARD_LIABILITY,
            difficulty=Difficulty.HIGH, time_to_effect="1-2 weeks",
            priority=Priority.HIGH, module=MODULE,
        ) if not award_ok else None,
    ))

    # 4. Roster efficiency (covers per rostered staff member per day)
    if d.covers_per_day and d.staff_count:
        covers_per_staff = d.covers_per_day / d.staff_count
        roster_src = base_data_source(src)
    else:
        covers_per_staff, roster_src = DEFAULT_COVERS_PER_STAFF, DataSource.ESTIMATED
    items.append(sub_score(
        "Roster Efficiency", 0.15,
        _roster_score(covers_per_staff),
        f"{covers_per_staff:.1f} covers/staff", f"≥ {fmt_num(COVERS_PER_STAFF_TARGET)}",
        roster_src,
        Recommendation(
            action=f"Improve roster efficiency from {covers_per_staff:.1f} covers/staff",
            how="Match rostered hours to covers by daypart. Trim shoulder shifts.",
            savings_monthly=ROSTER_SAVING,
            difficulty=Difficulty.MEDIUM, time_to_effect="2-4 weeks",
            priority=Priority.MEDIUM, module=MODULE,
        ) if covers_per_staff < COVERS_PER_STAFF_TARGET else None,
    ))

    # 5. Superannuation
    super_rate, super_src = metric(d.super_rate, DEFAULT_SUPER_RATE, src)
    on_time = d.pays_super_on_time is not False
    super_ok = super_rate >= SUPER_GUARANTEE_RATE and on_time
    items.append(sub_score(
        "Super Compliance", 0.10,
        _super_score(super_rate, on_time),
        f"{fmt_num(super_rate)}%", f"{fmt_num(SUPER_GUARANTEE_RATE)}% (paid on time)",
        combined_source(super_src, flag_source(d.pays_super_on_time, src)),
        Recommendation(
            action=f"Increase super to {fmt_num(SUPER_GUARANTEE_RATE)}% and pay on time",
            how="Required since 1 July 2025. Calculate back-payment. Rectify immediately.",
            savings_monthly=0.0,
            liability_reduction=SUPER_LIABILITY,
            difficulty=Difficulty.HIGH, time_to_effect="1 week",
            priority=Priority.HIGH, module=MODULE,
        ) if not super_ok else None,
    ))

    # 6. Fatigue & breaks
    fatigue_ok = d.fatigue_compliant is not False and d.break_compliant is not False
    items.append(sub_score(
        "Fatigue & Breaks", 0.10, 85 if fatigue_ok else 45,
        "Compliant" if fatigue_ok else "Breaches found", "Full compliance",
        combined_source(flag_source(d.fatigue_compliant, src), flag_source(d.break_compliant, src)),
        Recommendation(
            action="Enforce minimum breaks and rest between shifts",
            how="Record meal breaks in the timesheet. Roster a 10-hour break between shifts.",
            savings_monthly=0.0,
            liability_reduction=FATIGUE_LIABILITY,
            difficulty=Difficulty.MEDIUM, time_to_effect="1-2 weeks",
            priority=Priority.HIGH, module=MODULE,
        ) if not fatigue_ok else None,
    ))

    # 7. Casual conversion
    conversion_ok = d.casual_conversion_offered is not False
    items.append(sub_score(
        "Casual Conversion", 0.10, 90 if conversion_ok else 35,
        "Offered" if conversion_ok else "Not offered", "Offered to eligible casuals",
        flag_source(d.casual_conversion_offered, src),
        Recommendation(
            action="Offer casual conversion to eligible employees",
            how="Identify casuals with 12 months of regular shifts. Issue written offers.",
            savings_monthly=CASUAL_CONVERSION_SAVING,
            liability_reduction=CASUAL_CONVERSION_LIABILITY,
            difficulty=Difficulty.MEDIUM, time_to_effect="2-3 weeks",
            priority=Priority.HIGH, module=MODULE,
        ) if not conversion_ok else None,
    ))

    result = build_module_result(
        ModuleKey.LABOUR, audit_input, items,
        data_completeness=DATA_COMPLETENESS,
        prev_offset=2,
    )
    logger.debug("Labour scored %d (%s)", result.score, result.band)
    return result
