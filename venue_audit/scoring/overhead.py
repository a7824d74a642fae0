"""
Overhead module scorer.

P&L-level ratios: total overhead, rent, prime cost, net profit and the
day of the month on which the venue breaks even.  Savings here are sized
from monthly revenue, so this module tends to dominate the found-money
total for larger venues.

Data completeness is the caller-reported share of the P&L that was
available (``pnl_data_complete_pct`` / 100).
"""

from __future__ import annotations

import logging

from venue_audit.benchmarks.registry import get_benchmarks
from venue_audit.benchmarks.thresholds import (
    PRIME_COST_THRESHOLDS,
    RENT_THRESHOLDS,
    score_from_thresholds,
    score_net_profit,
)
from venue_audit.models.audit_input import AuditInput
from venue_audit.models.audit_result import ModuleResult, Recommendation, SubScore
from venue_audit.scoring.common import (
    base_data_source,
    build_module_result,
    fmt_num,
    metric,
    sub_score,
)
from venue_audit.taxonomy.audit_taxonomy import DataSource, Difficulty, ModuleKey, Priority

logger = logging.getLogger(__name__)

MODULE = "Overhead"

DEFAULT_OVERHEAD_PCT = 22.0
DEFAULT_RENT_PCT = 11.0
DEFAULT_PRIME_COST_PCT = 66.0
DEFAULT_NET_PROFIT_PCT = 8.0
DEFAULT_BREAK_EVEN_DAY = 18
DEFAULT_PNL_COMPLETE_PCT = 75.0
DEFAULT_MONTHLY_REVENUE = 80_000.0
DEFAULT_MONTHLY_RENT = 8_000.0

OVERHEAD_TARGET_PCT = 22.0
RENT_TARGET_PCT = 10.0
RENT_HIGH_PRIORITY_PCT = 12.0
PRIME_COST_TARGET_PCT = 65.0
PNL_COMPLETE_TARGET_PCT = 90.0
# Share of monthly rent a renegotiation is assumed to recover.
RENT_RENEGOTIATION_SHARE = 0.10
NO_BREAK_EVEN_SCORE = 70


def _overhead_score(pct: float) -> int:
    if pct <= 18:
        return 100
    if pct <= 22:
        return 80
    if pct <= 26:
        return 60
    if pct <= 30:
        return 40
    return 20


def _break_even_score(day: int) -> int:
    if day <= 15:
        return 90
    if day <= 20:
        return 70
    if day <= 25:
        return 45
    return 20


def score_overhead(audit_input: AuditInput) -> ModuleResult:
    """Score the Overhead module for one snapshot."""
    d = audit_input.overhead
    src = audit_input.source
    bench = get_benchmarks(audit_input.venue_type)
    revenue = d.monthly_revenue if d.monthly_revenue is not None else DEFAULT_MONTHLY_REVENUE
    rent_dollars = d.monthly_rent if d.monthly_rent is not None else DEFAULT_MONTHLY_RENT
    items: list[SubScore] = []

    # 1. Total overhead %
    overhead_pct, overhead_src = metric(d.total_overhead_pct, DEFAULT_OVERHEAD_PCT, src)
    items.append(sub_score(
        "Total Overhead %", 0.15,
        _overhead_score(overhead_pct),
        f"{fmt_num(overhead_pct)}%", f"≤ {fmt_num(OVERHEAD_TARGET_PCT)}%", overhead_src,
        Recommendation(
            action=f"Reduce overheads from {fmt_num(overhead_pct)}% to "
                   f"{fmt_num(OVERHEAD_TARGET_PCT)}%",
            how="Audit utilities, insurance, subscriptions and repairs contracts. "
                "Re-tender the largest three.",
            savings_monthly=revenue * (overhead_pct - OVERHEAD_TARGET_PCT) / 100,
            difficulty=Difficulty.MEDIUM, time_to_effect="4-8 weeks",
            priority=Priority.MEDIUM, module=MODULE,
        ) if overhead_pct > OVERHEAD_TARGET_PCT else None,
    ))

    # 2. Rent
    rent_pct, rent_src = metric(d.rent_pct, DEFAULT_RENT_PCT, src)
    items.append(sub_score(
        "Rent % of Revenue", 0.20,
        score_from_thresholds(rent_pct, RENT_THRESHOLDS),
        f"{fmt_num(rent_pct)}%", f"≤ {fmt_num(RENT_TARGET_PCT)}%", rent_src,
        Recommendation(
            action=f"Rent at {fmt_num(rent_pct)}%: structural challenge",
            how="Negotiate rent review at next option. Grow revenue through "
                "quiet-night activation to dilute the fixed cost.",
            savings_monthly=rent_dollars * RENT_RENEGOTIATION_SHARE,
            difficulty=Difficulty.HIGH, time_to_effect="3-6 months",
            priority=Priority.HIGH if rent_pct > RENT_HIGH_PRIORITY_PCT else Priority.MEDIUM,
            module=MODULE,
        ) if rent_pct > RENT_TARGET_PCT else None,
    ))

    # 3. Prime cost
    prime_pct, prime_src = metric(d.prime_cost_pct, DEFAULT_PRIME_COST_PCT, src)
    items.append(sub_score(
        "Prime Cost %", 0.20,
        score_from_thresholds(prime_pct, PRIME_COST_THRESHOLDS),
        f"{fmt_num(prime_pct)}%", f"≤ {fmt_num(PRIME_COST_TARGET_PCT)}%", prime_src,
        Recommendation(
            action=f"Reduce prime cost from {fmt_num(prime_pct)}% to "
                   f"{fmt_num(PRIME_COST_TARGET_PCT)}%",
            how="Combined food and labour levers: menu engineering plus roster optimisation.",
            savings_monthly=revenue * (prime_pct - PRIME_COST_TARGET_PCT) / 100,
            difficulty=Difficulty.HIGH, time_to_effect="4-12 weeks",
            priority=Priority.HIGH, module=MODULE,
        ) if prime_pct > PRIME_COST_TARGET_PCT else None,
    ))

    # 4. Net profit vs venue benchmark
    net_pct, net_src = metric(d.net_profit_pct, DEFAULT_NET_PROFIT_PCT, src)
    net_target = bench.net_profit_pct
    items.append(sub_score(
        "Net Profit %", 0.20,
        score_net_profit(net_pct),
        f"{fmt_num(net_pct)}%", f"≥ {fmt_num(net_target)}%", net_src,
        Recommendation(
            action=f"Lift net profit from {fmt_num(net_pct)}% to {fmt_num(net_target)}%",
            how="Work the cost recommendations above in priority order. "
                "Review pricing on the top 20 sellers.",
            savings_monthly=revenue * (net_target - net_pct) / 100,
            difficulty=Difficulty.HIGH, time_to_effect="8-16 weeks",
            priority=Priority.HIGH, module=MODULE,
        ) if net_pct < net_target else None,
    ))

    # 5. Break-even day (informational)
    if d.break_even_day_of_month:
        day = d.break_even_day_of_month
        be_score = _break_even_score(day)
        be_value = f"Day {day}"
        if d.prev_break_even_day:
            be_value += f" (was day {d.prev_break_even_day})"
        be_src = base_data_source(src)
    else:
        be_score = NO_BREAK_EVEN_SCORE
        be_value = f"Day ~{DEFAULT_BREAK_EVEN_DAY}"
        be_src = DataSource.ESTIMATED
    items.append(sub_score(
        "Break-Even Trend", 0.15, be_score,
        be_value, "≤ Day 15", be_src,
    ))

    # 6. P&L data completeness
    pnl_pct, pnl_src = metric(d.pnl_data_complete_pct, DEFAULT_PNL_COMPLETE_PCT, src)
    items.append(sub_score(
        "Data Completeness", 0.10, pnl_pct,
        f"{fmt_num(pnl_pct)}%", f"≥ {fmt_num(PNL_COMPLETE_TARGET_PCT)}%", pnl_src,
        Recommendation(
            action="Complete P&L reporting",
            how="Close the books monthly with all cost lines coded. "
                "Reconcile supplier statements before month end.",
            savings_monthly=0.0,
            difficulty=Difficulty.LOW, time_to_effect="1-2 weeks",
            priority=Priority.LOW, module=MODULE,
        ) if pnl_pct < PNL_COMPLETE_TARGET_PCT else None,
    ))

    result = build_module_result(
        ModuleKey.OVERHEAD, audit_input, items,
        data_completeness=pnl_pct / 100,
        prev_offset=0,
    )
    logger.debug("Overhead scored %d (%s)", result.score, result.band)
    return result
