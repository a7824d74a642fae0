"""
Beverage module scorer.

Pour cost, dead stock and stocktake variance are cost-control metrics;
list turnover and revenue mix are commercial ones.  Bev Revenue Mix is
scored relative to the venue-type benchmark, not a fixed table: a bar is
expected to take far more of its revenue over the bar than a fast-casual
venue.
"""

from __future__ import annotations

import logging

from venue_audit.benchmarks.registry import get_benchmarks
from venue_audit.benchmarks.thresholds import (
    DEAD_STOCK_THRESHOLDS,
    POUR_COST_THRESHOLDS,
    score_from_thresholds,
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

MODULE = "Beverage"

DEFAULT_BEV_COST_PCT = 24.0
DEFAULT_DEAD_STOCK_PCT = 7.0
DEFAULT_STOCKTAKE_VARIANCE_PCT = 3.0
DEFAULT_LIST_REVIEW_DAYS = 120
DEFAULT_CORAVIN_YIELD_PCT = 85.0
DEFAULT_BEV_REVENUE_MIX_PCT = 28.0

DEAD_STOCK_TARGET_PCT = 5.0
STOCKTAKE_TARGET_PCT = 2.0
LIST_REVIEW_MAX_DAYS = 90
NO_CORAVIN_SCORE = 50

# Fixed proxy; beverage inputs are rarely all available.
DATA_COMPLETENESS = 0.85


def _stocktake_score(variance: float) -> int:
    if variance <= 1:
        return 100
    if variance <= 2:
        return 90
    if variance <= 5:
        return 65
    if variance <= 10:
        return 35
    return 10


def _list_turnover_score(days: float) -> int:
    if days < 30:
        return 100
    if days < 60:
        return 85
    if days < 90:
        return 70
    if days < 180:
        return 40
    return 15


def _bev_mix_score(mix: float, target: float) -> int:
    if mix >= target:
        return 90
    if mix >= target - 5:
        return 70
    if mix >= target - 10:
        return 50
    return 30


def score_beverage(audit_input: AuditInput) -> ModuleResult:
    """Score the Beverage module for one snapshot."""
    d = audit_input.beverage
    src = audit_input.source
    bench = get_benchmarks(audit_input.venue_type)
    items: list[SubScore] = []

    pour_cost, pour_src = metric(d.actual_bev_cost_pct, DEFAULT_BEV_COST_PCT, src)
    pour_target = bench.bev_cost_pct
    items.append(sub_score(
        "Pour Cost vs Target", 0.25,
        score_from_thresholds(pour_cost, POUR_COST_THRESHOLDS),
        f"{fmt_num(pour_cost)}%", f"≤ {fmt_num(pour_target)}%", pour_src,
        Recommendation(
            action=f"Reduce pour cost from {fmt_num(pour_cost)}% to {fmt_num(pour_target)}%",
            how="Portion control, speed rail optimisation, supplier review.",
            savings_monthly=300.0,
            difficulty=Difficulty.MEDIUM, time_to_effect="2-4 weeks",
            priority=Priority.MEDIUM, module=MODULE,
        ) if pour_cost > pour_target else None,
    ))

    dead_stock, dead_src = metric(d.dead_stock_pct, DEFAULT_DEAD_STOCK_PCT, src)
    items.append(sub_score(
        "Dead Stock", 0.20,
        score_from_thresholds(dead_stock, DEAD_STOCK_THRESHOLDS),
        f"{fmt_num(dead_stock)}%", f"< {fmt_num(DEAD_STOCK_TARGET_PCT)}%", dead_src,
        Recommendation(
            action=f"Reduce dead stock from {fmt_num(dead_stock)}% to under "
                   f"{fmt_num(DEAD_STOCK_TARGET_PCT)}%",
            how="Rotate slow wines into BTG or staff tastings. Review purchasing.",
            savings_monthly=200.0,
            difficulty=Difficulty.LOW, time_to_effect="2 weeks",
            priority=Priority.MEDIUM, module=MODULE,
        ) if dead_stock > DEAD_STOCK_TARGET_PCT else None,
    ))

    stock_var, var_src = metric(d.stocktake_variance_pct, DEFAULT_STOCKTAKE_VARIANCE_PCT, src)
    items.append(sub_score(
        "Stocktake Accuracy", 0.20,
        _stocktake_score(stock_var),
        f"{fmt_num(stock_var)}% variance", f"< {fmt_num(STOCKTAKE_TARGET_PCT)}%", var_src,
        Recommendation(
            action=f"Improve stocktake accuracy from {fmt_num(stock_var)}% to under "
                   f"{fmt_num(STOCKTAKE_TARGET_PCT)}%",
            how="Weekly partial counts, full monthly stocktake, blind counts.",
            savings_monthly=150.0,
            difficulty=Difficulty.LOW, time_to_effect="2 weeks",
            priority=Priority.LOW, module=MODULE,
        ) if stock_var > STOCKTAKE_TARGET_PCT else None,
    ))

    list_days, list_src = metric(d.list_review_days, DEFAULT_LIST_REVIEW_DAYS, src)
    items.append(sub_score(
        "List Turnover", 0.15,
        _list_turnover_score(list_days),
        f"{list_days} days since review", f"< {LIST_REVIEW_MAX_DAYS} days", list_src,
        Recommendation(
            action="Review and refresh wine/cocktail list",
            how="Quarterly review cycle. Remove low-sellers, add seasonal items.",
            savings_monthly=100.0,
            difficulty=Difficulty.LOW, time_to_effect="1-2 weeks",
            priority=Priority.LOW, module=MODULE,
        ) if list_days >= LIST_REVIEW_MAX_DAYS else None,
    ))

    # Informational only; no recommendation either way.
    if d.use_coravin:
        coravin_yield, coravin_src = metric(d.coravin_yield_pct, DEFAULT_CORAVIN_YIELD_PCT, src)
        coravin_score: float = coravin_yield
        coravin_value = f"{fmt_num(coravin_yield)}% yield"
    else:
        coravin_score = NO_CORAVIN_SCORE
        coravin_value = "Not using Coravin"
        coravin_src = DataSource.ESTIMATED if d.use_coravin is None else base_data_source(src)
    items.append(sub_score(
        "Coravin/BTG Yield", 0.10, coravin_score,
        coravin_value, "≥ 85% yield", coravin_src,
    ))

    bev_mix, mix_src = metric(d.bev_revenue_mix_pct, DEFAULT_BEV_REVENUE_MIX_PCT, src)
    mix_target = bench.bev_revenue_mix_pct
    items.append(sub_score(
        "Bev Revenue Mix", 0.10,
        _bev_mix_score(bev_mix, mix_target),
        f"{fmt_num(bev_mix)}%", f"{fmt_num(mix_target)}%", mix_src,
        Recommendation(
            action=f"Increase bev revenue from {fmt_num(bev_mix)}% to {fmt_num(mix_target)}%",
            how="Staff upselling training, food+bev pairing suggestions, BTG expansion.",
            savings_monthly=400.0,
            difficulty=Difficulty.MEDIUM, time_to_effect="4-8 weeks",
            priority=Priority.MEDIUM, module=MODULE,
        ) if bev_mix < mix_target else None,
    ))

    result = build_module_result(
        ModuleKey.BEVERAGE, audit_input, items,
        data_completeness=DATA_COMPLETENESS,
        prev_offset=-2,
    )
    logger.debug("Beverage scored %d (%s)", result.score, result.band)
    return result
