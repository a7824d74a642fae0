"""
Food module scorer.

Sub-scores (weight)
-------------------
AvT Variance (0.25):
    |actual − theoretical| food cost %, scored by ``FOOD_AVT_THRESHOLDS``.
    Recommendation when the gap exceeds 2 points; saving = food revenue ×
    (gap − 2) / 100.

Food Cost % vs Benchmark (0.20):
    Deviation from the venue-type target:
    ≤−2 → 100, ≤0 → 90, ≤2 → 70, ≤4 → 50, ≤6 → 30, else 10.
    Recommendation whenever above target; HIGH priority once more than
    3 points over.

Food Waste (0.20):
    Waste % of purchases via ``WASTE_THRESHOLDS`` against a fixed 3% target
    for every venue type.

Menu Engineering (0.15):
    Stars % + Plowhorses % combined: ≥80 → 100, ≥65 → 80, ≥50 → 60,
    ≥35 → 40, else 20.  Saving sized at 150/month per Dog removed.

Supplier Monitoring (0.10):
    3+ suppliers with price comparison → 80, 3+ without → 60, fewer → 40.

Prep Accuracy (0.10):
    Prep-list completion rate; a flat 30 when prep lists are not used at
    all, whatever the completion rate says.

Data completeness is the literal share of sub-scores whose driving fields
were supplied.
"""

from __future__ import annotations

import logging

from venue_audit.benchmarks.registry import get_benchmarks
from venue_audit.benchmarks.thresholds import (
    FOOD_AVT_THRESHOLDS,
    WASTE_THRESHOLDS,
    score_from_thresholds,
)
from venue_audit.models.audit_input import AuditInput
from venue_audit.models.audit_result import ModuleResult, Recommendation, SubScore
from venue_audit.scoring.common import (
    base_data_source,
    build_module_result,
    combined_source,
    estimated_share,
    fmt_num,
    metric,
    sub_score,
)
from venue_audit.taxonomy.audit_taxonomy import DataSource, Difficulty, ModuleKey, Priority

logger = logging.getLogger(__name__)

MODULE = "Food"

DEFAULT_AVT_GAP = 3.0
DEFAULT_FOOD_COST_PCT = 31.0
DEFAULT_WASTE_PCT = 4.8
WASTE_TARGET_PCT = 3.0
DEFAULT_MENU_STARS_PCT = 40.0
DEFAULT_MENU_PLOWHORSE_PCT = 25.0
DEFAULT_MENU_DOGS_COUNT = 4
DEFAULT_MENU_PUZZLES_COUNT = 3
DEFAULT_SUPPLIER_COUNT = 3
DEFAULT_PREP_COMPLETION_RATE = 85.0
DEFAULT_MONTHLY_FOOD_REVENUE = 40_000.0
DEFAULT_MONTHLY_FOOD_PURCHASES = 12_000.0

AVT_TARGET_GAP = 2.0
MENU_TARGET_PCT = 65.0
MIN_SUPPLIERS = 3
PREP_TARGET_RATE = 85.0
NO_PREP_LISTS_SCORE = 30
SAVING_PER_DOG = 150.0
SUPPLIER_COMPARE_SAVING = 200.0
PREP_LIST_SAVING = 150.0


def _food_cost_score(deviation: float) -> int:
    if deviation <= -2:
        return 100
    if deviation <= 0:
        return 90
    if deviation <= 2:
        return 70
    if deviation <= 4:
        return 50
    if deviation <= 6:
        return 30
    return 10


def _menu_score(stars_plows: float) -> int:
    if stars_plows >= 80:
        return 100
    if stars_plows >= 65:
        return 80
    if stars_plows >= 50:
        return 60
    if stars_plows >= 35:
        return 40
    return 20


def score_food(audit_input: AuditInput) -> ModuleResult:
    """Score the Food module for one snapshot."""
    d = audit_input.food
    src = audit_input.source
    bench = get_benchmarks(audit_input.venue_type)
    food_revenue = d.monthly_food_revenue if d.monthly_food_revenue is not None else DEFAULT_MONTHLY_FOOD_REVENUE
    purchases = (
        d.monthly_food_purchases if d.monthly_food_purchases is not None else DEFAULT_MONTHLY_FOOD_PURCHASES
    )
    items: list[SubScore] = []

    # 1. AvT variance
    if d.actual_food_cost_pct is not None and d.theoretical_food_cost_pct is not None:
        avt_gap = abs(d.actual_food_cost_pct - d.theoretical_food_cost_pct)
        avt_src = base_data_source(src)
    else:
        avt_gap, avt_src = DEFAULT_AVT_GAP, DataSource.ESTIMATED
    items.append(sub_score(
        "AvT Variance", 0.25,
        score_from_thresholds(avt_gap, FOOD_AVT_THRESHOLDS),
        f"{avt_gap:.1f}% gap", f"< {fmt_num(AVT_TARGET_GAP)}%", avt_src,
        Recommendation(
            action=f"Reduce AvT gap from {avt_gap:.1f}% to under {fmt_num(AVT_TARGET_GAP)}%",
            how="Implement portion control on top 10 dishes. "
                "Cross-check supplier invoices against recipe costs.",
            savings_monthly=food_revenue * (avt_gap - AVT_TARGET_GAP) / 100,
            difficulty=Difficulty.MEDIUM, time_to_effect="2-4 weeks",
            priority=Priority.HIGH, module=MODULE,
        ) if avt_gap > AVT_TARGET_GAP else None,
    ))

    # 2. Food cost % vs venue benchmark
    fc_pct, fc_src = metric(d.actual_food_cost_pct, DEFAULT_FOOD_COST_PCT, src)
    deviation = fc_pct - bench.food_cost_pct
    items.append(sub_score(
        "Food Cost % vs Benchmark", 0.20,
        _food_cost_score(deviation),
        f"{fc_pct:.1f}%", f"≤ {fmt_num(bench.food_cost_pct)}%", fc_src,
        Recommendation(
            action=f"Reduce food cost from {fc_pct:.1f}% to {fmt_num(bench.food_cost_pct)}%",
            how="Menu rationalisation, supplier consolidation, portion control.",
            savings_monthly=food_revenue * deviation / 100,
            difficulty=Difficulty.MEDIUM, time_to_effect="4-8 weeks",
            priority=Priority.HIGH if deviation > 3 else Priority.MEDIUM, module=MODULE,
        ) if deviation > 0 else None,
    ))

    # 3. Waste
    waste, waste_src = metric(d.waste_pct, DEFAULT_WASTE_PCT, src)
    waste_target = WASTE_TARGET_PCT
    items.append(sub_score(
        "Food Waste", 0.20,
        score_from_thresholds(waste, WASTE_THRESHOLDS),
        f"{waste:.1f}%", f"≤ {fmt_num(waste_target)}%", waste_src,
        Recommendation(
            action=f"Reduce waste from {waste:.1f}% to under {fmt_num(waste_target)}%",
            how="Daily waste logging. Adjust prep volumes. Cross-utilise trim.",
            savings_monthly=purchases * (waste - waste_target) / 100,
            difficulty=Difficulty.LOW, time_to_effect="1-2 weeks",
            priority=Priority.MEDIUM, module=MODULE,
        ) if waste > waste_target else None,
    ))

    # 4. Menu engineering
    stars, stars_src = metric(d.menu_stars_pct, DEFAULT_MENU_STARS_PCT, src)
    plows, plows_src = metric(d.menu_plowhorse_pct, DEFAULT_MENU_PLOWHORSE_PCT, src)
    dogs = d.menu_dogs_count if d.menu_dogs_count is not None else DEFAULT_MENU_DOGS_COUNT
    puzzles = d.menu_puzzles_count if d.menu_puzzles_count is not None else DEFAULT_MENU_PUZZLES_COUNT
    stars_plows = stars + plows
    items.append(sub_score(
        "Menu Engineering", 0.15,
        _menu_score(stars_plows),
        f"{fmt_num(stars_plows)}% Stars+Plowhorses", f"≥ {fmt_num(MENU_TARGET_PCT)}%",
        combined_source(stars_src, plows_src),
        Recommendation(
            action="Rationalise menu: remove Dogs, reprice Puzzles",
            how=f"Remove {dogs} Dogs. Reposition {puzzles} Puzzles.",
            savings_monthly=dogs * SAVING_PER_DOG,
            difficulty=Difficulty.MEDIUM, time_to_effect="2-4 weeks",
            priority=Priority.MEDIUM, module=MODULE,
        ) if stars_plows < MENU_TARGET_PCT else None,
    ))

    # 5. Supplier monitoring
    suppliers, supp_src = metric(d.supplier_count, DEFAULT_SUPPLIER_COUNT, src)
    compares = d.supplier_price_compare is not False
    if suppliers >= MIN_SUPPLIERS and compares:
        supp_score = 80
    elif suppliers >= MIN_SUPPLIERS:
        supp_score = 60
    else:
        supp_score = 40
    if d.supplier_price_compare is None:
        supp_src = DataSource.ESTIMATED
    items.append(sub_score(
        "Supplier Monitoring", 0.10, supp_score,
        f"{suppliers} suppliers", f"{MIN_SUPPLIERS}+ with price comparison", supp_src,
        Recommendation(
            action="Implement regular supplier price comparison",
            how="Compare top 10 ingredients across 3+ suppliers monthly.",
            savings_monthly=SUPPLIER_COMPARE_SAVING,
            difficulty=Difficulty.LOW, time_to_effect="1-2 weeks",
            priority=Priority.LOW, module=MODULE,
        ) if supp_score < 75 else None,
    ))

    # 6. Prep accuracy
    if d.use_prep_lists is False:
        prep_score: float = NO_PREP_LISTS_SCORE
        prep_value = "No prep lists"
        prep_src = base_data_source(src)
    else:
        rate, prep_src = metric(d.prep_completion_rate, DEFAULT_PREP_COMPLETION_RATE, src)
        prep_score = rate
        prep_value = f"{fmt_num(rate)}% completion"
    items.append(sub_score(
        "Prep Accuracy", 0.10, prep_score,
        prep_value, "≥ 95% completion", prep_src,
        Recommendation(
            action="Implement daily prep lists with completion tracking",
            how="Run prep lists from the kitchen system. Track completion rate daily.",
            savings_monthly=PREP_LIST_SAVING,
            difficulty=Difficulty.LOW, time_to_effect="1 week",
            priority=Priority.LOW, module=MODULE,
        ) if prep_score < PREP_TARGET_RATE else None,
    ))

    result = build_module_result(
        ModuleKey.FOOD, audit_input, items,
        data_completeness=estimated_share(items),
        prev_offset=-3,
    )
    logger.debug("Food scored %d (%s)", result.score, result.band)
    return result
