"""
Threshold tables and the shared piecewise lookup.

A ``ThresholdTable`` is a tuple of ``ThresholdEntry(upper_bound, score)``
sorted ascending by bound and terminated by a ``math.inf`` sentinel.
``score_from_thresholds()`` is a first-match scan: the score of the first
entry whose bound is >= the value wins.  There is no interpolation between
adjacent bands.

All tables below are "higher is worse" metrics (cost %, variance %, rate),
so their scores are non-increasing down the table: a larger input can never
score higher than a smaller one.

``score_net_profit()`` is the single "higher is better" step function and is
kept separate rather than expressed as a reversed table.

Every table is checked by ``validate_threshold_table()`` at import time.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ThresholdEntry:
    """One band: values <= ``upper_bound`` score ``score``."""

    upper_bound: float
    score: int


ThresholdTable = tuple[ThresholdEntry, ...]


def _table(*pairs: tuple[float, int]) -> ThresholdTable:
    return tuple(ThresholdEntry(bound, score) for bound, score in pairs)


# |actual − theoretical| food cost %, six bands.
FOOD_AVT_THRESHOLDS: ThresholdTable = _table(
    (1.0, 100), (2.0, 85), (3.0, 70), (4.0, 50), (6.0, 30), (math.inf, 10),
)

# Food waste as % of food purchases.
WASTE_THRESHOLDS: ThresholdTable = _table(
    (2.0, 100), (3.0, 85), (4.0, 70), (5.0, 55), (7.0, 35), (math.inf, 15),
)

# Beverage cost as % of beverage revenue.
POUR_COST_THRESHOLDS: ThresholdTable = _table(
    (18.0, 100), (20.0, 90), (22.0, 80), (24.0, 70), (26.0, 55), (28.0, 40), (math.inf, 20),
)

# Stock not moved within the review window, % of inventory value.
DEAD_STOCK_THRESHOLDS: ThresholdTable = _table(
    (3.0, 100), (5.0, 85), (8.0, 65), (12.0, 40), (math.inf, 15),
)

# Voided items as % of items ordered.
VOID_RATE_THRESHOLDS: ThresholdTable = _table(
    (1.0, 100), (2.0, 85), (3.0, 65), (5.0, 40), (math.inf, 15),
)

# Discounts as % of gross sales.
DISCOUNT_THRESHOLDS: ThresholdTable = _table(
    (2.0, 100), (3.0, 85), (5.0, 65), (8.0, 40), (math.inf, 15),
)

# Till over/under as % of cash takings.
CASH_VARIANCE_THRESHOLDS: ThresholdTable = _table(
    (0.25, 100), (0.5, 90), (1.0, 70), (2.0, 45), (3.0, 25), (math.inf, 10),
)

# Rent + outgoings as % of revenue.
RENT_THRESHOLDS: ThresholdTable = _table(
    (6.0, 100), (8.0, 90), (10.0, 75), (12.0, 55), (15.0, 35), (math.inf, 15),
)

# Food + labour as % of revenue, six bands.
PRIME_COST_THRESHOLDS: ThresholdTable = _table(
    (55.0, 100), (60.0, 90), (65.0, 75), (68.0, 55), (72.0, 35), (math.inf, 15),
)

ALL_THRESHOLD_TABLES: dict[str, ThresholdTable] = {
    "food_avt":      FOOD_AVT_THRESHOLDS,
    "waste":         WASTE_THRESHOLDS,
    "pour_cost":     POUR_COST_THRESHOLDS,
    "dead_stock":    DEAD_STOCK_THRESHOLDS,
    "void_rate":     VOID_RATE_THRESHOLDS,
    "discount":      DISCOUNT_THRESHOLDS,
    "cash_variance": CASH_VARIANCE_THRESHOLDS,
    "rent":          RENT_THRESHOLDS,
    "prime_cost":    PRIME_COST_THRESHOLDS,
}

# (lower bound, score) for net profit %, checked top-down.
_NET_PROFIT_STEPS: tuple[tuple[float, int], ...] = (
    (15.0, 100),
    (10.0, 85),
    (7.0,  70),
    (5.0,  55),
    (2.0,  35),
    (0.0,  20),
)
_NET_PROFIT_LOSS_SCORE = 5


def score_from_thresholds(value: float, table: ThresholdTable) -> int:
    """Return the score of the first entry whose bound is >= ``value``.

    Falls back to the last entry's score if nothing matches (only reachable
    for a table missing its ``inf`` sentinel, or for ``NaN``).  An empty
    table scores 0.

    Args:
        value: Metric value in the table's unit.
        table: Ascending ``ThresholdTable``.

    Returns:
        Integer score 0–100.
    """
    if not table:
        return 0
    for entry in table:
        if value <= entry.upper_bound:
            return entry.score
    return table[-1].score


def score_net_profit(pct: float) -> int:
    """Score net profit %, the one metric where more is better.

    >=15 → 100, >=10 → 85, >=7 → 70, >=5 → 55, >=2 → 35, >=0 → 20,
    loss-making → 5.
    """
    for lower, score in _NET_PROFIT_STEPS:
        if pct >= lower:
            return score
    return _NET_PROFIT_LOSS_SCORE


def validate_threshold_table(name: str, table: ThresholdTable) -> None:
    """Raise ``ValueError`` unless ``table`` is well-formed.

    Well-formed: non-empty, bounds non-decreasing, last bound ``inf``,
    scores within [0, 100].
    """
    if not table:
        raise ValueError(f"Threshold table '{name}' is empty.")
    bounds = [e.upper_bound for e in table]
    if any(b2 < b1 for b1, b2 in zip(bounds, bounds[1:])):
        raise ValueError(f"Threshold table '{name}' bounds are not ascending: {bounds}.")
    if not math.isinf(bounds[-1]):
        raise ValueError(f"Threshold table '{name}' must end with an inf sentinel.")
    for e in table:
        if not 0 <= e.score <= 100:
            raise ValueError(f"Threshold table '{name}' has out-of-range score {e.score}.")


for _name, _tbl in ALL_THRESHOLD_TABLES.items():
    validate_threshold_table(_name, _tbl)
