"""
Per-venue-type benchmark registry.

Usage
-----
    from venue_audit.benchmarks.registry import get_benchmark, score_band

    target = get_benchmark("fast_casual", "food_cost_pct")   # 25.0
    band   = score_band(82)                                    # ScoreBand.GOOD

Lookups never fail on the venue type: an unknown or empty string resolves
to the ``casual_dining`` set.  An unknown *metric* name is a programming
error and raises ``KeyError``.

Targets are Australian hospitality figures: cost targets sit at the low
(best-practice) end of each venue type's observed range, net profit at the
typical level.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass

from venue_audit.taxonomy.audit_taxonomy import ModuleKey, ScoreBand, VenueType

logger = logging.getLogger(__name__)

FALLBACK_VENUE_TYPE = VenueType.CASUAL_DINING


@dataclass(frozen=True)
class VenueBenchmarks:
    """Twelve numeric targets for one venue type.

    Attributes:
        food_cost_pct:       Food COGS as % of food revenue (ceiling).
        bev_cost_pct:        Beverage COGS as % of beverage revenue (ceiling).
        labour_pct:          Labour inc. super as % of revenue (ceiling).
        prime_cost_pct:      Food + labour as % of revenue (ceiling).
        rent_pct:            Rent + outgoings as % of revenue (ceiling).
        overhead_pct:        All non-COGS, non-labour costs % (ceiling).
        net_profit_pct:      Bottom line % (floor).
        waste_pct:           Food waste % of purchases (ceiling).
        bev_revenue_mix_pct: Beverage share of total revenue (floor).
        avg_service_minutes: Order-to-table minutes (ceiling).
        covers_per_staff:    Daily covers per rostered staff member (floor).
        discount_pct:        Discounts as % of gross sales (ceiling).
    """

    food_cost_pct: float
    bev_cost_pct: float
    labour_pct: float
    prime_cost_pct: float
    rent_pct: float
    overhead_pct: float
    net_profit_pct: float
    waste_pct: float
    bev_revenue_mix_pct: float
    avg_service_minutes: float
    covers_per_staff: float
    discount_pct: float


BENCHMARKS: dict[VenueType, VenueBenchmarks] = {
    VenueType.FINE_DINING: VenueBenchmarks(
        food_cost_pct=30.0, bev_cost_pct=22.0, labour_pct=32.0, prime_cost_pct=68.0,
        rent_pct=11.0, overhead_pct=25.0, net_profit_pct=8.0, waste_pct=3.0,
        bev_revenue_mix_pct=35.0, avg_service_minutes=25.0, covers_per_staff=8.0,
        discount_pct=2.0,
    ),
    VenueType.CASUAL_DINING: VenueBenchmarks(
        food_cost_pct=28.0, bev_cost_pct=20.0, labour_pct=28.0, prime_cost_pct=62.0,
        rent_pct=9.0, overhead_pct=22.0, net_profit_pct=10.0, waste_pct=3.0,
        bev_revenue_mix_pct=30.0, avg_service_minutes=15.0, covers_per_staff=12.0,
        discount_pct=3.0,
    ),
    VenueType.CAFE: VenueBenchmarks(
        food_cost_pct=26.0, bev_cost_pct=18.0, labour_pct=30.0, prime_cost_pct=64.0,
        rent_pct=10.0, overhead_pct=22.0, net_profit_pct=8.0, waste_pct=4.0,
        bev_revenue_mix_pct=35.0, avg_service_minutes=8.0, covers_per_staff=15.0,
        discount_pct=3.0,
    ),
    VenueType.BAR_PUB: VenueBenchmarks(
        food_cost_pct=25.0, bev_cost_pct=20.0, labour_pct=25.0, prime_cost_pct=60.0,
        rent_pct=10.0, overhead_pct=22.0, net_profit_pct=12.0, waste_pct=2.5,
        bev_revenue_mix_pct=60.0, avg_service_minutes=10.0, covers_per_staff=18.0,
        discount_pct=3.0,
    ),
    VenueType.FAST_CASUAL: VenueBenchmarks(
        food_cost_pct=25.0, bev_cost_pct=15.0, labour_pct=22.0, prime_cost_pct=55.0,
        rent_pct=10.0, overhead_pct=20.0, net_profit_pct=15.0, waste_pct=2.5,
        bev_revenue_mix_pct=20.0, avg_service_minutes=6.0, covers_per_staff=20.0,
        discount_pct=2.0,
    ),
}

# Share of the overall score per module; sums to 1.0.
MODULE_WEIGHTS: dict[ModuleKey, float] = {
    ModuleKey.FOOD:       0.15,
    ModuleKey.BEVERAGE:   0.10,
    ModuleKey.LABOUR:     0.20,
    ModuleKey.OVERHEAD:   0.20,
    ModuleKey.SERVICE:    0.15,
    ModuleKey.MARKETING:  0.10,
    ModuleKey.COMPLIANCE: 0.10,
}

# (lower bound, band), checked top-down.
_BAND_CUTOFFS: tuple[tuple[int, ScoreBand], ...] = (
    (90, ScoreBand.EXCELLENT),
    (75, ScoreBand.GOOD),
    (60, ScoreBand.FAIR),
    (40, ScoreBand.POOR),
)

BENCHMARK_METRICS: frozenset[str] = frozenset(VenueBenchmarks.__dataclass_fields__)


def resolve_venue_type(venue_type: str | VenueType | None) -> VenueType:
    """Map any string to a known ``VenueType``; unknown → ``casual_dining``."""
    try:
        return VenueType(str(venue_type).strip().lower())
    except ValueError:
        logger.debug(
            "Unknown venue type %r; using %s benchmarks.", venue_type, FALLBACK_VENUE_TYPE
        )
        return FALLBACK_VENUE_TYPE


def get_benchmarks(venue_type: str | VenueType | None) -> VenueBenchmarks:
    """Return the benchmark set for ``venue_type``.  Never raises."""
    return BENCHMARKS[resolve_venue_type(venue_type)]


def get_benchmark(venue_type: str | VenueType | None, metric: str) -> float:
    """Return one benchmark target.

    Raises:
        KeyError: If ``metric`` is not one of the twelve benchmark fields.
    """
    if metric not in BENCHMARK_METRICS:
        raise KeyError(f"Unknown benchmark metric '{metric}'. Valid: {sorted(BENCHMARK_METRICS)}")
    return getattr(get_benchmarks(venue_type), metric)


def benchmarks_as_dict(venue_type: str | VenueType | None) -> dict[str, float]:
    """Benchmark set as a plain dict (for reports and exports)."""
    return asdict(get_benchmarks(venue_type))


def score_band(score: float) -> ScoreBand:
    """excellent ≥90, good ≥75, fair ≥60, poor ≥40, critical <40."""
    for lower, band in _BAND_CUTOFFS:
        if score >= lower:
            return band
    return ScoreBand.CRITICAL
