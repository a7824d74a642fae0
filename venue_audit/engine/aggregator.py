"""
Aggregator: runs the seven module scorers and combines their results.

Usage flow
----------
1. run_quiet_audit(audit_input)
   -> AuditResult  (overall score, seven ModuleResults, sorted recommendations)

2. build_recovery_summary(result)          (see ``engine.recovery``)
   -> RecoverySummary

The money totals are computed by ``annualised_savings()`` and
``total_liabilities()``, which the recovery post-processor reuses so the
two views of "found money" can never disagree.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from venue_audit.benchmarks.registry import score_band
from venue_audit.models.audit_input import AuditInput
from venue_audit.models.audit_result import AuditResult, ModuleResult, Recommendation
from venue_audit.scoring.beverage import score_beverage
from venue_audit.scoring.common import round_half_up
from venue_audit.scoring.compliance import (
    CRITICAL_CEILING,
    SIGNIFICANT_CEILING,
    score_compliance,
)
from venue_audit.scoring.food import score_food
from venue_audit.scoring.labour import score_labour
from venue_audit.scoring.marketing import score_marketing
from venue_audit.scoring.overhead import score_overhead
from venue_audit.scoring.service import score_service
from venue_audit.taxonomy.audit_taxonomy import (
    PRIORITY_ORDER,
    AuditSource,
    Confidence,
    ModuleKey,
)

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12
HIGH_COMPLETENESS = 0.7

CRITICAL_RED_LINE = "CRITICAL compliance violations detected"
SIGNIFICANT_RED_LINE = "Significant compliance issues detected"

# Fixed report order.
SCORERS: tuple[tuple[ModuleKey, Callable[[AuditInput], ModuleResult]], ...] = (
    (ModuleKey.FOOD,       score_food),
    (ModuleKey.BEVERAGE,   score_beverage),
    (ModuleKey.LABOUR,     score_labour),
    (ModuleKey.OVERHEAD,   score_overhead),
    (ModuleKey.SERVICE,    score_service),
    (ModuleKey.MARKETING,  score_marketing),
    (ModuleKey.COMPLIANCE, score_compliance),
)


def annualised_savings(recommendations: Sequence[Recommendation]) -> float:
    """12 × the sum of positive monthly savings, rounded to cents.

    Negative ``savings_monthly`` values are proposed investments, not
    savings, and are excluded.
    """
    monthly = sum(max(0.0, r.savings_monthly) for r in recommendations)
    return round(monthly * MONTHS_PER_YEAR, 2)


def total_liabilities(recommendations: Sequence[Recommendation]) -> float:
    """Sum of one-off liability reductions (absent counts as zero)."""
    return round(sum(r.liability_reduction or 0.0 for r in recommendations), 2)


def sort_by_priority(recommendations: Sequence[Recommendation]) -> list[Recommendation]:
    """Stable sort HIGH < MEDIUM < LOW; ties keep module/sub-score order."""
    return sorted(recommendations, key=lambda r: PRIORITY_ORDER[r.priority])


def overall_score(modules: Sequence[ModuleResult]) -> int:
    """Module scores weighted by module weight, rounded half-up."""
    total_weight = sum(m.weight for m in modules)
    if total_weight <= 0:
        return 0
    return round_half_up(sum(m.score * m.weight for m in modules) / total_weight)


def audit_confidence(source: AuditSource, completeness: float) -> Confidence:
    """HIGH for internal data; otherwise MEDIUM above 70% completeness, else LOW."""
    if source is AuditSource.INTERNAL:
        return Confidence.HIGH
    if completeness > HIGH_COMPLETENESS:
        return Confidence.MEDIUM
    return Confidence.LOW


def compliance_flags(compliance_score: int) -> list[str]:
    """Headline red-line flag for the Compliance module score, if any."""
    if compliance_score <= CRITICAL_CEILING:
        return [CRITICAL_RED_LINE]
    if compliance_score <= SIGNIFICANT_CEILING:
        return [SIGNIFICANT_RED_LINE]
    return []


def run_quiet_audit(audit_input: AuditInput) -> AuditResult:
    """Run the full seven-module audit for one venue snapshot.

    Never raises for a valid ``AuditInput``: every missing metric falls
    back to its scorer's default, so ``run_quiet_audit(AuditInput())``
    produces a complete (estimated) result.

    Args:
        audit_input: Venue snapshot.

    Returns:
        Frozen ``AuditResult``.
    """
    modules = [scorer(audit_input) for _, scorer in SCORERS]

    recommendations = sort_by_priority(
        [rec for m in modules for rec in m.recommendations]
    )
    completeness = sum(m.data_completeness for m in modules) / len(modules)
    overall = overall_score(modules)
    compliance = next(m for m in modules if m.module == ModuleKey.COMPLIANCE)

    result = AuditResult(
        overall_score=overall,
        overall_band=score_band(overall),
        modules=modules,
        recommendations=recommendations,
        total_annual_savings=annualised_savings(recommendations),
        total_liabilities=total_liabilities(recommendations),
        data_completeness=completeness,
        confidence=audit_confidence(audit_input.source, completeness),
        compliance_red_lines=compliance_flags(compliance.score),
    )

    logger.info(
        "Audit complete: venue_type=%s overall=%d (%s) recs=%d savings=%.2f liabilities=%.2f",
        audit_input.venue_type,
        result.overall_score,
        result.overall_band,
        len(result.recommendations),
        result.total_annual_savings,
        result.total_liabilities,
        extra={
            "venue_type": audit_input.venue_type,
            "overall_score": result.overall_score,
            "overall_band": result.overall_band.value,
            "confidence": result.confidence.value,
            "recommendation_count": len(result.recommendations),
            "annual_savings": result.total_annual_savings,
            "liabilities": result.total_liabilities,
        },
    )
    return result

