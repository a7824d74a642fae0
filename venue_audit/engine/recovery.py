"""
Recovery post-processor: buckets an audit's recommendations by horizon.

Buckets
-------
immediate    HIGH priority that is not HIGH difficulty (quick wins)
short_term   HIGH priority and HIGH difficulty, plus every MEDIUM
medium_term  every LOW

The three buckets partition ``AuditResult.recommendations``: each
recommendation lands in exactly one, in its original (priority-sorted)
order.
"""

from __future__ import annotations

import logging

from venue_audit.engine.aggregator import annualised_savings, total_liabilities
from venue_audit.models.audit_result import AuditResult, Recommendation, RecoverySummary
from venue_audit.taxonomy.audit_taxonomy import Difficulty, Priority

logger = logging.getLogger(__name__)


def recovery_bucket(rec: Recommendation) -> str:
    """Return ``"immediate"``, ``"short_term"`` or ``"medium_term"`` for ``rec``."""
    if rec.priority is Priority.HIGH:
        return "short_term" if rec.difficulty is Difficulty.HIGH else "immediate"
    if rec.priority is Priority.MEDIUM:
        return "short_term"
    return "medium_term"


def build_recovery_summary(result: AuditResult) -> RecoverySummary:
    """Build the executive recovery view of ``result``.

    ``found_money`` is annualised positive savings plus one-off liabilities,
    computed with the same helpers as the aggregator so it always equals
    ``result.total_annual_savings + result.total_liabilities``.
    """
    buckets: dict[str, list[Recommendation]] = {
        "immediate": [],
        "short_term": [],
        "medium_term": [],
    }
    for rec in result.recommendations:
        buckets[recovery_bucket(rec)].append(rec)

    savings = annualised_savings(result.recommendations)
    liabilities = total_liabilities(result.recommendations)

    summary = RecoverySummary(
        total_annual_savings=savings,
        total_liabilities=liabilities,
        immediate_actions=buckets["immediate"],
        short_term_actions=buckets["short_term"],
        medium_term_actions=buckets["medium_term"],
        found_money=round(savings + liabilities, 2),
    )
    logger.debug(
        "Recovery buckets: immediate=%d short_term=%d medium_term=%d found_money=%.2f",
        len(summary.immediate_actions),
        len(summary.short_term_actions),
        len(summary.medium_term_actions),
        summary.found_money,
    )
    return summary
