"""
Helpers shared by the seven module scorers.

Every scorer follows the same shape::

    value, src = metric(input.field, DEFAULT_FIELD, source)
    score      = <threshold lookup or ladder>(value)
    sub_scores.append(sub_score(name, weight, score, value_str, target_str,
                                src, recommendation_or_None))
    return build_module_result(ModuleKey.X, input, sub_scores, completeness,
                               prev_offset=...)

The cosmetic previous-score / trend logic lives in ``trend_from()`` and
``display_prev_score()`` and is applied only after the module score is
final, so it can never feed back into scoring.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, TypeVar

from venue_audit.benchmarks.registry import MODULE_WEIGHTS, score_band
from venue_audit.models.audit_input import AuditInput
from venue_audit.models.audit_result import ModuleResult, Recommendation, SubScore
from venue_audit.taxonomy.audit_taxonomy import (
    AuditSource,
    Confidence,
    DataSource,
    ModuleKey,
    Status,
    Trend,
)

T = TypeVar("T")

# (label, icon) per module, as shown on the dashboard.
MODULE_DISPLAY: dict[ModuleKey, tuple[str, str]] = {
    ModuleKey.FOOD:       ("Food",       "ChefHat"),
    ModuleKey.BEVERAGE:   ("Beverage",   "Wine"),
    ModuleKey.LABOUR:     ("Labour",     "Users"),
    ModuleKey.OVERHEAD:   ("Overhead",   "BarChart3"),
    ModuleKey.SERVICE:    ("Service",    "Utensils"),
    ModuleKey.MARKETING:  ("Marketing",  "Megaphone"),
    ModuleKey.COMPLIANCE: ("Compliance", "Scale"),
}

TREND_THRESHOLD = 2


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's ``round()`` uses banker's rounding (``round(72.5) == 72``);
    scores are published as half-up integers.
    """
    return int(math.floor(x + 0.5))


def clamp_score(x: float) -> int:
    """Round half-up and clamp to [0, 100]."""
    return max(0, min(100, round_half_up(x)))


def status_from_score(score: float) -> Status:
    """GOOD ≥75, FAIR ≥60, else POOR."""
    if score >= 75:
        return Status.GOOD
    if score >= 60:
        return Status.FAIR
    return Status.POOR


def weighted_average(items: Sequence[SubScore]) -> int:
    """Σ(score·weight) / Σ(weight), rounded half-up.  Zero total weight → 0."""
    total_weight = sum(s.weight for s in items)
    if total_weight <= 0:
        return 0
    return clamp_score(sum(s.score * s.weight for s in items) / total_weight)


def base_data_source(source: AuditSource) -> DataSource:
    """Data-source tag for a metric that was actually supplied."""
    return DataSource.INTERNAL if source is AuditSource.INTERNAL else DataSource.QUESTIONNAIRE


def metric(value: Optional[T], default: T, source: AuditSource) -> tuple[T, DataSource]:
    """Return ``(value or default, data source)``.

    A missing value is replaced by ``default`` and tagged ``ESTIMATED``.
    """
    if value is None:
        return default, DataSource.ESTIMATED
    return value, base_data_source(source)


def flag_source(flag: Optional[bool], source: AuditSource) -> DataSource:
    """ESTIMATED when a yes/no answer was not given."""
    return DataSource.ESTIMATED if flag is None else base_data_source(source)


def combined_source(*sources: DataSource) -> DataSource:
    """ESTIMATED if any contributing metric was estimated."""
    if DataSource.ESTIMATED in sources:
        return DataSource.ESTIMATED
    return sources[0]


def sub_score(
    name:           str,
    weight:         float,
    score:          float,
    value:          str,
    target:         str,
    data_source:    DataSource,
    recommendation: Optional[Recommendation] = None,
) -> SubScore:
    """Build a ``SubScore``, deriving status from the clamped score."""
    final = clamp_score(score)
    return SubScore(
        name=name,
        weight=weight,
        score=final,
        value=value,
        target=target,
        status=status_from_score(final),
        data_source=data_source,
        recommendation=recommendation,
    )


def fmt_num(x: float, digits: int = 1) -> str:
    """Format ``x`` without a trailing ``.0`` on whole numbers (``13`` / ``3.2``)."""
    if float(x).is_integer():
        return str(int(x))
    return f"{x:.{digits}f}".rstrip("0").rstrip(".")


def trend_from(current: int, previous: Optional[int]) -> Trend:
    """Direction against a caller-supplied previous score; none → stable."""
    if previous is None:
        return Trend.STABLE
    diff = current - previous
    if diff >= TREND_THRESHOLD:
        return Trend.UP
    if diff <= -TREND_THRESHOLD:
        return Trend.DOWN
    return Trend.STABLE


def display_prev_score(current: int, previous: Optional[int], offset: int) -> int:
    """Previous score for display: caller's value, else ``current + offset``."""
    if previous is not None:
        return max(0, min(100, previous))
    return max(0, min(100, current + offset))


def default_confidence(source: AuditSource, external: Confidence = Confidence.MEDIUM) -> Confidence:
    """HIGH for internal data, otherwise ``external``."""
    return Confidence.HIGH if source is AuditSource.INTERNAL else external


def estimated_share(items: Sequence[SubScore]) -> float:
    """Share of sub-scores backed by supplied (non-estimated) data."""
    if not items:
        return 0.0
    filled = sum(1 for s in items if s.data_source is not DataSource.ESTIMATED)
    return filled / len(items)


def build_module_result(
    key:               ModuleKey,
    audit_input:       AuditInput,
    items:             list[SubScore],
    data_completeness: float,
    prev_offset:       int,
    confidence:        Optional[Confidence] = None,
    score:             Optional[int] = None,
    red_lines:         Optional[list[str]] = None,
) -> ModuleResult:
    """Assemble a ``ModuleResult`` for ``key``.

    Args:
        key:               Module being built.
        audit_input:       Snapshot (for source and previous scores).
        items:             Sub-scores in declaration order.
        data_completeness: 0–1 completeness for this module.
        prev_offset:       Cosmetic offset used when no previous score exists.
        confidence:        Override; defaults to HIGH/MEDIUM by source.
        score:             Final score override (Compliance passes its
                           ceiling-adjusted score); defaults to the
                           weighted average of ``items``.
        red_lines:         Detailed red-line messages.
    """
    final = weighted_average(items) if score is None else score
    label, icon = MODULE_DISPLAY[key]
    previous = audit_input.prev_score(key)
    return ModuleResult(
        module=key.value,
        label=label,
        icon=icon,
        weight=MODULE_WEIGHTS[key],
        score=final,
        prev_score=display_prev_score(final, previous, prev_offset),
        band=score_band(final),
        trend=trend_from(final, previous),
        sub_scores=items,
        data_completeness=max(0.0, min(1.0, data_completeness)),
        confidence=confidence or default_confidence(audit_input.source),
        red_lines=red_lines or [],
    )
