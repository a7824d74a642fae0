"""
Audit output models.

``SubScore``      — one metric inside a module, with its optional
                    ``Recommendation``.
``ModuleResult``  — one of the seven audit modules.
``AuditResult``   — the whole audit: overall score, modules, merged and
                    priority-sorted recommendations, money totals.
``RecoverySummary`` — the post-processor's horizon buckets and found money.

All models are frozen: an audit is built once from one snapshot and then
only read.  Range validators enforce the score/weight invariants so a scorer
bug surfaces as a ``ValidationError`` at construction rather than as a
silently out-of-range number in a report.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from venue_audit.taxonomy.audit_taxonomy import (
    Confidence,
    DataSource,
    Difficulty,
    Priority,
    ScoreBand,
    Status,
    Trend,
)


def _check_unit_interval(name: str, v: float) -> float:
    if not 0.0 <= v <= 1.0:
        raise ValueError(f"{name} must be in [0.0, 1.0], got {v}.")
    return v


def _check_score(name: str, v: int) -> int:
    if not 0 <= v <= 100:
        raise ValueError(f"{name} must be in [0, 100], got {v}.")
    return v


class Recommendation(BaseModel):
    """A costed corrective action.

    Attributes:
        action: One-line imperative, templated from the current value/target.
        how: Concrete steps.
        savings_monthly: Estimated monthly saving.  Negative values are a
            proposed investment (marketing spend expected to lift revenue)
            and are excluded from savings totals.
        liability_reduction: One-off legal exposure removed by acting, or
            ``None``.  Never monthly.
        difficulty: Effort to implement.
        time_to_effect: Display string, e.g. ``"2-4 weeks"``.
        priority: Urgency; drives sort order and recovery bucket.
        module: Display label of the owning module, e.g. ``"Food"``.
    """

    model_config = ConfigDict(frozen=True)

    action: str
    how: str
    savings_monthly: float = 0.0
    liability_reduction: Optional[float] = None
    difficulty: Difficulty
    time_to_effect: str
    priority: Priority
    module: str

    @property
    def is_investment(self) -> bool:
        """True when this is proposed spend rather than a saving."""
        return self.savings_monthly < 0


class SubScore(BaseModel):
    """One scored metric within a module.

    ``weight`` is this metric's share of its own module only.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    weight: float
    score: int
    value: str
    target: str
    status: Status
    data_source: DataSource
    recommendation: Optional[Recommendation] = None

    @field_validator("weight")
    @classmethod
    def validate_weight(cls, v: float) -> float:
        return _check_unit_interval("weight", v)

    @field_validator("score")
    @classmethod
    def validate_score(cls, v: int) -> int:
        return _check_score("score", v)


class ModuleResult(BaseModel):
    """Scored result for one audit module.

    Attributes:
        module: Module key, e.g. ``"food"``.
        label: Display name, e.g. ``"Food"``.
        icon: Icon identifier used by the dashboard.
        weight: This module's share of the overall score.
        score: Weighted average of the sub-scores (Compliance: after the
            red-line ceiling).
        prev_score: Previous score for display.  Caller-supplied when
            available, otherwise a cosmetic offset of ``score``.
        band: Band derived from ``score``.
        trend: Direction against the caller-supplied previous score only.
        sub_scores: Metrics in declaration order.
        data_completeness: 0–1 share of real (non-estimated) data.
        confidence: Trust in the module's inputs.
        red_lines: Detailed compliance red-line messages (Compliance only).
    """

    model_config = ConfigDict(frozen=True)

    module: str
    label: str
    icon: str
    weight: float
    score: int
    prev_score: int
    band: ScoreBand
    trend: Trend
    sub_scores: list[SubScore]
    data_completeness: float
    confidence: Confidence
    red_lines: list[str] = []

    @field_validator("weight")
    @classmethod
    def validate_weight(cls, v: float) -> float:
        return _check_unit_interval("weight", v)

    @field_validator("data_completeness")
    @classmethod
    def validate_completeness(cls, v: float) -> float:
        return _check_unit_interval("data_completeness", v)

    @field_validator("score", "prev_score")
    @classmethod
    def validate_score(cls, v: int) -> int:
        return _check_score("score", v)

    @property
    def recommendations(self) -> list[Recommendation]:
        """Non-null recommendations in sub-score order."""
        return [s.recommendation for s in self.sub_scores if s.recommendation is not None]


class AuditResult(BaseModel):
    """Complete output of ``run_quiet_audit()``."""

    model_config = ConfigDict(frozen=True)

    overall_score: int
    overall_band: ScoreBand
    modules: list[ModuleResult]
    recommendations: list[Recommendation]
    total_annual_savings: float
    total_liabilities: float
    data_completeness: float
    confidence: Confidence
    compliance_red_lines: list[str] = []

    @field_validator("overall_score")
    @classmethod
    def validate_score(cls, v: int) -> int:
        return _check_score("overall_score", v)

    @field_validator("data_completeness")
    @classmethod
    def validate_completeness(cls, v: float) -> float:
        return _check_unit_interval("data_completeness", v)

    def module(self, key: str) -> Optional[ModuleResult]:
        """Return the module result for ``key`` (e.g. ``"labour"``), or ``None``."""
        for m in self.modules:
            if m.module == key:
                return m
        return None


class RecoverySummary(BaseModel):
    """Executive recovery view built by ``build_recovery_summary()``.

    The three action buckets partition ``AuditResult.recommendations``:
    every recommendation appears in exactly one of them.
    """

    model_config = ConfigDict(frozen=True)

    total_annual_savings: float
    total_liabilities: float
    immediate_actions: list[Recommendation]
    short_term_actions: list[Recommendation]
    medium_term_actions: list[Recommendation]
    found_money: float

    @property
    def action_count(self) -> int:
        return (
            len(self.immediate_actions)
            + len(self.short_term_actions)
            + len(self.medium_term_actions)
        )
