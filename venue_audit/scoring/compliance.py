"""
Compliance module scorer and red-line override.

Nine sub-scores cover payroll, licensing and record-keeping obligations.
On top of the weighted average, a *red line* is a single breach serious
enough that no amount of good practice elsewhere may hide it:

    CRITICAL     caps the module score at 39 (always "critical" band)
    SIGNIFICANT  caps the module score at 59 (never better than "poor")

The cap is applied by ``apply_red_line_ceiling()`` exactly once, after the
weighted average.  ``evaluate_red_lines()`` is public so callers (and the
CLI report) can list the breaches that triggered the cap.

Award compliance, super rate and break compliance are read from the Labour
sub-record; they are payroll facts reported once and scored twice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from venue_audit.models.audit_input import AuditInput, ComplianceInput, LabourInput
from venue_audit.models.audit_result import ModuleResult, Recommendation, SubScore
from venue_audit.scoring.common import (
    build_module_result,
    combined_source,
    flag_source,
    fmt_num,
    metric,
    sub_score,
    weighted_average,
)
from venue_audit.taxonomy.audit_taxonomy import (
    Difficulty,
    ModuleKey,
    Priority,
    RedLineSeverity,
)

logger = logging.getLogger(__name__)

MODULE = "Compliance"

CRITICAL_CEILING = 39
SIGNIFICANT_CEILING = 59

DEFAULT_SUPER_RATE = 12.0
DEFAULT_RETENTION_YEARS = 7.0

SUPER_GUARANTEE_RATE = 12.0
RETENTION_TARGET_YEARS = 7.0
MIN_RETENTION_YEARS = 1.0

AWARD_LIABILITY = 5_000.0
SUPER_LIABILITY = 3_200.0
CERTIFICATE_LIABILITY = 10_000.0

DATA_COMPLETENESS = 0.85


@dataclass(frozen=True)
class RedLine:
    """One compliance breach that caps the module score."""

    severity: RedLineSeverity
    message: str

    def __str__(self) -> str:
        return f"{self.severity}: {self.message}"


def evaluate_red_lines(
    compliance: ComplianceInput,
    labour: Optional[LabourInput] = None,
) -> list[RedLine]:
    """Return every red line breached by the snapshot, CRITICAL first.

    Only an explicit ``False`` (or an explicit zero / sub-year value) is a
    breach, with one exception: written employment contracts must be
    affirmatively confirmed, so an absent answer counts as a SIGNIFICANT
    breach.

    Args:
        compliance: Compliance sub-record.
        labour:     Labour sub-record (award and super facts).  ``None`` is
                    treated as an empty record.
    """
    labour = labour or LabourInput()
    critical: list[str] = []
    significant: list[str] = []

    if labour.award_compliant is False:
        critical.append("Staff paid below Award minimum rate")
    if labour.super_rate == 0:
        critical.append("No super being paid")
    if compliance.liquor_license_current is False:
        critical.append("Liquor license expired")
    if compliance.workers_comp_current is False:
        critical.append("Workers Compensation missing")
    if (
        compliance.record_retention_years is not None
        and compliance.record_retention_years < MIN_RETENTION_YEARS
    ):
        critical.append("No payroll records older than 12 months")

    if compliance.stp_phase2_compliant is False:
        significant.append("STP Phase 2 not compliant")
    if compliance.rsa_current is False:
        significant.append("RSA certificates expired")
    if compliance.food_safety_cert_current is False:
        significant.append("Food Safety Supervisor certificate expired")
    if compliance.written_contracts is not True:
        significant.append("No written employment contracts")

    return (
        [RedLine(RedLineSeverity.CRITICAL, m) for m in critical]
        + [RedLine(RedLineSeverity.SIGNIFICANT, m) for m in significant]
    )


def apply_red_line_ceiling(score: int, red_lines: Sequence[RedLine]) -> int:
    """Cap ``score`` at 39 for any CRITICAL red line, else 59 for any SIGNIFICANT."""
    severities = {r.severity for r in red_lines}
    if RedLineSeverity.CRITICAL in severities:
        return min(score, CRITICAL_CEILING)
    if RedLineSeverity.SIGNIFICANT in severities:
        return min(score, SIGNIFICANT_CEILING)
    return score


def _certificate_score(current: int) -> int:
    if current >= 4:
        return 95
    if current == 3:
        return 70
    if current == 2:
        return 45
    return 15


def _retention_score(years: float) -> int:
    if years >= 7:
        return 95
    if years >= 5:
        return 70
    if years >= 3:
        return 45
    return 15


def score_compliance(audit_input: AuditInput) -> ModuleResult:
    """Score the Compliance module, then apply the red-line ceiling."""
    d = audit_input.compliance
    labour = audit_input.labour
    src = audit_input.source
    items: list[SubScore] = []

    award_ok = labour.award_compliant is not False
    items.append(sub_score(
        "Award Rate Correctness", 0.20, 95 if award_ok else 20,
        "Compliant" if award_ok else "Below Award", "All staff at or above Award",
        flag_source(labour.award_compliant, src),
        Recommendation(
            action="Back-pay staff to Award minimum rates",
            how="Audit every classification against MA000009. "
                "Calculate and pay the shortfall with a written explanation.",
            savings_monthly=0.0,
            liability_reduction=AWARD_LIABILITY,
            difficulty=Difficulty.HIGH, time_to_effect="1-2 weeks",
            priority=Priority.HIGH, module=MODULE,
        ) if not award_ok else None,
    ))

    stp_ok = d.stp_phase2_compliant is not False
    items.append(sub_score(
        "STP Phase 2", 0.10, 100 if stp_ok else 40,
        "Compliant" if stp_ok else "Not compliant", "Reporting via STP Phase 2",
        flag_source(d.stp_phase2_compliant, src),
        Recommendation(
            action="Move payroll reporting to STP Phase 2",
            how="Update payroll software and disaggregate gross pay categories.",
            savings_monthly=0.0,
            difficulty=Difficulty.MEDIUM, time_to_effect="2-4 weeks",
            priority=Priority.HIGH, module=MODULE,
        ) if not stp_ok else None,
    ))

    super_rate, super_src = metric(labour.super_rate, DEFAULT_SUPER_RATE, src)
    super_ok = super_rate >= SUPER_GUARANTEE_RATE
    items.append(sub_score(
        "Super Guarantee", 0.15, 95 if super_ok else 30,
        f"{fmt_num(super_rate)}%", f"{fmt_num(SUPER_GUARANTEE_RATE)}%", super_src,
        Recommendation(
            action=f"Pay the {fmt_num(SUPER_GUARANTEE_RATE)}% Super Guarantee",
            how="Correct the payroll super rate. Lodge a Super Guarantee Charge "
                "statement for any shortfall quarter.",
            savings_monthly=0.0,
            liability_reduction=SUPER_LIABILITY,
            difficulty=Difficulty.HIGH, time_to_effect="1 week",
            priority=Priority.HIGH, module=MODULE,
        ) if not super_ok else None,
    ))

    certificates = {
        "liquor licence": d.liquor_license_current,
        "food safety certificate": d.food_safety_cert_current,
        "RSA": d.rsa_current,
        "workers compensation": d.workers_comp_current,
    }
    lapsed = [name for name, current in certificates.items() if current is False]
    current_count = len(certificates) - len(lapsed)
    items.append(sub_score(
        "Certificates & Licenses", 0.15,
        _certificate_score(current_count),
        f"{current_count}/{len(certificates)} current", "All current",
        combined_source(*(flag_source(v, src) for v in certificates.values())),
        Recommendation(
            action="Renew lapsed certificates and licences",
            how=f"Renew: {', '.join(lapsed)}. Keep a renewal calendar with 60-day reminders.",
            savings_monthly=0.0,
            liability_reduction=CERTIFICATE_LIABILITY,
            difficulty=Difficulty.MEDIUM, time_to_effect="1-4 weeks",
            priority=Priority.HIGH, module=MODULE,
        ) if lapsed else None,
    ))

    years, years_src = metric(d.record_retention_years, DEFAULT_RETENTION_YEARS, src)
    items.append(sub_score(
        "Record Retention", 0.10,
        _retention_score(years),
        f"{fmt_num(years)} years", f"≥ {fmt_num(RETENTION_TARGET_YEARS)} years", years_src,
        Recommendation(
            action=f"Retain employee records for {fmt_num(RETENTION_TARGET_YEARS)} years",
            how="Archive payroll, timesheets and contracts to cloud storage with a retention rule.",
            savings_monthly=0.0,
            difficulty=Difficulty.LOW, time_to_effect="2 weeks",
            priority=Priority.MEDIUM, module=MODULE,
        ) if years < RETENTION_TARGET_YEARS else None,
    ))

    payslip_ok = d.payslip_compliant is not False
    items.append(sub_score(
        "Payslip Compliance", 0.10, 90 if payslip_ok else 40,
        "Compliant" if payslip_ok else "Missing details", "Issued within 1 working day",
        flag_source(d.payslip_compliant, src),
    ))

    breaks_ok = labour.break_compliant is not False
    items.append(sub_score(
        "Break & Fatigue", 0.10, 85 if breaks_ok else 40,
        "Compliant" if breaks_ok else "Breaches found", "Breaks recorded",
        flag_source(labour.break_compliant, src),
    ))

    disconnect_ok = d.right_to_disconnect_policy is True
    items.append(sub_score(
        "Right to Disconnect", 0.05, 90 if disconnect_ok else 30,
        "Policy in place" if disconnect_ok else "No policy", "Written policy",
        flag_source(d.right_to_disconnect_policy, src),
        Recommendation(
            action="Adopt a right-to-disconnect policy",
            how="Set out-of-hours contact rules for managers. Share the policy with all staff.",
            savings_monthly=0.0,
            difficulty=Difficulty.LOW, time_to_effect="1 week",
            priority=Priority.MEDIUM, module=MODULE,
        ) if not disconnect_ok else None,
    ))

    induction_ok = d.induction_records_complete is not False
    items.append(sub_score(
        "Induction & Training", 0.05, 85 if induction_ok else 35,
        "Records complete" if induction_ok else "Records incomplete", "Signed induction per staff",
        flag_source(d.induction_records_complete, src),
    ))

    red_lines = evaluate_red_lines(d, labour)
    raw = weighted_average(items)
    final = apply_red_line_ceiling(raw, red_lines)
    if final < raw:
        logger.info(
            "Compliance capped at %d (raw %d) by %d red line(s)", final, raw, len(red_lines)
        )

    return build_module_result(
        ModuleKey.COMPLIANCE, audit_input, items,
        data_completeness=DATA_COMPLETENESS,
        prev_offset=-1,
        score=final,
        red_lines=[str(r) for r in red_lines],
    )
