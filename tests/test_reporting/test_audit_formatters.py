"""Tests for venue_audit.reporting.formatters."""

from __future__ import annotations

from venue_audit.engine.aggregator import run_quiet_audit
from venue_audit.engine.recovery import build_recovery_summary
from venue_audit.reporting.formatters import (
    format_audit_report,
    format_module_table,
    format_recommendations,
    format_recovery_summary,
)
from venue_audit.taxonomy.audit_taxonomy import Priority


# ── format_module_table ───────────────────────────────────────────────────────


def test_module_table_lists_every_module(demo_result) -> None:
    """One row per module label plus its sub-scores."""
    table = format_module_table(demo_result.modules)
    for label in ("Food", "Beverage", "Labour", "Overhead", "Service", "Marketing", "Compliance"):
        assert label in table
    assert "AvT Variance" in table


def test_module_table_marks_estimated(empty_input) -> None:
    """Estimated sub-scores carry a trailing '*'."""
    table = format_module_table(run_quiet_audit(empty_input).modules)
    assert "AvT Variance*" in table


def test_module_table_shows_red_lines(empty_input) -> None:
    """Compliance red lines get their own row."""
    table = format_module_table(run_quiet_audit(empty_input).modules)
    assert "[RED LINE] SIGNIFICANT: No written employment contracts" in table


# ── format_recommendations ────────────────────────────────────────────────────


def test_recommendations_empty() -> None:
    assert format_recommendations([]) == "  (no recommendations)"


def test_recommendations_money_wording(make_recommendation) -> None:
    """Savings, investments and liabilities are labelled differently."""
    text = format_recommendations([
        make_recommendation(savings_monthly=1_250.0),
        make_recommendation(savings_monthly=-800.0),
        make_recommendation(savings_monthly=0.0, liability_reduction=3_200.0),
    ])
    assert "save $1,250/mo" in text
    assert "invest $800/mo" in text
    assert "liability $3,200" in text


def test_recommendations_limit(make_recommendation) -> None:
    """A positive limit truncates and says how many were hidden."""
    recs = [make_recommendation(action=f"Action {i}") for i in range(5)]
    text = format_recommendations(recs, limit=2)
    assert "Action 1" in text
    assert "Action 2" not in text
    assert "... and 3 more" in text


def test_recommendations_priority_shown(make_recommendation) -> None:
    text = format_recommendations([make_recommendation(priority=Priority.HIGH, action="Fix it")])
    assert "[HIGH  ]" in text
    assert "Fix it" in text


# ── format_audit_report ───────────────────────────────────────────────────────


def test_audit_report_header(demo_result) -> None:
    report = format_audit_report(demo_result)
    assert "=== Venue Audit ===" in report
    assert "Overall score:     64/100 (fair)" in report
    assert "--- Recommendations (29) ---" in report
    assert "[!]" not in report


def test_audit_report_flags_and_footer(empty_input) -> None:
    """Red-line flags and the estimated footer appear for an empty snapshot."""
    report = format_audit_report(run_quiet_audit(empty_input))
    assert "[!] Significant compliance issues detected" in report
    assert "* estimated: field not supplied" in report


def test_audit_report_no_footer_when_all_supplied(good_input) -> None:
    report = format_audit_report(run_quiet_audit(good_input))
    assert "* estimated" not in report
    assert "(no recommendations)" in report


# ── format_recovery_summary ───────────────────────────────────────────────────


def test_recovery_summary_sections(demo_summary) -> None:
    text = format_recovery_summary(demo_summary)
    assert "=== Recovery Summary ===" in text
    assert "Found money:" in text
    assert "--- Immediate (this week): 6 ---" in text
    assert "--- Short term (1-2 months): 18 ---" in text
    assert "--- Medium term (quarter): 5 ---" in text


def test_recovery_summary_empty_buckets(good_input) -> None:
    text = format_recovery_summary(build_recovery_summary(run_quiet_audit(good_input)))
    assert "Found money:       $0" in text
    assert text.count("(no recommendations)") == 3
