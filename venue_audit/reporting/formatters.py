"""
ASCII terminal formatters for the audit CLI.

All formatters accept result models and return plain multi-line strings
suitable for ``typer.echo()``.  No third-party dependencies (no ``rich``,
no ``colorama``).

Estimated sub-scores
--------------------
Sub-scores whose driving field was absent are marked with ``*`` in the
module table, and the report footer states how many there were, so a
reader can tell measured numbers from defaults at a glance::

  Food              72  good       up     AvT Variance*  ...
  * estimated: field not supplied, default used
"""

from __future__ import annotations

from typing import Sequence

from venue_audit.models.audit_result import (
    AuditResult,
    ModuleResult,
    Recommendation,
    RecoverySummary,
)
from venue_audit.taxonomy.audit_taxonomy import DataSource

_TREND_ARROWS = {"up": "^", "down": "v", "stable": "="}


def _money(x: float) -> str:
    return f"${x:,.0f}"


# ── Module table ──────────────────────────────────────────────────────────────


def format_module_table(modules: Sequence[ModuleResult]) -> str:
    """One row per module, then one indented row per sub-score.

    Args:
        modules: Module results in report order.

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    header = (
        f"  {'Module':<12}  {'Score':>5}  {'Band':<9}  {'Prev':>4}  {'Trend':>5}  "
        f"{'Weight':>6}  {'Data':>5}  {'Conf':<6}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for m in modules:
        lines.append(
            f"  {m.label:<12}  {m.score:>5}  {m.band:<9}  {m.prev_score:>4}  "
            f"{_TREND_ARROWS.get(m.trend, '?'):>5}  {m.weight:>6.0%}  "
            f"{m.data_completeness:>5.0%}  {m.confidence:<6}"
        )
        for s in m.sub_scores:
            marker = "*" if s.data_source is DataSource.ESTIMATED else " "
            lines.append(
                f"      {s.name + marker:<28} {s.score:>4}  {s.status:<5}  "
                f"{s.value:<28}  target {s.target}"
            )
        for red_line in m.red_lines:
            lines.append(f"      [RED LINE] {red_line}")
    return "\n".join(lines)


# ── Recommendations ───────────────────────────────────────────────────────────


def _format_recommendation(rank: int, rec: Recommendation) -> list[str]:
    if rec.is_investment:
        money = f"invest {_money(-rec.savings_monthly)}/mo"
    elif rec.savings_monthly > 0:
        money = f"save {_money(rec.savings_monthly)}/mo"
    else:
        money = ""
    if rec.liability_reduction:
        liability = f"liability {_money(rec.liability_reduction)}"
        money = f"{money}, {liability}" if money else liability
    lines = [
        f"  {rank:>3}. [{rec.priority:<6}] {rec.module:<10}  {rec.action}",
        f"         {rec.how}",
        f"         difficulty {rec.difficulty.lower()}, {rec.time_to_effect}"
        + (f"; {money}" if money else ""),
    ]
    return lines


def format_recommendations(recommendations: Sequence[Recommendation], limit: int = 0) -> str:
    """Numbered recommendation list; ``limit`` > 0 truncates with a note."""
    if not recommendations:
        return "  (no recommendations)"
    shown = recommendations[:limit] if limit > 0 else recommendations
    lines: list[str] = []
    for rank, rec in enumerate(shown, start=1):
        lines.extend(_format_recommendation(rank, rec))
    if len(shown) < len(recommendations):
        lines.append(f"  ... and {len(recommendations) - len(shown)} more")
    return "\n".join(lines)


# ── Full report ───────────────────────────────────────────────────────────────


def format_audit_report(result: AuditResult) -> str:
    """Format the complete audit as a console report.

    Args:
        result: Output of ``run_quiet_audit()``.

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Venue Audit ===")
    lines.append(f"  Overall score:     {result.overall_score}/100 ({result.overall_band})")
    lines.append(f"  Confidence:        {result.confidence}")
    lines.append(f"  Data completeness: {result.data_completeness:.0%}")
    lines.append(f"  Annual savings:    {_money(result.total_annual_savings)}")
    lines.append(f"  Liabilities:       {_money(result.total_liabilities)}")
    for flag in result.compliance_red_lines:
        lines.append(f"  [!] {flag}")

    lines.append("")
    lines.append("--- Modules ---")
    lines.append(format_module_table(result.modules))

    lines.append("")
    lines.append(f"--- Recommendations ({len(result.recommendations)}) ---")
    lines.append(format_recommendations(result.recommendations))

    estimated = sum(
        1 for m in result.modules for s in m.sub_scores if s.data_source is DataSource.ESTIMATED
    )
    if estimated:
        lines.append("")
        lines.append(f"  * estimated: field not supplied, default used ({estimated} sub-scores)")
    return "\n".join(lines)


def format_recovery_summary(summary: RecoverySummary, limit: int = 0) -> str:
    """Format the recovery buckets and found-money headline.

    Args:
        summary: Output of ``build_recovery_summary()``.
        limit:   Max actions listed per bucket (0 = all).

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Recovery Summary ===")
    lines.append(f"  Found money:       {_money(summary.found_money)}")
    lines.append(f"    Annual savings:  {_money(summary.total_annual_savings)}")
    lines.append(f"    Liabilities:     {_money(summary.total_liabilities)}")
    lines.append(f"  Actions:           {summary.action_count}")

    buckets = (
        ("Immediate (this week)", summary.immediate_actions),
        ("Short term (1-2 months)", summary.short_term_actions),
        ("Medium term (quarter)", summary.medium_term_actions),
    )
    for title, actions in buckets:
        lines.append("")
        lines.append(f"--- {title}: {len(actions)} ---")
        lines.append(format_recommendations(actions, limit=limit))
    return "\n".join(lines)
