"""
Audit report writers: JSON and CSV files for one audit run.

All functions write to disk and return the written ``Path``.

Output files
------------
  <output_dir>/
    audit_{venue}_{date}.json            -- full result, recovery summary, benchmarks
    recommendations_{venue}_{date}.csv   -- one flat row per recommendation

CSV rows are flat (no nested dicts) so they load directly in Excel or
pandas without any pre-processing step.
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from venue_audit.benchmarks.registry import benchmarks_as_dict
from venue_audit.engine.recovery import recovery_bucket
from venue_audit.models.audit_result import AuditResult, RecoverySummary

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1.0.0"

RECOMMENDATION_FIELDS = [
    "rank", "module", "priority", "difficulty", "bucket", "action", "how",
    "savings_monthly", "savings_annual", "liability_reduction", "time_to_effect",
]


def slugify(name: str) -> str:
    """``"The Corner Bistro"`` → ``"the-corner-bistro"``; empty → ``"venue"``."""
    slug = "-".join("".join(c if c.isalnum() else " " for c in name.lower()).split())
    return slug or "venue"


def flatten_recommendations(result: AuditResult) -> list[dict]:
    """One flat row per recommendation, in priority order.

    ``savings_annual`` is 12 × the monthly figure for savings and 0 for
    investments (negative monthly amounts), matching how the found-money
    total treats them.
    """
    rows: list[dict] = []
    for rank, rec in enumerate(result.recommendations, start=1):
        rows.append(
            {
                "rank":                rank,
                "module":              rec.module,
                "priority":            rec.priority.value,
                "difficulty":          rec.difficulty.value,
                "bucket":              recovery_bucket(rec),
                "action":              rec.action,
                "how":                 rec.how,
                "savings_monthly":     round(rec.savings_monthly, 2),
                "savings_annual":      round(max(0.0, rec.savings_monthly) * 12, 2),
                "liability_reduction": rec.liability_reduction or 0.0,
                "time_to_effect":      rec.time_to_effect,
            }
        )
    return rows


def write_audit_json(
    result:     AuditResult,
    summary:    RecoverySummary,
    output_dir: Path,
    venue_slug: str,
    run_date:   Optional[date] = None,
    venue_type: Optional[str] = None,
) -> Path:
    """Write the audit result and its recovery summary to one JSON file.

    Args:
        result:     Output of ``run_quiet_audit()``.
        summary:    Output of ``build_recovery_summary(result)``.
        output_dir: Target directory (created if missing).
        venue_slug: Used in filename + metadata.
        run_date:   Date label. Defaults to today.
        venue_type: When given, the venue type and the benchmark set it was
                    scored against are embedded under ``benchmarks``.

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"audit_{venue_slug}_{run_date}.json"

    payload: dict = {
        "schema_version": SCHEMA_VERSION,
        "venue_slug":     venue_slug,
        "generated_at":   run_date.isoformat(),
        "result":         result.model_dump(mode="json"),
        "recovery":       summary.model_dump(mode="json"),
    }
    if venue_type is not None:
        payload["venue_type"] = venue_type
        payload["benchmarks"] = benchmarks_as_dict(venue_type)
    json_path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")

    logger.info("Audit JSON written: %s", json_path)
    return json_path


def write_recommendations_csv(
    result:     AuditResult,
    output_dir: Path,
    venue_slug: str,
    run_date:   Optional[date] = None,
) -> Path:
    """Write ``flatten_recommendations(result)`` to a CSV file.

    Args:
        result:     Output of ``run_quiet_audit()``.
        output_dir: Target directory (created if missing).
        venue_slug: Used in filename.
        run_date:   Date label. Defaults to today.

    Returns:
        Path to the written CSV file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"recommendations_{venue_slug}_{run_date}.csv"
    rows = flatten_recommendations(result)

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=RECOMMENDATION_FIELDS)
        writer.writeheader()
        writer.writerows(rows)

    logger.info("Recommendation CSV written: %s (%d rows)", csv_path, len(rows))
    return csv_path
