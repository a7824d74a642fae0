"""Tests for venue_audit.reporting.export."""

from __future__ import annotations

import csv
import json
from datetime import date
from pathlib import Path

import pytest

from venue_audit.benchmarks.registry import benchmarks_as_dict
from venue_audit.engine.aggregator import run_quiet_audit
from venue_audit.reporting.export import (
    RECOMMENDATION_FIELDS,
    SCHEMA_VERSION,
    flatten_recommendations,
    slugify,
    write_audit_json,
    write_recommendations_csv,
)

RUN_DATE = date(2026, 3, 1)


# ── slugify ───────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "name, slug",
    [
        ("The Corner Bistro", "the-corner-bistro"),
        ("bar & grill #2", "bar-grill-2"),
        ("demo", "demo"),
        ("", "venue"),
        ("  --  ", "venue"),
    ],
)
def test_slugify(name: str, slug: str) -> None:
    assert slugify(name) == slug


# ── flatten_recommendations ───────────────────────────────────────────────────


def test_flatten_rows_are_flat(demo_result) -> None:
    """Every row has exactly the CSV columns and no nested values."""
    rows = flatten_recommendations(demo_result)
    assert len(rows) == len(demo_result.recommendations)
    for row in rows:
        assert list(row) == RECOMMENDATION_FIELDS
        assert not any(isinstance(v, (dict, list)) for v in row.values())


def test_flatten_ranks_and_annual_savings(demo_result) -> None:
    rows = flatten_recommendations(demo_result)
    assert [r["rank"] for r in rows] == list(range(1, len(rows) + 1))
    assert sum(r["savings_annual"] for r in rows) == pytest.approx(
        demo_result.total_annual_savings, abs=0.1
    )


def test_flatten_investment_has_no_annual_saving(demo_result) -> None:
    """Marketing investments show negative monthly and zero annual savings."""
    rows = [r for r in flatten_recommendations(demo_result) if r["savings_monthly"] < 0]
    assert rows
    assert all(r["savings_annual"] == 0.0 for r in rows)


# ── write_audit_json ──────────────────────────────────────────────────────────


def test_write_audit_json(tmp_path: Path, demo_result, demo_summary) -> None:
    """File name, metadata and payload round-trip through json."""
    path = write_audit_json(demo_result, demo_summary, tmp_path / "out", "demo", RUN_DATE)

    assert path == tmp_path / "out" / "audit_demo_2026-03-01.json"
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["schema_version"] == SCHEMA_VERSION
    assert payload["venue_slug"] == "demo"
    assert payload["generated_at"] == "2026-03-01"
    assert payload["result"]["overall_score"] == demo_result.overall_score
    assert len(payload["result"]["modules"]) == 7
    assert payload["recovery"]["found_money"] == pytest.approx(demo_summary.found_money)
    assert "benchmarks" not in payload


def test_write_audit_json_embeds_benchmarks(tmp_path: Path, demo_result, demo_summary) -> None:
    """With a venue type, the benchmark set scored against is exported alongside."""
    path = write_audit_json(
        demo_result, demo_summary, tmp_path, "corner-cafe", RUN_DATE, venue_type="cafe"
    )

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["venue_type"] == "cafe"
    assert payload["benchmarks"] == benchmarks_as_dict("cafe")
    assert payload["benchmarks"]["waste_pct"] == pytest.approx(4.0)


# ── write_recommendations_csv ─────────────────────────────────────────────────


def test_write_recommendations_csv(tmp_path: Path, demo_result) -> None:
    path = write_recommendations_csv(demo_result, tmp_path, "demo", RUN_DATE)

    assert path.name == "recommendations_demo_2026-03-01.csv"
    with path.open(encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = list(reader)
    assert reader.fieldnames == RECOMMENDATION_FIELDS
    assert len(rows) == 29
    assert rows[0]["rank"] == "1"
    assert rows[0]["module"] == "Food"


def test_write_recommendations_csv_empty(tmp_path: Path, good_input) -> None:
    """No recommendations still writes a header-only file."""
    path = write_recommendations_csv(run_quiet_audit(good_input), tmp_path, "good", RUN_DATE)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == [",".join(RECOMMENDATION_FIELDS)]
