"""
Tests for venue_audit/cli.py (typer commands via CliRunner).

What we test
------------
validate-config:
  - Valid config prints [OK]; invalid config exits 1 with [ERROR].
run-audit:
  - --demo prints the report; --json-out writes JSON (with benchmarks) + CSV.
  - Flat and nested input files are both accepted.
  - --venue-type overrides the record; config defaults fill gaps.
  - Missing / invalid / non-finite / conflicting inputs exit 1.
recovery:
  - --demo prints the buckets and the found-money line.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from venue_audit.cli import _load_audit_input_or_exit, app
from venue_audit.config import load_config
from venue_audit.taxonomy.audit_taxonomy import AuditSource

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """Commands reconfigure the root logger onto the runner's stream."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Quiet config so INFO log lines do not interleave with report output."""
    path = tmp_path / "cli.toml"
    path.write_text(
        '[audit]\ndefault_venue_type = "cafe"\nbucket_display_limit = 2\n'
        '[logging]\nlevel = "WARNING"\n',
        encoding="utf-8",
    )
    return path


def _write_json(directory: Path, payload, name: str = "venue.json") -> Path:
    path = directory / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


# ── validate-config ───────────────────────────────────────────────────────────

class TestValidateConfig:
    def test_valid(self, config_file):
        result = runner.invoke(app, ["validate-config", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "Default venue type: cafe" in result.output
        assert "[OK] Config is valid." in result.output

    def test_full(self, config_file):
        result = runner.invoke(app, ["validate-config", "--config", str(config_file), "--full"])
        assert result.exit_code == 0
        assert '"bucket_display_limit": 2' in result.output

    def test_invalid(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text('[logging]\nlevel = "LOUD"\n', encoding="utf-8")
        result = runner.invoke(app, ["validate-config", "--config", str(path)])
        assert result.exit_code == 1
        assert "[ERROR] Config validation failed" in result.output

    def test_missing(self, tmp_path):
        result = runner.invoke(app, ["validate-config", "--config", str(tmp_path / "none.toml")])
        assert result.exit_code == 1


# ── run-audit ─────────────────────────────────────────────────────────────────

class TestRunAudit:
    def test_demo(self, config_file):
        result = runner.invoke(app, ["run-audit", "--demo", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "=== Venue Audit ===" in result.output
        assert "[OK] Audit complete: 64/100 (fair)." in result.output

    def test_json_out(self, config_file, tmp_path):
        out_dir = tmp_path / "reports"
        result = runner.invoke(
            app, ["run-audit", "--demo", "--json-out", str(out_dir), "--config", str(config_file)]
        )
        assert result.exit_code == 0
        assert len(list(out_dir.glob("audit_demo_*.json"))) == 1
        assert len(list(out_dir.glob("recommendations_demo_*.csv"))) == 1
        payload = json.loads(next(out_dir.glob("audit_demo_*.json")).read_text(encoding="utf-8"))
        assert payload["venue_type"] == "casual_dining"
        assert payload["benchmarks"]["food_cost_pct"] == pytest.approx(28.0)

    def test_flat_input_file(self, config_file, tmp_path):
        path = _write_json(tmp_path, {"source": "INTERNAL", "rentPct": 13}, name="Corner Bistro.json")
        out_dir = tmp_path / "reports"
        result = runner.invoke(
            app,
            ["run-audit", "--input", str(path), "--json-out", str(out_dir),
             "--config", str(config_file)],
        )
        assert result.exit_code == 0
        assert len(list(out_dir.glob("audit_corner-bistro_*.json"))) == 1

    def test_nested_input_file(self, config_file, tmp_path):
        path = _write_json(tmp_path, {"overhead": {"rent_pct": 13}, "compliance": {"written_contracts": True}})
        result = runner.invoke(app, ["run-audit", "--input", str(path), "--config", str(config_file)])
        assert result.exit_code == 0
        assert "Rent at 13%" in result.output

    def test_requires_one_input(self, config_file, tmp_path):
        path = _write_json(tmp_path, {})
        neither = runner.invoke(app, ["run-audit", "--config", str(config_file)])
        both = runner.invoke(
            app, ["run-audit", "--demo", "--input", str(path), "--config", str(config_file)]
        )
        assert neither.exit_code == 1
        assert both.exit_code == 1
        assert "exactly one" in neither.output

    def test_missing_input(self, config_file, tmp_path):
        result = runner.invoke(
            app, ["run-audit", "--input", str(tmp_path / "none.json"), "--config", str(config_file)]
        )
        assert result.exit_code == 1
        assert "Input file not found" in result.output

    def test_not_json(self, config_file, tmp_path):
        path = tmp_path / "venue.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["run-audit", "--input", str(path), "--config", str(config_file)])
        assert result.exit_code == 1
        assert "not valid JSON" in result.output

    def test_not_an_object(self, config_file, tmp_path):
        path = _write_json(tmp_path, [1, 2, 3])
        result = runner.invoke(app, ["run-audit", "--input", str(path), "--config", str(config_file)])
        assert result.exit_code == 1

    def test_invalid_value(self, config_file, tmp_path):
        path = _write_json(tmp_path, {"rentPct": "plenty"})
        result = runner.invoke(app, ["run-audit", "--input", str(path), "--config", str(config_file)])
        assert result.exit_code == 1
        assert "[ERROR] Input validation failed" in result.output

    def test_non_finite_value(self, config_file, tmp_path):
        path = tmp_path / "venue.json"
        path.write_text('{"paymentEfficiencyScore": NaN}', encoding="utf-8")
        result = runner.invoke(app, ["run-audit", "--input", str(path), "--config", str(config_file)])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "[ERROR] Input validation failed" in result.output


class TestInputDefaults:
    def test_config_fills_venue_type_and_source(self, config_file, tmp_path):
        config = load_config(config_file)
        audit_input = _load_audit_input_or_exit(
            config, str(_write_json(tmp_path, {"rentPct": 9})), False, None
        )
        assert audit_input.venue_type == "cafe"
        assert audit_input.source is AuditSource.EXTERNAL

    def test_record_venue_type_kept(self, config_file, tmp_path):
        config = load_config(config_file)
        path = _write_json(tmp_path, {"venueType": "bar_pub"})
        assert _load_audit_input_or_exit(config, str(path), False, None).venue_type == "bar_pub"

    def test_option_overrides_record(self, config_file, tmp_path):
        config = load_config(config_file)
        path = _write_json(tmp_path, {"venueType": "bar_pub"})
        audit_input = _load_audit_input_or_exit(config, str(path), False, "fine_dining")
        assert audit_input.venue_type == "fine_dining"


# ── recovery ──────────────────────────────────────────────────────────────────

class TestRecovery:
    def test_demo(self, config_file):
        result = runner.invoke(app, ["recovery", "--demo", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "=== Recovery Summary ===" in result.output
        assert "--- Immediate (this week): 6 ---" in result.output
        assert "[OK] 29 actions, found money $" in result.output

    def test_bucket_limit_from_config(self, config_file):
        result = runner.invoke(app, ["recovery", "--demo", "--config", str(config_file)])
        assert "... and 16 more" in result.output
