"""Tests for venue_audit.utils.logging, including the audit summary JSON line."""

from __future__ import annotations

import io
import json
import logging

import pytest

from venue_audit.config import LoggingConfig
from venue_audit.engine.aggregator import run_quiet_audit
from venue_audit.utils.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_plain_format_respects_level() -> None:
    """Records below the configured level are dropped."""
    stream = io.StringIO()
    configure_logging(LoggingConfig(level="WARNING"), stream=stream)

    log = logging.getLogger("venue_audit.test")
    log.info("hidden")
    log.warning("shown %d", 1)

    output = stream.getvalue()
    assert "hidden" not in output
    assert "[WARNING] venue_audit.test: shown 1" in output


def test_json_format_includes_extras() -> None:
    """JSON lines carry the standard keys plus any ``extra=`` fields."""
    stream = io.StringIO()
    configure_logging(LoggingConfig(level="INFO", json_format=True), stream=stream)

    logging.getLogger("venue_audit.test").info("scored", extra={"venue": "demo"})

    record = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert record["level"] == "INFO"
    assert record["logger"] == "venue_audit.test"
    assert record["msg"] == "scored"
    assert record["venue"] == "demo"
    assert record["ts"].endswith("Z")


def test_log_file(tmp_path) -> None:
    """A configured log file receives the same records; parent dirs are created."""
    log_path = tmp_path / "logs" / "audit.log"
    configure_logging(LoggingConfig(level="INFO", log_file=str(log_path)), stream=io.StringIO())

    logging.getLogger("venue_audit.test").info("to file")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "to file" in log_path.read_text(encoding="utf-8")


def test_json_audit_summary_fields(demo_input) -> None:
    """The audit summary line carries venue and score fields as JSON keys."""
    stream = io.StringIO()
    configure_logging(LoggingConfig(level="INFO", json_format=True), stream=stream)

    run_quiet_audit(demo_input)

    lines = [json.loads(line) for line in stream.getvalue().strip().splitlines()]
    summary = next(r for r in lines if r["logger"] == "venue_audit.engine.aggregator")
    assert summary["venue_type"] == "casual_dining"
    assert summary["overall_score"] == 64
    assert summary["confidence"] == "HIGH"
    assert summary["msg"].startswith("Audit complete")
