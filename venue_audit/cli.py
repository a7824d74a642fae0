"""
Venue audit — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate the venue snapshot.
  4. Run the audit.
  5. Report result to stdout (and optionally to files).

Install and run::

    pip install -e .
    venue-audit --help
    venue-audit validate-config
    venue-audit run-audit --demo
    venue-audit run-audit --input venue.json --json-out data/outputs/audits
    venue-audit recovery --input venue.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError

app = typer.Typer(
    name="venue-audit",
    help="Hospitality venue operations audit — scores, costed actions, recovery plan.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from venue_audit.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from venue_audit.utils.logging import configure_logging
    configure_logging(config.logging)


def _is_nested(record: dict[str, Any]) -> bool:
    """True when the record already groups metrics by module (``{"food": {...}}``)."""
    from venue_audit.taxonomy.audit_taxonomy import ModuleKey

    return any(isinstance(record.get(key.value), dict) for key in ModuleKey)


def _load_audit_input_or_exit(
    config,
    input_path: Optional[str],
    demo: bool,
    venue_type: Optional[str],
):
    """Build an ``AuditInput`` from ``--input`` / ``--demo``, exiting on bad data.

    Config defaults fill ``venue_type`` / ``source`` when the record omits
    them; ``--venue-type`` wins over both.
    """
    from venue_audit.models.audit_input import AuditInput
    from venue_audit.samples import DEMO_RECORD

    if demo == bool(input_path):
        typer.echo("[ERROR] Pass exactly one of --input FILE or --demo.", err=True)
        raise typer.Exit(code=1)

    if demo:
        record: dict[str, Any] = dict(DEMO_RECORD)
    else:
        path = Path(input_path)
        if not path.exists():
            typer.echo(f"[ERROR] Input file not found: {path}", err=True)
            raise typer.Exit(code=1)
        try:
            record = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            typer.echo(f"[ERROR] {path} is not valid JSON: {exc}", err=True)
            raise typer.Exit(code=1)
        if not isinstance(record, dict):
            typer.echo(f"[ERROR] {path} must contain a single JSON object.", err=True)
            raise typer.Exit(code=1)

    has_venue_type = "venue_type" in record or "venueType" in record
    if venue_type:
        record.pop("venueType", None)
        record["venue_type"] = venue_type
    elif not has_venue_type:
        record["venue_type"] = config.audit.default_venue_type
    if "source" not in record:
        record["source"] = config.audit.default_source.value

    try:
        if _is_nested(record):
            return AuditInput.model_validate(record)
        return AuditInput.from_flat(record)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Input validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Default venue type: {config.audit.default_venue_type}")
    typer.echo(f"  Default source:     {config.audit.default_source}")
    typer.echo(f"  Output dir:         {config.output.output_dir}")
    typer.echo(f"  Log level:          {config.logging.level}")
    typer.echo(f"  Debug mode:         {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(mode="json"), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config is valid.")


@app.command("run-audit")
def run_audit(
    input_path: Optional[str] = typer.Option(
        None,
        "--input",
        help="Path to a venue snapshot JSON (flat camelCase or nested by module).",
    ),
    demo: bool = typer.Option(
        False,
        "--demo",
        help="Audit the built-in casual-dining demo snapshot.",
    ),
    venue_type: Optional[str] = typer.Option(
        None,
        "--venue-type",
        help="Override venue type (fine_dining, casual_dining, cafe, bar_pub, fast_casual).",
    ),
    json_out: Optional[str] = typer.Option(
        None,
        "--json-out",
        help="Write audit JSON + recommendations CSV to this directory.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Run the seven-module audit and print the report.

    Exits with code 1 if the input is missing or fails validation.
    """
    from venue_audit.engine.aggregator import run_quiet_audit
    from venue_audit.engine.recovery import build_recovery_summary
    from venue_audit.reporting.export import slugify, write_audit_json, write_recommendations_csv
    from venue_audit.reporting.formatters import format_audit_report

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    audit_input = _load_audit_input_or_exit(config, input_path, demo, venue_type)
    result = run_quiet_audit(audit_input)
    typer.echo(format_audit_report(result))

    if json_out is not None:
        out_dir = Path(json_out)
        slug = "demo" if demo else slugify(Path(input_path).stem)
        summary = build_recovery_summary(result)
        json_path = write_audit_json(
            result, summary, out_dir, slug, venue_type=audit_input.venue_type
        )
        csv_path = write_recommendations_csv(result, out_dir, slug)
        typer.echo("")
        typer.echo(f"  JSON: {json_path}")
        typer.echo(f"  CSV:  {csv_path}")

    typer.echo("")
    typer.echo(f"[OK] Audit complete: {result.overall_score}/100 ({result.overall_band}).")


@app.command("recovery")
def recovery(
    input_path: Optional[str] = typer.Option(
        None,
        "--input",
        help="Path to a venue snapshot JSON.",
    ),
    demo: bool = typer.Option(
        False,
        "--demo",
        help="Use the built-in demo snapshot.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Print the recovery plan: actions bucketed by horizon and found money."""
    from venue_audit.engine.aggregator import run_quiet_audit
    from venue_audit.engine.recovery import build_recovery_summary
    from venue_audit.reporting.formatters import format_recovery_summary

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    audit_input = _load_audit_input_or_exit(config, input_path, demo, None)
    summary = build_recovery_summary(run_quiet_audit(audit_input))
    typer.echo(format_recovery_summary(summary, limit=config.audit.bucket_display_limit))

    typer.echo("")
    typer.echo(f"[OK] {summary.action_count} actions, found money ${summary.found_money:,.0f}.")


if __name__ == "__main__":
    app()
