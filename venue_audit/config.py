"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local overrides (gitignored)
  4. Environment variables        — ``VENUE_AUDIT_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The audit engine itself takes no configuration: ``run_quiet_audit`` is a
pure function of its input.  ``AppConfig`` only drives the surfaces around
it (CLI defaults, report output, logging).
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from venue_audit.taxonomy.audit_taxonomy import AuditSource, VenueType

ENV_PREFIX = "VENUE_AUDIT_"

# ── Sub-config models ─────────────────────────────────────────────────────────


class AuditConfig(BaseModel):
    """Defaults applied when an input record omits them."""

    model_config = ConfigDict(frozen=True)

    default_venue_type: str = VenueType.CASUAL_DINING.value
    default_source: AuditSource = AuditSource.EXTERNAL
    bucket_display_limit: int = 10

    @field_validator("default_venue_type")
    @classmethod
    def validate_venue_type(cls, v: str) -> str:
        valid = {t.value for t in VenueType}
        if v.strip().lower() not in valid:
            raise ValueError(f"default_venue_type must be one of {sorted(valid)}, got '{v}'.")
        return v.strip().lower()

    @field_validator("bucket_display_limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"bucket_display_limit must be >= 1, got {v}.")
        return v


class OutputConfig(BaseModel):
    """Where exported reports are written."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs/audits"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    audit: AuditConfig = AuditConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    load_dotenv(dotenv_path=root / ".env", override=False)

    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    raw = _apply_env_overrides(raw)

    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply VENUE_AUDIT_* env vars to the raw config dict.

    Supported overrides:
      VENUE_AUDIT_LOG_LEVEL           → raw["logging"]["level"]
      VENUE_AUDIT_OUTPUT_DIR          → raw["output"]["output_dir"]
      VENUE_AUDIT_DEFAULT_VENUE_TYPE  → raw["audit"]["default_venue_type"]
      VENUE_AUDIT_DEBUG               → raw["debug"]
    """
    if log_level := os.environ.get(f"{ENV_PREFIX}LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if output_dir := os.environ.get(f"{ENV_PREFIX}OUTPUT_DIR"):
        raw.setdefault("output", {})["output_dir"] = output_dir

    if venue_type := os.environ.get(f"{ENV_PREFIX}DEFAULT_VENUE_TYPE"):
        raw.setdefault("audit", {})["default_venue_type"] = venue_type

    if debug := os.environ.get(f"{ENV_PREFIX}DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        audit=AuditConfig(**raw.get("audit", {})),
        output=OutputConfig(**raw.get("output", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
