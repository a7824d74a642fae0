"""
Closed vocabularies used across the audit engine.

Every tag that the scorers, aggregator and post-processor branch on is a
``StrEnum`` here, so the priority sort and bucket partition switch on enum
members rather than raw strings.  Values are the upper-case strings the
surrounding application already stores (``"GOOD"``, ``"HIGH"`` ...), which
keeps serialised results byte-compatible.

Usage example::

    from venue_audit.taxonomy.audit_taxonomy import Priority, Status

    if sub.status is Status.POOR and rec.priority is Priority.HIGH:
        ...

This module has NO imports from any other ``venue_audit`` package.
"""

from enum import StrEnum


class VenueType(StrEnum):
    """Venue format; selects the benchmark set."""

    FINE_DINING = "fine_dining"
    CASUAL_DINING = "casual_dining"
    CAFE = "cafe"
    BAR_PUB = "bar_pub"
    FAST_CASUAL = "fast_casual"


class AuditSource(StrEnum):
    """Who supplied the snapshot."""

    INTERNAL = "INTERNAL"
    """Numbers pulled from the venue's own systems (POS, payroll, P&L)."""

    EXTERNAL = "EXTERNAL"
    """Numbers self-reported through the intake questionnaire."""


class DataSource(StrEnum):
    """Provenance of a single sub-score."""

    INTERNAL = "INTERNAL"
    DOCUMENT = "DOCUMENT"
    QUESTIONNAIRE = "QUESTIONNAIRE"
    ESTIMATED = "ESTIMATED"
    """Driving field was absent; the scorer's default was substituted."""


class Status(StrEnum):
    """Traffic-light status of a sub-score."""

    GOOD = "GOOD"
    FAIR = "FAIR"
    POOR = "POOR"


class Priority(StrEnum):
    """Recommendation urgency."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class Difficulty(StrEnum):
    """Effort required to act on a recommendation."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Confidence(StrEnum):
    """How far the numbers behind a score can be trusted."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class Trend(StrEnum):
    """Direction of a module score against the caller-supplied previous score."""

    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class ScoreBand(StrEnum):
    """Named tier derived from a 0–100 score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"


class ModuleKey(StrEnum):
    """The seven audit modules, in report order."""

    FOOD = "food"
    BEVERAGE = "beverage"
    LABOUR = "labour"
    OVERHEAD = "overhead"
    SERVICE = "service"
    MARKETING = "marketing"
    COMPLIANCE = "compliance"


class RedLineSeverity(StrEnum):
    """Severity tier of a compliance red line."""

    CRITICAL = "CRITICAL"
    """Caps the Compliance score at 39."""

    SIGNIFICANT = "SIGNIFICANT"
    """Caps the Compliance score at 59."""


# Sort key for recommendation priority (lower sorts first).
PRIORITY_ORDER: dict[Priority, int] = {
    Priority.HIGH:   0,
    Priority.MEDIUM: 1,
    Priority.LOW:    2,
}
