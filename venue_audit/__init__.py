"""
venue_audit — operations-audit scoring engine for hospitality venues.

Given one snapshot of operational metrics, ``run_quiet_audit`` scores seven
modules (food, beverage, labour, overhead, service, marketing, compliance)
against venue-type benchmarks and returns a priority-sorted, costed list of
corrective actions.  ``build_recovery_summary`` buckets those actions by
horizon and totals the money they recover.
"""

from venue_audit.engine.aggregator import run_quiet_audit
from venue_audit.engine.recovery import build_recovery_summary
from venue_audit.models.audit_input import AuditInput

__all__ = ["AuditInput", "build_recovery_summary", "run_quiet_audit"]
__version__ = "0.1.0"
