"""
Audit engine: runs the seven module scorers and post-processes their output.

Modules
-------
aggregator : run_quiet_audit() + annualised_savings() + total_liabilities()
             + sort_by_priority() — pure functions, no I/O.
recovery   : build_recovery_summary() — horizon buckets and found money.
"""
