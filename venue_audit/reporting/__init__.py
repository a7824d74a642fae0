"""
venue_audit.reporting — console formatting and file export of audit results.

This package only presents results already produced by the engine; it
never scores anything itself.

Modules:
  formatters — ASCII terminal formatters for the Typer CLI.
  export     — JSON / CSV writers for one audit run.
"""
