"""
Module scorers: one pure function per audit module.

Each ``score_<module>(audit_input) -> ModuleResult`` reads only its own
sub-record (plus the shared venue type, source and the few cross-module
facts documented in its module docstring) and never another scorer's
output, so the seven can run in any order.

Modules
-------
common     : shared helpers (rounding, weighted average, data-source tags,
             trend, ModuleResult assembly).
food, beverage, labour, overhead, service, marketing : module scorers.
compliance : scorer plus evaluate_red_lines() / apply_red_line_ceiling().
"""
