"""Rule-scoped sweeping of ignored files and directories.

This module provides rule file compilation, scope resolution, the
skip-pattern filter, the traversal engine and the action executor.
"""

from gitsweep.sweep.errors import DeletionError, ListingError, RuleFileError, SweepError
from gitsweep.sweep.executor import ActionExecutor, measure_size
from gitsweep.sweep.filter import PathFilter
from gitsweep.sweep.models import EntryKind, RunState, Verdict
from gitsweep.sweep.rules import Scope, compile_rule_file
from gitsweep.sweep.scope import ScopeAction, ScopeResolution, resolve_root_scope, resolve_scope
from gitsweep.sweep.walker import Sweeper

__all__ = [
    "ActionExecutor",
    "DeletionError",
    "EntryKind",
    "ListingError",
    "PathFilter",
    "RuleFileError",
    "RunState",
    "Scope",
    "ScopeAction",
    "ScopeResolution",
    "SweepError",
    "Sweeper",
    "Verdict",
    "compile_rule_file",
    "measure_size",
    "resolve_root_scope",
    "resolve_scope",
]
