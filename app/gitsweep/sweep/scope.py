"""Scope resolution for directories visited during a sweep.

Decides, per directory, whether a new rule scope begins, the parent
scope is inherited, or descent stops. A directory's own rule file
replaces the inherited scope; it never merges with it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from gitsweep.core.config import RULE_FILE_NAME
from gitsweep.sweep.errors import RuleFileError
from gitsweep.sweep.rules import Scope, compile_rule_file
from gitsweep.utils.formatting import print_error

logger = logging.getLogger(__name__)


def _rule_file_exists(rule_file: Path) -> bool:
    """Check for a rule file, treating an unreadable directory as having none."""
    try:
        return rule_file.exists()
    except OSError as e:
        logger.debug("Cannot check for %s: %s", rule_file, e)
        return False


class ScopeAction(str, Enum):
    """What the walker should do with a directory.

    Attributes:
        RECURSE: Walk the directory's children with the resolved scope.
        SKIP_DESCENT: Leave the directory's children alone.
        ABORT: Stop the whole walk before anything is visited (root only).
    """

    RECURSE = "recurse"
    SKIP_DESCENT = "skip_descent"
    ABORT = "abort"


@dataclass(frozen=True, slots=True)
class ScopeResolution:
    """Result of resolving the scope for a directory.

    Attributes:
        action: Signal for the walker.
        scope: Scope for the children when action is RECURSE, None otherwise
            or when no rules are in effect.
    """

    action: ScopeAction
    scope: Scope | None = None

    @property
    def should_recurse(self) -> bool:
        """Check if the walker should descend."""
        return self.action is ScopeAction.RECURSE


def resolve_scope(
    directory: Path,
    inherited: Scope | None,
    *,
    skip_nested: bool = False,
    rule_file_name: str = RULE_FILE_NAME,
) -> ScopeResolution:
    """Resolve the scope for a nested directory's children.

    Args:
        directory: Directory about to be walked.
        inherited: Scope in effect for the directory's parent.
        skip_nested: If True, never descend into directories that carry
            their own rule file.
        rule_file_name: Name of the per-directory rule file.

    Returns:
        ScopeResolution. A rule file that fails to compile is reported
        and yields SKIP_DESCENT for this subtree only.
    """
    rule_file = directory / rule_file_name
    if not _rule_file_exists(rule_file):
        logger.debug("Visiting %s with parent rules", directory)
        return ScopeResolution(ScopeAction.RECURSE, inherited)

    try:
        scope = compile_rule_file(rule_file)
    except RuleFileError as e:
        logger.debug("Rule file error: %s", e)
        print_error(f"Failed to parse rule file at {rule_file}: {e.reason}. Skipping directory...")
        return ScopeResolution(ScopeAction.SKIP_DESCENT)

    if skip_nested:
        logger.debug("Skipping nested rule scope at %s", directory)
        return ScopeResolution(ScopeAction.SKIP_DESCENT)

    logger.debug("Visiting %s with new rules from %s", directory, rule_file)
    return ScopeResolution(ScopeAction.RECURSE, scope)


def resolve_root_scope(root: Path, *, rule_file_name: str = RULE_FILE_NAME) -> ScopeResolution:
    """Resolve the scope the walk starts with.

    Unlike nested directories, a broken root rule file aborts the whole
    walk, and skip-nested does not apply.

    Args:
        root: Root directory of the sweep.
        rule_file_name: Name of the per-directory rule file.

    Returns:
        RECURSE with the root scope (None when the root has no rule file),
        or ABORT when the root rule file fails to compile.
    """
    rule_file = root / rule_file_name
    if not _rule_file_exists(rule_file):
        logger.debug("No rule file at root %s", root)
        return ScopeResolution(ScopeAction.RECURSE)

    try:
        scope = compile_rule_file(rule_file)
    except RuleFileError as e:
        logger.debug("Root rule file error: %s", e)
        print_error(f"Failed to parse rule file at {rule_file}: {e.reason}. Nothing to clean.")
        return ScopeResolution(ScopeAction.ABORT)

    return ScopeResolution(ScopeAction.RECURSE, scope)
