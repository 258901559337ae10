"""Depth-first traversal engine.

Walks a directory tree, testing each entry against the rule scope in
effect for its directory. Ignored entries go to the action executor
and are never descended into; kept directories are walked with the
scope the resolver hands back.
"""

import logging
import time
from pathlib import Path

from gitsweep.core.config import RunConfig
from gitsweep.sweep.errors import ListingError
from gitsweep.sweep.executor import ActionExecutor
from gitsweep.sweep.filter import PathFilter
from gitsweep.sweep.models import RunState
from gitsweep.sweep.rules import Scope
from gitsweep.sweep.scope import ScopeAction, resolve_root_scope, resolve_scope
from gitsweep.utils.formatting import console, print_error

logger = logging.getLogger(__name__)

DRY_RUN_DELAY_SECONDS = 0.5


class Sweeper:
    """Removes ignored entries below a root directory.

    Args:
        root: Directory to sweep.
        config: Immutable run configuration.
    """

    def __init__(self, root: Path, config: RunConfig) -> None:
        self._root = root
        self._config = config
        self._filter = PathFilter.from_patterns(config.skip_patterns)
        self._executor = ActionExecutor(config)

    @property
    def root(self) -> Path:
        """Root directory as given; listed entries are shown below it."""
        return self._root

    def sweep(self) -> RunState:
        """Run the sweep from the root.

        Returns:
            RunState with counters and the measured byte total.

        Raises:
            ListingError: If a directory cannot be listed and errors are
                not ignored.
            DeletionError: If an ignored entry cannot be removed.
        """
        state = RunState()

        if self._config.dry_run:
            console.print("🚫 Running in dry-run mode. Pass --delete to actually delete.")
            time.sleep(DRY_RUN_DELAY_SECONDS)

        resolution = resolve_root_scope(self._root, rule_file_name=self._config.rule_file_name)
        if resolution.action is ScopeAction.ABORT:
            logger.debug("Sweep of %s aborted by root rule file", self._root)
            return state

        self._walk(self._root, resolution.scope, state)
        logger.debug(
            "Sweep finished: %d matched, %d deleted, %d bytes",
            state.matched,
            state.deleted,
            state.total_bytes,
        )
        return state

    def _walk(self, directory: Path, scope: Scope | None, state: RunState) -> None:
        """Visit every immediate entry of a directory.

        Args:
            directory: Directory to list.
            scope: Rules in effect for the directory's children.
            state: Run state shared by the whole walk.

        Raises:
            ListingError: If listing fails and errors are not ignored.
        """
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            if self._config.ignore_errors:
                print_error(f"Error processing directory {directory}: {e}")
                return
            raise ListingError(directory, e) from e

        for entry in entries:
            self._visit(entry, scope, state)

    def _visit(self, entry: Path, scope: Scope | None, state: RunState) -> None:
        """Decide and act on a single entry.

        Args:
            entry: Entry to process.
            scope: Rules in effect for the entry's directory.
            state: Run state shared by the whole walk.
        """
        logger.debug("entry %s", entry)

        if not entry.exists() and not entry.is_symlink():
            logger.debug("Entry vanished before visit: %s", entry)
            return

        is_dir = entry.is_dir()

        if self._filter.excludes(entry):
            logger.debug("Skip pattern protects %s", entry)
        elif scope is not None and scope.is_ignored(entry, is_dir):
            self._executor.execute(entry, state)
            return

        # Only real directories are walked; symlinks are terminal.
        if not is_dir or entry.is_symlink():
            return

        resolution = resolve_scope(
            entry,
            scope,
            skip_nested=self._config.skip_nested,
            rule_file_name=self._config.rule_file_name,
        )
        if not resolution.should_recurse:
            return

        try:
            self._walk(entry, resolution.scope, state)
        except (ListingError, OSError) as e:
            if not self._config.ignore_errors:
                raise
            print_error(f"Error processing file {entry}: {e}")
