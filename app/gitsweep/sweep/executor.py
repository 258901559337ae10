"""Action executor for ignored entries.

Reports, measures and (when enabled) deletes entries that received an
IGNORED verdict. Symbolic links are never removed.
"""

import logging
import os
import shutil
from pathlib import Path

from gitsweep.core.config import RunConfig
from gitsweep.sweep.errors import DeletionError
from gitsweep.sweep.models import EntryKind, RunState
from gitsweep.utils.formatting import console, format_entry_line

logger = logging.getLogger(__name__)


def measure_size(path: Path, kind: EntryKind) -> int:
    """Get size in bytes for an entry.

    For files, returns the file size. For directories, returns the sum
    of all regular files below it without following symlinks. Symlinks
    and other kinds measure as 0. Unreadable children are skipped.

    Args:
        path: Entry to measure.
        kind: Classification of the entry.

    Returns:
        Size in bytes.
    """
    if kind is EntryKind.FILE:
        try:
            return path.stat().st_size
        except OSError as e:
            logger.warning("Cannot measure %s: %s", path, e)
            return 0

    if kind is not EntryKind.DIRECTORY:
        return 0

    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for name in filenames:
            child = os.path.join(dirpath, name)
            try:
                if not os.path.islink(child):
                    total += os.lstat(child).st_size
            except OSError:
                continue
    return total


class ActionExecutor:
    """Handles entries with an IGNORED verdict.

    Attributes:
        _config: Run configuration (delete, quiet, calculate_size).
    """

    def __init__(self, config: RunConfig) -> None:
        """Initialize the ActionExecutor.

        Args:
            config: Immutable run configuration.
        """
        self._config = config

    def execute(self, path: Path, state: RunState) -> None:
        """Report, measure and possibly delete an ignored entry.

        The size is measured before anything is removed.

        Args:
            path: Ignored entry.
            state: Run state receiving counters and the size total.

        Raises:
            DeletionError: If deletion is enabled and removal fails.
        """
        kind = EntryKind.of(path)
        state.matched += 1

        size: int | None = None
        if self._config.calculate_size:
            size = measure_size(path, kind)
            state.add_bytes(size)

        if not self._config.quiet:
            console.print(format_entry_line(str(path), path.is_dir(), size), soft_wrap=True)

        if self._config.dry_run:
            return

        self._delete(path, kind, state)

    def _delete(self, path: Path, kind: EntryKind, state: RunState) -> None:
        """Remove a single entry.

        Dispatches on the entry kind:
        - Symlinks: never removed
        - Directories: shutil.rmtree
        - Files: Path.unlink
        - Anything else: left in place

        Args:
            path: Entry to remove.
            kind: Classification of the entry.
            state: Run state receiving counters.

        Raises:
            DeletionError: If the filesystem refuses the removal.
        """
        if kind is EntryKind.SYMLINK:
            logger.debug("Not deleting symlink %s", path)
            state.skipped_symlinks += 1
            return

        try:
            if kind is EntryKind.DIRECTORY:
                shutil.rmtree(path)
            elif kind is EntryKind.FILE:
                path.unlink()
            else:
                logger.debug("Not deleting special entry %s", path)
                return
        except OSError as e:
            raise DeletionError(path, e) from e

        state.deleted += 1
