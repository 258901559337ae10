"""Sweep domain models.

This module defines the data structures shared by the traversal engine,
the scope resolver and the action executor: entry kinds, match verdicts
and the mutable run state accumulated over a walk.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(str, Enum):
    """Type of filesystem entry.

    Attributes:
        DIRECTORY: Real directory (not a symlink to one).
        FILE: Regular file.
        SYMLINK: Symbolic link, live or dead, to anything.
        OTHER: Sockets, FIFOs, devices and entries that vanished.
    """

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    OTHER = "other"

    @classmethod
    def of(cls, path: Path) -> "EntryKind":
        """Classify a path.

        Symlinks are checked first because is_dir/is_file follow them.

        Args:
            path: Path to classify.

        Returns:
            EntryKind for the path as it currently exists on disk.
        """
        if path.is_symlink():
            return cls.SYMLINK
        if path.is_dir():
            return cls.DIRECTORY
        if path.is_file():
            return cls.FILE
        return cls.OTHER


class Verdict(str, Enum):
    """Outcome of testing an entry against the active scope."""

    IGNORED = "ignored"
    KEPT = "kept"


@dataclass(slots=True)
class RunState:
    """Mutable state accumulated across a whole sweep.

    Owned by the top-level sweep call and passed down the recursion.

    Attributes:
        total_bytes: Bytes measured for ignored entries (calculate-size only).
        matched: Number of entries that received an IGNORED verdict.
        deleted: Number of entries actually removed.
        skipped_symlinks: Ignored symlinks left in place during a delete run.
    """

    total_bytes: int = 0
    matched: int = 0
    deleted: int = 0
    skipped_symlinks: int = 0

    def add_bytes(self, size: int) -> None:
        """Add a measured size to the running total."""
        if size < 0:
            msg = f"Size cannot be negative, got {size}"
            raise ValueError(msg)
        self.total_bytes += size
