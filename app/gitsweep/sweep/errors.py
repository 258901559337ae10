"""Exceptions raised by the sweep engine.

Listing and deletion failures carry the offending path so callers can
report them with enough context to locate the problem.
"""

from pathlib import Path


class SweepError(Exception):
    """Base exception for sweep errors."""


class ListingError(SweepError):
    """Raised when a directory cannot be listed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot list directory {path}: {cause}")


class DeletionError(SweepError):
    """Raised when an ignored entry cannot be removed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to delete {path}: {cause}")


class RuleFileError(SweepError):
    """Raised when a rule file cannot be read or compiled."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse rule file at {path}: {reason}")
