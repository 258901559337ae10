"""Skip-pattern path filter.

Entries whose canonical path matches any configured regular expression
are excluded from matching: they are never reported, measured or
deleted. Directories are still descended into.
"""

import os
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PathFilter:
    """Compiled skip patterns.

    Attributes:
        patterns: Compiled regular expressions, tested in order.
    """

    patterns: tuple[re.Pattern[str], ...] = ()

    @classmethod
    def from_patterns(cls, patterns: Iterable[str]) -> "PathFilter":
        """Compile a list of regular expressions.

        Args:
            patterns: Regular expression sources.

        Returns:
            PathFilter holding the compiled patterns.

        Raises:
            re.error: If any pattern is not a valid regular expression.
        """
        return cls(patterns=tuple(re.compile(p) for p in patterns))

    def excludes(self, path: Path) -> bool:
        """Check whether an entry is protected by a skip pattern.

        The path is canonicalized (absolute, symlinks resolved) before
        matching, so a symlink is judged by where it points.

        Args:
            path: Entry path as listed during the walk.

        Returns:
            True if any pattern matches the canonical path.
        """
        if not self.patterns:
            return False

        canonical = os.path.realpath(path)
        return any(pattern.search(canonical) for pattern in self.patterns)
