"""Rule file compilation and matching.

Wraps pathspec's gitignore implementation. A compiled rule file becomes
an immutable Scope that answers ignore/keep for paths below the
directory the rule file lives in.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from pathspec import GitIgnoreSpec, RegexPattern

from gitsweep.sweep.errors import RuleFileError
from gitsweep.sweep.models import Verdict

logger = logging.getLogger(__name__)

# Group pathspec captures for the slash after a directory a pattern matched.
_DIR_MARK = "ps_d"


def _matches_entry(pattern: RegexPattern, candidate: str) -> bool:
    """Check whether a pattern matches the entry itself.

    Matches that only hold because an ancestor directory matched (``cache/``
    against ``cache/out.log``) do not count.
    """
    result = pattern.match_file(candidate)
    if result is None:
        return False
    match = result.match
    if _DIR_MARK not in match.re.groupindex:
        return True
    mark_end = match.end(_DIR_MARK)
    return mark_end == -1 or mark_end == len(candidate)


@dataclass(frozen=True, slots=True)
class Scope:
    """Compiled rules governing the children of one directory tree.

    Attributes:
        base: Directory containing the rule file; entries are matched
            relative to it.
        spec: Compiled gitignore patterns.
        source: Path of the rule file the scope was compiled from.
    """

    base: Path
    spec: GitIgnoreSpec
    source: Path

    def verdict(self, path: Path, is_dir: bool) -> Verdict:
        """Test a path against the scope's rules.

        Directories are matched with a trailing slash so that
        directory-only rules (``build/``) never match plain files. The
        last rule matching the entry itself decides; a rule that only
        matches one of the entry's parent directories does not.

        Args:
            path: Path of the entry, under ``base``.
            is_dir: Whether the entry is (or points to) a directory.

        Returns:
            Verdict.IGNORED if the rules ignore the path, Verdict.KEPT otherwise.
        """
        try:
            relative = path.relative_to(self.base).as_posix()
        except ValueError:
            return Verdict.KEPT

        if is_dir:
            relative += "/"

        ignored = False
        for pattern in self.spec.patterns:
            if pattern.include is not None and _matches_entry(pattern, relative):
                ignored = pattern.include
        return Verdict.IGNORED if ignored else Verdict.KEPT

    def is_ignored(self, path: Path, is_dir: bool) -> bool:
        """Check whether the scope ignores a path."""
        return self.verdict(path, is_dir) is Verdict.IGNORED


def compile_rule_file(path: Path) -> Scope:
    """Read and compile a rule file into a Scope.

    Args:
        path: Path to the rule file.

    Returns:
        Scope rooted at the rule file's directory.

    Raises:
        RuleFileError: If the file cannot be read, is not valid UTF-8,
            or contains a pattern pathspec rejects.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise RuleFileError(path, f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise RuleFileError(path, str(e)) from e

    try:
        spec = GitIgnoreSpec.from_lines(text.splitlines())
    except ValueError as e:
        raise RuleFileError(path, str(e)) from e

    logger.debug("Compiled %d pattern(s) from %s", len(spec), path)
    return Scope(base=path.parent, spec=spec, source=path)
