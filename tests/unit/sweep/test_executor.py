"""Unit tests for ActionExecutor and size measurement.

Tests listing output, size accumulation, dry-run behavior, symlink
safety and deletion failures.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from gitsweep.core.config import RunConfig
from gitsweep.sweep.errors import DeletionError
from gitsweep.sweep.executor import ActionExecutor, measure_size
from gitsweep.sweep.models import EntryKind, RunState


class TestMeasureSize:
    """Tests for measure_size."""

    def test_file_size(self, tmp_path: Path) -> None:
        """Files measure as their length."""
        target = tmp_path / "file.bin"
        target.write_bytes(b"x" * 42)

        assert measure_size(target, EntryKind.FILE) == 42

    def test_directory_size_is_recursive(self, tmp_path: Path) -> None:
        """Directories measure as the sum of all files below them."""
        target = tmp_path / "dir"
        (target / "nested").mkdir(parents=True)
        (target / "a.bin").write_bytes(b"x" * 10)
        (target / "nested" / "b.bin").write_bytes(b"x" * 5)

        assert measure_size(target, EntryKind.DIRECTORY) == 15

    def test_directory_size_skips_symlinks(self, tmp_path: Path) -> None:
        """Symlinks inside a directory do not add their target's size."""
        outside = tmp_path / "big.bin"
        outside.write_bytes(b"x" * 1000)
        target = tmp_path / "dir"
        target.mkdir()
        (target / "small.bin").write_bytes(b"x" * 3)
        (target / "link.bin").symlink_to(outside)

        assert measure_size(target, EntryKind.DIRECTORY) == 3

    def test_symlink_measures_zero(self, tmp_path: Path) -> None:
        """Symlinks are never removed and count as zero bytes."""
        real = tmp_path / "real.bin"
        real.write_bytes(b"x" * 100)
        link = tmp_path / "link"
        link.symlink_to(real)

        assert measure_size(link, EntryKind.SYMLINK) == 0


class TestActionExecutor:
    """Tests for ActionExecutor.execute."""

    def test_dry_run_reports_without_deleting(self, tmp_path: Path, capsys) -> None:
        """Dry-run lists the entry and leaves it in place."""
        target = tmp_path / "ignored.txt"
        target.write_text("content")
        state = RunState()

        ActionExecutor(RunConfig()).execute(target, state)

        assert target.exists()
        assert state.matched == 1
        assert state.deleted == 0
        out = capsys.readouterr().out
        assert "📄" in out
        assert "ignored.txt" in out

    def test_directory_line(self, tmp_path: Path, capsys) -> None:
        """Directories are listed with the folder marker."""
        target = tmp_path / "build"
        target.mkdir()

        ActionExecutor(RunConfig()).execute(target, RunState())

        assert "🗂" in capsys.readouterr().out

    def test_quiet_suppresses_listing(self, tmp_path: Path, capsys) -> None:
        """Quiet mode prints nothing per entry."""
        target = tmp_path / "ignored.txt"
        target.write_text("content")

        ActionExecutor(RunConfig(quiet=True)).execute(target, RunState())

        assert capsys.readouterr().out == ""

    def test_size_suffix_and_total(self, tmp_path: Path, capsys) -> None:
        """Calculate-size appends the size and adds it to the total."""
        target = tmp_path / "ignored.txt"
        target.write_bytes(b"x" * 512)
        state = RunState()

        ActionExecutor(RunConfig(calculate_size=True)).execute(target, state)

        assert state.total_bytes == 512
        assert "(512 B)" in capsys.readouterr().out

    def test_size_measured_before_deletion(self, tmp_path: Path) -> None:
        """Sizes are accumulated even when the entry is then deleted."""
        target = tmp_path / "build"
        target.mkdir()
        (target / "out.o").write_bytes(b"x" * 64)
        state = RunState()

        config = RunConfig(delete=True, quiet=True, calculate_size=True)
        ActionExecutor(config).execute(target, state)

        assert not target.exists()
        assert state.total_bytes == 64
        assert state.deleted == 1

    def test_delete_file(self, tmp_path: Path) -> None:
        """Files are removed individually."""
        target = tmp_path / "ignored.txt"
        target.write_text("content")

        ActionExecutor(RunConfig(delete=True, quiet=True)).execute(target, RunState())

        assert not target.exists()

    def test_delete_directory_recursively(self, tmp_path: Path) -> None:
        """Directories are removed with their contents."""
        target = tmp_path / "folder"
        (target / "deep").mkdir(parents=True)
        (target / "deep" / "file.txt").write_text("content")

        ActionExecutor(RunConfig(delete=True, quiet=True)).execute(target, RunState())

        assert not target.exists()

    def test_symlink_to_file_never_deleted(self, tmp_path: Path) -> None:
        """Symlinks to files survive a delete run."""
        real = tmp_path / "target_file.txt"
        real.write_text("content")
        link = tmp_path / "symlink.txt"
        link.symlink_to(real)
        state = RunState()

        ActionExecutor(RunConfig(delete=True, quiet=True)).execute(link, state)

        assert link.is_symlink()
        assert real.exists()
        assert state.deleted == 0
        assert state.skipped_symlinks == 1

    def test_symlink_to_directory_never_deleted(self, tmp_path: Path) -> None:
        """Symlinks to directories survive and their target is untouched."""
        real = tmp_path / "real_dir"
        real.mkdir()
        (real / "file.txt").write_text("content")
        link = tmp_path / "symlinked_folder"
        link.symlink_to(real)

        ActionExecutor(RunConfig(delete=True, quiet=True)).execute(link, RunState())

        assert link.is_symlink()
        assert (real / "file.txt").exists()

    def test_dead_symlink_never_deleted(self, tmp_path: Path) -> None:
        """Dead symlinks are left in place too."""
        link = tmp_path / "dead_link"
        link.symlink_to(tmp_path / "missing")

        ActionExecutor(RunConfig(delete=True, quiet=True)).execute(link, RunState())

        assert link.is_symlink()

    def test_deletion_failure_raises(self, tmp_path: Path) -> None:
        """Removal errors surface as DeletionError."""
        target = tmp_path / "folder"
        target.mkdir()

        with (
            patch(
                "gitsweep.sweep.executor.shutil.rmtree",
                side_effect=PermissionError(13, "Permission denied"),
            ),
            pytest.raises(DeletionError, match="Failed to delete") as exc_info,
        ):
            ActionExecutor(RunConfig(delete=True, quiet=True)).execute(target, RunState())

        assert exc_info.value.path == target
        assert target.exists()
