"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def no_dry_run_delay(monkeypatch: pytest.MonkeyPatch) -> None:
    """Skip the cosmetic pause before dry runs."""
    monkeypatch.setattr("gitsweep.sweep.walker.DRY_RUN_DELAY_SECONDS", 0)


@pytest.fixture(autouse=True)
def isolated_config_home(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory."""
    config_home = tmp_path_factory.mktemp("xdg_config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def write_rules():
    """Write a rule file with the given lines into a directory."""

    def _write(directory: Path, *lines: str, name: str = ".gitignore") -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        rule_file = directory / name
        rule_file.write_text("".join(f"{line}\n" for line in lines))
        return rule_file

    return _write


@pytest.fixture
def broken_rules():
    """Write a rule file that cannot be decoded."""

    def _write(directory: Path, name: str = ".gitignore") -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        rule_file = directory / name
        rule_file.write_bytes(b"\xff\xfe\xfa not utf-8\n")
        return rule_file

    return _write
