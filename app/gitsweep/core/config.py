"""Run configuration and settings.

This module provides the immutable configuration captured once at the
start of a sweep, and I/O functions for the optional TOML file that
supplies defaults for it.

Configuration is stored in ~/.config/gitsweep/config.toml
"""

import re
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gitsweep.core.paths import get_config_path

RULE_FILE_NAME = ".gitignore"


def _validate_patterns(patterns: list[str]) -> list[str]:
    """Ensure every skip pattern is a valid regular expression."""
    for pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as e:
            msg = f"Invalid skip pattern {pattern!r}: {e}"
            raise ValueError(msg) from None
    return patterns


def _validate_rule_file_name(name: str) -> str:
    """Ensure the rule file name is a bare file name."""
    if not name or "/" in name or name in (".", ".."):
        msg = f"Rule file name must be a plain file name, got {name!r}"
        raise ValueError(msg)
    return name


class FileConfig(BaseModel):
    """Defaults read from the configuration file.

    Deletion cannot be enabled from the file; only the --delete flag does that.

    Attributes:
        quiet: Suppress per-entry listing output.
        ignore_errors: Report and skip directories that cannot be listed.
        skip_nested: Do not descend into directories with their own rule file.
        calculate_size: Measure ignored entries and report the total.
        skip_patterns: Regular expressions protecting canonical paths.
        rule_file_name: Name of the per-directory rule file.
    """

    model_config = ConfigDict(extra="forbid")

    quiet: bool = False
    ignore_errors: bool = False
    skip_nested: bool = False
    calculate_size: bool = False
    skip_patterns: list[str] = Field(default_factory=list)
    rule_file_name: str = RULE_FILE_NAME

    @field_validator("skip_patterns")
    @classmethod
    def validate_skip_patterns(cls, v: list[str]) -> list[str]:
        """Validate that skip patterns compile."""
        return _validate_patterns(v)

    @field_validator("rule_file_name")
    @classmethod
    def validate_rule_file_name(cls, v: str) -> str:
        """Validate the rule file name."""
        return _validate_rule_file_name(v)


class RunConfig(BaseModel):
    """Immutable configuration for a single sweep.

    Attributes:
        delete: Actually remove ignored entries (dry-run otherwise).
        quiet: Suppress per-entry listing output.
        ignore_errors: Downgrade directory listing failures to reported-and-skip.
        skip_nested: Do not descend into directories with their own rule file.
        skip_patterns: Regular expressions protecting canonical paths.
        calculate_size: Measure ignored entries and report the total.
        rule_file_name: Name of the per-directory rule file.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    delete: bool = False
    quiet: bool = False
    ignore_errors: bool = False
    skip_nested: bool = False
    skip_patterns: Annotated[
        tuple[str, ...],
        Field(description="Regular expressions matched against canonical paths"),
    ] = ()
    calculate_size: bool = False
    rule_file_name: Annotated[
        str,
        Field(description="Per-directory rule file name"),
    ] = RULE_FILE_NAME

    @field_validator("skip_patterns")
    @classmethod
    def validate_skip_patterns(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Validate that skip patterns compile."""
        _validate_patterns(list(v))
        return v

    @field_validator("rule_file_name")
    @classmethod
    def validate_rule_file_name(cls, v: str) -> str:
        """Validate the rule file name."""
        return _validate_rule_file_name(v)

    @property
    def dry_run(self) -> bool:
        """Check if this run only reports."""
        return not self.delete


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


def load_file_config(path: Path | None = None) -> FileConfig:
    """Load configuration defaults from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated FileConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return FileConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_file_config_or_default(path: Path | None = None) -> FileConfig:
    """Load configuration defaults, tolerating a missing default file.

    An explicitly requested file must exist; the default file is optional.

    Args:
        path: Explicit config file, or None for the default location.

    Returns:
        FileConfig from the file, or defaults if the default file is absent.

    Raises:
        ConfigError: If the file exists but is invalid, or an explicit
            path does not exist.
    """
    try:
        return load_file_config(path)
    except ConfigNotFoundError:
        if path is not None:
            raise
        return FileConfig()


def build_run_config(
    file_config: FileConfig,
    *,
    delete: bool = False,
    quiet: bool = False,
    ignore_errors: bool = False,
    skip_nested: bool = False,
    skip_patterns: list[str] | None = None,
    calculate_size: bool = False,
) -> RunConfig:
    """Merge file defaults with command-line options.

    Boolean flags can only switch options on. Skip patterns from the
    command line are appended to those from the file.

    Args:
        file_config: Defaults loaded from the configuration file.
        delete: Enable real deletion.
        quiet: Suppress per-entry output.
        ignore_errors: Report and skip listing failures.
        skip_nested: Do not descend into nested rule scopes.
        skip_patterns: Additional skip patterns.
        calculate_size: Measure sizes and report the total.

    Returns:
        Frozen RunConfig.

    Raises:
        pydantic.ValidationError: If a skip pattern is not a valid regex.
    """
    return RunConfig(
        delete=delete,
        quiet=quiet or file_config.quiet,
        ignore_errors=ignore_errors or file_config.ignore_errors,
        skip_nested=skip_nested or file_config.skip_nested,
        skip_patterns=(*file_config.skip_patterns, *(skip_patterns or [])),
        calculate_size=calculate_size or file_config.calculate_size,
        rule_file_name=file_config.rule_file_name,
    )
