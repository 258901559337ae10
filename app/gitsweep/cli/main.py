"""Main CLI application entry point.

Defines the Typer application, validates the root path, assembles the
run configuration and hands off to the sweeper.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.logging import RichHandler

from gitsweep import __version__
from gitsweep.core.config import ConfigError, build_run_config, load_file_config_or_default
from gitsweep.sweep.errors import SweepError
from gitsweep.sweep.walker import Sweeper
from gitsweep.utils.formatting import console, err_console, format_size, print_error

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="gitsweep",
    help="Remove files and directories ignored by nested .gitignore rules.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"gitsweep version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command()
def main(
    path: Annotated[
        Path,
        typer.Argument(help="Root path to clean from."),
    ],
    delete: Annotated[
        bool,
        typer.Option("--delete", "-d", help="Enable deletion (default is a dry run)."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Do not list matched entries."),
    ] = False,
    ignore_errors: Annotated[
        bool,
        typer.Option(
            "--ignore-errors",
            "-i",
            help="Report and skip directories that cannot be read.",
        ),
    ] = False,
    skip_nested: Annotated[
        bool,
        typer.Option(
            "--skip-nested",
            help="Do not descend into directories with their own .gitignore.",
        ),
    ] = False,
    skip_patterns: Annotated[
        list[str] | None,
        typer.Option(
            "--skip-patterns",
            help="Regex matched against canonical paths; matches are never deleted.",
        ),
    ] = None,
    calculate_size: Annotated[
        bool,
        typer.Option(
            "--calculate-size",
            help="Measure matched entries and print the total.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration file (default: ~/.config/gitsweep/config.toml).",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Remove entries matched by .gitignore files below PATH.

    Each directory's own .gitignore replaces its parent's rules for that
    subtree. Runs as a dry run unless --delete is given; symbolic links
    are never removed.
    """
    _configure_logging(verbose)
    logger.debug("gitsweep %s started", __version__)

    if not path.exists():
        print_error(f"Path {path} does not exist!")
        raise typer.Exit(code=1)

    if not path.is_dir():
        print_error(f"Path {path} is not a directory!")
        raise typer.Exit(code=1)

    try:
        file_config = load_file_config_or_default(config_path)
        config = build_run_config(
            file_config,
            delete=delete,
            quiet=quiet,
            ignore_errors=ignore_errors,
            skip_nested=skip_nested,
            skip_patterns=skip_patterns,
            calculate_size=calculate_size,
        )
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except ValidationError as e:
        print_error(f"Invalid options: {e}")
        raise typer.Exit(code=1) from e

    try:
        state = Sweeper(path, config).sweep()
    except SweepError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if config.calculate_size:
        console.print(f"Total size: [size]{format_size(state.total_bytes)}[/]")


if __name__ == "__main__":
    app()
