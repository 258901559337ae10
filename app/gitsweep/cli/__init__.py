"""CLI package for gitsweep.

This package contains the Typer application.
"""

from gitsweep.cli.main import app

__all__ = ["app"]
