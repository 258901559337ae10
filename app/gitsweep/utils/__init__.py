"""Utility modules for gitsweep.

This module exports commonly used utility functions.
"""

from gitsweep.utils.formatting import (
    console,
    err_console,
    format_entry_line,
    format_size,
    print_error,
)

__all__ = [
    "console",
    "err_console",
    "format_entry_line",
    "format_size",
    "print_error",
]
