"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.markup import escape

from gitsweep.core.theme import get_theme

_SIZE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB")


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def format_size(size_bytes: int | None) -> str:
    """Format byte count as human-readable string.

    Args:
        size_bytes: Number of bytes, or None if unknown.

    Returns:
        String such as "0 B", "512 B" or "1.5 KB".
    """
    if size_bytes is None or size_bytes == 0:
        return "0 B"
    size = float(size_bytes)
    for unit in _SIZE_UNITS:
        if abs(size) < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} TB"


def format_entry_line(path: str, is_dir: bool, size_bytes: int | None = None) -> str:
    """Format the listing line for an ignored entry.

    Args:
        path: Entry path to display.
        is_dir: Whether the entry is shown as a directory.
        size_bytes: Measured size; a size suffix is added when not None.

    Returns:
        Rich markup string for the entry.
    """
    if is_dir:
        line = f"🗂️  [directory]{escape(path)}[/]"
    else:
        line = f"📄 [file]{escape(path)}[/]"

    if size_bytes is not None:
        line += f" [size]({format_size(size_bytes)})[/]"
    return line


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}", soft_wrap=True)
