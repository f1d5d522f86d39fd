"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import os
import sys

from rich.console import Console

from nuke.core.theme import get_theme

_KB = 1024
_MB = _KB * 1024
_GB = _MB * 1024
_TB = _GB * 1024


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


def format_size(size_bytes: int) -> str:
    """Format a byte count as a human-readable string.

    Args:
        size_bytes: Size in bytes.

    Returns:
        String such as "512 B", "1.50 KB" or "2.00 GB".
    """
    for unit_size, unit in ((_TB, "TB"), (_GB, "GB"), (_MB, "MB"), (_KB, "KB")):
        if size_bytes >= unit_size:
            return f"{size_bytes / unit_size:.2f} {unit}"
    return f"{size_bytes} B"


def truncate_path(path: str, max_len: int) -> str:
    """Shorten a path for display, keeping the file name visible.

    Args:
        path: Path to shorten.
        max_len: Maximum length of the result.

    Returns:
        The path itself if short enough, otherwise a shortened form such
        as "/home/.../report.txt".
    """
    if len(path) <= max_len:
        return path

    parts = path.split(os.sep)
    if len(parts) <= 2:
        return path[: max_len - 3] + "..."

    filename = parts[-1]
    if len(filename) > max_len - 6:
        return "..." + path[len(path) - max_len + 3 :]

    prefix = os.sep + parts[1] if parts[0] == "" else parts[0]
    if max_len - len(prefix) - len(filename) - 4 < 0:
        return "..." + path[len(path) - max_len + 3 :]

    return f"{prefix}{os.sep}...{os.sep}{filename}"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
