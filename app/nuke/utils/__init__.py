"""Utility modules for nuke.

This module exports commonly used utility functions.
"""

from nuke.utils.formatting import (
    console,
    err_console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
    truncate_path,
)

__all__ = [
    "console",
    "err_console",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "truncate_path",
]
