"""Filesystem scanning.

This module provides the walker that turns a root path into an ordered
list of deletion candidates.
"""

from nuke.scanner.walker import scan, sort_deepest_first

__all__ = [
    "scan",
    "sort_deepest_first",
]
