"""Recoverable trash.

This module provides the durable trash store and the rename-or-copy
transfer protocol used to move data in and out of it.
"""

from nuke.trash.store import TrashStore
from nuke.trash.transfer import copy_path, move_path, path_size, remove_path

__all__ = [
    "TrashStore",
    "copy_path",
    "move_path",
    "path_size",
    "remove_path",
]
