"""Deletion engine.

This module provides the concurrent engine that soft-deletes or
securely erases a batch of candidates, and the shred primitives.
"""

from nuke.deleter.engine import DEFAULT_WORKERS, DeletionEngine, ProgressCallback
from nuke.deleter.shred import CHUNK_SIZE, SHRED_PASSES, shred_file, shred_tree

__all__ = [
    "CHUNK_SIZE",
    "DEFAULT_WORKERS",
    "SHRED_PASSES",
    "DeletionEngine",
    "ProgressCallback",
    "shred_file",
    "shred_tree",
]
