"""Data models for nuke.

This module exports the value objects shared by the scanner, the
trash store, and the deletion engine.
"""

from nuke.models.candidate import CandidateEntry
from nuke.models.deletion import DeletionMode, DeletionOutcome, DeletionReport
from nuke.models.trash import EvictionResult, TrashEntry

__all__ = [
    "CandidateEntry",
    "DeletionMode",
    "DeletionOutcome",
    "DeletionReport",
    "EvictionResult",
    "TrashEntry",
]
