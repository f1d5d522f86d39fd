"""Trash entry models.

This module defines the durable record written for every staged item
and the summary returned by a retention sweep.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class TrashEntry:
    """Metadata record for one staged (soft-deleted) item.

    Written once by stage, then removed by restore or eviction. The
    record on disk is the source of truth for what the trash contains.

    Attributes:
        original_path: Absolute path the item was removed from.
        trash_path: Absolute path of the staged data.
        deleted_at: When the item was staged (timezone-aware).
        size: Size in bytes (aggregate for directories when listed).
        is_dir: Whether the staged item is a directory.
    """

    original_path: str
    trash_path: str
    deleted_at: datetime
    size: int
    is_dir: bool

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.original_path:
            msg = "Original path cannot be empty"
            raise ValueError(msg)
        if not self.trash_path:
            msg = "Trash path cannot be empty"
            raise ValueError(msg)
        if self.deleted_at.tzinfo is None:
            msg = "Deletion timestamp must be timezone-aware"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Base name of the original path."""
        return os.path.basename(self.original_path)

    @property
    def staged_name(self) -> str:
        """Generated name of the staged data (also keys the metadata record)."""
        return os.path.basename(self.trash_path)

    def with_size(self, size: int) -> TrashEntry:
        """Return a copy with a recomputed size."""
        return replace(self, size=size)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage.

        Returns:
            Dictionary representation of the trash entry.
        """
        return {
            "original_path": self.original_path,
            "trash_path": self.trash_path,
            "deleted_at": self.deleted_at.isoformat(),
            "size": self.size,
            "is_dir": self.is_dir,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TrashEntry:
        """Deserialize from dictionary.

        Args:
            data: Dictionary containing entry data.

        Returns:
            TrashEntry instance.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If the timestamp or any field is invalid.
        """
        return cls(
            original_path=data["original_path"],
            trash_path=data["trash_path"],
            deleted_at=datetime.fromisoformat(data["deleted_at"]),
            size=int(data.get("size", 0)),
            is_dir=bool(data.get("is_dir", False)),
        )

    def to_json(self) -> str:
        """Serialize to indented, human-readable JSON."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, text: str) -> TrashEntry:
        """Deserialize from JSON text.

        Raises:
            json.JSONDecodeError: If the text is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        return cls.from_dict(json.loads(text))


@dataclass(frozen=True, slots=True)
class EvictionResult:
    """Outcome of a retention sweep.

    Attributes:
        items_removed: Number of entries permanently deleted.
        bytes_freed: Total size of the removed entries.
    """

    items_removed: int = 0
    bytes_freed: int = 0
