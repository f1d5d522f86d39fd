"""Candidate entry model.

A CandidateEntry is a transient work item: created by the walker (or
synthesized from a single path), consumed once by the deletion engine.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CandidateEntry:
    """A filesystem object slated for an operation.

    Attributes:
        path: Absolute path, unique within one batch.
        size: Size in bytes (directories report their inode size).
        mode: Permission and file type bits from lstat.
        mtime: Modification time as a POSIX timestamp.
        is_dir: Whether the entry is a directory (symlinks never are).
        whole_tree: Whether a directory stands for its entire subtree.
            Set for directory targets scanned without recursion; other
            directories are only removed once emptied.
    """

    path: str
    size: int
    mode: int
    mtime: float
    is_dir: bool
    whole_tree: bool = False

    def __post_init__(self) -> None:
        """Validate candidate data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size < 0:
            msg = f"Size cannot be negative, got {self.size}"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Base name of the entry."""
        return os.path.basename(self.path)

    @property
    def modified_at(self) -> datetime:
        """Modification time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.mtime, UTC)

    @property
    def is_symlink(self) -> bool:
        """Whether the entry is a symbolic link."""
        return stat.S_ISLNK(self.mode)

    @property
    def depth(self) -> int:
        """Number of path separators, used for deepest-first ordering."""
        return self.path.count(os.sep)

    @classmethod
    def from_stat(cls, path: str, st: os.stat_result) -> CandidateEntry:
        """Build a candidate from an lstat result.

        Args:
            path: Absolute path the stat result belongs to.
            st: Result of os.lstat (or DirEntry.stat(follow_symlinks=False)).

        Returns:
            New CandidateEntry.
        """
        return cls(
            path=path,
            size=st.st_size,
            mode=st.st_mode,
            mtime=st.st_mtime,
            is_dir=stat.S_ISDIR(st.st_mode),
        )

    @classmethod
    def from_path(cls, path: str | Path) -> CandidateEntry:
        """Synthesize a candidate directly from a path argument.

        Args:
            path: Path to stat (made absolute, symlinks not followed).

        Returns:
            New CandidateEntry.

        Raises:
            OSError: If the path cannot be statted.
        """
        absolute = os.path.abspath(path)
        return cls.from_stat(absolute, os.lstat(absolute))
