"""Durable trash store for soft-deleted items.

Layout under the trash root:

    files/<stamp>_<name>        staged file or directory
    meta/<stamp>_<name>.json    metadata record (TrashEntry)

The metadata directory is the source of truth: an item is in the trash
if and only if its record exists. Records are plain indented JSON so
the trash can be recovered by hand if nuke itself is unavailable.

Concurrent stage calls are safe because every call generates a distinct
name. Listing, eviction, and purging assume no stage is in flight.
"""

import logging
import os
import shutil
import stat
import threading
import time
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

from nuke.core.paths import ensure_dir, get_trash_dir
from nuke.errors import (
    ConflictError,
    NotFoundError,
    NukeIOError,
    PartialMoveError,
    StaleEntryError,
    TrashStoreError,
)
from nuke.models.trash import EvictionResult, TrashEntry
from nuke.trash.transfer import move_path, path_size, remove_path

logger = logging.getLogger(__name__)

_BYTES_PER_MB = 1024 * 1024

# Longest base name kept in a staged name; the full path lives in the record
MAX_NAME_BYTES = 200

# Strictly increasing nanosecond stamps shared by every store in the process
_stamp_lock = threading.Lock()
_last_stamp = 0


def _next_stamp() -> int:
    global _last_stamp
    with _stamp_lock:
        stamp = max(time.time_ns(), _last_stamp + 1)
        _last_stamp = stamp
        return stamp


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _short_name(name: str) -> str:
    """Cut a base name so stamp, name and record suffix fit in NAME_MAX."""
    encoded = os.fsencode(name)
    if len(encoded) <= MAX_NAME_BYTES:
        return name
    return os.fsdecode(encoded[:MAX_NAME_BYTES])


class TrashStore:
    """Stages items into a recoverable holding area and tracks them.

    Storage location: ~/.local/share/nuke/trash (overridable).

    Attributes:
        root: Trash root containing the files/ and meta/ directories.
    """

    FILES_DIRNAME = "files"
    META_DIRNAME = "meta"
    META_SUFFIX = ".json"

    def __init__(
        self,
        root: Path | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the store, creating its directories if needed.

        Args:
            root: Optional override for the trash root.
                  Default: ~/.local/share/nuke/trash
            clock: Source of deletion timestamps (aware datetimes).
                   Default: current UTC time.

        Raises:
            TrashStoreError: If the trash directories cannot be created.
        """
        self._root = Path(root) if root is not None else get_trash_dir()
        self._clock = clock or _utc_now
        self._ensure_dirs()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def files_dir(self) -> Path:
        """Directory holding the staged data."""
        return self._root / self.FILES_DIRNAME

    @property
    def meta_dir(self) -> Path:
        """Directory holding one metadata record per staged item."""
        return self._root / self.META_DIRNAME

    def stage(self, path: str | Path) -> TrashEntry:
        """Move a file or directory into the trash and record it.

        The data is moved first (rename, falling back to copy+remove),
        then the metadata record is written. A failure between the two
        steps leaves staged data without a record; the move is not
        rolled back. Base names longer than MAX_NAME_BYTES are shortened
        in the staged name only.

        Args:
            path: File, symlink, or directory to stage.

        Returns:
            The TrashEntry that was recorded.

        Raises:
            NotFoundError: If the path does not exist.
            PartialMoveError: If a tree was copied across volumes but the
                original could only be partly removed. The copy is
                recorded and can be restored.
            NukeIOError: If the move or the metadata write fails.
        """
        absolute = os.path.abspath(path)

        try:
            st = os.lstat(absolute)
        except FileNotFoundError as e:
            msg = f"No such file or directory: {absolute}"
            raise NotFoundError(msg) from e
        except OSError as e:
            msg = f"Cannot stat {absolute}: {e}"
            raise NukeIOError(msg) from e

        if self._is_inside_trash(absolute):
            msg = f"Refusing to move trash data into itself: {absolute}"
            raise NukeIOError(msg)

        staged_name = f"{_next_stamp()}_{_short_name(os.path.basename(absolute))}"
        trash_path = str(self.files_dir / staged_name)

        partial: PartialMoveError | None = None
        try:
            move_path(absolute, trash_path)
        except PartialMoveError as e:
            # The staged copy is complete, so it must stay restorable
            partial = e

        entry = TrashEntry(
            original_path=absolute,
            trash_path=trash_path,
            deleted_at=self._clock(),
            size=st.st_size,
            is_dir=stat.S_ISDIR(st.st_mode),
        )

        try:
            self._write_record(entry)
        except OSError as e:
            msg = f"Moved {absolute} to trash but could not write its metadata: {e}"
            raise NukeIOError(msg) from e

        if partial is not None:
            raise partial

        logger.info("Staged %s as %s", absolute, staged_name)
        return entry

    def list_entries(self) -> tuple[list[TrashEntry], int]:
        """List every item in the trash with the total size.

        Records whose staged data has vanished are left out of the
        listing (see find_orphans). Directory sizes are recomputed by
        walking the staged tree.

        Returns:
            Tuple of (entries sorted oldest first, total size in bytes).
        """
        entries: list[TrashEntry] = []
        total = 0

        for _, entry in self._read_records():
            if not os.path.lexists(entry.trash_path):
                logger.warning(
                    "Trash record for %s has no staged data at %s",
                    entry.original_path,
                    entry.trash_path,
                )
                continue

            if entry.is_dir:
                entry = entry.with_size(path_size(entry.trash_path))

            entries.append(entry)
            total += entry.size

        entries.sort(key=lambda e: e.deleted_at)
        return entries, total

    def find_orphans(self) -> list[TrashEntry]:
        """Find metadata records whose staged data is missing.

        Returns:
            Records that can no longer be restored.
        """
        return [
            entry
            for _, entry in self._read_records()
            if not os.path.lexists(entry.trash_path)
        ]

    def restore(self, name: str) -> TrashEntry:
        """Move a staged item back to its original location.

        Records are searched in staging order; the first whose original
        base name equals ``name``, or whose original path contains it,
        is restored. Missing parent directories are recreated. The
        record is deleted only after the data is back in place.

        Args:
            name: Base name or fragment of the original path.

        Returns:
            The TrashEntry that was restored.

        Raises:
            NotFoundError: If no record matches.
            StaleEntryError: If the matching record's staged data is gone.
            ConflictError: If the original location is occupied.
            NukeIOError: If the move back fails.
        """
        if not name:
            msg = "Empty name cannot match a trash entry"
            raise NotFoundError(msg)

        for meta_path, entry in self._read_records():
            if entry.name != name and name not in entry.original_path:
                continue

            if not os.path.lexists(entry.trash_path):
                msg = f"Staged data for {entry.original_path} no longer exists: {entry.trash_path}"
                raise StaleEntryError(msg)

            if os.path.lexists(entry.original_path):
                msg = f"Original location already exists: {entry.original_path}"
                raise ConflictError(msg)

            try:
                os.makedirs(os.path.dirname(entry.original_path), exist_ok=True)
            except OSError as e:
                msg = f"Cannot recreate parent directory of {entry.original_path}: {e}"
                raise NukeIOError(msg) from e

            move_path(entry.trash_path, entry.original_path)
            meta_path.unlink(missing_ok=True)

            logger.info("Restored %s", entry.original_path)
            return entry

        msg = f"File not found in trash: {name}"
        raise NotFoundError(msg)

    def evict(self, retention_days: int, max_size_mb: int) -> EvictionResult:
        """Permanently delete items by age, then by total size.

        Phase 1 removes every entry deleted more than ``retention_days``
        ago. Phase 2 runs only if the remaining total still exceeds
        ``max_size_mb`` and removes the oldest entries until it does not.
        Entries whose data cannot be removed are logged and kept.

        Args:
            retention_days: Maximum age in days.
            max_size_mb: Maximum total trash size in MiB.

        Returns:
            EvictionResult with the number of items and bytes removed.

        Raises:
            ValueError: If either limit is negative.
        """
        if retention_days < 0 or max_size_mb < 0:
            msg = "Retention days and max size must be non-negative"
            raise ValueError(msg)

        entries, total = self.list_entries()
        if not entries:
            return EvictionResult()

        cutoff = self._clock() - timedelta(days=retention_days)
        max_bytes = max_size_mb * _BYTES_PER_MB
        removed = 0
        freed = 0

        remaining: list[TrashEntry] = []
        for entry in entries:
            if entry.deleted_at < cutoff and self._discard(entry):
                removed += 1
                freed += entry.size
                total -= entry.size
            else:
                remaining.append(entry)

        if total > max_bytes:
            for entry in sorted(remaining, key=lambda e: e.deleted_at):
                if total <= max_bytes:
                    break
                if self._discard(entry):
                    removed += 1
                    freed += entry.size
                    total -= entry.size

        if removed:
            logger.info("Evicted %d trash item(s), %d bytes", removed, freed)
        return EvictionResult(items_removed=removed, bytes_freed=freed)

    def purge_all(self) -> None:
        """Permanently delete everything in the trash.

        Both directories are removed and recreated empty; calling this
        on an empty trash is a no-op.

        Raises:
            NukeIOError: If either directory cannot be removed.
            TrashStoreError: If the directories cannot be recreated.
        """
        for directory in (self.files_dir, self.meta_dir):
            if not directory.exists():
                continue
            try:
                shutil.rmtree(directory)
            except OSError as e:
                msg = f"Failed to empty {directory}: {e}"
                raise NukeIOError(msg) from e

        self._ensure_dirs()
        logger.info("Purged trash at %s", self._root)

    # === Private helpers ===

    def _ensure_dirs(self) -> None:
        try:
            ensure_dir(self.files_dir, "trash")
            ensure_dir(self.meta_dir, "trash metadata")
        except RuntimeError as e:
            raise TrashStoreError(str(e)) from e

    def _meta_path(self, staged_name: str) -> Path:
        return self.meta_dir / f"{staged_name}{self.META_SUFFIX}"

    def _is_inside_trash(self, path: str) -> bool:
        """Check if path is the trash root, inside it, or one of its ancestors."""
        root = os.path.abspath(self._root)
        return os.path.commonpath([path, root]) in (path, root)

    def _write_record(self, entry: TrashEntry) -> None:
        """Write a metadata record atomically (temp file + rename)."""
        meta_path = self._meta_path(entry.staged_name)
        tmp_path = meta_path.with_name(meta_path.name + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            f.write(entry.to_json() + "\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, meta_path)

    def _read_records(self) -> Iterator[tuple[Path, TrashEntry]]:
        """Yield (record path, entry) for every readable record, oldest first."""
        try:
            meta_paths = sorted(self.meta_dir.glob(f"*{self.META_SUFFIX}"))
        except OSError as e:
            msg = f"Cannot read trash metadata directory {self.meta_dir}: {e}"
            raise NukeIOError(msg) from e

        for meta_path in meta_paths:
            try:
                entry = TrashEntry.from_json(meta_path.read_text(encoding="utf-8"))
            except (OSError, KeyError, ValueError) as e:
                logger.warning("Skipping corrupt trash record %s: %s", meta_path.name, e)
                continue
            yield meta_path, entry

    def _discard(self, entry: TrashEntry) -> bool:
        """Delete staged data and its record; False if the data stays."""
        try:
            remove_path(entry.trash_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not evict %s: %s", entry.trash_path, e)
            return False

        self._meta_path(entry.staged_name).unlink(missing_ok=True)
        return True
