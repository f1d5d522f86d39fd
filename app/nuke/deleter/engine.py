"""Concurrent deletion engine.

Applies a disposition (soft-delete into the trash, or secure erase) to
a batch of candidates. Files are processed by a bounded pool of worker
threads draining a shared queue; directories follow sequentially,
longest path first, once every file worker has finished.

A failure on one candidate is reported and the batch continues. There
is no cancellation: items already picked up by a worker always run to
completion, so no file is left half-moved or half-overwritten.
"""

import errno
import logging
import os
import queue
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor

from nuke.deleter.shred import shred_file, shred_tree
from nuke.errors import NukeError
from nuke.models.candidate import CandidateEntry
from nuke.models.deletion import DeletionMode, DeletionOutcome, DeletionReport
from nuke.trash.store import TrashStore
from nuke.trash.transfer import remove_path

logger = logging.getLogger(__name__)

# Called once per candidate, possibly from several threads at once
ProgressCallback = Callable[[str, Exception | None], None]

DEFAULT_WORKERS = 8


class DeletionEngine:
    """Deletes candidates with bounded parallelism.

    Soft-delete stages items into the trash store. Without a trash store
    it degrades to an irreversible direct removal. Secure erase never
    touches the trash.

    Attributes:
        mode: Disposition applied to every candidate.
        workers: Maximum number of concurrent file workers.
        trash: Trash store used by soft-delete, or None.
    """

    def __init__(
        self,
        mode: DeletionMode = DeletionMode.SOFT,
        workers: int = DEFAULT_WORKERS,
        trash: TrashStore | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            mode: Soft-delete or secure erase.
            workers: Worker count; non-positive values fall back to 8.
            trash: Trash store for soft-delete.
        """
        self.mode = mode
        self.workers = workers if workers > 0 else DEFAULT_WORKERS
        self.trash = trash

        if mode == DeletionMode.SOFT and trash is None:
            logger.warning("No trash store configured: soft-delete removes items permanently")

    def apply(
        self,
        candidates: Iterable[CandidateEntry],
        on_progress: ProgressCallback | None = None,
    ) -> DeletionReport:
        """Dispose of every candidate and report the outcomes.

        Candidates are partitioned once into files and directories.
        Files are handled concurrently; directories are handled after
        all files, deepest first. A directory that does not stand for
        its whole tree fails with ENOTEMPTY while anything is left in it.

        Args:
            candidates: Entries to delete (typically from the walker).
            on_progress: Optional callback ``(path, error_or_none)``.

        Returns:
            DeletionReport with one outcome per candidate.
        """
        files: list[CandidateEntry] = []
        directories: list[CandidateEntry] = []
        for candidate in candidates:
            (directories if candidate.is_dir else files).append(candidate)

        report = DeletionReport()

        self._delete_files(files, report, on_progress)

        # Independent of the walker's ordering: callers may bypass it
        directories.sort(key=lambda d: len(d.path), reverse=True)
        for directory in directories:
            self._process(directory, report, on_progress)

        logger.debug(
            "Deletion batch done: %d succeeded, %d failed",
            report.success_count,
            report.failure_count,
        )
        return report

    def dispose(self, candidate: CandidateEntry) -> None:
        """Apply the configured disposition to one candidate.

        Args:
            candidate: File or directory to dispose of.

        Raises:
            NukeError: If the trash or shred operation fails.
            OSError: If a direct removal fails.
        """
        if candidate.is_dir:
            self._dispose_directory(candidate)
        else:
            self._dispose_file(candidate)

    # === Private helpers ===

    def _delete_files(
        self,
        files: list[CandidateEntry],
        report: DeletionReport,
        on_progress: ProgressCallback | None,
    ) -> None:
        if not files:
            return

        # Filled completely before any worker starts; workers stop once it is empty
        work: queue.Queue[CandidateEntry] = queue.Queue()
        for candidate in files:
            work.put(candidate)

        worker_count = min(self.workers, len(files))
        with ThreadPoolExecutor(
            max_workers=worker_count, thread_name_prefix="nuke-worker"
        ) as executor:
            futures = [
                executor.submit(self._drain, work, report, on_progress)
                for _ in range(worker_count)
            ]

        # Surface errors raised by the progress callback itself
        for future in futures:
            future.result()

    def _drain(
        self,
        work: queue.Queue[CandidateEntry],
        report: DeletionReport,
        on_progress: ProgressCallback | None,
    ) -> None:
        while True:
            try:
                candidate = work.get_nowait()
            except queue.Empty:
                return
            self._process(candidate, report, on_progress)

    def _process(
        self,
        candidate: CandidateEntry,
        report: DeletionReport,
        on_progress: ProgressCallback | None,
    ) -> None:
        error: Exception | None = None
        try:
            self.dispose(candidate)
        except (NukeError, OSError) as e:
            logger.debug("Failed to delete %s: %s", candidate.path, e)
            error = e

        report.record(DeletionOutcome(path=candidate.path, is_dir=candidate.is_dir, error=error))
        if on_progress is not None:
            on_progress(candidate.path, error)

    def _dispose_file(self, candidate: CandidateEntry) -> None:
        if self.mode == DeletionMode.SHRED:
            shred_file(candidate.path, candidate.size)
        elif self.trash is not None:
            self.trash.stage(candidate.path)
        else:
            os.unlink(candidate.path)

    def _dispose_directory(self, candidate: CandidateEntry) -> None:
        # Anything still inside was filtered out or failed; it must survive
        if not candidate.whole_tree and os.listdir(candidate.path):
            raise OSError(errno.ENOTEMPTY, os.strerror(errno.ENOTEMPTY), candidate.path)

        if self.mode == DeletionMode.SHRED:
            shred_tree(candidate.path)
        elif self.trash is not None:
            self.trash.stage(candidate.path)
        else:
            remove_path(candidate.path)
