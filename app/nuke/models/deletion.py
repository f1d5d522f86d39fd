"""Deletion engine models.

Defines the disposition modes, the per-item outcome, and the report
that accumulates outcomes from concurrent workers.
"""

import threading
from dataclasses import dataclass
from enum import Enum


class DeletionMode(str, Enum):
    """How candidates are disposed of.

    Attributes:
        SOFT: Stage into the trash (reversible).
        SHRED: Overwrite then unlink (irreversible, never trashed).
    """

    SOFT = "soft"
    SHRED = "shred"


@dataclass(frozen=True, slots=True)
class DeletionOutcome:
    """Result of disposing of a single candidate.

    Attributes:
        path: Absolute path that was operated on.
        is_dir: Whether the candidate was a directory.
        error: Exception raised by the disposition, None on success.
    """

    path: str
    is_dir: bool = False
    error: Exception | None = None

    @property
    def success(self) -> bool:
        """Check if the disposition succeeded."""
        return self.error is None

    @property
    def failed(self) -> bool:
        """Check if the disposition failed."""
        return self.error is not None


class DeletionReport:
    """Tally of outcomes for one deletion batch.

    Safe to record into from several worker threads at once.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._outcomes: list[DeletionOutcome] = []

    def record(self, outcome: DeletionOutcome) -> None:
        """Append an outcome."""
        with self._lock:
            self._outcomes.append(outcome)

    @property
    def outcomes(self) -> list[DeletionOutcome]:
        """All outcomes in completion order."""
        with self._lock:
            return list(self._outcomes)

    @property
    def succeeded(self) -> list[DeletionOutcome]:
        """Outcomes without an error."""
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> list[DeletionOutcome]:
        """Outcomes with an error."""
        return [o for o in self.outcomes if o.failed]

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._outcomes)
