"""Exception hierarchy for nuke.

Every error raised by the core derives from NukeError so that callers
(the CLI in particular) can report domain failures without catching
unrelated exceptions.
"""


class NukeError(Exception):
    """Base exception for all nuke errors."""


class NotFoundError(NukeError):
    """Raised when a deletion target or trash entry does not exist."""


class ConflictError(NukeError):
    """Raised when a restore destination is already occupied."""


class StaleEntryError(NukeError):
    """Raised when a trash metadata record exists but its staged data is gone."""


class ScanError(NukeError):
    """Raised when the root of a scan cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot scan {path}: {reason}")
        self.path = path


class NukeIOError(NukeError):
    """Raised when a move, shred, or metadata write fails."""


class InvalidFilterError(NukeError, ValueError):
    """Raised when a size, duration, or regex filter is malformed."""


class TrashStoreError(NukeError):
    """Raised when the trash directories cannot be created."""


class PartialMoveError(NukeIOError):
    """Raised when a tree was copied but its source could only be partly removed.

    The destination holds the only complete copy of the data.
    """

    def __init__(self, src: str, dst: str, reason: str) -> None:
        super().__init__(f"Failed to remove original {src} after copy: {reason}")
        self.src = src
        self.dst = dst
