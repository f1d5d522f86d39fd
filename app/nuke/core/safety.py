"""Detection of dangerous deletion requests.

A dangerous request is not refused outright; the CLI asks for an
explicit typed confirmation before it proceeds.
"""

import os
from collections.abc import Sequence

# Targets that expand to "everything here"
WILDCARD_ONLY_TARGETS: frozenset[str] = frozenset({"*", "/*", "./*"})

SYSTEM_DIRECTORIES: tuple[str, ...] = ("/bin", "/sbin", "/usr", "/etc", "/var", "/lib", "/boot")

# Candidate count above which a batch inside a system directory is dangerous
SYSTEM_BATCH_LIMIT = 100

CONFIRMATION_PHRASE = "yes I am sure"


def detect_dangerous_operation(targets: Sequence[str], candidate_count: int) -> str | None:
    """Check whether a deletion request needs extra confirmation.

    Args:
        targets: Target arguments as typed by the user.
        candidate_count: Number of candidates the scan produced.

    Returns:
        Human-readable reason if the request is dangerous, None otherwise.
    """
    for target in targets:
        absolute = os.path.abspath(target)

        if absolute == os.sep:
            return "Attempting to delete root directory (/)"

        if target in WILDCARD_ONLY_TARGETS:
            return "Wildcard-only pattern detected"

        if candidate_count > SYSTEM_BATCH_LIMIT:
            for directory in SYSTEM_DIRECTORIES:
                if absolute == directory or absolute.startswith(directory + os.sep):
                    return f"Attempting to delete many files in system directory: {directory}"

    return None
