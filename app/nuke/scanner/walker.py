"""Filesystem walker producing deletion candidates.

Enumerates a root path, applies the selector to every entry it meets,
and returns the admitted entries ordered deepest-first so that children
always precede their parent directory.
"""

import logging
import os
from collections.abc import Iterator
from dataclasses import replace
from pathlib import Path

from nuke.errors import ScanError
from nuke.filter.criteria import FilterCriteria
from nuke.filter.selector import admits
from nuke.models.candidate import CandidateEntry

logger = logging.getLogger(__name__)


def scan(
    root: str | Path,
    recursive: bool = False,
    criteria: FilterCriteria | None = None,
) -> list[CandidateEntry]:
    """Scan a path and return the admitted candidates.

    - A regular file (or symlink) root yields at most itself.
    - A directory root without recursion yields at most the directory itself,
      marked as standing for its whole subtree.
    - A directory root with recursion yields every admitted entry of the
      subtree, the root included. Unreadable descendants are skipped.

    Args:
        root: Path to scan (made absolute; symlinks are not followed).
        recursive: Whether to descend into directories.
        criteria: Filters to apply, or None to admit everything.

    Returns:
        Admitted candidates, deepest paths first.

    Raises:
        ScanError: If the root itself cannot be statted.
    """
    absolute = os.path.abspath(root)

    try:
        root_entry = CandidateEntry.from_stat(absolute, os.lstat(absolute))
    except OSError as e:
        raise ScanError(absolute, e.strerror or str(e)) from e

    if not root_entry.is_dir:
        return [root_entry] if admits(root_entry, criteria) else []
    if not recursive:
        return [replace(root_entry, whole_tree=True)] if admits(root_entry, criteria) else []

    candidates = [entry for entry in _walk(root_entry) if admits(entry, criteria)]
    return sort_deepest_first(candidates)


def sort_deepest_first(entries: list[CandidateEntry]) -> list[CandidateEntry]:
    """Order entries by descending depth, ties by descending path.

    Args:
        entries: Candidates in any order.

    Returns:
        New list where every child precedes its parent directory.
    """
    return sorted(entries, key=lambda e: (e.depth, e.path), reverse=True)


def _walk(root: CandidateEntry) -> Iterator[CandidateEntry]:
    """Yield the root and every descendant, without following symlinks.

    Filtering does not prune traversal: the children of a rejected
    directory are still visited and judged on their own.
    """
    yield root

    pending = [root.path]
    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as it:
                children = list(it)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            continue

        for child in children:
            try:
                entry = CandidateEntry.from_stat(child.path, child.stat(follow_symlinks=False))
            except OSError as e:
                logger.debug("Skipping unreadable entry %s: %s", child.path, e)
                continue

            yield entry
            if entry.is_dir:
                pending.append(entry.path)
