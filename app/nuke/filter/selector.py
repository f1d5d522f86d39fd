"""Selector deciding whether a candidate passes the filter criteria.

Checks run in a fixed order and short-circuit on the first rejection.
Final admission is the logical AND of every configured check, so the
order only affects how quickly an entry is rejected.
"""

import fnmatch
import os
from collections.abc import Iterable

from nuke.filter.criteria import FilterCriteria, SizeOperator
from nuke.models.candidate import CandidateEntry


def is_hidden(path: str) -> bool:
    """Check if the base name of a path starts with a dot."""
    return os.path.basename(path).startswith(".")


def matches_glob(path: str, patterns: Iterable[str]) -> bool:
    """Check if a path matches any glob pattern.

    Each pattern is tried against the base name first, then the full path.

    Args:
        path: Absolute path to test.
        patterns: Glob patterns (fnmatch syntax).

    Returns:
        True if any pattern matches.
    """
    base_name = os.path.basename(path)
    return any(
        fnmatch.fnmatch(base_name, pattern) or fnmatch.fnmatch(path, pattern)
        for pattern in patterns
    )


def admits(entry: CandidateEntry, criteria: FilterCriteria | None) -> bool:
    """Decide whether an entry is admitted by the criteria.

    Evaluation order:
    1. Hidden-file suppression
    2. Older-than cutoff (reject entries modified after it)
    3. Newer-than cutoff (reject entries modified before it)
    4. Size filter (regular files only, strict comparison)
    5. Include globs (at least one must match)
    6. Exclude globs (none may match)
    7. Regular expression (must match path or base name)

    An mtime exactly equal to a cutoff passes that check.

    Args:
        entry: Candidate to evaluate.
        criteria: Filter criteria, or None to admit everything.

    Returns:
        True if the entry passes every configured check.
    """
    if criteria is None:
        return True

    if criteria.skip_hidden and is_hidden(entry.path):
        return False

    if criteria.older_than is not None and entry.mtime > criteria.older_than.timestamp():
        return False

    if criteria.newer_than is not None and entry.mtime < criteria.newer_than.timestamp():
        return False

    if criteria.size_threshold is not None and not entry.is_dir:
        if criteria.size_operator == SizeOperator.GREATER:
            if entry.size <= criteria.size_threshold:
                return False
        elif entry.size >= criteria.size_threshold:
            return False

    if criteria.include and not matches_glob(entry.path, criteria.include):
        return False

    if criteria.exclude and matches_glob(entry.path, criteria.exclude):
        return False

    if criteria.regex is not None:
        if not (
            criteria.regex.search(entry.path) or criteria.regex.search(entry.name)
        ):
            return False

    return True
