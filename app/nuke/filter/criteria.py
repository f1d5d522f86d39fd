"""Filter criteria describing which filesystem entries to admit.

A FilterCriteria instance is built once per operation from user intent
and shared read-only by every selector evaluation during a scan.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum

from nuke.errors import InvalidFilterError
from nuke.filter.parsing import parse_duration, parse_size_filter


class SizeOperator(str, Enum):
    """Direction of a size comparison.

    Attributes:
        GREATER: Admit files strictly larger than the threshold.
        LESS: Admit files strictly smaller than the threshold.
    """

    GREATER = "+"
    LESS = "-"


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    """Immutable set of filters applied to scan candidates.

    Attributes:
        older_than: Admit only entries modified at or before this instant.
        newer_than: Admit only entries modified at or after this instant.
        size_threshold: Byte count for the size filter (None disables it).
        size_operator: Direction of the size comparison.
        include: Glob patterns; if non-empty an entry must match one.
        exclude: Glob patterns; an entry matching any is rejected.
        regex: Pattern that must match the full path or the base name.
        skip_hidden: Reject entries whose base name starts with a dot.
    """

    older_than: datetime | None = None
    newer_than: datetime | None = None
    size_threshold: int | None = None
    size_operator: SizeOperator = SizeOperator.GREATER
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    regex: re.Pattern[str] | None = None
    skip_hidden: bool = False

    def __post_init__(self) -> None:
        """Validate criteria after initialization."""
        if self.size_threshold is not None and self.size_threshold < 0:
            msg = f"Size threshold cannot be negative, got {self.size_threshold}"
            raise InvalidFilterError(msg)
        for cutoff in (self.older_than, self.newer_than):
            if cutoff is not None and cutoff.tzinfo is None:
                msg = "Age cutoffs must be timezone-aware"
                raise InvalidFilterError(msg)

    @property
    def is_empty(self) -> bool:
        """Check whether no filter is configured."""
        return (
            self.older_than is None
            and self.newer_than is None
            and self.size_threshold is None
            and not self.include
            and not self.exclude
            and self.regex is None
            and not self.skip_hidden
        )

    @classmethod
    def from_options(
        cls,
        *,
        older_than: str | None = None,
        newer_than: str | None = None,
        size: str | None = None,
        include: Iterable[str] = (),
        exclude: Iterable[str] = (),
        regex: str | None = None,
        skip_hidden: bool = False,
        now: datetime | None = None,
    ) -> FilterCriteria:
        """Build criteria from user-supplied option strings.

        Durations are converted to absolute cutoffs relative to ``now``,
        so every entry of one scan is judged against the same instant.

        Args:
            older_than: Duration such as "30d"; admits entries older than it.
            newer_than: Duration such as "24h"; admits entries newer than it.
            size: Size filter such as "+100M" or "-1G".
            include: Glob patterns an entry must match.
            exclude: Glob patterns that reject an entry.
            regex: Regular expression matched against path or base name.
            skip_hidden: Reject dot-files and dot-directories.
            now: Reference instant (defaults to the current UTC time).

        Returns:
            Validated FilterCriteria.

        Raises:
            InvalidFilterError: If any option is malformed.
        """
        reference = now or datetime.now(UTC)

        older_cutoff = None
        if older_than:
            older_cutoff = reference - _parse_option_duration("--older-than", older_than)

        newer_cutoff = None
        if newer_than:
            newer_cutoff = reference - _parse_option_duration("--newer-than", newer_than)

        threshold = None
        operator = SizeOperator.GREATER
        if size:
            try:
                threshold, op = parse_size_filter(size)
            except InvalidFilterError as e:
                msg = f"Invalid --size value: {e}"
                raise InvalidFilterError(msg) from e
            operator = SizeOperator(op)

        compiled = None
        if regex:
            try:
                compiled = re.compile(regex)
            except re.error as e:
                msg = f"Invalid regex pattern {regex!r}: {e}"
                raise InvalidFilterError(msg) from e

        return cls(
            older_than=older_cutoff,
            newer_than=newer_cutoff,
            size_threshold=threshold,
            size_operator=operator,
            include=tuple(include),
            exclude=tuple(exclude),
            regex=compiled,
            skip_hidden=skip_hidden,
        )


def _parse_option_duration(option: str, value: str) -> timedelta:
    try:
        return parse_duration(value)
    except InvalidFilterError as e:
        msg = f"Invalid {option} value: {e}"
        raise InvalidFilterError(msg) from e
