"""Parsers for human-friendly size and duration strings.

Accepted forms follow common rm/find conventions:
- Sizes: ``512``, ``10K``, ``1.5GB``, ``100M`` (binary multiples)
- Size filters: ``+100M`` (greater than), ``-1G`` (less than)
- Durations: ``30d``, ``24h``, ``2w``, ``1h30m``
"""

import re
from datetime import timedelta

from nuke.errors import InvalidFilterError

_SIZE_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s*([KMGT]?B?)$")

_SIZE_MULTIPLIERS: dict[str, int] = {
    "": 1,
    "B": 1,
    "K": 1024,
    "KB": 1024,
    "M": 1024**2,
    "MB": 1024**2,
    "G": 1024**3,
    "GB": 1024**3,
    "T": 1024**4,
    "TB": 1024**4,
}

_DURATION_TOKEN = re.compile(r"(\d+(?:\.\d+)?)\s*([a-z]+)")

_DURATION_UNITS: dict[str, timedelta] = {
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "sec": timedelta(seconds=1),
    "second": timedelta(seconds=1),
    "seconds": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "min": timedelta(minutes=1),
    "minute": timedelta(minutes=1),
    "minutes": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "hr": timedelta(hours=1),
    "hour": timedelta(hours=1),
    "hours": timedelta(hours=1),
    "d": timedelta(days=1),
    "day": timedelta(days=1),
    "days": timedelta(days=1),
    "w": timedelta(weeks=1),
    "week": timedelta(weeks=1),
    "weeks": timedelta(weeks=1),
    # Approximations
    "mo": timedelta(days=30),
    "month": timedelta(days=30),
    "months": timedelta(days=30),
    "y": timedelta(days=365),
    "year": timedelta(days=365),
    "years": timedelta(days=365),
}


def parse_size(value: str) -> int:
    """Parse a size string into a byte count.

    Args:
        value: Size such as "100", "10K", "1.5G" or "2TB" (case-insensitive).

    Returns:
        Size in bytes, truncated to an integer.

    Raises:
        InvalidFilterError: If the string is empty or not a valid size.
    """
    text = value.strip().upper()
    if not text:
        msg = "Empty size string"
        raise InvalidFilterError(msg)

    match = _SIZE_PATTERN.match(text)
    if match is None:
        msg = f"Invalid size format: {value!r}"
        raise InvalidFilterError(msg)

    number, unit = match.groups()
    return int(float(number) * _SIZE_MULTIPLIERS[unit])


def parse_size_filter(value: str) -> tuple[int, str]:
    """Parse a size filter with an optional direction prefix.

    A leading "+" selects entries strictly larger than the threshold,
    a leading "-" entries strictly smaller. Without a prefix "+" is assumed.

    Args:
        value: Filter such as "+100M" or "-1G".

    Returns:
        Tuple of (threshold in bytes, operator "+" or "-").

    Raises:
        InvalidFilterError: If the filter is empty or the size is malformed.
    """
    text = value.strip()
    if not text:
        msg = "Empty size filter"
        raise InvalidFilterError(msg)

    operator = "+"
    if text[0] in "+-":
        operator, text = text[0], text[1:]

    return parse_size(text), operator


def parse_duration(value: str) -> timedelta:
    """Parse a duration string into a timedelta.

    Supports single units ("30d", "2 weeks") and compound forms ("1h30m").

    Args:
        value: Duration string (case-insensitive).

    Returns:
        Parsed duration.

    Raises:
        InvalidFilterError: If the string is empty, malformed, or uses an
            unknown unit.
    """
    text = value.strip().lower()
    if not text:
        msg = "Empty duration string"
        raise InvalidFilterError(msg)

    # Every character must belong to a number/unit token
    if _DURATION_TOKEN.sub("", text).strip():
        msg = f"Invalid duration format: {value!r}"
        raise InvalidFilterError(msg)

    total = timedelta()
    for number, unit in _DURATION_TOKEN.findall(text):
        multiplier = _DURATION_UNITS.get(unit)
        if multiplier is None:
            msg = f"Unknown time unit {unit!r} in duration {value!r}"
            raise InvalidFilterError(msg)
        total += multiplier * float(number)

    return total
