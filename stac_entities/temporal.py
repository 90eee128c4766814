"""Datetime helpers for STAC temporal metadata.

STAC requires all datetimes to be given in UTC, so the parser only accepts
``Z`` or a zero offset and rejects everything else.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

from stac_entities.utils import has_text

Interval = list[datetime | None]

ISO_UTC_PATTERN = re.compile(
    r"^(-?\d{1,})-(\d\d)-(\d\d)[T ](\d\d):(\d\d):(\d\d)(?:\.(\d*))?(?:Z|[+-]00:00)?$",
    re.IGNORECASE,
)


def iso_to_date(value: Any) -> datetime | None:
    """Parse a UTC-based ISO 8601 datetime string.

    Accepted offsets are ``Z``, ``+00:00`` and ``-00:00`` (RFC 3339 uses the
    latter for UTC times with an unknown local offset), or none at all.
    Fractional seconds are kept with microsecond precision. Strings with any
    other offset and malformed strings yield None instead of raising. So do
    negative years and years with more than four digits, which match the
    pattern but are outside the range of ``datetime`` (1 to 9999).

    Args:
        value: The potential datetime string.

    Returns:
        A timezone-aware datetime in UTC, or None.

    Example:
        >>> iso_to_date("2020-01-01T12:13:14.523Z").microsecond
        523000
    """
    if not has_text(value) or len(value) < 10:
        return None

    match = ISO_UTC_PATTERN.match(value)
    if match is None:
        return None

    year, month, day, hour, minute, second, fraction = match.groups()
    # Pad or cut the fraction to microseconds
    microsecond = int((fraction or "").ljust(6, "0")[:6])
    try:
        return datetime(
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            int(second),
            microsecond,
            tzinfo=timezone.utc,
        )
    except ValueError:
        return None


def center_datetime(start: datetime, end: datetime) -> datetime:
    """Compute the midpoint between two datetimes."""
    return start + (end - start) / 2


def union_datetime(intervals: list[Interval] | None) -> Interval | None:
    """Compute the union of multiple temporal intervals.

    Open bounds dominate: if any interval has an open (None) start, the union
    has an open start, and the same applies to the end.

    Args:
        intervals: List of ``[start, end]`` pairs.

    Returns:
        The union as ``[start, end]``, or None for empty input.
    """
    if not isinstance(intervals, list) or not intervals:
        return None

    start: datetime | None = None
    end: datetime | None = None
    open_start = False
    open_end = False
    seen = False
    for interval in intervals:
        if not isinstance(interval, (list, tuple)) or len(interval) != 2:
            continue
        seen = True
        lower, upper = interval
        if lower is None:
            open_start = True
        elif start is None or lower < start:
            start = lower
        if upper is None:
            open_end = True
        elif end is None or upper > end:
            end = upper

    if not seen:
        return None
    return [None if open_start else start, None if open_end else end]
