"""Relative durations and absolute timestamps found at the start of a memo.

Pure Python, no framework dependencies.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR

# unit -> seconds. Months and years are fixed-length.
DURATION_UNITS = {
    "s": 1, "sec": 1, "secs": 1, "second": 1, "seconds": 1,
    "m": _MINUTE, "min": _MINUTE, "mins": _MINUTE, "minute": _MINUTE, "minutes": _MINUTE,
    "h": _HOUR, "hour": _HOUR, "hours": _HOUR,
    "d": _DAY, "day": _DAY, "days": _DAY,
    "w": 7 * _DAY, "week": 7 * _DAY, "weeks": 7 * _DAY,
    "mon": 30 * _DAY, "month": 30 * _DAY, "months": 30 * _DAY,
    "y": 365 * _DAY, "year": 365 * _DAY, "years": 365 * _DAY,
}

_DURATION_PART_RE = re.compile(r"([0-9]+)([a-z]*)")

# RFC 3339: date, time and offset all mandatory
_TIMESTAMP_RE = re.compile(
    r"^([0-9]{4})-([0-9]{2})-([0-9]{2})"
    r"T([0-9]{2}):([0-9]{2}):([0-9]{2})(?:\.([0-9]{1,9}))?"
    r"(Z|[+-][0-9]{2}:[0-9]{2})$"
)


def parse_duration(text: str) -> Optional[timedelta]:
    """Parse a compact duration such as ``90s``, ``5min3s`` or ``2h``.

    Number/unit pairs follow each other without separators. A number
    without unit is read as seconds, which only works as the last part
    (``0``, ``1`` and ``5m3`` are valid). Returns None for anything else.
    """
    if not text:
        return None

    seconds = 0
    pos = 0
    while pos < len(text):
        m = _DURATION_PART_RE.match(text, pos)
        if not m:
            return None
        number, unit = m.groups()
        if unit and unit not in DURATION_UNITS:
            return None
        seconds += int(number) * DURATION_UNITS.get(unit, 1)
        pos = m.end()

    try:
        return timedelta(seconds=seconds)
    except OverflowError:
        return None


def _parse_offset(offset: str) -> Optional[timezone]:
    if offset == "Z":
        return timezone.utc
    hours, minutes = int(offset[1:3]), int(offset[4:6])
    if hours > 23 or minutes > 59:
        return None
    delta = timedelta(hours=hours, minutes=minutes)
    return timezone(-delta if offset[0] == "-" else delta)


def parse_timestamp(text: str) -> Optional[datetime]:
    """Parse a strict RFC 3339 timestamp like ``1970-01-01T12:34:56Z``.

    A timestamp without UTC offset is rejected rather than guessed.
    Fractions beyond microseconds are truncated. The result is in UTC.
    """
    m = _TIMESTAMP_RE.match(text)
    if not m:
        return None

    year, month, day, hour, minute, second = (int(g) for g in m.groups()[:6])
    fraction, offset = m.group(7), m.group(8)
    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0

    tz = _parse_offset(offset)
    if tz is None:
        return None
    try:
        ts = datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)
        return ts.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None
