"""Date parsing and windowing utilities.

Clip and fixture dates are compared at calendar-day precision in whatever
local representation they were published with; no timezone conversion is
applied before truncation.
"""

from __future__ import annotations

import datetime as dt

# Fallback formats for values datetime.fromisoformat() rejects
DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d.%m.%Y",
    "%d/%m/%Y",
)


def parse_calendar_date(value: object) -> dt.date | None:
    """Truncate a date, datetime or ISO-8601 string to its calendar day.

    Args:
        value: ``date``/``datetime`` object or a string such as
            ``"2024-03-10"`` or ``"2024-03-10T18:45:00+01:00"``

    Returns:
        The calendar day, or None when the value is absent or unparseable.
    """
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        return None

    stripped = value.strip()
    if not stripped:
        return None

    try:
        return dt.datetime.fromisoformat(stripped).date()
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return dt.datetime.strptime(stripped[:10], fmt).date()
        except ValueError:
            continue
    return None


def parse_timestamp(value: object) -> dt.datetime | None:
    """Parse a search-start timestamp.

    Naive values are interpreted in the host's local timezone so they can be
    compared with an aware ``now``.
    """
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = dt.datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.astimezone()
    return parsed


def within_days_after(candidate: dt.date | None, reference: dt.date, max_days_after: int) -> bool:
    """Return True when ``candidate`` falls on ``reference`` or up to ``max_days_after`` days later."""
    if candidate is None:
        return False
    delta = (candidate - reference).days
    return 0 <= delta <= max_days_after
