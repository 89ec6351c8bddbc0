"""
Date arithmetic helpers built on pandas Timestamps.

**Conceptual**: Accepting anything pd.Timestamp understands (datetime, date,
ISO strings, other Timestamps) lets callers pass whatever they already have.
Results come back as pd.Timestamp, which is a datetime subclass, so they
work anywhere a datetime does.

Timezones are preserved: a tz-aware input produces a tz-aware result.
"""

from typing import Any, Optional

import pandas as pd

from utilkit.utils.time import Clock, get_real_clock


def is_leap_year(year: int) -> bool:
    """
    Gregorian leap year test.

    Example:
        >>> is_leap_year(2024), is_leap_year(1900), is_leap_year(2000)
        (True, False, True)
    """
    return bool(pd.Timestamp(year=year, month=1, day=1).is_leap_year)


def add_days(date: Any, days: int) -> pd.Timestamp:
    """Shift a date by a whole number of days (negative moves backwards)."""
    return pd.Timestamp(date) + pd.Timedelta(days=days)


def days_between(start: Any, end: Any) -> int:
    """
    Whole days from `start` to `end`, negative if `end` is earlier.

    Partial days are truncated toward zero: days_between("2024-01-01 00:00",
    "2024-01-02 23:00") -> 1.
    """
    delta = pd.Timestamp(end) - pd.Timestamp(start)
    seconds = delta.total_seconds()
    return int(seconds / 86400)


def format_date(date: Any, fmt: str = "%Y-%m-%d") -> str:
    """Format a date with strftime codes (ISO date by default)."""
    return pd.Timestamp(date).strftime(fmt)


def start_of_day(date: Any = None, clock: Optional[Clock] = None) -> pd.Timestamp:
    """
    Midnight at the start of the given day.

    Args:
        date: Any Timestamp-compatible value. When omitted, "today" is taken
              from `clock`.
        clock: Time source used when date is None (defaults to RealClock).

    Returns:
        pd.Timestamp at 00:00 of that day, keeping the input's timezone.
    """
    if date is None:
        clock = clock or get_real_clock()
        date = clock.now()
    return pd.Timestamp(date).normalize()
