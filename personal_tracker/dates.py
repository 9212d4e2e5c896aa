"""
Date / Calendar Utility

Every date in the tracker is a canonical day identifier: a ``YYYY-MM-DD``
string for a calendar date in ONE fixed time zone. The execution
environment's local zone never leaks in.

DESIGN DECISION: Day arithmetic goes through each date's midnight-UTC
instant. Time-of-day and DST transitions therefore cannot shift a
difference by a day - only the calendar date matters.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Optional

import pytz


DEFAULT_TIMEZONE = "Asia/Kolkata"

DAY_FORMAT = "%Y-%m-%d"

WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

_SECONDS_PER_DAY = 86400


def today(timezone: str = DEFAULT_TIMEZONE, now: Optional[datetime] = None) -> str:
    """
    Canonical day identifier for the current instant in ``timezone``.

    Args:
        timezone: IANA zone name the tracker's "today" is evaluated in
        now: Aware instant to evaluate instead of the wall clock.
             Naive values are taken as UTC.
    """
    tz = pytz.timezone(timezone)
    if now is None:
        now = datetime.now(pytz.utc)
    elif now.tzinfo is None:
        now = pytz.utc.localize(now)
    return now.astimezone(tz).strftime(DAY_FORMAT)


def parse_day(value: str) -> date:
    """Parse a canonical day identifier. Raises ValueError on anything else."""
    if not isinstance(value, str) or len(value) != 10:
        raise ValueError(f"Not a YYYY-MM-DD day identifier: {value!r}")
    return datetime.strptime(value, DAY_FORMAT).date()


def is_day(value) -> bool:
    try:
        parse_day(value)
    except ValueError:
        return False
    return True


def format_day(value: date) -> str:
    return value.strftime(DAY_FORMAT)


def _utc_midnight(value: str) -> float:
    d = parse_day(value)
    return datetime(d.year, d.month, d.day, tzinfo=pytz.utc).timestamp()


def day_difference(a: str, b: str) -> int:
    """
    Whole days between two day identifiers, positive when ``a`` is later.

    day_difference("2024-03-02", "2024-03-01") == 1
    """
    return round((_utc_midnight(a) - _utc_midnight(b)) / _SECONDS_PER_DAY)


def shift_day(day: str, days: int) -> str:
    """Day identifier ``days`` after ``day`` (negative goes back)."""
    return format_day(parse_day(day) + timedelta(days=days))


def week_of(day: str) -> list[str]:
    """The Monday-first week containing ``day``, Monday through Sunday."""
    d = parse_day(day)
    monday = d - timedelta(days=d.weekday())
    return [format_day(monday + timedelta(days=i)) for i in range(7)]


def weekday_label(day: str) -> str:
    return WEEKDAY_LABELS[parse_day(day).weekday()]


def month_prefix(day: str) -> str:
    """``YYYY-MM`` bucket used for month comparisons."""
    return day[:7]


def _split_prefix(prefix: str) -> tuple[int, int]:
    year, month = parse_day(f"{prefix}-01").timetuple()[:2]
    return year, month


def shift_month(prefix: str, months: int) -> str:
    """Move a ``YYYY-MM`` prefix by whole months."""
    year, month = _split_prefix(prefix)
    index = year * 12 + (month - 1) + months
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def month_days(prefix: str) -> list[str]:
    """Every day identifier in the month ``prefix``, in order."""
    year, month = _split_prefix(prefix)
    _, count = calendar.monthrange(year, month)
    return [f"{prefix}-{d:02d}" for d in range(1, count + 1)]


def month_title(prefix: str) -> str:
    """Display title for a month, e.g. ``October 2026``."""
    year, month = _split_prefix(prefix)
    return f"{calendar.month_name[month]} {year}"


def sunday_offset(prefix: str) -> int:
    """
    Blank cells before the 1st in a Sunday-first month grid.

    Sunday is 0, Saturday is 6.
    """
    year, month = _split_prefix(prefix)
    return (date(year, month, 1).weekday() + 1) % 7
