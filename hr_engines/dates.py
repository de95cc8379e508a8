"""
Module: hr_engines.dates
Responsibility:
    Calendar helpers shared by the benefit engines: coarse month
    differences for tier bucketing and year/month arithmetic for expiry
    dates.

Architecture position:
    Engines -- pure calculation layer, zero I/O, no clock access.

Invariants enforced:
    - ``MonthCounting.CALENDAR`` ignores the day of month entirely:
      ``(end.year - start.year) * 12 + (end.month - start.month)``.
    - Results may be negative when ``end`` precedes ``start``; callers
      decide how to treat future dates.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime
from enum import Enum


class MonthCounting(Enum):
    """How elapsed months are counted between two dates."""

    CALENDAR = "calendar"  # year*12 + month difference, day ignored
    COMPLETED = "completed"  # a month counts once its day of month is reached


def as_date(value: date | datetime) -> date:
    """Normalise a datetime to its calendar date; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def months_between(
    start: date | datetime,
    end: date | datetime,
    counting: MonthCounting = MonthCounting.CALENDAR,
) -> int:
    """
    Whole months from ``start`` to ``end``.

    Preconditions:
        - Both arguments are valid calendar dates (or datetimes).
    Postconditions:
        - CALENDAR: 2024-01-31 -> 2024-02-01 is 1 month.
        - COMPLETED: 2024-01-15 -> 2024-04-14 is 2 months, -> 2024-04-15 is 3.
    """
    start = as_date(start)
    end = as_date(end)
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if counting is MonthCounting.COMPLETED:
        if months > 0 and end.day < start.day:
            months -= 1
        elif months < 0 and end.day > start.day:
            months += 1
    return months


def add_months(value: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the target month."""
    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def add_years(value: date, years: int) -> date:
    """Shift a date by whole years; Feb 29 falls back to Feb 28."""
    return add_months(value, years * 12)
