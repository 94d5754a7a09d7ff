"""Calendar resolution for monthly payroll periods."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Iterator

from hrms_payroll.calculators.types import Period

WORKING_DAYS_PER_WEEK = 5


class InvalidPeriodError(ValueError):
    """Raised when a month/year pair does not name a calendar month."""

    def __init__(self, year: int, month: int, reason: str | None = None):
        self.year = year
        self.month = month
        msg = f"Invalid payroll period {year}-{month}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


def is_working_day(day: date) -> bool:
    """Monday to Friday are working days."""
    return day.weekday() < WORKING_DAYS_PER_WEEK


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end inclusive."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def resolve_period(year: int, month: int) -> Period:
    """Resolve a (year, month) pair into a Period with its day counts.

    Raises:
        InvalidPeriodError: If month is outside 1-12 or year outside 1-9999
    """
    if not 1 <= month <= 12:
        raise InvalidPeriodError(year, month, "month must be between 1 and 12")
    if not 1 <= year <= 9999:
        raise InvalidPeriodError(year, month, "year must be between 1 and 9999")

    total_days = calendar.monthrange(year, month)[1]
    first_day = date(year, month, 1)
    last_day = date(year, month, total_days)
    working_days = sum(1 for day in iter_days(first_day, last_day) if is_working_day(day))

    return Period(
        year=year,
        month=month,
        first_day=first_day,
        last_day=last_day,
        total_days_in_month=total_days,
        total_working_days=working_days,
    )


def working_days_between(start: date, end: date, period: Period) -> list[date]:
    """Weekdays of [start, end] that fall inside the period."""
    lo = max(start, period.first_day)
    hi = min(end, period.last_day)
    return [day for day in iter_days(lo, hi) if is_working_day(day)]
