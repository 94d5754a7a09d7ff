"""Assign each weekday of a payroll period to exactly one day bucket."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from hrms_payroll.calculators.period import (
    is_working_day,
    iter_days,
    working_days_between,
)
from hrms_payroll.calculators.types import (
    AttendanceEntry,
    AttendanceStatus,
    DayBucket,
    DayClassification,
    LeaveClass,
    LeaveEntry,
    LeaveStatus,
    LeaveType,
    Period,
)

logger = logging.getLogger(__name__)

# Paid leave is the single paid type. Everything else, including types this
# module does not know about, is unpaid.
PAID_LEAVE_TYPES = frozenset({LeaveType.PAID_TIME_OFF.value})
UNPAID_LEAVE_TYPES = frozenset(
    {LeaveType.SICK_TIME_OFF.value, LeaveType.UNPAID_LEAVES.value}
)

# A date goes to the first bucket in this order that claims it.
BUCKET_PRIORITY = (DayBucket.WORKED, DayBucket.PAID_LEAVE, DayBucket.UNPAID_LEAVE)


def leave_class(leave_type: str) -> LeaveClass:
    """Map a leave type to its payroll class."""
    if leave_type in PAID_LEAVE_TYPES:
        return LeaveClass.PAID
    if leave_type not in UNPAID_LEAVE_TYPES:
        logger.warning("Unknown leave type %r treated as unpaid", leave_type)
    return LeaveClass.UNPAID


def _in_period(day: date, period: Period) -> bool:
    return period.first_day <= day <= period.last_day and is_working_day(day)


def _claims(
    period: Period,
    attendance: Iterable[AttendanceEntry],
    leaves: Iterable[LeaveEntry],
) -> dict[DayBucket, set[date]]:
    """Collect, per bucket, every weekday in the period that bucket would claim."""
    claims: dict[DayBucket, set[date]] = {bucket: set() for bucket in BUCKET_PRIORITY}
    unpaid_ranges: list[tuple[date, date]] = []
    leave_markers: set[date] = set()

    for entry in attendance:
        if not _in_period(entry.date, period):
            continue
        if entry.status == AttendanceStatus.PRESENT.value:
            claims[DayBucket.WORKED].add(entry.date)
        elif entry.status == AttendanceStatus.LEAVE.value:
            leave_markers.add(entry.date)

    for leave in leaves:
        if leave.status != LeaveStatus.APPROVED.value:
            continue
        days = working_days_between(leave.start_date, leave.end_date, period)
        if leave_class(leave.leave_type) is LeaveClass.PAID:
            claims[DayBucket.PAID_LEAVE].update(days)
        else:
            claims[DayBucket.UNPAID_LEAVE].update(days)
            unpaid_ranges.append((leave.start_date, leave.end_date))

    # "Leave" attendance markers written by leave approval only count as
    # unpaid when an approved unpaid range covers them.
    for day in leave_markers:
        if any(start <= day <= end for start, end in unpaid_ranges):
            claims[DayBucket.UNPAID_LEAVE].add(day)

    return claims


def classify_days(
    period: Period,
    attendance: Iterable[AttendanceEntry],
    leaves: Iterable[LeaveEntry],
) -> DayClassification:
    """Partition the period's weekdays into worked, paid, unpaid and unaccounted.

    Priority is Present > paid leave > unpaid leave, so a date is never
    paid twice or both paid and deducted. Weekends are never counted.
    """
    claims = _claims(period, attendance, leaves)
    buckets: dict[DayBucket, set[date]] = {bucket: set() for bucket in DayBucket}

    for day in iter_days(period.first_day, period.last_day):
        if not is_working_day(day):
            continue
        bucket = next(
            (b for b in BUCKET_PRIORITY if day in claims[b]),
            DayBucket.UNACCOUNTED,
        )
        buckets[bucket].add(day)

    return DayClassification(
        attendance_dates=frozenset(buckets[DayBucket.WORKED]),
        paid_leave_dates=frozenset(buckets[DayBucket.PAID_LEAVE]),
        unpaid_leave_dates=frozenset(buckets[DayBucket.UNPAID_LEAVE]),
        unaccounted_dates=frozenset(buckets[DayBucket.UNACCOUNTED]),
    )
