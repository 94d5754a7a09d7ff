"""Pytest fixtures for payroll calculator tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from hrms_payroll.calculators.period import is_working_day, iter_days, resolve_period
from hrms_payroll.calculators.types import (
    AttendanceEntry,
    LeaveEntry,
    Period,
    SalaryStructure,
)


@pytest.fixture
def april_2025() -> Period:
    """April 2025: 30 days, starts on a Tuesday, 22 working days."""
    return resolve_period(2025, 4)


@pytest.fixture
def weekdays():
    """Factory listing the working days of a period in order."""

    def _weekdays(period: Period) -> list[date]:
        return [d for d in iter_days(period.first_day, period.last_day) if is_working_day(d)]

    return _weekdays


@pytest.fixture
def attendance():
    """Factory building attendance entries for a list of dates."""

    def _attendance(dates, status: str = "Present") -> list[AttendanceEntry]:
        return [AttendanceEntry(date=d, status=status) for d in dates]

    return _attendance


@pytest.fixture
def leave():
    """Factory building a single leave entry (approved by default)."""

    def _leave(
        leave_type: str,
        start: date,
        end: date,
        status: str = "Approved",
    ) -> LeaveEntry:
        return LeaveEntry(leave_type=leave_type, start_date=start, end_date=end, status=status)

    return _leave


@pytest.fixture
def basic_structure() -> SalaryStructure:
    """30000 monthly wage with basic at 80% and nothing else stored."""
    return SalaryStructure(
        monthly_wage=Decimal("30000"),
        basic_salary_percentage=Decimal("80"),
    )
