"""Type definitions for the payroll calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

ZERO = Decimal("0")


class AttendanceStatus(str, Enum):
    """Attendance record status values."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LEAVE = "Leave"


class LeaveStatus(str, Enum):
    """Leave request status values."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class LeaveType(str, Enum):
    """Known leave types."""

    PAID_TIME_OFF = "Paid time Off"
    SICK_TIME_OFF = "Sick time off"
    UNPAID_LEAVES = "Unpaid Leaves"


class LeaveClass(str, Enum):
    """Payroll class of a leave type."""

    PAID = "paid"
    UNPAID = "unpaid"


class DayBucket(str, Enum):
    """Bucket a weekday of the period is assigned to."""

    WORKED = "worked"
    PAID_LEAVE = "paid_leave"
    UNPAID_LEAVE = "unpaid_leave"
    UNACCOUNTED = "unaccounted"


@dataclass(frozen=True)
class Period:
    """Calendar month with its derived day counts."""

    year: int
    month: int
    first_day: date
    last_day: date
    total_days_in_month: int
    total_working_days: int


@dataclass(frozen=True)
class AttendanceEntry:
    """Attendance row as consumed by the engine."""

    date: date
    status: str


@dataclass(frozen=True)
class LeaveEntry:
    """Leave row as consumed by the engine."""

    leave_type: str
    start_date: date
    end_date: date
    status: str


@dataclass(frozen=True)
class SalaryStructure:
    """Stored salary structure for one employee.

    Amounts and percentages are optional; the resolver decides which one
    applies for each component.
    """

    monthly_wage: Decimal | None
    basic_salary: Decimal | None = None
    basic_salary_percentage: Decimal | None = None
    hra: Decimal | None = None
    hra_percentage: Decimal | None = None
    standard_allowance: Decimal | None = None
    standard_allowance_percentage: Decimal | None = None
    performance_bonus: Decimal | None = None
    performance_bonus_percentage: Decimal | None = None
    leave_travel_allowance: Decimal | None = None
    leave_travel_allowance_percentage: Decimal | None = None
    food_allowance: Decimal | None = None
    fixed_allowance: Decimal | None = None
    fixed_allowance_percentage: Decimal | None = None
    pf_employee: Decimal | None = None
    pf_employee_percentage: Decimal | None = None
    pf_employer: Decimal | None = None
    pf_employer_percentage: Decimal | None = None
    professional_tax: Decimal | None = None

    @classmethod
    def from_record(cls, record: Any) -> SalaryStructure:
        """Build from any object exposing the salary attributes (ORM row, etc.)."""
        return cls(
            **{name: getattr(record, name, None) for name in cls.__dataclass_fields__}
        )


@dataclass(frozen=True)
class DayClassification:
    """Disjoint weekday buckets for one employee and period."""

    attendance_dates: frozenset[date]
    paid_leave_dates: frozenset[date]
    unpaid_leave_dates: frozenset[date]
    unaccounted_dates: frozenset[date] = frozenset()

    @property
    def attendance_days(self) -> int:
        return len(self.attendance_dates)

    @property
    def paid_time_off_days(self) -> int:
        return len(self.paid_leave_dates)

    @property
    def unpaid_time_off_days(self) -> int:
        return len(self.unpaid_leave_dates)


# Component order is the resolution order; later steps may read earlier ones.
SALARY_COMPONENTS = (
    "basic_salary",
    "hra",
    "standard_allowance",
    "performance_bonus",
    "leave_travel_allowance",
    "food_allowance",
    "fixed_allowance",
)


@dataclass
class SalaryComponents:
    """Absolute monthly amounts for every salary component."""

    basic_salary: Decimal = ZERO
    hra: Decimal = ZERO
    standard_allowance: Decimal = ZERO
    performance_bonus: Decimal = ZERO
    leave_travel_allowance: Decimal = ZERO
    food_allowance: Decimal = ZERO
    fixed_allowance: Decimal = ZERO

    @property
    def gross(self) -> Decimal:
        return sum((getattr(self, name) for name in SALARY_COMPONENTS), ZERO)

    def as_dict(self) -> dict[str, Decimal]:
        return {name: getattr(self, name) for name in SALARY_COMPONENTS}


@dataclass
class WorkedDaysBreakdown:
    """Worked-days counts and their amounts at the daily wage rate."""

    attendance_days: int
    attendance_amount: Decimal
    paid_time_off_days: int
    paid_time_off_amount: Decimal
    unpaid_time_off_days: int
    unpaid_time_off_amount: Decimal
    total_payable_days: int
    total_payable_amount: Decimal
    total_working_days: int
    working_days_per_week: int = 5

    def as_dict(self) -> dict[str, Any]:
        return {
            "attendance_days": self.attendance_days,
            "attendance_amount": self.attendance_amount,
            "paid_time_off_days": self.paid_time_off_days,
            "paid_time_off_amount": self.paid_time_off_amount,
            "unpaid_time_off_days": self.unpaid_time_off_days,
            "unpaid_time_off_amount": self.unpaid_time_off_amount,
            "total_payable_days": self.total_payable_days,
            "total_payable_amount": self.total_payable_amount,
            "total_working_days": self.total_working_days,
            "working_days_per_week": self.working_days_per_week,
        }


@dataclass
class ProrationResult:
    """Output of the proration step."""

    daily_wage_rate: Decimal
    payable_ratio: Decimal  # exact, not rounded
    worked_days: WorkedDaysBreakdown
    adjusted: SalaryComponents

    @property
    def adjusted_gross(self) -> Decimal:
        return self.adjusted.gross


@dataclass
class Deductions:
    """Statutory deductions for one payroll."""

    pf_employee: Decimal = ZERO
    pf_employer: Decimal = ZERO
    professional_tax: Decimal = ZERO
    income_tax: Decimal = ZERO
    tds_deduction: Decimal = ZERO
    loan_deduction: Decimal = ZERO
    other_deductions: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return (
            self.pf_employee
            + self.pf_employer
            + self.professional_tax
            + self.income_tax
            + self.tds_deduction
            + self.loan_deduction
            + self.other_deductions
        )

    def as_dict(self) -> dict[str, Decimal]:
        return {
            "pf_employee": self.pf_employee,
            "pf_employer": self.pf_employer,
            "professional_tax": self.professional_tax,
            "income_tax": self.income_tax,
            "tds_deduction": self.tds_deduction,
            "loan_deduction": self.loan_deduction,
            "other_deductions": self.other_deductions,
        }


@dataclass
class PayrollComputation:
    """Complete result of computing one employee's payroll for a period."""

    period: Period
    classification: DayClassification
    resolved: SalaryComponents
    proration: ProrationResult
    deductions: Deductions

    @property
    def worked_days(self) -> WorkedDaysBreakdown:
        return self.proration.worked_days

    @property
    def gross_salary(self) -> Decimal:
        return self.proration.adjusted_gross

    @property
    def total_deductions(self) -> Decimal:
        return self.deductions.total

    @property
    def net_salary(self) -> Decimal:
        return self.gross_salary - self.total_deductions

    def payroll_values(self) -> dict[str, Decimal]:
        """Column values for the payroll record."""
        values: dict[str, Decimal] = {}
        values.update(self.proration.adjusted.as_dict())
        values["gross_salary"] = self.gross_salary
        values.update(self.deductions.as_dict())
        values["total_deductions"] = self.total_deductions
        values["net_salary"] = self.net_salary
        return values
