"""Pydantic schemas for API request/response models."""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Payroll schemas
# ============================================================================


class GenerateRequest(BaseModel):
    """Schema for generating payroll.

    Without ``employee_id`` every employee lacking a payroll for the period
    is generated. Month and year are checked by the calendar, not here, so
    an invalid period is reported as a domain error.
    """

    employee_id: int | None = None
    month: int
    year: int
    payrun_id: str | None = Field(default=None, max_length=100)


class WorkedDaysResponse(BaseModel):
    """Schema for the worked-days breakdown of a payroll."""

    model_config = ConfigDict(from_attributes=True)

    attendance_days: int
    attendance_amount: Decimal
    paid_time_off_days: int
    paid_time_off_amount: Decimal
    unpaid_time_off_days: int
    unpaid_time_off_amount: Decimal
    total_payable_days: int
    total_payable_amount: Decimal
    total_working_days: int
    working_days_per_week: int


class PayrollResponse(BaseModel):
    """Schema for a payroll record (the payslip view)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    employee_name: str | None = None
    month: int
    year: int
    payrun_id: str | None = None

    basic_salary: Decimal
    hra: Decimal
    standard_allowance: Decimal
    performance_bonus: Decimal
    leave_travel_allowance: Decimal
    food_allowance: Decimal
    fixed_allowance: Decimal
    gross_salary: Decimal

    pf_employee: Decimal
    pf_employer: Decimal
    professional_tax: Decimal
    income_tax: Decimal
    tds_deduction: Decimal
    loan_deduction: Decimal
    other_deductions: Decimal
    total_deductions: Decimal
    net_salary: Decimal

    status: str
    is_validated: bool
    validated_at: datetime | None = None
    worked_days: WorkedDaysResponse | None = None
    created_at: datetime
    updated_at: datetime


class PayrollListResponse(BaseModel):
    """Schema for listing payrolls."""

    items: list[PayrollResponse]
    total: int


class BatchError(BaseModel):
    """One employee that could not be generated in a batch."""

    employee_id: int
    message: str


class BatchGenerationResponse(BaseModel):
    """Schema for the result of generating payroll for all employees."""

    month: int
    year: int
    payrun_id: str
    total_employees: int
    generated_count: int
    skipped_count: int
    failed_count: int
    payrolls: list[PayrollResponse]
    errors: list[BatchError]


# ============================================================================
# Leave schemas
# ============================================================================


class LeaveCreate(BaseModel):
    """Schema for applying for leave."""

    employee_id: int
    leave_type: str = Field(min_length=1, max_length=50)
    start_date: date
    end_date: date
    reason: str | None = None


class LeaveStatusUpdate(BaseModel):
    """Schema for approving or rejecting a leave."""

    status: str


class LeaveResponse(BaseModel):
    """Schema for leave response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    leave_type: str
    start_date: date
    end_date: date
    reason: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime


# ============================================================================
# Attendance schemas
# ============================================================================


class AttendanceResponse(BaseModel):
    """Schema for an attendance record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    work_date: date
    status: str
    check_in: time | None = None
    check_out: time | None = None
    total_hours: Decimal | None = None


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
    context: dict[str, Any] | None = None
