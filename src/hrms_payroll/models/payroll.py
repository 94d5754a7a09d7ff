"""Payroll and worked-days breakdown models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hrms_payroll.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from hrms_payroll.models.employee import Employee

Money = Numeric(12, 2)
ZERO = Decimal("0")

# Columns written by every (re)computation. is_validated, validated_at and
# status are not among them.
PAYROLL_COMPUTED_FIELDS = (
    "basic_salary",
    "hra",
    "standard_allowance",
    "performance_bonus",
    "leave_travel_allowance",
    "food_allowance",
    "fixed_allowance",
    "gross_salary",
    "pf_employee",
    "pf_employer",
    "professional_tax",
    "income_tax",
    "tds_deduction",
    "loan_deduction",
    "other_deductions",
    "total_deductions",
    "net_salary",
)

WORKED_DAYS_FIELDS = (
    "attendance_days",
    "attendance_amount",
    "paid_time_off_days",
    "paid_time_off_amount",
    "unpaid_time_off_days",
    "unpaid_time_off_amount",
    "total_payable_days",
    "total_payable_amount",
    "total_working_days",
    "working_days_per_week",
)


class Payroll(Base, TimestampMixin):
    """Computed payroll statement, one per employee per month."""

    __tablename__ = "payroll"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    payrun_id: Mapped[str] = mapped_column(String(100), nullable=False)

    # Prorated earnings
    basic_salary: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    hra: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    standard_allowance: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    performance_bonus: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    leave_travel_allowance: Mapped[Decimal] = mapped_column(
        Money, nullable=False, default=ZERO
    )
    food_allowance: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    fixed_allowance: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    gross_salary: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)

    # Deductions
    pf_employee: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    pf_employer: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    professional_tax: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    income_tax: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    tds_deduction: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    loan_deduction: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    other_deductions: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    total_deductions: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    net_salary: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Processed")
    is_validated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    validated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("employee_id", "month", "year", name="payroll_employee_period_unique"),
        CheckConstraint("month BETWEEN 1 AND 12", name="payroll_month_check"),
        CheckConstraint(
            "status IN ('Pending', 'Processed')",
            name="payroll_status_check",
        ),
    )

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="payrolls")
    worked_days: Mapped[WorkedDays | None] = relationship(
        back_populates="payroll",
        uselist=False,
        cascade="all, delete-orphan",
    )


class WorkedDays(Base, TimestampMixin):
    """Worked-days breakdown backing a payroll statement."""

    __tablename__ = "worked_days"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    payroll_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("payroll.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    attendance_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    attendance_amount: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    paid_time_off_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    paid_time_off_amount: Mapped[Decimal] = mapped_column(Money, nullable=False, default=ZERO)
    unpaid_time_off_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    unpaid_time_off_amount: Mapped[Decimal] = mapped_column(
        Money, nullable=False, default=ZERO
    )
    total_payable_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_payable_amount: Mapped[Decimal] = mapped_column(
        Money, nullable=False, default=ZERO
    )
    total_working_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    working_days_per_week: Mapped[int] = mapped_column(Integer, nullable=False, default=5)

    # Relationships
    payroll: Mapped[Payroll] = relationship(back_populates="worked_days")
