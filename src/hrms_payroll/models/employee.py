"""Employee and salary structure models."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hrms_payroll.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from hrms_payroll.models.payroll import Payroll
    from hrms_payroll.models.time import Attendance, Leave

Money = Numeric(12, 2)
Percent = Numeric(5, 2)


class Employee(Base, TimestampMixin):
    """Employee record."""

    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    department: Mapped[str | None] = mapped_column(String(100), nullable=True)
    position: Mapped[str | None] = mapped_column(String(100), nullable=True)
    hire_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Relationships
    salary_info: Mapped[SalaryInfo | None] = relationship(
        back_populates="employee",
        uselist=False,
        cascade="all, delete-orphan",
    )
    attendance: Mapped[list[Attendance]] = relationship(
        back_populates="employee",
        cascade="all, delete-orphan",
    )
    leaves: Mapped[list[Leave]] = relationship(
        back_populates="employee",
        cascade="all, delete-orphan",
    )
    payrolls: Mapped[list[Payroll]] = relationship(
        back_populates="employee",
        cascade="all, delete-orphan",
    )

    @property
    def full_name(self) -> str:
        """Get full name."""
        return f"{self.first_name} {self.last_name}"


class SalaryInfo(Base, TimestampMixin):
    """Salary structure for an employee (at most one per employee).

    Each component may be stored as an absolute amount, a percentage, or both;
    the resolver prefers a positive amount over the percentage.
    """

    __tablename__ = "salary_info"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    monthly_wage: Mapped[Decimal | None] = mapped_column(Money, nullable=True)

    basic_salary: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    basic_salary_percentage: Mapped[Decimal | None] = mapped_column(Percent, nullable=True)
    hra: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    hra_percentage: Mapped[Decimal | None] = mapped_column(Percent, nullable=True)
    standard_allowance: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    standard_allowance_percentage: Mapped[Decimal | None] = mapped_column(
        Percent, nullable=True
    )
    performance_bonus: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    performance_bonus_percentage: Mapped[Decimal | None] = mapped_column(
        Percent, nullable=True
    )
    leave_travel_allowance: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    leave_travel_allowance_percentage: Mapped[Decimal | None] = mapped_column(
        Percent, nullable=True
    )
    food_allowance: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    fixed_allowance: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    fixed_allowance_percentage: Mapped[Decimal | None] = mapped_column(
        Percent, nullable=True
    )

    pf_employee: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    pf_employee_percentage: Mapped[Decimal | None] = mapped_column(Percent, nullable=True)
    pf_employer: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    pf_employer_percentage: Mapped[Decimal | None] = mapped_column(Percent, nullable=True)
    professional_tax: Mapped[Decimal | None] = mapped_column(Money, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "monthly_wage IS NULL OR monthly_wage >= 0",
            name="salary_info_wage_non_negative",
        ),
    )

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="salary_info")
