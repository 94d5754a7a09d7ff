"""Attendance and leave models."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hrms_payroll.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from hrms_payroll.models.employee import Employee


class Attendance(Base, TimestampMixin):
    """Daily attendance record (one per employee per date)."""

    __tablename__ = "attendance"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    work_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Present")
    check_in: Mapped[time | None] = mapped_column(Time, nullable=True)
    check_out: Mapped[time | None] = mapped_column(Time, nullable=True)

    __table_args__ = (
        UniqueConstraint("employee_id", "work_date", name="attendance_employee_date_unique"),
        CheckConstraint(
            "status IN ('Present', 'Absent', 'Leave')",
            name="attendance_status_check",
        ),
    )

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="attendance")

    @property
    def total_hours(self) -> Decimal | None:
        """Hours between check-in and check-out, None if either is missing.

        A check-out earlier than the check-in is an overnight shift ending
        the next day.
        """
        if self.check_in is None or self.check_out is None:
            return None
        start = datetime.combine(self.work_date, self.check_in)
        end = datetime.combine(self.work_date, self.check_out)
        if end < start:
            end += timedelta(days=1)
        seconds = (end - start).total_seconds()
        return (Decimal(int(seconds)) / Decimal(3600)).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )


class Leave(Base, TimestampMixin):
    """Leave request covering an inclusive date range."""

    __tablename__ = "leaves"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    leave_type: Mapped[str] = mapped_column(String(50), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Pending")

    __table_args__ = (
        CheckConstraint(
            "status IN ('Pending', 'Approved', 'Rejected')",
            name="leave_status_check",
        ),
        CheckConstraint("end_date >= start_date", name="leave_dates_check"),
    )

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="leaves")
