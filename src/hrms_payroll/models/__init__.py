"""ORM models."""

from hrms_payroll.models.base import Base, TimestampMixin
from hrms_payroll.models.employee import Employee, SalaryInfo
from hrms_payroll.models.payroll import Payroll, WorkedDays
from hrms_payroll.models.time import Attendance, Leave

__all__ = [
    "Attendance",
    "Base",
    "Employee",
    "Leave",
    "Payroll",
    "SalaryInfo",
    "TimestampMixin",
    "WorkedDays",
]
