"""Business logic services."""

from hrms_payroll.services.attendance_service import AttendanceService
from hrms_payroll.services.leave_service import (
    InvalidLeaveRequestError,
    LeaveNotFoundError,
    LeaveOverlapError,
    LeaveService,
)
from hrms_payroll.services.payroll_service import (
    BatchGenerationResult,
    EmployeeNotFoundError,
    EmployeeOutcome,
    PayrollNotFoundError,
    PayrollService,
)
from hrms_payroll.services.state_machine import (
    InvalidTransitionError,
    PayrollLockedError,
    PayrollStateMachine,
)

__all__ = [
    "AttendanceService",
    "BatchGenerationResult",
    "EmployeeNotFoundError",
    "EmployeeOutcome",
    "InvalidLeaveRequestError",
    "InvalidTransitionError",
    "LeaveNotFoundError",
    "LeaveOverlapError",
    "LeaveService",
    "PayrollLockedError",
    "PayrollNotFoundError",
    "PayrollService",
    "PayrollStateMachine",
]
