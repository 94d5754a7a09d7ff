"""Leave service - leave requests and their attendance side effect."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hrms_payroll.calculators.period import iter_days
from hrms_payroll.calculators.types import AttendanceStatus, LeaveStatus
from hrms_payroll.database import dialect_insert
from hrms_payroll.models import Attendance, Employee, Leave
from hrms_payroll.services.payroll_service import EmployeeNotFoundError

logger = logging.getLogger(__name__)

DECIDED_STATUSES = (LeaveStatus.APPROVED.value, LeaveStatus.REJECTED.value)


class LeaveNotFoundError(LookupError):
    """Raised when a leave id does not exist."""

    def __init__(self, leave_id: int):
        self.leave_id = leave_id
        super().__init__(f"Leave request {leave_id} not found")


class InvalidLeaveRequestError(ValueError):
    """Raised for a malformed leave request or status change."""


class LeaveOverlapError(Exception):
    """Raised when a new request overlaps an approved leave."""

    def __init__(self, employee_id: int, start_date: date, end_date: date, leave_id: int):
        self.employee_id = employee_id
        self.start_date = start_date
        self.end_date = end_date
        self.leave_id = leave_id
        super().__init__(
            f"Leave request {start_date}..{end_date} for employee {employee_id} "
            f"overlaps approved leave {leave_id}"
        )


class LeaveService:
    """Service for leave requests.

    Approving a leave marks every date it covers (weekends included) as a
    ``Leave`` attendance row, overwriting whatever status was recorded.
    The service flushes; callers own the transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def apply_leave(
        self,
        employee_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: str | None = None,
    ) -> Leave:
        """Create a pending leave request.

        Raises:
            InvalidLeaveRequestError: If the range is reversed
            EmployeeNotFoundError: If the employee does not exist
            LeaveOverlapError: If the range intersects an approved leave
        """
        if start_date > end_date:
            raise InvalidLeaveRequestError("Start date must not be after end date")

        if await self.session.get(Employee, employee_id) is None:
            raise EmployeeNotFoundError(employee_id)

        result = await self.session.execute(
            select(Leave.id)
            .where(
                Leave.employee_id == employee_id,
                Leave.status == LeaveStatus.APPROVED.value,
                Leave.start_date <= end_date,
                Leave.end_date >= start_date,
            )
            .limit(1)
        )
        overlapping = result.scalar_one_or_none()
        if overlapping is not None:
            raise LeaveOverlapError(employee_id, start_date, end_date, overlapping)

        leave = Leave(
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING.value,
        )
        self.session.add(leave)
        await self.session.flush()
        await self.session.refresh(leave)

        logger.info(
            "Employee %s applied for %s from %s to %s (leave %s)",
            employee_id,
            leave_type,
            start_date,
            end_date,
            leave.id,
        )
        return leave

    async def get_leave(self, leave_id: int) -> Leave:
        leave = await self.session.get(Leave, leave_id)
        if leave is None:
            raise LeaveNotFoundError(leave_id)
        return leave

    async def list_leaves(
        self,
        employee_id: int | None = None,
        status: str | None = None,
    ) -> list[Leave]:
        """List leave requests, most recent start first."""
        query = select(Leave)
        if employee_id is not None:
            query = query.where(Leave.employee_id == employee_id)
        if status is not None:
            query = query.where(Leave.status == status)
        query = query.order_by(Leave.start_date.desc(), Leave.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update_status(self, leave_id: int, status: str) -> Leave:
        """Approve or reject a leave request.

        Raises:
            InvalidLeaveRequestError: If status is not Approved or Rejected
            LeaveNotFoundError: If the leave does not exist
        """
        if status not in DECIDED_STATUSES:
            raise InvalidLeaveRequestError(
                f"Status must be one of {', '.join(DECIDED_STATUSES)}, got '{status}'"
            )

        leave = await self.get_leave(leave_id)
        leave.status = status
        await self.session.flush()
        await self.session.refresh(leave)

        if status == LeaveStatus.APPROVED.value:
            marked = await self._mark_attendance(leave)
            logger.info("Approved leave %s; marked %d attendance days", leave_id, marked)
        else:
            logger.info("Rejected leave %s", leave_id)

        return leave

    async def _mark_attendance(self, leave: Leave) -> int:
        """Upsert a ``Leave`` attendance row for every date of the leave."""
        insert = dialect_insert(self.session)
        rows = [
            {
                "employee_id": leave.employee_id,
                "work_date": day,
                "status": AttendanceStatus.LEAVE.value,
            }
            for day in iter_days(leave.start_date, leave.end_date)
        ]

        stmt = insert(Attendance).values(rows)
        stmt = stmt.on_conflict_do_update(
            index_elements=["employee_id", "work_date"],
            set_={
                "status": AttendanceStatus.LEAVE.value,
                "updated_at": func.now(),
            },
        )
        await self.session.execute(stmt)
        return len(rows)
