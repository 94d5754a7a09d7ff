"""Attendance service - read access to recorded attendance."""

from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hrms_payroll.models import Attendance


class AttendanceService:
    """Service for querying attendance records."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_attendance(
        self,
        employee_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Attendance]:
        """List attendance, most recent date first.

        Both range bounds are inclusive and optional.
        """
        query = select(Attendance)
        if employee_id is not None:
            query = query.where(Attendance.employee_id == employee_id)
        if start_date is not None:
            query = query.where(Attendance.work_date >= start_date)
        if end_date is not None:
            query = query.where(Attendance.work_date <= end_date)

        query = query.order_by(Attendance.work_date.desc(), Attendance.employee_id)
        result = await self.session.execute(
            query.execution_options(populate_existing=True)
        )
        return list(result.scalars().all())
