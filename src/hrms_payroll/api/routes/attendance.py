"""Attendance API endpoints."""

from datetime import date

from fastapi import APIRouter

from hrms_payroll.api.dependencies import DbSession
from hrms_payroll.api.schemas import AttendanceResponse
from hrms_payroll.services.attendance_service import AttendanceService

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.get(
    "",
    response_model=list[AttendanceResponse],
)
async def list_attendance(
    db: DbSession,
    employee_id: int | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[AttendanceResponse]:
    """List attendance records with hours worked."""
    records = await AttendanceService(db).list_attendance(employee_id, start_date, end_date)
    return [AttendanceResponse.model_validate(record) for record in records]
