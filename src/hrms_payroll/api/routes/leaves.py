"""Leave API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from hrms_payroll.api.dependencies import DbSession
from hrms_payroll.api.schemas import (
    ErrorResponse,
    LeaveCreate,
    LeaveResponse,
    LeaveStatusUpdate,
)
from hrms_payroll.services.leave_service import LeaveService

router = APIRouter(prefix="/leaves", tags=["leaves"])


@router.post(
    "",
    response_model=LeaveResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def apply_leave(
    db: DbSession,
    payload: LeaveCreate,
) -> LeaveResponse:
    """Apply for leave. The request starts out pending."""
    leave = await LeaveService(db).apply_leave(
        employee_id=payload.employee_id,
        leave_type=payload.leave_type,
        start_date=payload.start_date,
        end_date=payload.end_date,
        reason=payload.reason,
    )
    await db.commit()
    return LeaveResponse.model_validate(leave)


@router.get(
    "",
    response_model=list[LeaveResponse],
)
async def list_leaves(
    db: DbSession,
    employee_id: int | None = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
) -> list[LeaveResponse]:
    """List leave requests with optional filters."""
    leaves = await LeaveService(db).list_leaves(employee_id, status_filter)
    return [LeaveResponse.model_validate(leave) for leave in leaves]


@router.put(
    "/{leave_id}/status",
    response_model=LeaveResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_leave_status(
    db: DbSession,
    leave_id: Annotated[int, Path()],
    payload: LeaveStatusUpdate,
) -> LeaveResponse:
    """Approve or reject a leave. Approval marks the covered dates as Leave."""
    leave = await LeaveService(db).update_status(leave_id, payload.status)
    await db.commit()
    return LeaveResponse.model_validate(leave)
