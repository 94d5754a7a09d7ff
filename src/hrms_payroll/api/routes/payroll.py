"""Payroll API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from hrms_payroll.api.dependencies import DbSession
from hrms_payroll.api.schemas import (
    BatchError,
    BatchGenerationResponse,
    ErrorResponse,
    GenerateRequest,
    PayrollListResponse,
    PayrollResponse,
)
from hrms_payroll.models import Payroll
from hrms_payroll.services.payroll_service import BatchGenerationResult, PayrollService

router = APIRouter(prefix="/payroll", tags=["payroll"])


def _payroll_response(payroll: Payroll) -> PayrollResponse:
    resp = PayrollResponse.model_validate(payroll)
    resp.employee_name = payroll.employee.full_name
    return resp


def _batch_response(batch: BatchGenerationResult) -> BatchGenerationResponse:
    return BatchGenerationResponse(
        month=batch.month,
        year=batch.year,
        payrun_id=batch.payrun_id,
        total_employees=batch.total_employees,
        generated_count=batch.generated_count,
        skipped_count=batch.skipped_count,
        failed_count=batch.failed_count,
        payrolls=[_payroll_response(p) for p in batch.payrolls],
        errors=[BatchError(**e) for e in batch.errors],
    )


# ============================================================================
# Generation
# ============================================================================


@router.post(
    "/generate",
    response_model=PayrollResponse | BatchGenerationResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def generate_payroll(
    db: DbSession,
    payload: GenerateRequest,
) -> PayrollResponse | BatchGenerationResponse:
    """Generate payroll for one employee, or for every employee without one.

    Regenerating an existing (employee, month, year) recomputes it in place.
    """
    service = PayrollService(db)

    if payload.employee_id is not None:
        payroll = await service.generate(
            payload.employee_id, payload.month, payload.year, payload.payrun_id
        )
        await db.commit()
        return _payroll_response(payroll)

    batch = await service.generate_for_all(payload.month, payload.year, payload.payrun_id)
    await db.commit()
    return _batch_response(batch)


# ============================================================================
# Payroll records
# ============================================================================


@router.get(
    "",
    response_model=PayrollListResponse,
)
async def list_payrolls(
    db: DbSession,
    month: Annotated[int | None, Query(ge=1, le=12)] = None,
    year: int | None = None,
    employee_id: int | None = None,
) -> PayrollListResponse:
    """List payrolls with optional filters."""
    payrolls = await PayrollService(db).list_payrolls(month, year, employee_id)
    items = [_payroll_response(p) for p in payrolls]
    return PayrollListResponse(items=items, total=len(items))


@router.get(
    "/{payroll_id}",
    response_model=PayrollResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_payroll(
    db: DbSession,
    payroll_id: Annotated[int, Path()],
) -> PayrollResponse:
    """Get a payroll with its worked-days breakdown."""
    payroll = await PayrollService(db).get_payroll(payroll_id)
    return _payroll_response(payroll)


@router.post(
    "/{payroll_id}/validate",
    response_model=PayrollResponse,
    responses={404: {"model": ErrorResponse}},
)
async def validate_payroll(
    db: DbSession,
    payroll_id: Annotated[int, Path()],
) -> PayrollResponse:
    """Mark a payroll as validated."""
    payroll = await PayrollService(db).validate(payroll_id)
    await db.commit()
    return _payroll_response(payroll)


@router.delete(
    "/{payroll_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_payroll(
    db: DbSession,
    payroll_id: Annotated[int, Path()],
) -> None:
    """Delete a payroll and its worked-days breakdown."""
    await PayrollService(db).delete_payroll(payroll_id)
    await db.commit()
