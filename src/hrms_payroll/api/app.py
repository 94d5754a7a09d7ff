"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hrms_payroll import __version__
from hrms_payroll.api.routes import (
    attendance_router,
    health_router,
    leaves_router,
    payroll_router,
)
from hrms_payroll.calculators.period import InvalidPeriodError
from hrms_payroll.calculators.salary_resolver import MissingSalaryInfoError
from hrms_payroll.config import configure_logging
from hrms_payroll.database import init_db
from hrms_payroll.services.leave_service import (
    InvalidLeaveRequestError,
    LeaveNotFoundError,
    LeaveOverlapError,
)
from hrms_payroll.services.payroll_service import (
    EmployeeNotFoundError,
    PayrollNotFoundError,
)
from hrms_payroll.services.state_machine import InvalidTransitionError, PayrollLockedError

logger = logging.getLogger(__name__)

# Domain error -> (HTTP status, error code)
ERROR_STATUS: list[tuple[type[Exception], int, str]] = [
    (InvalidPeriodError, status.HTTP_400_BAD_REQUEST, "INVALID_PERIOD"),
    (MissingSalaryInfoError, status.HTTP_400_BAD_REQUEST, "MISSING_SALARY_INFO"),
    (InvalidLeaveRequestError, status.HTTP_400_BAD_REQUEST, "INVALID_LEAVE_REQUEST"),
    (EmployeeNotFoundError, status.HTTP_404_NOT_FOUND, "EMPLOYEE_NOT_FOUND"),
    (PayrollNotFoundError, status.HTTP_404_NOT_FOUND, "PAYROLL_NOT_FOUND"),
    (LeaveNotFoundError, status.HTTP_404_NOT_FOUND, "LEAVE_NOT_FOUND"),
    (PayrollLockedError, status.HTTP_409_CONFLICT, "PAYROLL_LOCKED"),
    (InvalidTransitionError, status.HTTP_409_CONFLICT, "INVALID_TRANSITION"),
    (LeaveOverlapError, status.HTTP_409_CONFLICT, "LEAVE_OVERLAP"),
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    configure_logging()
    init_db()
    yield


def _domain_error_handler(status_code: int, code: str):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, code, exc)
        content: dict[str, Any] = {"detail": str(exc), "code": code}
        # Structured attributes set by the exception, e.g. employee_id
        context = jsonable_encoder(vars(exc))
        if context:
            content["context"] = context
        return JSONResponse(status_code=status_code, content=content)

    return handler


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="HRMS Payroll API",
        description="Monthly payroll computation for the HRMS",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    for exc_class, status_code, code in ERROR_STATUS:
        app.add_exception_handler(exc_class, _domain_error_handler(status_code, code))

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(payroll_router, prefix="/api/v1")
    app.include_router(leaves_router, prefix="/api/v1")
    app.include_router(attendance_router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
