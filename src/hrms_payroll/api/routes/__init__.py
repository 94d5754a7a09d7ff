"""API routes."""

from hrms_payroll.api.routes.attendance import router as attendance_router
from hrms_payroll.api.routes.health import router as health_router
from hrms_payroll.api.routes.leaves import router as leaves_router
from hrms_payroll.api.routes.payroll import router as payroll_router

__all__ = ["attendance_router", "health_router", "leaves_router", "payroll_router"]
