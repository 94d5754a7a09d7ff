"""Payroll service - generates, validates and persists payroll records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hrms_payroll.calculators.engine import PayrollEngine
from hrms_payroll.calculators.period import resolve_period
from hrms_payroll.calculators.salary_resolver import MissingSalaryInfoError
from hrms_payroll.calculators.types import (
    AttendanceEntry,
    LeaveEntry,
    LeaveStatus,
    PayrollComputation,
    Period,
    SalaryStructure,
)
from hrms_payroll.config import Settings, get_settings
from hrms_payroll.database import dialect_insert
from hrms_payroll.models import Attendance, Employee, Leave, Payroll, SalaryInfo, WorkedDays
from hrms_payroll.models.payroll import PAYROLL_COMPUTED_FIELDS, WORKED_DAYS_FIELDS
from hrms_payroll.services.state_machine import (
    PayrollAction,
    PayrollStateMachine,
    PayrollStatus,
)

logger = logging.getLogger(__name__)


class EmployeeNotFoundError(LookupError):
    """Raised when an employee id is not in the directory."""

    def __init__(self, employee_id: int):
        self.employee_id = employee_id
        super().__init__(f"Employee {employee_id} not found")


class PayrollNotFoundError(LookupError):
    """Raised when a payroll id does not exist."""

    def __init__(self, payroll_id: int):
        self.payroll_id = payroll_id
        super().__init__(f"Payroll {payroll_id} not found")


@dataclass
class EmployeeOutcome:
    """Result of generating one employee's payroll inside a batch."""

    employee_id: int
    payroll: Payroll | None = None
    skipped: bool = False
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.payroll is not None


@dataclass
class BatchGenerationResult:
    """Aggregate of a payroll batch over every employee."""

    month: int
    year: int
    payrun_id: str
    outcomes: list[EmployeeOutcome] = field(default_factory=list)

    @property
    def total_employees(self) -> int:
        return len(self.outcomes)

    @property
    def payrolls(self) -> list[Payroll]:
        return [o.payroll for o in self.outcomes if o.payroll is not None]

    @property
    def generated_count(self) -> int:
        return len(self.payrolls)

    @property
    def skipped_count(self) -> int:
        return sum(1 for o in self.outcomes if o.skipped)

    @property
    def errors(self) -> list[dict[str, Any]]:
        return [
            {"employee_id": o.employee_id, "message": o.error}
            for o in self.outcomes
            if o.error is not None
        ]

    @property
    def failed_count(self) -> int:
        return len(self.errors)


class PayrollService:
    """Service for the payroll record lifecycle.

    Operations:
    - compute: run the engine for one employee without writing anything
    - generate: create or recompute one employee's payroll in place
    - generate_for_all: generate for every employee without a record yet
    - validate: mark a payroll as validated (idempotent)
    - get_payroll / list_payrolls / delete_payroll

    Records are keyed by (employee, month, year) and written with the
    database's insert-or-update, so the unique key is the only guard
    against duplicates. The service flushes; callers own the transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        settings: Settings | None = None,
        engine: PayrollEngine | None = None,
        state_machine: PayrollStateMachine | None = None,
    ):
        self.session = session
        self.settings = settings or get_settings()
        self.engine = engine or PayrollEngine(self.settings.default_professional_tax)
        self.state_machine = state_machine or PayrollStateMachine(
            self.settings.validated_recompute_policy
        )

    def default_payrun_id(self, period: Period) -> str:
        """Label shared by every payroll generated for a period by default."""
        return f"{self.settings.default_payrun_prefix}-{period.year}-{period.month:02d}"

    async def compute(self, employee_id: int, period: Period) -> PayrollComputation:
        """Load the employee's inputs for the period and run the engine."""
        structure = await self._get_salary_structure(employee_id)
        attendance = await self._get_attendance(employee_id, period)
        leaves = await self._get_approved_leaves(employee_id, period)
        return self.engine.compute(period, structure, attendance, leaves, employee_id)

    async def generate(
        self,
        employee_id: int,
        month: int,
        year: int,
        payrun_id: str | None = None,
    ) -> Payroll:
        """Generate (or recompute in place) one employee's payroll.

        Raises:
            InvalidPeriodError: Before any I/O if month/year are invalid
            EmployeeNotFoundError: If the employee does not exist
            MissingSalaryInfoError: If the salary structure is unusable
            PayrollLockedError: If the payroll is validated and the recompute
                policy is ``reject``
        """
        period = resolve_period(year, month)

        if await self.session.get(Employee, employee_id) is None:
            raise EmployeeNotFoundError(employee_id)

        existing = await self._get_payroll_for_period(employee_id, period)
        self.state_machine.apply(existing, PayrollAction.GENERATE)

        if payrun_id is None:
            payrun_id = existing.payrun_id if existing else self.default_payrun_id(period)

        computation = await self.compute(employee_id, period)
        payroll = await self._upsert(employee_id, period, computation, payrun_id)

        logger.info(
            "%s payroll %s for employee %s (%04d-%02d, payrun %s): net %s",
            "Recomputed" if existing else "Generated",
            payroll.id,
            employee_id,
            year,
            month,
            payrun_id,
            payroll.net_salary,
        )
        return payroll

    async def generate_for_all(
        self,
        month: int,
        year: int,
        payrun_id: str | None = None,
    ) -> BatchGenerationResult:
        """Generate payroll for every employee that has none for the period.

        Employees that already have a record are skipped. An employee whose
        salary structure is unusable is reported in ``errors`` and does not
        stop the others; nothing is written for that employee.

        Raises:
            InvalidPeriodError: Before any I/O if month/year are invalid
        """
        period = resolve_period(year, month)
        payrun_id = payrun_id or self.default_payrun_id(period)

        result = await self.session.execute(select(Employee.id).order_by(Employee.id))
        employee_ids = list(result.scalars().all())

        result = await self.session.execute(
            select(Payroll.employee_id).where(
                Payroll.month == period.month,
                Payroll.year == period.year,
            )
        )
        already_generated = set(result.scalars().all())

        batch = BatchGenerationResult(month=month, year=year, payrun_id=payrun_id)
        for employee_id in employee_ids:
            outcome = await self._generate_outcome(
                employee_id, period, payrun_id, already_generated
            )
            batch.outcomes.append(outcome)

        logger.info(
            "Payrun %s: %d generated, %d skipped, %d failed of %d employees",
            payrun_id,
            batch.generated_count,
            batch.skipped_count,
            batch.failed_count,
            batch.total_employees,
        )
        return batch

    async def validate(self, payroll_id: int) -> Payroll:
        """Mark a payroll as validated. Amounts are not touched."""
        payroll = await self.get_payroll(payroll_id)
        self.state_machine.apply(payroll, PayrollAction.VALIDATE)

        if not payroll.is_validated:
            payroll.is_validated = True
            payroll.validated_at = datetime.now(timezone.utc)
            await self.session.flush()
            logger.info("Validated payroll %s", payroll_id)
            payroll = await self.get_payroll(payroll_id)

        return payroll

    async def get_payroll(self, payroll_id: int) -> Payroll:
        """Load a payroll with its worked-days breakdown and employee."""
        result = await self.session.execute(
            select(Payroll)
            .where(Payroll.id == payroll_id)
            .options(selectinload(Payroll.worked_days), selectinload(Payroll.employee))
            .execution_options(populate_existing=True)
        )
        payroll = result.scalar_one_or_none()
        if payroll is None:
            raise PayrollNotFoundError(payroll_id)
        return payroll

    async def list_payrolls(
        self,
        month: int | None = None,
        year: int | None = None,
        employee_id: int | None = None,
    ) -> list[Payroll]:
        """List payrolls, newest period first."""
        query = select(Payroll).options(
            selectinload(Payroll.worked_days), selectinload(Payroll.employee)
        )
        if month is not None:
            query = query.where(Payroll.month == month)
        if year is not None:
            query = query.where(Payroll.year == year)
        if employee_id is not None:
            query = query.where(Payroll.employee_id == employee_id)

        query = query.order_by(Payroll.year.desc(), Payroll.month.desc(), Payroll.employee_id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def delete_payroll(self, payroll_id: int) -> None:
        """Delete a payroll and its worked-days breakdown."""
        payroll = await self.get_payroll(payroll_id)
        await self.session.delete(payroll)
        await self.session.flush()
        logger.info("Deleted payroll %s", payroll_id)

    async def _generate_outcome(
        self,
        employee_id: int,
        period: Period,
        payrun_id: str,
        already_generated: set[int],
    ) -> EmployeeOutcome:
        if employee_id in already_generated:
            logger.debug("Skipping employee %s: payroll already exists", employee_id)
            return EmployeeOutcome(employee_id=employee_id, skipped=True)

        try:
            computation = await self.compute(employee_id, period)
        except MissingSalaryInfoError as e:
            logger.warning("Payroll not generated for employee %s: %s", employee_id, e)
            return EmployeeOutcome(employee_id=employee_id, error=str(e))

        payroll = await self._upsert(employee_id, period, computation, payrun_id)
        return EmployeeOutcome(employee_id=employee_id, payroll=payroll)

    async def _upsert(
        self,
        employee_id: int,
        period: Period,
        computation: PayrollComputation,
        payrun_id: str,
    ) -> Payroll:
        """Insert or overwrite the payroll and its breakdown for the key."""
        insert = dialect_insert(self.session)

        stmt = insert(Payroll).values(
            employee_id=employee_id,
            month=period.month,
            year=period.year,
            payrun_id=payrun_id,
            status=PayrollStatus.PROCESSED.value,
            is_validated=False,
            **computation.payroll_values(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["employee_id", "month", "year"],
            set_={
                **{name: stmt.excluded[name] for name in PAYROLL_COMPUTED_FIELDS},
                "payrun_id": stmt.excluded.payrun_id,
                "status": PayrollStatus.PROCESSED.value,
                "updated_at": func.now(),
            },
        ).returning(Payroll.id)
        payroll_id = (await self.session.execute(stmt)).scalar_one()

        wd_stmt = insert(WorkedDays).values(
            payroll_id=payroll_id,
            **computation.worked_days.as_dict(),
        )
        wd_stmt = wd_stmt.on_conflict_do_update(
            index_elements=["payroll_id"],
            set_={
                **{name: wd_stmt.excluded[name] for name in WORKED_DAYS_FIELDS},
                "updated_at": func.now(),
            },
        )
        await self.session.execute(wd_stmt)

        return await self.get_payroll(payroll_id)

    # === Data Loading Methods ===

    async def _get_payroll_for_period(
        self, employee_id: int, period: Period
    ) -> Payroll | None:
        result = await self.session.execute(
            select(Payroll).where(
                Payroll.employee_id == employee_id,
                Payroll.month == period.month,
                Payroll.year == period.year,
            )
        )
        return result.scalar_one_or_none()

    async def _get_salary_structure(self, employee_id: int) -> SalaryStructure | None:
        result = await self.session.execute(
            select(SalaryInfo).where(SalaryInfo.employee_id == employee_id)
        )
        info = result.scalar_one_or_none()
        if info is None:
            return None
        return SalaryStructure.from_record(info)

    async def _get_attendance(
        self, employee_id: int, period: Period
    ) -> list[AttendanceEntry]:
        result = await self.session.execute(
            select(Attendance).where(
                Attendance.employee_id == employee_id,
                Attendance.work_date >= period.first_day,
                Attendance.work_date <= period.last_day,
            )
            .execution_options(populate_existing=True)
        )
        return [
            AttendanceEntry(date=row.work_date, status=row.status)
            for row in result.scalars().all()
        ]

    async def _get_approved_leaves(
        self, employee_id: int, period: Period
    ) -> list[LeaveEntry]:
        """Approved leaves whose range intersects the period."""
        result = await self.session.execute(
            select(Leave).where(
                Leave.employee_id == employee_id,
                Leave.status == LeaveStatus.APPROVED.value,
                Leave.start_date <= period.last_day,
                Leave.end_date >= period.first_day,
            )
        )
        return [
            LeaveEntry(
                leave_type=row.leave_type,
                start_date=row.start_date,
                end_date=row.end_date,
                status=row.status,
            )
            for row in result.scalars().all()
        ]
