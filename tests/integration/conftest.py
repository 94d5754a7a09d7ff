"""Integration test fixtures with a real (in-memory SQLite) database."""

from __future__ import annotations

import dataclasses
from collections.abc import AsyncGenerator
from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from hrms_payroll.api.app import create_app
from hrms_payroll.api.dependencies import get_db_session
from hrms_payroll.calculators.period import iter_days
from hrms_payroll.config import RECOMPUTE_PRESERVE, RECOMPUTE_REJECT, Settings, get_settings
from hrms_payroll.database import create_all
from hrms_payroll.models import Attendance, Employee, Leave, SalaryInfo

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database per test; StaticPool keeps one connection."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Get database session for integration tests."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def preserve_settings() -> Settings:
    return dataclasses.replace(
        get_settings(),
        validated_recompute_policy=RECOMPUTE_PRESERVE,
        default_professional_tax=Decimal("200"),
        default_payrun_prefix="PAYRUN",
    )


@pytest.fixture
def reject_settings(preserve_settings) -> Settings:
    return dataclasses.replace(preserve_settings, validated_recompute_policy=RECOMPUTE_REJECT)


# ============================================================================
# Data builders
# ============================================================================


@pytest.fixture
def create_employee(db_session: AsyncSession):
    """Factory adding an employee with an optional salary structure."""
    counter = {"n": 0}

    async def _create(
        first_name: str = "Asha",
        last_name: str = "Rao",
        salary: dict | None = None,
        with_salary: bool = True,
    ) -> Employee:
        counter["n"] += 1
        employee = Employee(
            employee_code=f"EMP{counter['n']:03d}",
            first_name=first_name,
            last_name=last_name,
            email=f"emp{counter['n']}@example.com",
            department="Engineering",
        )
        db_session.add(employee)
        await db_session.flush()

        if with_salary:
            values = {
                "monthly_wage": Decimal("30000"),
                "basic_salary_percentage": Decimal("80"),
            }
            values.update(salary or {})
            db_session.add(SalaryInfo(employee_id=employee.id, **values))
            await db_session.flush()

        return employee

    return _create


@pytest.fixture
def add_attendance(db_session: AsyncSession):
    """Factory adding attendance rows for a list of dates."""

    async def _add(employee_id: int, dates, status: str = "Present") -> None:
        for day in dates:
            db_session.add(Attendance(employee_id=employee_id, work_date=day, status=status))
        await db_session.flush()

    return _add


@pytest.fixture
def add_leave(db_session: AsyncSession):
    """Factory adding a leave row directly (approved by default)."""

    async def _add(
        employee_id: int,
        leave_type: str,
        start: date,
        end: date,
        status: str = "Approved",
    ) -> Leave:
        leave = Leave(
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start,
            end_date=end,
            status=status,
        )
        db_session.add(leave)
        await db_session.flush()
        return leave

    return _add


@pytest.fixture
def april_weekdays() -> list[date]:
    """The 22 working days of April 2025."""
    return [
        d
        for d in iter_days(date(2025, 4, 1), date(2025, 4, 30))
        if d.weekday() < 5
    ]


# ============================================================================
# HTTP client
# ============================================================================


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app with the test database."""
    app = create_app()

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
