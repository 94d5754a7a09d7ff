"""Seed demo data and generate a month of payroll.

Usage:
    python scripts/seed_demo.py [--year 2025] [--month 10] [--database-url URL]

Creates the tables if needed, adds a few employees with salary structures,
marks attendance for the month's working days (each employee misses a
couple of days), files and approves leave for the missed days, then runs
payroll for everyone. Intended for development databases only.
"""

from __future__ import annotations

import argparse
import asyncio
from datetime import time
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from hrms_payroll.calculators.period import is_working_day, iter_days, resolve_period
from hrms_payroll.config import configure_logging, settings
from hrms_payroll.database import create_all
from hrms_payroll.models import Attendance, Employee, SalaryInfo
from hrms_payroll.services import LeaveService, PayrollService

DEMO_EMPLOYEES = [
    # code, first, last, monthly wage, leave type, indexes of missed working days
    ("EMP001", "Asha", "Rao", Decimal("30000"), "Paid time Off", (0, 1)),
    ("EMP002", "Ravi", "Kumar", Decimal("45000"), "Sick time off", (4, 5)),
    ("EMP003", "Meena", "Iyer", Decimal("52000"), "Unpaid Leaves", (9, 10)),
]


def salary_structure(employee_id: int, wage: Decimal) -> SalaryInfo:
    return SalaryInfo(
        employee_id=employee_id,
        monthly_wage=wage,
        basic_salary_percentage=Decimal("50"),
        hra_percentage=Decimal("40"),
        standard_allowance_percentage=Decimal("10"),
        performance_bonus_percentage=Decimal("8.33"),
        leave_travel_allowance_percentage=Decimal("8.33"),
        pf_employee_percentage=Decimal("12"),
        pf_employer_percentage=Decimal("12"),
        professional_tax=Decimal("200"),
    )


async def seed(session: AsyncSession, year: int, month: int) -> None:
    period = resolve_period(year, month)
    working_days = [d for d in iter_days(period.first_day, period.last_day) if is_working_day(d)]

    print(f"Period: {year}-{month:02d}")
    print(f"  Total days in month: {period.total_days_in_month}")
    print(f"  Working days: {period.total_working_days}")

    leave_service = LeaveService(session)

    for code, first, last, wage, leave_type, missed in DEMO_EMPLOYEES:
        employee = await session.scalar(select(Employee).where(Employee.employee_code == code))
        if employee is None:
            employee = Employee(employee_code=code, first_name=first, last_name=last)
            session.add(employee)
            await session.flush()
            session.add(salary_structure(employee.id, wage))

        existing = set(
            (
                await session.execute(
                    select(Attendance.work_date).where(
                        Attendance.employee_id == employee.id,
                        Attendance.work_date.between(period.first_day, period.last_day),
                    )
                )
            ).scalars()
        )

        added: list[Attendance] = []
        for index, day in enumerate(working_days):
            if index in missed or day in existing:
                continue
            added.append(
                Attendance(
                    employee_id=employee.id,
                    work_date=day,
                    status="Present",
                    check_in=time(9, 0),
                    check_out=time(18, 0),
                )
            )
        session.add_all(added)
        await session.flush()
        hours = sum((record.total_hours for record in added), Decimal("0"))

        if not existing:
            leave = await leave_service.apply_leave(
                employee.id,
                leave_type,
                working_days[missed[0]],
                working_days[missed[-1]],
                reason="Demo data",
            )
            await leave_service.update_status(leave.id, "Approved")

        print(
            f"  {code} ({first} {last}): {len(added)} attendance records added, "
            f"{hours} hours"
        )

    batch = await PayrollService(session).generate_for_all(month, year)
    await session.commit()

    print("\nPayroll:")
    print(f"  Generated: {batch.generated_count}")
    print(f"  Skipped (already generated): {batch.skipped_count}")
    print(f"  Failed: {batch.failed_count}")
    for payroll in batch.payrolls:
        print(f"  Employee {payroll.employee_id}: net {payroll.net_salary}")


async def seed_demo(database_url: str, year: int, month: int) -> None:
    """Create tables and seed demo data into the database."""
    engine = create_async_engine(database_url, echo=False)
    try:
        await create_all(engine)
        async with AsyncSession(engine, expire_on_commit=False) as session:
            await seed(session, year, month)
    finally:
        await engine.dispose()


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed demo HRMS payroll data")
    parser.add_argument("--year", type=int, default=2025)
    parser.add_argument("--month", type=int, default=10)
    parser.add_argument(
        "--database-url",
        type=str,
        default=settings.database_url,
        help="Database URL (default: from settings)",
    )

    args = parser.parse_args()

    configure_logging()
    asyncio.run(seed_demo(args.database_url, args.year, args.month))


if __name__ == "__main__":
    main()
