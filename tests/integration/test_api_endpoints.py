"""API endpoint integration tests.

Tests the FastAPI endpoints for payroll and leave operations.
"""

from datetime import date, time
from decimal import Decimal

import pytest
from httpx import AsyncClient

from hrms_payroll.config import get_settings
from hrms_payroll.models import Attendance


@pytest.fixture
async def seeded(db_session, create_employee, add_attendance, april_weekdays):
    """One employee with 20 present days in April 2025, committed."""
    employee = await create_employee()
    await add_attendance(employee.id, april_weekdays[:20])
    await db_session.commit()
    return employee


@pytest.fixture
def reject_policy(monkeypatch):
    """Run the app with the reject recompute policy."""
    monkeypatch.setenv("VALIDATED_RECOMPUTE_POLICY", "reject")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


async def generate(client: AsyncClient, employee_id: int | None = None, **extra):
    body = {"month": 4, "year": 2025, **extra}
    if employee_id is not None:
        body["employee_id"] = employee_id
    return await client.post("/api/v1/payroll/generate", json=body)


class TestHealthEndpoints:
    """Test health check endpoints."""

    async def test_health_check(self, client: AsyncClient):
        """Health endpoint should return 200."""
        response = await client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert "timestamp" in data

    async def test_readiness_check(self, client: AsyncClient):
        response = await client.get("/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    async def test_liveness_check(self, client: AsyncClient):
        response = await client.get("/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"


class TestGeneratePayroll:
    """Test POST /api/v1/payroll/generate."""

    async def test_generate_single_employee(self, client: AsyncClient, seeded):
        response = await generate(client, seeded.id)

        assert response.status_code == 200, response.text
        data = response.json()
        assert data["employee_id"] == seeded.id
        assert data["employee_name"] == "Asha Rao"
        assert data["payrun_id"] == "PAYRUN-2025-04"
        assert Decimal(data["basic_salary"]) == Decimal("21818.18")
        assert Decimal(data["gross_salary"]) == Decimal("27272.73")
        assert Decimal(data["net_salary"]) == Decimal("27072.73")
        assert data["is_validated"] is False
        assert data["worked_days"]["attendance_days"] == 20
        assert Decimal(data["worked_days"]["attendance_amount"]) == Decimal("27272.80")

    async def test_regenerate_returns_same_record(self, client: AsyncClient, seeded):
        first = (await generate(client, seeded.id)).json()
        second = (await generate(client, seeded.id)).json()

        assert second["id"] == first["id"]
        assert second["net_salary"] == first["net_salary"]

    async def test_generate_all(self, client: AsyncClient, seeded, create_employee, db_session):
        await create_employee("No", "Salary", with_salary=False)
        await db_session.commit()

        response = await generate(client)

        assert response.status_code == 200, response.text
        data = response.json()
        assert data["payrun_id"] == "PAYRUN-2025-04"
        assert data["total_employees"] == 2
        assert data["generated_count"] == 1
        assert data["failed_count"] == 1
        assert data["payrolls"][0]["employee_id"] == seeded.id
        assert data["errors"][0]["message"].startswith("Missing salary info")

    async def test_invalid_month(self, client: AsyncClient, seeded):
        response = await generate(client, seeded.id, month=13)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PERIOD"
        assert response.json()["context"] == {"year": 2025, "month": 13}

    async def test_unknown_employee(self, client: AsyncClient):
        response = await generate(client, 999)

        assert response.status_code == 404
        assert response.json()["code"] == "EMPLOYEE_NOT_FOUND"
        assert response.json()["context"] == {"employee_id": 999}

    async def test_missing_salary(self, client: AsyncClient, create_employee, db_session):
        employee = await create_employee(with_salary=False)
        await db_session.commit()

        response = await generate(client, employee.id)

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_SALARY_INFO"

    async def test_regenerate_validated_locked_under_reject_policy(
        self, client: AsyncClient, seeded, reject_policy
    ):
        payroll = (await generate(client, seeded.id)).json()
        await client.post(f"/api/v1/payroll/{payroll['id']}/validate")

        response = await generate(client, seeded.id)

        assert response.status_code == 409
        assert response.json()["code"] == "PAYROLL_LOCKED"


class TestPayrollRecords:
    """Test payroll listing, payslip, validation and deletion."""

    async def test_list_payrolls(self, client: AsyncClient, seeded):
        await generate(client, seeded.id)
        await generate(client, seeded.id, month=3)

        response = await client.get("/api/v1/payroll", params={"month": 4, "year": 2025})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["month"] == 4

    async def test_get_payslip(self, client: AsyncClient, seeded):
        created = (await generate(client, seeded.id)).json()

        response = await client.get(f"/api/v1/payroll/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["employee_name"] == "Asha Rao"
        assert data["worked_days"]["total_working_days"] == 22

    async def test_get_unknown_payroll(self, client: AsyncClient):
        response = await client.get("/api/v1/payroll/4242")

        assert response.status_code == 404
        assert response.json()["code"] == "PAYROLL_NOT_FOUND"

    async def test_validate(self, client: AsyncClient, seeded):
        created = (await generate(client, seeded.id)).json()

        response = await client.post(f"/api/v1/payroll/{created['id']}/validate")

        assert response.status_code == 200
        data = response.json()
        assert data["is_validated"] is True
        assert data["validated_at"] is not None
        assert data["net_salary"] == created["net_salary"]

    async def test_regenerate_validated_keeps_flag(self, client: AsyncClient, seeded):
        created = (await generate(client, seeded.id)).json()
        await client.post(f"/api/v1/payroll/{created['id']}/validate")

        response = await generate(client, seeded.id)

        assert response.status_code == 200
        assert response.json()["is_validated"] is True

    async def test_delete(self, client: AsyncClient, seeded):
        created = (await generate(client, seeded.id)).json()

        response = await client.delete(f"/api/v1/payroll/{created['id']}")
        assert response.status_code == 204

        response = await client.get(f"/api/v1/payroll/{created['id']}")
        assert response.status_code == 404


class TestLeaves:
    """Test leave endpoints."""

    async def test_apply_leave(self, client: AsyncClient, seeded):
        response = await client.post(
            "/api/v1/leaves",
            json={
                "employee_id": seeded.id,
                "leave_type": "Paid time Off",
                "start_date": "2025-04-29",
                "end_date": "2025-04-30",
                "reason": "Wedding",
            },
        )

        assert response.status_code == 201, response.text
        data = response.json()
        assert data["status"] == "Pending"
        assert data["start_date"] == "2025-04-29"

    async def test_reversed_dates(self, client: AsyncClient, seeded):
        response = await client.post(
            "/api/v1/leaves",
            json={
                "employee_id": seeded.id,
                "leave_type": "Paid time Off",
                "start_date": "2025-04-30",
                "end_date": "2025-04-29",
            },
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_LEAVE_REQUEST"
        assert "context" not in response.json()

    async def test_approve_then_overlap_rejected(self, client: AsyncClient, seeded):
        body = {
            "employee_id": seeded.id,
            "leave_type": "Paid time Off",
            "start_date": "2025-04-29",
            "end_date": "2025-04-30",
        }
        leave = (await client.post("/api/v1/leaves", json=body)).json()

        response = await client.put(
            f"/api/v1/leaves/{leave['id']}/status", json={"status": "Approved"}
        )
        assert response.status_code == 200
        assert response.json()["status"] == "Approved"

        response = await client.post("/api/v1/leaves", json=body)
        assert response.status_code == 409
        assert response.json()["code"] == "LEAVE_OVERLAP"

    async def test_approved_leave_reaches_payroll(self, client: AsyncClient, seeded):
        leave = (
            await client.post(
                "/api/v1/leaves",
                json={
                    "employee_id": seeded.id,
                    "leave_type": "Paid time Off",
                    "start_date": "2025-04-29",
                    "end_date": "2025-04-30",
                },
            )
        ).json()
        await client.put(f"/api/v1/leaves/{leave['id']}/status", json={"status": "Approved"})

        data = (await generate(client, seeded.id)).json()

        assert data["worked_days"]["paid_time_off_days"] == 2
        assert data["worked_days"]["total_payable_days"] == 22
        assert Decimal(data["net_salary"]) == Decimal("29800.00")

    async def test_invalid_status(self, client: AsyncClient, seeded):
        leave = (
            await client.post(
                "/api/v1/leaves",
                json={
                    "employee_id": seeded.id,
                    "leave_type": "Sick time off",
                    "start_date": "2025-04-29",
                    "end_date": "2025-04-29",
                },
            )
        ).json()

        response = await client.put(
            f"/api/v1/leaves/{leave['id']}/status", json={"status": "Maybe"}
        )

        assert response.status_code == 400

    async def test_unknown_leave(self, client: AsyncClient):
        response = await client.put("/api/v1/leaves/77/status", json={"status": "Approved"})

        assert response.status_code == 404
        assert response.json()["code"] == "LEAVE_NOT_FOUND"

    async def test_list_leaves(self, client: AsyncClient, seeded):
        await client.post(
            "/api/v1/leaves",
            json={
                "employee_id": seeded.id,
                "leave_type": "Paid time Off",
                "start_date": "2025-04-29",
                "end_date": "2025-04-29",
            },
        )

        response = await client.get(
            "/api/v1/leaves", params={"employee_id": seeded.id, "status": "Pending"}
        )

        assert response.status_code == 200
        assert len(response.json()) == 1


class TestAttendance:
    """Test GET /api/v1/attendance."""

    async def test_lists_hours_worked(self, client: AsyncClient, create_employee, db_session):
        employee = await create_employee()
        db_session.add_all(
            [
                Attendance(
                    employee_id=employee.id,
                    work_date=date(2025, 4, 7),
                    status="Present",
                    check_in=time(9, 0),
                    check_out=time(17, 30),
                ),
                Attendance(
                    employee_id=employee.id,
                    work_date=date(2025, 4, 8),
                    status="Present",
                    check_in=time(9, 0),
                ),
            ]
        )
        await db_session.commit()

        response = await client.get("/api/v1/attendance", params={"employee_id": employee.id})

        assert response.status_code == 200
        data = response.json()
        assert [row["work_date"] for row in data] == ["2025-04-08", "2025-04-07"]
        assert data[0]["total_hours"] is None
        assert Decimal(data[1]["total_hours"]) == Decimal("8.50")

    async def test_date_range_filter(self, client: AsyncClient, seeded):
        response = await client.get(
            "/api/v1/attendance",
            params={
                "employee_id": seeded.id,
                "start_date": "2025-04-01",
                "end_date": "2025-04-04",
            },
        )

        assert response.status_code == 200
        assert len(response.json()) == 4

    async def test_approved_leave_shows_as_leave(self, client: AsyncClient, seeded):
        leave = (
            await client.post(
                "/api/v1/leaves",
                json={
                    "employee_id": seeded.id,
                    "leave_type": "Paid time Off",
                    "start_date": "2025-04-29",
                    "end_date": "2025-04-29",
                },
            )
        ).json()
        await client.put(f"/api/v1/leaves/{leave['id']}/status", json={"status": "Approved"})

        response = await client.get(
            "/api/v1/attendance",
            params={"employee_id": seeded.id, "start_date": "2025-04-29"},
        )

        data = response.json()
        assert len(data) == 1
        assert data[0]["status"] == "Leave"
        assert data[0]["total_hours"] is None
