from __future__ import annotations

from datetime import datetime

import pytest

from src.restaurant_staff.restaurant_staff.core.enums import PayrollType
from src.restaurant_staff.restaurant_staff.main import create_app


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def test_checkin_and_checkout_roundtrip(client):
    res = client.post("/api/employees/1/checkin", json={"timestamp": "2026-03-04T09:20:00"})
    assert res.status_code == 200
    assert res.get_json()["attendance"]["status"] == "late"
    assert res.get_json()["attendance"]["late_minutes"] == 20

    res = client.post("/api/employees/1/checkout", json={"timestamp": "2026-03-04T19:00:00"})
    body = res.get_json()
    assert res.status_code == 200
    assert body["attendance"]["status"] == "overtime"
    assert body["attendance"]["hours_worked"] == 9.67


def test_domain_errors_map_to_status_codes(client):
    assert client.post("/api/employees/99/checkin", json={}).status_code == 404

    client.post("/api/employees/1/checkin", json={"timestamp": "2026-03-04T09:00:00"})
    res = client.post("/api/employees/1/checkin", json={"timestamp": "2026-03-04T09:05:00"})
    assert res.status_code == 409
    assert res.get_json()["error"] == "ALREADY_CHECKED_IN"
    assert res.get_json()["date"] == "2026-03-04"

    res = client.post("/api/employees/1/breaks/start", json={"type": "brunch"})
    assert res.status_code == 400
    assert res.get_json()["field"] == "type"

    res = client.post("/api/employees/1/checkout", json={"timestamp": "yesterday"})
    assert res.status_code == 400


def test_break_routes(client):
    client.post("/api/employees/1/checkin", json={"timestamp": "2026-03-04T09:00:00"})
    res = client.post("/api/employees/1/breaks/start", json={"type": "lunch", "timestamp": "2026-03-04T13:00:00"})
    assert res.status_code == 200
    assert res.get_json()["break"]["end_time"] is None

    res = client.post("/api/employees/1/breaks/end", json={"timestamp": "2026-03-04T13:30:00"})
    assert res.get_json()["break"]["duration"] == 30


def test_leave_and_balance(client):
    res = client.post(
        "/api/employees/1/leave",
        json={"leave_type": "sick", "start_date": "2026-03-09", "end_date": "2026-03-09", "reason": "Flu"},
    )
    assert res.status_code == 200
    assert res.get_json()["requires_approval"] is False
    assert res.get_json()["balance"]["sick"]["remaining"] == 11

    res = client.post(
        "/api/employees/1/leave",
        json={"leave_type": "emergency", "start_date": "2026-03-10", "end_date": "2026-03-13", "is_emergency": True},
    )
    assert res.status_code == 409
    assert res.get_json()["error"] == "INSUFFICIENT_BALANCE"

    res = client.get("/api/employees/1/leave/balance?year=2026")
    assert res.get_json()["balance"]["sick"]["used"] == 1


def test_salary_and_payroll_routes(client, employee_factory):
    employee_factory(2, payroll_type=PayrollType.WEEKLY)

    res = client.get("/api/employees/1/salary/3/2026")
    assert res.status_code == 200
    assert res.get_json()["payroll_type"] == "monthly"

    assert client.get("/api/employees/2/salary/3/2026").status_code == 422
    assert client.get("/api/employees/1/salary/13/2026").status_code == 400

    res = client.get("/api/payroll/3/2026")
    assert res.get_json()["failed"] == 1


def test_employee_crud(client):
    res = client.post(
        "/api/employees",
        json={"name": "Meera", "email": "meera@example.com", "phone": "123", "role": "cashier", "weekly_offs": ["monday"]},
    )
    assert res.status_code == 201
    new_id = res.get_json()["employee"]["id"]
    assert res.get_json()["employee"]["employee_code"] == "EMP0002"
    assert res.get_json()["employee"]["weekly_offs"] == ["monday"]

    res = client.put(f"/api/employees/{new_id}", json={"base_salary": 15000})
    assert res.get_json()["employee"]["base_salary"] == 15000

    assert client.post("/api/employees", json={"email": "x@example.com"}).status_code == 400

    res = client.delete(f"/api/employees/{new_id}", json={"reason": "Seasonal"})
    assert res.get_json()["employee"]["is_active"] is False

    res = client.get("/api/employees?active=true")
    assert res.get_json()["total"] == 1


def test_today_roster_and_bulk_checkin(client, employee_factory):
    employee_factory(2)

    res = client.post(
        "/api/attendance/bulk-checkin",
        json={"employee_ids": [1, 2, 77], "timestamp": "2026-03-04T09:00:00"},
    )
    assert res.status_code == 200
    assert res.get_json()["succeeded"] == 2
    assert res.get_json()["failed"] == 1

    res = client.get("/api/attendance/today?date=2026-03-04")
    assert res.get_json()["summary"] == {"present": 2, "absent": 0, "total": 2}


def test_monthly_attendance_report(client):
    client.post("/api/employees/1/checkin", json={"timestamp": "2026-03-04T09:00:00"})

    res = client.get("/api/employees/1/attendance?month=3&year=2026")
    body = res.get_json()
    assert body["summary"]["present_days"] == 1
    assert body["attendance"][0]["date"] == "2026-03-04"


@pytest.mark.parametrize("stamp", ["2026-03-04T09:20:00+05:30", "2026-03-04T03:50:00Z"])
def test_checkin_with_utc_offset_is_converted_to_local_time(client, stamp):
    expected = datetime.fromisoformat(stamp.replace("Z", "+00:00")).astimezone().replace(tzinfo=None)

    res = client.post("/api/employees/1/checkin", json={"timestamp": stamp})

    assert res.status_code == 200
    attendance = res.get_json()["attendance"]
    assert attendance["login_time"] == expected.isoformat()
    assert attendance["date"] == expected.date().isoformat()


def test_employee_is_active_accepts_json_strings(client):
    res = client.put("/api/employees/1", json={"is_active": "false"})
    assert res.status_code == 200
    assert res.get_json()["employee"]["is_active"] is False

    assert client.put("/api/employees/1", json={"is_active": "maybe"}).status_code == 400
