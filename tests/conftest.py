from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from src.restaurant_staff.restaurant_staff.attendance.model import AttendanceRecord
from src.restaurant_staff.restaurant_staff.container import wire
from src.restaurant_staff.restaurant_staff.core.enums import PayrollType, StaffRole
from src.restaurant_staff.restaurant_staff.core.exceptions import AlreadyCheckedInError
from src.restaurant_staff.restaurant_staff.employees.model import Compensation, Employee, PerformanceReview, ShiftConfig
from src.restaurant_staff.restaurant_staff.leave.model import LeaveBalance


class InMemoryEmployees:
    def __init__(self, employees: Optional[list[Employee]] = None):
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees or []}
        self._reviews: list[PerformanceReview] = []
        self._next_id = max(self._by_id, default=0) + 1

    def add(self, employee: Employee) -> Employee:
        self._by_id[employee.employee_id] = employee
        self._next_id = max(self._next_id, employee.employee_id + 1)
        return employee

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.employee_code == employee_code), None)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.email == email.lower()), None)

    def count(self) -> int:
        return len(self._by_id)

    def list(self, *, active=None, role=None, offset=0, limit=None):
        items = [
            e
            for e in sorted(self._by_id.values(), key=lambda e: e.employee_id, reverse=True)
            if (active is None or e.is_active == active) and (role is None or e.role == role)
        ]
        page = items[offset:] if limit is None else items[offset : offset + limit]
        return page, len(items)

    def create(self, employee: Employee) -> int:
        new_id = self._next_id
        self._next_id += 1
        self._by_id[new_id] = replace(employee, employee_id=new_id)
        return new_id

    def update(self, employee: Employee) -> bool:
        if employee.employee_id not in self._by_id:
            return False
        self._by_id[employee.employee_id] = employee
        return True

    def set_last_login(self, employee_id: int, when: datetime) -> bool:
        e = self._by_id.get(employee_id)
        if not e:
            return False
        self._by_id[employee_id] = replace(e, last_login=when)
        return True

    def add_review(self, review: PerformanceReview) -> int:
        stored = replace(review, review_id=len(self._reviews) + 1)
        self._reviews.append(stored)
        return stored.review_id

    def list_reviews(self, employee_id: int):
        return [r for r in reversed(self._reviews) if r.employee_id == employee_id]


class InMemoryAttendance:
    def __init__(self):
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self.save_calls = 0
        self._claim_guard = threading.Lock()

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((employee_id, work_date))

    def list_for_employee_month(self, employee_id: int, month: int, year: int):
        return sorted(
            (
                r
                for (eid, d), r in self._by_key.items()
                if eid == employee_id and d.month == month and d.year == year
            ),
            key=lambda r: r.work_date,
        )

    def list_for_date(self, work_date: date):
        return [r for (_, d), r in self._by_key.items() if d == work_date]

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        self.save_calls += 1
        key = (record.employee_id, record.work_date)
        existing = self._by_key.get(key)
        if existing:
            record = replace(record, attendance_id=existing.attendance_id)
        else:
            self._id += 1
            record = replace(record, attendance_id=self._id)
        self._by_key[key] = record
        return record

    def save_many(self, records):
        return [self.save(r) for r in records]

    def claim_check_in(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._claim_guard:
            existing = self._by_key.get((record.employee_id, record.work_date))
            if existing and existing.login_time is not None:
                raise AlreadyCheckedInError(
                    "Already checked in today", employee_id=record.employee_id, work_date=record.work_date
                )
            return self.save(record)

    def all(self) -> list[AttendanceRecord]:
        return list(self._by_key.values())


class InMemoryLeaveBalances:
    def __init__(self, attendance: InMemoryAttendance):
        self._by_key: dict[tuple[int, int], LeaveBalance] = {}
        self._attendance = attendance

    def get_for_year(self, employee_id: int, year: int) -> Optional[LeaveBalance]:
        return self._by_key.get((employee_id, year))

    def save(self, balance: LeaveBalance) -> None:
        self._by_key[(balance.employee_id, balance.year)] = balance

    def save_leave(self, balance: LeaveBalance, records):
        # Rolls the attendance writes back when the balance write fails.
        snapshot = dict(self._attendance._by_key)
        try:
            stored = self._attendance.save_many(records)
            self.save(balance)
        except Exception:
            self._attendance._by_key = snapshot
            raise
        return stored


def make_employee(
    employee_id: int = 1,
    *,
    payroll_type: PayrollType = PayrollType.MONTHLY,
    base_salary: float = 20000,
    hourly_rate: float = 0,
    overtime_rate: float = 0,
    bonus: float = 0,
    deductions: float = 0,
    shift_start: time = time(9, 0),
    shift_end: time = time(18, 0),
    weekly_offs=("sunday",),
    is_active: bool = True,
    role: StaffRole = StaffRole.WAITER,
) -> Employee:
    return Employee(
        employee_id=employee_id,
        employee_code=f"EMP{employee_id:04d}",
        name=f"Staff {employee_id}",
        email=f"staff{employee_id}@example.com",
        phone="9000000000",
        role=role,
        join_date=date(2025, 1, 1),
        compensation=Compensation(
            payroll_type=payroll_type,
            base_salary=base_salary,
            hourly_rate=hourly_rate,
            overtime_rate=overtime_rate,
            bonus=bonus,
            deductions=deductions,
        ),
        shift=ShiftConfig(start_time=shift_start, end_time=shift_end, break_minutes=60, weekly_offs=frozenset(weekly_offs)),
        is_active=is_active,
    )


@pytest.fixture
def employees_repo():
    return InMemoryEmployees([make_employee(1)])


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def leave_repo(attendance_repo):
    return InMemoryLeaveBalances(attendance_repo)


@pytest.fixture
def fixed_now():
    # Wednesday
    return datetime(2026, 3, 4, 9, 0, 0)


@pytest.fixture
def container(employees_repo, attendance_repo, leave_repo, fixed_now):
    return wire(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        clock=lambda: fixed_now,
    )


@pytest.fixture
def employee_factory(employees_repo):
    """Create an employee with make_employee(...) and store it in the in-memory repo."""

    def _make(employee_id: int, **kwargs) -> Employee:
        return employees_repo.add(make_employee(employee_id, **kwargs))

    return _make
