from __future__ import annotations

from datetime import date, datetime

import pytest

from src.restaurant_staff.restaurant_staff.core.enums import AttendanceStatus, LeaveType
from src.restaurant_staff.restaurant_staff.core.exceptions import (
    EmployeeInactiveError,
    InsufficientBalanceError,
    NotFoundError,
    ValidationError,
)
from src.restaurant_staff.restaurant_staff.leave.balance import default_balance


def test_insufficient_balance_changes_nothing(container, leave_repo, attendance_repo):
    leave_repo.save(default_balance(1, 2026).deduct(LeaveType.CASUAL, 10))

    with pytest.raises(InsufficientBalanceError) as exc:
        container.leave_service.apply_leave(1, LeaveType.CASUAL, date(2026, 3, 10), date(2026, 3, 12), "Wedding")

    assert exc.value.employee_id == 1
    assert attendance_repo.all() == []
    assert attendance_repo.save_calls == 0
    assert leave_repo.get_for_year(1, 2026).allowances[LeaveType.CASUAL].remaining == 2


def test_single_sick_day_is_deducted_immediately(container, leave_repo, attendance_repo):
    outcome = container.leave_service.apply_leave(1, LeaveType.SICK, date(2026, 3, 9), date(2026, 3, 9), "Fever")

    assert outcome.days_applied == 1
    assert outcome.requires_approval is False
    assert outcome.balance_deducted is True
    sick = leave_repo.get_for_year(1, 2026).allowances[LeaveType.SICK]
    assert (sick.used, sick.remaining, sick.total) == (1, 11, 12)

    rec = attendance_repo.get_for_employee_and_date(1, date(2026, 3, 9))
    assert rec.is_present is False
    assert rec.status == AttendanceStatus.SICK_LEAVE
    assert rec.leave_reason == "Fever"
    assert rec.approved_by is None


def test_planned_leave_waits_for_approval(container, leave_repo, attendance_repo):
    outcome = container.leave_service.apply_leave(1, LeaveType.ANNUAL, date(2026, 3, 10), date(2026, 3, 13), "Trip")

    assert outcome.days_applied == 4
    assert outcome.requires_approval is True
    assert outcome.balance_deducted is False
    assert leave_repo.get_for_year(1, 2026).allowances[LeaveType.ANNUAL].remaining == 21

    marked = [attendance_repo.get_for_employee_and_date(1, date(2026, 3, d)) for d in range(10, 14)]
    assert all(r.status == AttendanceStatus.ANNUAL_LEAVE and not r.is_present for r in marked)


def test_emergency_leave_is_deducted_and_approved(container, leave_repo, attendance_repo):
    outcome = container.leave_service.apply_leave(
        1,
        LeaveType.CASUAL,
        date(2026, 3, 10),
        date(2026, 3, 11),
        "Family",
        True,
        actor="manager@example.com",
    )

    assert outcome.requires_approval is True
    assert outcome.balance_deducted is True
    casual = leave_repo.get_for_year(1, 2026).allowances[LeaveType.CASUAL]
    assert casual.used + casual.remaining == casual.total
    assert casual.remaining == 10
    rec = attendance_repo.get_for_employee_and_date(1, date(2026, 3, 11))
    assert rec.approved_by == "manager@example.com"


def test_leave_overwrites_checked_in_day(container, attendance_repo):
    container.attendance_service.check_in(1, now=datetime(2026, 3, 4, 9, 0))

    container.leave_service.apply_leave(1, LeaveType.EMERGENCY, date(2026, 3, 4), date(2026, 3, 4), "Sent home", True)

    rec = attendance_repo.get_for_employee_and_date(1, date(2026, 3, 4))
    assert rec.status == AttendanceStatus.EMERGENCY_LEAVE
    assert rec.is_present is False
    assert rec.login_time == datetime(2026, 3, 4, 9, 0)
    assert len(attendance_repo.all()) == 1


def test_end_before_start_is_rejected(container):
    with pytest.raises(ValidationError):
        container.leave_service.apply_leave(1, LeaveType.SICK, date(2026, 3, 9), date(2026, 3, 8), "Oops")


def test_unknown_and_inactive_employees(container, employee_factory):
    employee_factory(2, is_active=False)

    with pytest.raises(NotFoundError):
        container.leave_service.apply_leave(99, LeaveType.SICK, date(2026, 3, 9), date(2026, 3, 9))
    with pytest.raises(EmployeeInactiveError):
        container.leave_service.apply_leave(2, LeaveType.SICK, date(2026, 3, 9), date(2026, 3, 9))


def test_get_balance_creates_year_lazily_without_saving(container, leave_repo):
    balance = container.leave_service.get_balance(1)

    assert balance.year == 2026
    assert balance.remaining(LeaveType.EMERGENCY) == 3
    assert leave_repo.get_for_year(1, 2026) is None


def test_failed_balance_write_leaves_no_leave_days(container, leave_repo, attendance_repo, monkeypatch):
    def broken_save(balance):
        raise RuntimeError("balance table unavailable")

    monkeypatch.setattr(leave_repo, "save", broken_save)

    with pytest.raises(RuntimeError):
        container.leave_service.apply_leave(1, LeaveType.SICK, date(2026, 3, 5), date(2026, 3, 5), "Fever")

    assert attendance_repo.all() == []
    assert leave_repo.get_for_year(1, 2026) is None


def test_check_in_on_leave_day_clears_leave_fields(container):
    container.leave_service.apply_leave(
        1, LeaveType.EMERGENCY, date(2026, 3, 4), date(2026, 3, 4), "Family", True, actor="Owner"
    )

    rec = container.attendance_service.check_in(1, now=datetime(2026, 3, 4, 9, 5))

    assert rec.status == AttendanceStatus.PRESENT
    assert rec.is_present is True
    assert rec.leave_type is None
    assert rec.leave_reason is None
    assert rec.approved_by is None
