from __future__ import annotations

from datetime import datetime

import pytest

from src.restaurant_staff.restaurant_staff.core.enums import BreakType
from src.restaurant_staff.restaurant_staff.core.exceptions import (
    AlreadyCheckedOutError,
    BreakInProgressError,
    NoOpenBreakError,
    NotCheckedInError,
)


def at(hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2026, 3, 4, hour, minute, second)


def test_break_requires_checkin(container):
    with pytest.raises(NotCheckedInError):
        container.attendance_service.start_break(1, BreakType.LUNCH, now=at(13, 0))


def test_break_after_checkout_is_rejected(container):
    svc = container.attendance_service
    svc.check_in(1, now=at(9, 0))
    svc.check_out(1, now=at(18, 0))

    with pytest.raises(AlreadyCheckedOutError):
        svc.start_break(1, BreakType.TEA, now=at(18, 30))


def test_only_one_open_break(container, attendance_repo):
    svc = container.attendance_service
    svc.check_in(1, now=at(9, 0))
    svc.start_break(1, BreakType.LUNCH, now=at(13, 0))

    with pytest.raises(BreakInProgressError):
        svc.start_break(1, BreakType.TEA, now=at(13, 5))

    rec = attendance_repo.get_for_employee_and_date(1, at(0).date())
    assert sum(1 for b in rec.breaks if b.is_open) == 1


def test_end_break_without_open_break(container):
    svc = container.attendance_service
    svc.check_in(1, now=at(9, 0))

    with pytest.raises(NoOpenBreakError):
        svc.end_break(1, now=at(13, 0))


def test_end_break_rounds_duration_half_up(container):
    svc = container.attendance_service
    svc.check_in(1, now=at(9, 0))
    svc.start_break(1, BreakType.TEA, now=at(11, 0))

    closed = svc.end_break(1, now=at(11, 10, 30))

    assert closed.end_time == at(11, 10, 30)
    assert closed.duration == 11
    assert closed.break_type == BreakType.TEA


def test_total_break_time_tracks_closed_breaks(container, attendance_repo):
    svc = container.attendance_service
    svc.check_in(1, now=at(9, 0))

    svc.start_break(1, BreakType.TEA, now=at(11, 0))
    svc.end_break(1, now=at(11, 15))
    rec = attendance_repo.get_for_employee_and_date(1, at(0).date())
    assert rec.total_break_time == 15

    svc.start_break(1, BreakType.LUNCH, now=at(14, 0))
    rec = attendance_repo.get_for_employee_and_date(1, at(0).date())
    assert rec.total_break_time == 15

    svc.end_break(1, now=at(14, 40))
    rec = attendance_repo.get_for_employee_and_date(1, at(0).date())
    assert rec.total_break_time == 55
    assert rec.total_break_time == sum(b.duration for b in rec.breaks if not b.is_open)
    assert [b.break_type for b in rec.breaks] == [BreakType.TEA, BreakType.LUNCH]
