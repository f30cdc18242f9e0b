"""Pure time arithmetic behind check-in and check-out.

All values here are unrounded; rounding happens when a record is written.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable

from ..common.numbers import round_half_up
from ..employees.model import ShiftConfig
from .model import BreakInterval


@dataclass(frozen=True)
class CheckOutMetrics:
    hours_worked: float
    overtime_hours: float
    early_leave_minutes: int


def late_minutes(*, now: datetime, day: date, shift: ShiftConfig) -> int:
    """Whole minutes after the shift start, never negative."""
    seconds = (now - shift.start_on(day)).total_seconds()
    return max(0, math.floor(seconds / 60))


def early_leave_minutes(*, now: datetime, day: date, shift: ShiftConfig) -> int:
    """Whole minutes before the shift end, never negative."""
    seconds = (shift.end_on(day) - now).total_seconds()
    return max(0, math.floor(seconds / 60))


def break_duration(item: BreakInterval, end_time: datetime) -> int:
    return int(round_half_up((end_time - item.start_time).total_seconds() / 60))


def total_break_minutes(breaks: Iterable[BreakInterval]) -> int:
    return sum(b.duration for b in breaks if not b.is_open)


def checkout_metrics(
    *,
    login_time: datetime,
    now: datetime,
    day: date,
    total_break_time: int,
    shift: ShiftConfig,
) -> CheckOutMetrics:
    minutes_worked = (now - login_time).total_seconds() / 60 - total_break_time
    hours_worked = minutes_worked / 60
    return CheckOutMetrics(
        hours_worked=hours_worked,
        overtime_hours=max(0.0, hours_worked - shift.standard_hours),
        early_leave_minutes=early_leave_minutes(now=now, day=day, shift=shift),
    )
