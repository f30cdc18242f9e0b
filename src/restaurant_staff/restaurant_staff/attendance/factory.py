from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import (
    EARLY_LEAVE_THRESHOLD_MINUTES,
    HALF_DAY_MAX_HOURS,
    LATE_THRESHOLD_MINUTES,
    OVERTIME_STATUS_MIN_HOURS,
)
from .strategies.base import CheckInStrategy, CheckOutStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import KeepStatusStrategy, OnTimeStrategy
from .strategies.overtime_strategy import OvertimeStrategy
from .timesheet import CheckOutMetrics


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    late_threshold_minutes: int = LATE_THRESHOLD_MINUTES
    early_leave_threshold_minutes: int = EARLY_LEAVE_THRESHOLD_MINUTES
    half_day_max_hours: float = HALF_DAY_MAX_HOURS
    overtime_status_min_hours: float = OVERTIME_STATUS_MIN_HOURS

    def for_checkin(self, *, late_minutes: int) -> CheckInStrategy:
        if late_minutes > self.late_threshold_minutes:
            return LateStrategy()
        return OnTimeStrategy()

    def for_checkout(self, *, metrics: CheckOutMetrics) -> CheckOutStrategy:
        # First match wins: overtime, then early leave, then half day.
        if metrics.overtime_hours > self.overtime_status_min_hours:
            return OvertimeStrategy()
        if metrics.early_leave_minutes > self.early_leave_threshold_minutes:
            return EarlyLeaveStrategy()
        if metrics.hours_worked < self.half_day_max_hours:
            return HalfDayStrategy()
        return KeepStatusStrategy()
