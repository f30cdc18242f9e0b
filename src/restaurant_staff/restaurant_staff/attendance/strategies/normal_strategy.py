from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..timesheet import CheckOutMetrics
from .base import CheckInStrategy, CheckOutStrategy, StatusDecision


class OnTimeStrategy(CheckInStrategy):
    """Arrived within the late threshold."""

    def decide(self, *, late_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)


class KeepStatusStrategy(CheckOutStrategy):
    """Regular check-out: whatever check-in decided stands."""

    def decide(self, *, metrics: CheckOutMetrics, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
