from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..timesheet import CheckOutMetrics
from .base import CheckOutStrategy, StatusDecision


class EarlyLeaveStrategy(CheckOutStrategy):
    """Left well before the shift end; the only decision that records early-leave minutes."""

    def decide(self, *, metrics: CheckOutMetrics, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.EARLY_LEAVE, early_leave_minutes=metrics.early_leave_minutes)
