from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..timesheet import CheckOutMetrics
from .base import CheckOutStrategy, StatusDecision


class HalfDayStrategy(CheckOutStrategy):
    """Too few hours for a full day."""

    def decide(self, *, metrics: CheckOutMetrics, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY)
