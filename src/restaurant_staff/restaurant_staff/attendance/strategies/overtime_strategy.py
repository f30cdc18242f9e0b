from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..timesheet import CheckOutMetrics
from .base import CheckOutStrategy, StatusDecision


class OvertimeStrategy(CheckOutStrategy):
    def decide(self, *, metrics: CheckOutMetrics, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.OVERTIME)
