from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, StatusDecision


class LateStrategy(CheckInStrategy):
    """Late check-in."""

    def decide(self, *, late_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)
