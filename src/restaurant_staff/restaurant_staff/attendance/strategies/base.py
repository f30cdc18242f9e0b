from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import AttendanceStatus
from ..timesheet import CheckOutMetrics


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    early_leave_minutes: int = 0


class CheckInStrategy(ABC):
    """Strategy Pattern: how the status is decided when an employee arrives."""

    @abstractmethod
    def decide(self, *, late_minutes: int) -> StatusDecision:
        raise NotImplementedError


class CheckOutStrategy(ABC):
    """Strategy Pattern: how the status is decided when an employee leaves."""

    @abstractmethod
    def decide(self, *, metrics: CheckOutMetrics, current: AttendanceStatus) -> StatusDecision:
        raise NotImplementedError
