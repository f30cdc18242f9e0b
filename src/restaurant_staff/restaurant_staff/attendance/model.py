from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, BreakType, LeaveType


@dataclass(frozen=True)
class GeoLocation:
    latitude: float
    longitude: float
    address: Optional[str] = None


@dataclass(frozen=True)
class BreakInterval:
    """One break within a working day. end_time None means the break is still open."""

    start_time: datetime
    break_type: BreakType = BreakType.OTHER
    end_time: Optional[datetime] = None
    duration: int = 0

    @property
    def is_open(self) -> bool:
        return self.end_time is None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    employee_id: int
    work_date: date
    attendance_id: Optional[int] = None
    login_time: Optional[datetime] = None
    logout_time: Optional[datetime] = None
    is_present: bool = False
    hours_worked: float = 0.0
    overtime_hours: float = 0.0
    late_minutes: int = 0
    early_leave_minutes: int = 0
    status: AttendanceStatus = AttendanceStatus.ABSENT
    breaks: tuple[BreakInterval, ...] = field(default_factory=tuple)
    total_break_time: int = 0
    work_location: Optional[str] = None
    check_in_location: Optional[GeoLocation] = None
    check_out_location: Optional[GeoLocation] = None
    leave_type: Optional[LeaveType] = None
    leave_reason: Optional[str] = None
    approved_by: Optional[str] = None

    @property
    def open_break(self) -> Optional[BreakInterval]:
        return next((b for b in self.breaks if b.is_open), None)


@dataclass(frozen=True)
class RosterRow:
    """Read-model: one active employee's presence for a single day."""

    employee_id: int
    employee_code: str
    name: str
    role: str
    is_present: bool
    login_time: Optional[datetime]
    logout_time: Optional[datetime]
    hours_worked: float
    status: AttendanceStatus


@dataclass(frozen=True)
class DailyRoster:
    work_date: date
    rows: list[RosterRow]

    @property
    def present(self) -> int:
        return sum(1 for r in self.rows if r.is_present)

    @property
    def total(self) -> int:
        return len(self.rows)

    @property
    def absent(self) -> int:
        return self.total - self.present


@dataclass(frozen=True)
class BulkCheckInResult:
    employee_id: int
    success: bool
    record: Optional[AttendanceRecord] = None
    error: Optional[dict] = None
