from __future__ import annotations

from enum import Enum


class StaffRole(str, Enum):
    """Restaurant job role of an employee."""

    WAITER = "waiter"
    COOK = "cook"
    CASHIER = "cashier"
    CLEANER = "cleaner"
    MANAGER = "manager"


class PayrollType(str, Enum):
    """How an employee is paid.

    WEEKLY and DAILY are accepted as configuration values but have no salary formula.
    """

    MONTHLY = "monthly"
    HOURLY = "hourly"
    WEEKLY = "weekly"
    DAILY = "daily"


class LeaveType(str, Enum):
    CASUAL = "casual"
    SICK = "sick"
    ANNUAL = "annual"
    EMERGENCY = "emergency"


class AttendanceStatus(str, Enum):
    """Daily attendance state stored on each record.

    Leave statuses share their value with the matching LeaveType.
    """

    ABSENT = "absent"
    PRESENT = "present"
    LATE = "late"
    EARLY_LEAVE = "early-leave"
    OVERTIME = "overtime"
    HALF_DAY = "half-day"
    CASUAL_LEAVE = "casual"
    SICK_LEAVE = "sick"
    ANNUAL_LEAVE = "annual"
    EMERGENCY_LEAVE = "emergency"

    @classmethod
    def for_leave(cls, leave_type: LeaveType) -> "AttendanceStatus":
        return cls(leave_type.value)

    @property
    def is_leave(self) -> bool:
        return self.value in {t.value for t in LeaveType}


class BreakType(str, Enum):
    LUNCH = "lunch"
    TEA = "tea"
    DINNER = "dinner"
    OTHER = "other"


class Weekday(str, Enum):
    """Weekday names in `date.weekday()` order."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def of(cls, value) -> "Weekday":
        return list(cls)[value.weekday()]
