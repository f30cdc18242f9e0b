from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import FrozenSet, Optional

from ..common.datetime_utils import minutes_of_day
from ..core.constants import DEFAULT_BREAK_MINUTES, DEFAULT_SHIFT_END, DEFAULT_SHIFT_START, DEFAULT_WEEKLY_OFFS
from ..core.enums import PayrollType, StaffRole


@dataclass(frozen=True)
class ShiftConfig:
    """Daily shift window of an employee."""

    start_time: time = DEFAULT_SHIFT_START
    end_time: time = DEFAULT_SHIFT_END
    break_minutes: int = DEFAULT_BREAK_MINUTES
    weekly_offs: FrozenSet[str] = frozenset(DEFAULT_WEEKLY_OFFS)

    @property
    def standard_hours(self) -> float:
        return (minutes_of_day(self.end_time) - minutes_of_day(self.start_time)) / 60

    def start_on(self, day: date) -> datetime:
        return datetime.combine(day, self.start_time)

    def end_on(self, day: date) -> datetime:
        return datetime.combine(day, self.end_time)


@dataclass(frozen=True)
class Compensation:
    payroll_type: PayrollType = PayrollType.MONTHLY
    base_salary: float = 0.0
    hourly_rate: float = 0.0
    overtime_rate: float = 0.0
    bonus: float = 0.0
    deductions: float = 0.0


@dataclass(frozen=True)
class Employee:
    """Domain entity: one restaurant staff member.

    Plain data object; persistence lives in the repositories.
    """

    employee_id: int
    employee_code: str
    name: str
    email: str
    phone: str
    role: StaffRole
    join_date: date
    department: Optional[str] = None
    compensation: Compensation = field(default_factory=Compensation)
    shift: ShiftConfig = field(default_factory=ShiftConfig)
    is_active: bool = True
    termination_date: Optional[date] = None
    termination_reason: Optional[str] = None
    last_login: Optional[datetime] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None


@dataclass(frozen=True)
class PerformanceReview:
    review_id: int
    employee_id: int
    review_date: date
    reviewer: str
    rating: int
    comments: Optional[str] = None


@dataclass(frozen=True)
class EmployeePage:
    employees: list[Employee]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0
