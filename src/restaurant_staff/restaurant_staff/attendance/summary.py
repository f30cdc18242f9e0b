from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Iterable

from ..common.datetime_utils import count_weekly_off_days, days_in_month
from ..common.numbers import round_half_up, round_hours
from ..core.enums import AttendanceStatus
from ..employees.model import Employee
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthlyAttendanceAggregate:
    """Derived monthly view of one employee's attendance; never persisted."""

    employee_id: int
    month: int
    year: int
    total_working_days: int
    present_days: int
    absent_days: int
    total_hours: float
    overtime_hours: float
    total_break_hours: float
    average_hours: float
    attendance_percentage: int
    late_count: int
    early_leave_count: int
    punctuality_score: int

    @property
    def has_data_anomaly(self) -> bool:
        """More present days than working days, e.g. work on a weekly-off day."""
        return self.absent_days < 0

    def to_dict(self) -> dict:
        out = asdict(self)
        out["has_data_anomaly"] = self.has_data_anomaly
        return out


def build_monthly_aggregate(
    employee: Employee,
    records: Iterable[AttendanceRecord],
    *,
    month: int,
    year: int,
) -> MonthlyAttendanceAggregate:
    month_records = [r for r in records if r.work_date.month == month and r.work_date.year == year]
    present = [r for r in month_records if r.is_present]

    present_days = len(present)
    total_working_days = days_in_month(month, year) - count_weekly_off_days(employee.shift.weekly_offs, month, year)
    absent_days = total_working_days - present_days
    if absent_days < 0:
        logger.warning(
            "Employee %s has %d present days but only %d working days in %02d/%d",
            employee.employee_id,
            present_days,
            total_working_days,
            month,
            year,
        )

    total_hours = sum(r.hours_worked for r in month_records)
    overtime_hours = sum(r.overtime_hours for r in month_records)
    total_break_minutes = sum(r.total_break_time for r in month_records)
    late_count = sum(1 for r in present if r.status == AttendanceStatus.LATE)
    early_leave_count = sum(1 for r in present if r.status == AttendanceStatus.EARLY_LEAVE)

    attendance_percentage = 0
    if total_working_days > 0:
        attendance_percentage = int(round_half_up(present_days / total_working_days * 100))

    punctuality_score = 0
    average_hours = 0.0
    if present_days > 0:
        punctuality_score = int(round_half_up((present_days - late_count - early_leave_count) / present_days * 100))
        average_hours = round_hours(total_hours / present_days)

    return MonthlyAttendanceAggregate(
        employee_id=employee.employee_id,
        month=month,
        year=year,
        total_working_days=total_working_days,
        present_days=present_days,
        absent_days=absent_days,
        total_hours=round_hours(total_hours),
        overtime_hours=round_hours(overtime_hours),
        total_break_hours=round_hours(total_break_minutes / 60),
        average_hours=average_hours,
        attendance_percentage=attendance_percentage,
        late_count=late_count,
        early_leave_count=early_leave_count,
        punctuality_score=punctuality_score,
    )
