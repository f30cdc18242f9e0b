from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Callable, Iterable

from ..common.datetime_utils import now_local
from ..common.locks import EmployeeLockRegistry
from ..common.numbers import round_hours
from ..common.validators import require_month, require_year
from ..core.enums import AttendanceStatus, BreakType
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    BreakInProgressError,
    DomainError,
    EmployeeInactiveError,
    NoOpenBreakError,
    NotCheckedInError,
    NotFoundError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from . import timesheet
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, BreakInterval, BulkCheckInResult, DailyRoster, GeoLocation, RosterRow
from .repository import AttendanceRepository
from .summary import MonthlyAttendanceAggregate, build_monthly_aggregate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthlyAttendanceReport:
    employee: Employee
    records: list[AttendanceRecord]
    aggregate: MonthlyAttendanceAggregate


class AttendanceService:
    """Attendance ledger: check-in/out, breaks and monthly aggregation for one employee at a time."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        locks: EmployeeLockRegistry | None = None,
        strategy_factory: AttendanceStrategyFactory | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._employees = employees
        self._locks = locks or EmployeeLockRegistry()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._clock = clock

    def _get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found", employee_id=int(employee_id))
        return employee

    def _get_open_day(self, employee_id: int, today: date) -> AttendanceRecord:
        """Today's record, checked in and not yet checked out."""
        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record or record.login_time is None:
            raise NotCheckedInError("Not checked in today", employee_id=employee_id, work_date=today)
        if record.logout_time is not None:
            raise AlreadyCheckedOutError("Already checked out today", employee_id=employee_id, work_date=today)
        return record

    def check_in(
        self,
        employee_id: int,
        *,
        now: datetime | None = None,
        location: GeoLocation | None = None,
        work_location: str | None = None,
    ) -> AttendanceRecord:
        now = now or self._clock()
        today = now.date()
        employee = self._get_employee(employee_id)
        if not employee.is_active:
            raise EmployeeInactiveError("Employee is inactive", employee_id=employee.employee_id)

        with self._locks.hold(employee.employee_id):
            existing = self._attendance.get_for_employee_and_date(employee.employee_id, today)
            if existing and existing.login_time is not None:
                raise AlreadyCheckedInError("Already checked in today", employee_id=employee.employee_id, work_date=today)

            late = timesheet.late_minutes(now=now, day=today, shift=employee.shift)
            decision = self._factory.for_checkin(late_minutes=late).decide(late_minutes=late)

            base = existing or AttendanceRecord(employee_id=employee.employee_id, work_date=today)
            if base.leave_type is not None:
                logger.warning(
                    "Check-in replaces %s leave on %s for employee %s",
                    base.leave_type.value,
                    today.isoformat(),
                    employee.employee_id,
                )
            record = self._attendance.claim_check_in(
                replace(
                    base,
                    login_time=now,
                    is_present=True,
                    late_minutes=late,
                    status=decision.status,
                    check_in_location=location,
                    work_location=work_location,
                    leave_type=None,
                    leave_reason=None,
                    approved_by=None,
                )
            )
            self._employees.set_last_login(employee.employee_id, now)

        logger.info("Employee %s checked in at %s (%s)", employee.employee_id, now.isoformat(), record.status.value)
        return record

    def check_out(
        self,
        employee_id: int,
        *,
        now: datetime | None = None,
        location: GeoLocation | None = None,
    ) -> AttendanceRecord:
        now = now or self._clock()
        today = now.date()
        employee = self._get_employee(employee_id)

        with self._locks.hold(employee.employee_id):
            record = self._get_open_day(employee.employee_id, today)

            # An open break ends with the shift.
            breaks = tuple(
                replace(b, end_time=now, duration=timesheet.break_duration(b, now)) if b.is_open else b
                for b in record.breaks
            )
            total_break_time = timesheet.total_break_minutes(breaks)

            metrics = timesheet.checkout_metrics(
                login_time=record.login_time,
                now=now,
                day=today,
                total_break_time=total_break_time,
                shift=employee.shift,
            )
            if metrics.hours_worked < 0:
                logger.warning(
                    "Negative hours worked (%.2f) for employee %s on %s",
                    metrics.hours_worked,
                    employee.employee_id,
                    today.isoformat(),
                )
            decision = self._factory.for_checkout(metrics=metrics).decide(metrics=metrics, current=record.status)

            record = self._attendance.save(
                replace(
                    record,
                    logout_time=now,
                    breaks=breaks,
                    total_break_time=total_break_time,
                    hours_worked=round_hours(metrics.hours_worked),
                    overtime_hours=round_hours(metrics.overtime_hours),
                    early_leave_minutes=decision.early_leave_minutes,
                    status=decision.status,
                    check_out_location=location,
                )
            )

        logger.info(
            "Employee %s checked out at %s after %.2f h (%s)",
            employee.employee_id,
            now.isoformat(),
            record.hours_worked,
            record.status.value,
        )
        return record

    def start_break(
        self,
        employee_id: int,
        break_type: BreakType = BreakType.OTHER,
        *,
        now: datetime | None = None,
    ) -> BreakInterval:
        now = now or self._clock()
        today = now.date()
        employee = self._get_employee(employee_id)

        with self._locks.hold(employee.employee_id):
            record = self._get_open_day(employee.employee_id, today)
            if record.open_break is not None:
                raise BreakInProgressError("A break is already in progress", employee_id=employee.employee_id, work_date=today)

            item = BreakInterval(start_time=now, break_type=break_type)
            self._attendance.save(replace(record, breaks=record.breaks + (item,)))

        logger.info("Employee %s started %s break", employee.employee_id, break_type.value)
        return item

    def end_break(self, employee_id: int, *, now: datetime | None = None) -> BreakInterval:
        now = now or self._clock()
        today = now.date()
        employee = self._get_employee(employee_id)

        with self._locks.hold(employee.employee_id):
            record = self._attendance.get_for_employee_and_date(employee.employee_id, today)
            open_break = record.open_break if record else None
            if open_break is None:
                raise NoOpenBreakError("No break in progress", employee_id=employee.employee_id, work_date=today)

            closed = replace(open_break, end_time=now, duration=timesheet.break_duration(open_break, now))
            breaks = tuple(closed if b is open_break else b for b in record.breaks)
            self._attendance.save(
                replace(record, breaks=breaks, total_break_time=timesheet.total_break_minutes(breaks))
            )

        logger.info("Employee %s ended break after %d min", employee.employee_id, closed.duration)
        return closed

    def bulk_check_in(
        self,
        employee_ids: Iterable[int],
        *,
        now: datetime | None = None,
        work_location: str | None = None,
    ) -> list[BulkCheckInResult]:
        """Check in every employee independently; one failure never aborts the batch."""
        now = now or self._clock()
        results: list[BulkCheckInResult] = []
        for employee_id in employee_ids:
            try:
                record = self.check_in(int(employee_id), now=now, work_location=work_location)
            except DomainError as e:
                logger.warning("Bulk check-in failed for employee %s: %s", employee_id, e.message)
                results.append(BulkCheckInResult(employee_id=int(employee_id), success=False, error=e.to_dict()))
            else:
                results.append(BulkCheckInResult(employee_id=int(employee_id), success=True, record=record))
        return results

    def get_monthly_aggregate(self, employee_id: int, month: int, year: int) -> MonthlyAttendanceAggregate:
        month, year = require_month(month), require_year(year)
        employee = self._get_employee(employee_id)
        records = self._attendance.list_for_employee_month(employee.employee_id, month, year)
        return build_monthly_aggregate(employee, records, month=month, year=year)

    def get_monthly_report(self, employee_id: int, month: int, year: int) -> MonthlyAttendanceReport:
        month, year = require_month(month), require_year(year)
        employee = self._get_employee(employee_id)
        records = list(self._attendance.list_for_employee_month(employee.employee_id, month, year))
        return MonthlyAttendanceReport(
            employee=employee,
            records=sorted(records, key=lambda r: r.work_date, reverse=True),
            aggregate=build_monthly_aggregate(employee, records, month=month, year=year),
        )

    def get_daily_roster(self, day: date | None = None) -> DailyRoster:
        day = day or self._clock().date()
        by_employee = {r.employee_id: r for r in self._attendance.list_for_date(day)}
        active, _ = self._employees.list(active=True)

        rows = []
        for e in active:
            r = by_employee.get(e.employee_id)
            rows.append(
                RosterRow(
                    employee_id=e.employee_id,
                    employee_code=e.employee_code,
                    name=e.name,
                    role=e.role.value,
                    is_present=bool(r and r.is_present),
                    login_time=r.login_time if r else None,
                    logout_time=r.logout_time if r else None,
                    hours_worked=r.hours_worked if r else 0.0,
                    status=r.status if r else AttendanceStatus.ABSENT,
                )
            )
        return DailyRoster(work_date=day, rows=rows)
