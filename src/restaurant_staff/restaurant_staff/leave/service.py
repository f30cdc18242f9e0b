from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import iter_dates, now_local
from ..common.locks import EmployeeLockRegistry
from ..core.enums import AttendanceStatus, LeaveType
from ..core.exceptions import EmployeeInactiveError, InsufficientBalanceError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .balance import ensure_year_balance, requires_approval
from .model import LeaveBalance, LeaveOutcome
from .repository import LeaveBalanceRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Use case: apply leave against the current year's balance and mark the days on the ledger."""

    def __init__(
        self,
        balances: LeaveBalanceRepository,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        locks: EmployeeLockRegistry | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._balances = balances
        self._attendance = attendance
        self._employees = employees
        self._locks = locks or EmployeeLockRegistry()
        self._clock = clock

    def _load_balance(self, employee_id: int, year: int) -> LeaveBalance:
        return ensure_year_balance(self._balances.get_for_year(employee_id, year), employee_id=employee_id, year=year)

    def get_balance(self, employee_id: int, year: Optional[int] = None) -> LeaveBalance:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found", employee_id=int(employee_id))
        return self._load_balance(employee.employee_id, year or self._clock().year)

    def apply_leave(
        self,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
        is_emergency: bool = False,
        *,
        actor: Optional[str] = None,
        now: datetime | None = None,
    ) -> LeaveOutcome:
        now = now or self._clock()
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found", employee_id=int(employee_id))
        if not employee.is_active:
            raise EmployeeInactiveError("Employee is inactive", employee_id=employee.employee_id)
        if end_date < start_date:
            raise ValidationError("Leave end date is before start date", employee_id=employee.employee_id, field="end_date")

        days = (end_date - start_date).days + 1
        needs_approval = requires_approval(leave_type, days)
        deduct_now = is_emergency or not needs_approval

        with self._locks.hold(employee.employee_id):
            balance = self._load_balance(employee.employee_id, now.year)
            if balance.remaining(leave_type) < days:
                raise InsufficientBalanceError(
                    f"Insufficient {leave_type.value} leave: {balance.remaining(leave_type)} day(s) left, {days} requested",
                    employee_id=employee.employee_id,
                    work_date=start_date,
                    field="leave_type",
                )

            status = AttendanceStatus.for_leave(leave_type)
            note = (reason or "").strip() or None
            records: list[AttendanceRecord] = []
            for day in iter_dates(start_date, end_date):
                existing = self._attendance.get_for_employee_and_date(employee.employee_id, day)
                if existing and existing.login_time is not None:
                    logger.warning(
                        "Leave overwrites checked-in day %s for employee %s", day.isoformat(), employee.employee_id
                    )
                base = existing or AttendanceRecord(employee_id=employee.employee_id, work_date=day)
                records.append(
                    replace(
                        base,
                        is_present=False,
                        status=status,
                        leave_type=leave_type,
                        leave_reason=note,
                        approved_by=actor if is_emergency else None,
                    )
                )

            if deduct_now:
                balance = balance.deduct(leave_type, days)
            self._balances.save_leave(balance, records)

        logger.info(
            "Employee %s applied %d day(s) of %s leave from %s (approval=%s, deducted=%s)",
            employee.employee_id,
            days,
            leave_type.value,
            start_date.isoformat(),
            needs_approval,
            deduct_now,
        )
        return LeaveOutcome(
            employee_id=employee.employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            days_applied=days,
            requires_approval=needs_approval,
            balance_deducted=deduct_now,
            balance=balance,
        )
