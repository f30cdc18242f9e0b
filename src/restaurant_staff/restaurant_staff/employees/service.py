from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, time
from typing import Any, Iterable, Optional

from ..common.datetime_utils import now_local, parse_hhmm, parse_iso_date
from ..common.validators import (
    require_bool,
    require_enum,
    require_int_in_range,
    require_non_empty,
    require_non_negative,
)
from ..core.constants import (
    DEFAULT_PAGE_SIZE,
    EMPLOYEE_CODE_DIGITS,
    EMPLOYEE_CODE_PREFIX,
    MAX_REVIEW_RATING,
    MIN_REVIEW_RATING,
)
from ..core.enums import PayrollType, StaffRole, Weekday
from ..core.exceptions import InvalidStateError, NotFoundError, ValidationError
from .model import Compensation, Employee, EmployeePage, PerformanceReview, ShiftConfig
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_COMPENSATION_FIELDS = ("payroll_type", "base_salary", "hourly_rate", "overtime_rate", "bonus", "deductions")
_SHIFT_FIELDS = ("shift_start", "shift_end", "break_minutes", "weekly_offs")
_PROFILE_FIELDS = ("name", "email", "phone", "role", "department", "address", "emergency_contact", "is_active")


def _as_time(value: Any, field_name: str) -> time:
    if isinstance(value, time):
        return value
    return parse_hhmm(value, field=field_name)


def _as_date(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    return parse_iso_date(value, field=field_name)


def build_shift(
    *,
    base: ShiftConfig,
    shift_start: Any = None,
    shift_end: Any = None,
    break_minutes: Any = None,
    weekly_offs: Optional[Iterable[str]] = None,
) -> ShiftConfig:
    start = _as_time(shift_start, "shift_start") if shift_start is not None else base.start_time
    end = _as_time(shift_end, "shift_end") if shift_end is not None else base.end_time
    if end <= start:
        raise ValidationError("Shift end must be after shift start", field="shift_end")

    minutes = base.break_minutes
    if break_minutes is not None:
        minutes = int(require_non_negative(break_minutes, "break_minutes"))

    offs = base.weekly_offs
    if weekly_offs is not None:
        if isinstance(weekly_offs, str):
            weekly_offs = [w for w in weekly_offs.split(",") if w.strip()]
        offs = frozenset(require_enum(Weekday, w, "weekly_offs").value for w in weekly_offs)

    return ShiftConfig(start_time=start, end_time=end, break_minutes=minutes, weekly_offs=offs)


def build_compensation(*, base: Compensation, **fields: Any) -> Compensation:
    changes: dict[str, Any] = {}
    for name, value in fields.items():
        if value is None:
            continue
        if name == "payroll_type":
            changes[name] = require_enum(PayrollType, value, name)
        else:
            changes[name] = require_non_negative(value, name)
    return replace(base, **changes)


class EmployeeService:
    """Use case: hire, edit, list and terminate restaurant staff."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found", employee_id=int(employee_id))
        return employee

    def list(
        self,
        *,
        active: Optional[bool] = None,
        role: Optional[str] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> EmployeePage:
        page = max(int(page), 1)
        limit = max(int(limit), 1)
        role_filter = require_enum(StaffRole, role, "role") if role else None
        rows, total = self._employees.list(active=active, role=role_filter, offset=(page - 1) * limit, limit=limit)
        return EmployeePage(employees=list(rows), total=total, page=page, limit=limit)

    def _next_employee_code(self) -> str:
        return f"{EMPLOYEE_CODE_PREFIX}{self._employees.count() + 1:0{EMPLOYEE_CODE_DIGITS}d}"

    def hire(
        self,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        role: Any = None,
        department: Optional[str] = None,
        join_date: Any = None,
        address: Optional[str] = None,
        emergency_contact: Optional[str] = None,
        **config: Any,
    ) -> Employee:
        unknown = set(config) - set(_COMPENSATION_FIELDS) - set(_SHIFT_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}", field=sorted(unknown)[0])

        name = require_non_empty(name, "name")
        email = require_non_empty(email, "email").lower()
        phone = require_non_empty(phone, "phone")
        staff_role = require_enum(StaffRole, role, "role")

        if self._employees.get_by_email(email):
            raise ValidationError("Employee with this email already exists", field="email")

        employee = Employee(
            employee_id=0,
            employee_code=self._next_employee_code(),
            name=name,
            email=email,
            phone=phone,
            role=staff_role,
            department=(department or "").strip() or None,
            join_date=_as_date(join_date, "join_date") if join_date else now_local().date(),
            compensation=build_compensation(
                base=Compensation(), **{k: config.get(k) for k in _COMPENSATION_FIELDS}
            ),
            shift=build_shift(base=ShiftConfig(), **{k: config.get(k) for k in _SHIFT_FIELDS}),
            address=address,
            emergency_contact=emergency_contact,
        )
        new_id = self._employees.create(employee)
        logger.info("Hired employee %s (%s) as %s", employee.employee_code, new_id, staff_role.value)
        return replace(employee, employee_id=new_id)

    def update(self, employee_id: int, **changes: Any) -> Employee:
        employee = self.get(employee_id)

        unknown = set(changes) - set(_COMPENSATION_FIELDS) - set(_SHIFT_FIELDS) - set(_PROFILE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}", field=sorted(unknown)[0])

        profile: dict[str, Any] = {}
        if changes.get("name") is not None:
            profile["name"] = require_non_empty(changes["name"], "name")
        if changes.get("phone") is not None:
            profile["phone"] = require_non_empty(changes["phone"], "phone")
        if changes.get("role") is not None:
            profile["role"] = require_enum(StaffRole, changes["role"], "role")
        if changes.get("email") is not None:
            email = require_non_empty(changes["email"], "email").lower()
            other = self._employees.get_by_email(email)
            if other and other.employee_id != employee.employee_id:
                raise ValidationError("Employee with this email already exists", field="email")
            profile["email"] = email
        for key in ("department", "address", "emergency_contact"):
            if key in changes:
                profile[key] = changes[key]
        if changes.get("is_active") is not None:
            profile["is_active"] = require_bool(changes["is_active"], "is_active")

        updated = replace(
            employee,
            **profile,
            compensation=build_compensation(
                base=employee.compensation, **{k: changes.get(k) for k in _COMPENSATION_FIELDS}
            ),
            shift=build_shift(base=employee.shift, **{k: changes.get(k) for k in _SHIFT_FIELDS}),
        )
        if not self._employees.update(updated):
            raise NotFoundError("Employee not found", employee_id=employee.employee_id)
        return updated

    def terminate(self, employee_id: int, *, reason: str = "", termination_date: Any = None) -> Employee:
        """Soft delete: the employee is deactivated, never removed."""
        employee = self.get(employee_id)
        if not employee.is_active:
            raise InvalidStateError("Employee is already inactive", employee_id=employee.employee_id)

        when = _as_date(termination_date, "termination_date") if termination_date else now_local().date()
        updated = replace(
            employee,
            is_active=False,
            termination_date=when,
            termination_reason=(reason or "").strip() or None,
        )
        self._employees.update(updated)
        logger.info("Terminated employee %s on %s", employee.employee_code, when.isoformat())
        return updated

    def add_review(
        self,
        employee_id: int,
        *,
        reviewer: str,
        rating: Any,
        comments: Optional[str] = None,
        review_date: Any = None,
    ) -> PerformanceReview:
        employee = self.get(employee_id)
        review = PerformanceReview(
            review_id=0,
            employee_id=employee.employee_id,
            review_date=_as_date(review_date, "review_date") if review_date else now_local().date(),
            reviewer=require_non_empty(reviewer, "reviewer"),
            rating=require_int_in_range(rating, "rating", MIN_REVIEW_RATING, MAX_REVIEW_RATING),
            comments=(comments or "").strip() or None,
        )
        return replace(review, review_id=self._employees.add_review(review))

    def list_reviews(self, employee_id: int) -> list[PerformanceReview]:
        employee = self.get(employee_id)
        return list(self._employees.list_reviews(employee.employee_id))
