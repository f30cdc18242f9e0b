from __future__ import annotations

from typing import Optional

from ..core.constants import APPROVAL_REQUIRED_LEAVE_TYPES, DEFAULT_LEAVE_ALLOWANCES
from ..core.enums import LeaveType
from .model import LeaveAllowance, LeaveBalance


def default_balance(employee_id: int, year: int) -> LeaveBalance:
    return LeaveBalance(
        employee_id=employee_id,
        year=year,
        allowances={t: LeaveAllowance(total=DEFAULT_LEAVE_ALLOWANCES[t.value]) for t in LeaveType},
    )


def ensure_year_balance(existing: Optional[LeaveBalance], *, employee_id: int, year: int) -> LeaveBalance:
    """Return the balance for `year`, filling in any missing leave type with its default allowance.

    Pure: the caller decides whether to persist the result.
    """
    if existing is None:
        return default_balance(employee_id, year)

    allowances = dict(existing.allowances)
    for t in LeaveType:
        allowances.setdefault(t, LeaveAllowance(total=DEFAULT_LEAVE_ALLOWANCES[t.value]))
    return LeaveBalance(employee_id=existing.employee_id, year=existing.year, allowances=allowances)


def requires_approval(leave_type: LeaveType, days: int) -> bool:
    """Multi-day leave and planned leave types go through a manager."""
    return days > 1 or leave_type.value in APPROVAL_REQUIRED_LEAVE_TYPES
