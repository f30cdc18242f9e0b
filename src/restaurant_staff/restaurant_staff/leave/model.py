from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Mapping

from ..core.enums import LeaveType


@dataclass(frozen=True)
class LeaveAllowance:
    """Days of one leave type for one year. used + remaining always equals total."""

    total: int
    used: int = 0
    remaining: int | None = None

    def __post_init__(self):
        if self.remaining is None:
            object.__setattr__(self, "remaining", self.total - self.used)

    def deduct(self, days: int) -> "LeaveAllowance":
        return replace(self, used=self.used + days, remaining=self.remaining - days)


@dataclass(frozen=True)
class LeaveBalance:
    """Per-type leave allowances of one employee for one calendar year."""

    employee_id: int
    year: int
    allowances: Mapping[LeaveType, LeaveAllowance]

    def remaining(self, leave_type: LeaveType) -> int:
        return self.allowances[leave_type].remaining

    def deduct(self, leave_type: LeaveType, days: int) -> "LeaveBalance":
        updated = dict(self.allowances)
        updated[leave_type] = updated[leave_type].deduct(days)
        return replace(self, allowances=updated)

    def to_dict(self) -> dict:
        return {
            t.value: {"total": a.total, "used": a.used, "remaining": a.remaining}
            for t, a in self.allowances.items()
        }


@dataclass(frozen=True)
class LeaveOutcome:
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    days_applied: int
    requires_approval: bool
    balance_deducted: bool
    balance: LeaveBalance
