from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..attendance.model import AttendanceRecord
from .model import LeaveBalance


class LeaveBalanceRepository(Protocol):
    def get_for_year(self, employee_id: int, year: int) -> Optional[LeaveBalance]:
        raise NotImplementedError

    def save(self, balance: LeaveBalance) -> None:
        raise NotImplementedError

    def save_leave(self, balance: LeaveBalance, records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
        """Write the leave days and the balance in one transaction: both land or neither does."""
        raise NotImplementedError
