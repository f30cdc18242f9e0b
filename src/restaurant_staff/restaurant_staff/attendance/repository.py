from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """At most one AttendanceRecord per (employee_id, work_date)."""

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee_month(self, employee_id: int, month: int, year: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        """Upsert by (employee_id, work_date), replacing the day's breaks. Returns the stored record."""
        raise NotImplementedError

    def save_many(self, records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
        """Upsert several records in a single transaction."""
        raise NotImplementedError

    def claim_check_in(self, record: AttendanceRecord) -> AttendanceRecord:
        """Store a check-in unless the day already has a login; then raise AlreadyCheckedInError.

        The check and the write are atomic, also across processes.
        """
        raise NotImplementedError
