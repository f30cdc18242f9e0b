from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import StaffRole
from .model import Employee, PerformanceReview


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def list(
        self,
        *,
        active: Optional[bool] = None,
        role: Optional[StaffRole] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> tuple[Sequence[Employee], int]:
        """Return (page of employees newest first, total matching)."""
        raise NotImplementedError

    def create(self, employee: Employee) -> int:
        """Insert and return the new employee_id (employee.employee_id is ignored)."""
        raise NotImplementedError

    def update(self, employee: Employee) -> bool:
        raise NotImplementedError

    def set_last_login(self, employee_id: int, when: datetime) -> bool:
        raise NotImplementedError

    def add_review(self, review: PerformanceReview) -> int:
        raise NotImplementedError

    def list_reviews(self, employee_id: int) -> Sequence[PerformanceReview]:
        raise NotImplementedError
