from __future__ import annotations

from abc import ABC, abstractmethod

from ...attendance.summary import MonthlyAttendanceAggregate
from ...employees.model import Employee
from ..model import SalaryBreakdown


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, employee: Employee, aggregate: MonthlyAttendanceAggregate) -> SalaryBreakdown:
        raise NotImplementedError
