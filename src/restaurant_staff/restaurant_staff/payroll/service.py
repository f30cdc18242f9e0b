from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..attendance.service import AttendanceService
from ..core.enums import PayrollType
from ..core.exceptions import DomainError, NotFoundError, UnsupportedPayrollTypeError
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.hourly_calculator import HourlyPayrollCalculator
from .calculator.monthly_calculator import MonthlyPayrollCalculator
from .model import PayrollReport, PayrollReportRow, SalaryBreakdown

logger = logging.getLogger(__name__)


def default_calculators() -> dict[PayrollType, PayrollCalculator]:
    return {
        PayrollType.MONTHLY: MonthlyPayrollCalculator(),
        PayrollType.HOURLY: HourlyPayrollCalculator(),
    }


class PayrollService:
    """Payroll engine: monthly attendance aggregate + compensation config -> salary breakdown.

    Read-only; nothing is written back.
    """

    def __init__(
        self,
        attendance: AttendanceService,
        employees: EmployeeRepository,
        *,
        calculators: Optional[Mapping[PayrollType, PayrollCalculator]] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._calculators = dict(calculators or default_calculators())

    def calculate_salary(self, employee_id: int, month: int, year: int) -> SalaryBreakdown:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found", employee_id=int(employee_id))

        payroll_type = employee.compensation.payroll_type
        calculator = self._calculators.get(payroll_type)
        if calculator is None:
            raise UnsupportedPayrollTypeError(
                f"No salary formula for payroll type '{payroll_type.value}'",
                employee_id=employee.employee_id,
                field="payroll_type",
            )

        aggregate = self._attendance.get_monthly_aggregate(employee.employee_id, month, year)
        return calculator.calculate(employee, aggregate)

    def build_payroll_report(self, month: int, year: int) -> PayrollReport:
        """Salary for every active employee; per-employee failures are collected, not raised."""
        active, _ = self._employees.list(active=True)
        rows: list[PayrollReportRow] = []
        for e in active:
            try:
                breakdown = self.calculate_salary(e.employee_id, month, year)
            except DomainError as err:
                logger.warning("Payroll skipped for employee %s: %s", e.employee_id, err.message)
                rows.append(
                    PayrollReportRow(employee_id=e.employee_id, employee_code=e.employee_code, name=e.name, error=err.to_dict())
                )
            else:
                rows.append(
                    PayrollReportRow(
                        employee_id=e.employee_id, employee_code=e.employee_code, name=e.name, breakdown=breakdown
                    )
                )
        return PayrollReport(month=int(month), year=int(year), rows=rows)
