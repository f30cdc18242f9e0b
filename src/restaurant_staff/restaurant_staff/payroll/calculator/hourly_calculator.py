from __future__ import annotations

from ...attendance.summary import MonthlyAttendanceAggregate
from ...common.numbers import round_money
from ...core.constants import HOURLY_OVERTIME_MULTIPLIER
from ...employees.model import Employee
from ..model import HourlySalaryBreakdown
from .base import PayrollCalculator


class HourlyPayrollCalculator(PayrollCalculator):
    """Hours worked at the hourly rate; overtime hours paid again at a multiplier of that rate."""

    def __init__(self, overtime_multiplier: float = HOURLY_OVERTIME_MULTIPLIER):
        self._overtime_multiplier = overtime_multiplier

    def calculate(self, employee: Employee, aggregate: MonthlyAttendanceAggregate) -> HourlySalaryBreakdown:
        c = employee.compensation
        regular_pay = aggregate.total_hours * c.hourly_rate
        overtime_pay = aggregate.overtime_hours * c.hourly_rate * self._overtime_multiplier
        gross = regular_pay + overtime_pay + c.bonus
        net = gross - c.deductions

        return HourlySalaryBreakdown(
            employee_id=employee.employee_id,
            employee_code=employee.employee_code,
            name=employee.name,
            payroll_type=c.payroll_type,
            month=aggregate.month,
            year=aggregate.year,
            attendance=aggregate,
            hourly_rate=c.hourly_rate,
            overtime_multiplier=self._overtime_multiplier,
            regular_pay=round_money(regular_pay),
            overtime_pay=round_money(overtime_pay),
            bonus=round_money(c.bonus),
            deductions=round_money(c.deductions),
            gross_salary=round_money(gross),
            net_salary=round_money(net),
        )
