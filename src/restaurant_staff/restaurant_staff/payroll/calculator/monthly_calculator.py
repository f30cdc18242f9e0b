from __future__ import annotations

from ...attendance.summary import MonthlyAttendanceAggregate
from ...common.numbers import round_money
from ...employees.model import Employee
from ..model import MonthlySalaryBreakdown
from .base import PayrollCalculator


class MonthlyPayrollCalculator(PayrollCalculator):
    """Base salary prorated by attendance percentage, plus flat-rate overtime."""

    def calculate(self, employee: Employee, aggregate: MonthlyAttendanceAggregate) -> MonthlySalaryBreakdown:
        c = employee.compensation
        multiplier = aggregate.attendance_percentage / 100
        base_pay = c.base_salary * multiplier
        overtime_pay = c.overtime_rate * aggregate.overtime_hours
        gross = base_pay + overtime_pay + c.bonus
        net = gross - c.deductions

        return MonthlySalaryBreakdown(
            employee_id=employee.employee_id,
            employee_code=employee.employee_code,
            name=employee.name,
            payroll_type=c.payroll_type,
            month=aggregate.month,
            year=aggregate.year,
            attendance=aggregate,
            base_salary=round_money(c.base_salary),
            attendance_multiplier=multiplier,
            base_pay=round_money(base_pay),
            overtime_pay=round_money(overtime_pay),
            bonus=round_money(c.bonus),
            deductions=round_money(c.deductions),
            gross_salary=round_money(gross),
            net_salary=round_money(net),
        )
