from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from ..attendance.summary import MonthlyAttendanceAggregate
from ..core.enums import PayrollType


@dataclass(frozen=True)
class SalaryBreakdown:
    """Pay for one employee and one month; never persisted. Money is in whole currency units."""

    employee_id: int
    employee_code: str
    name: str
    payroll_type: PayrollType
    month: int
    year: int
    attendance: MonthlyAttendanceAggregate
    overtime_pay: int
    bonus: int
    deductions: int
    gross_salary: int
    net_salary: int

    @property
    def period(self) -> str:
        return f"{self.month}/{self.year}"

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["payroll_type"] = self.payroll_type.value
        out["period"] = self.period
        out["attendance"] = self.attendance.to_dict()
        return out


@dataclass(frozen=True)
class MonthlySalaryBreakdown(SalaryBreakdown):
    base_salary: int
    attendance_multiplier: float
    base_pay: int


@dataclass(frozen=True)
class HourlySalaryBreakdown(SalaryBreakdown):
    hourly_rate: float
    overtime_multiplier: float
    regular_pay: int


@dataclass(frozen=True)
class PayrollReportRow:
    employee_id: int
    employee_code: str
    name: str
    breakdown: Optional[SalaryBreakdown] = None
    error: Optional[dict] = None


@dataclass(frozen=True)
class PayrollReport:
    month: int
    year: int
    rows: list[PayrollReportRow] = field(default_factory=list)

    @property
    def total_net(self) -> int:
        return sum(r.breakdown.net_salary for r in self.rows if r.breakdown)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.rows if r.error)
