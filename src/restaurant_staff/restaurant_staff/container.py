from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.locks import EmployeeLockRegistry
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .leave.mysql_leave_repository import MySQLLeaveBalanceRepository
from .leave.repository import LeaveBalanceRepository
from .leave.service import LeaveService
from .payroll.service import PayrollService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    leave_repo: LeaveBalanceRepository

    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService


def wire(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    leave_repo: LeaveBalanceRepository,
    **service_kwargs,
) -> Container:
    """Build services over any repository implementation (MySQL in the app, in-memory in tests).

    `service_kwargs` (e.g. clock) are passed to the attendance and leave services.
    """
    locks = EmployeeLockRegistry()
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        locks=locks,
        strategy_factory=AttendanceStrategyFactory(),
        **service_kwargs,
    )
    return Container(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        employee_service=EmployeeService(employees_repo),
        attendance_service=attendance_service,
        leave_service=LeaveService(leave_repo, attendance_repo, employees_repo, locks=locks, **service_kwargs),
        payroll_service=PayrollService(attendance_service, employees_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leave_repo=MySQLLeaveBalanceRepository(conn),
    )
