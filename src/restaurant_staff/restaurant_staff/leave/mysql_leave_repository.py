from __future__ import annotations

from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.mysql_attendance_repository import upsert_record
from ..core.enums import LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LeaveAllowance, LeaveBalance
from .repository import LeaveBalanceRepository


def _write_balance(cur, balance: LeaveBalance) -> None:
    for leave_type, a in balance.allowances.items():
        cur.execute(
            """
            INSERT INTO leave_balances(employee_id, year, leave_type, total, used, remaining)
            VALUES(%s,%s,%s,%s,%s,%s)
            ON DUPLICATE KEY UPDATE total=VALUES(total), used=VALUES(used), remaining=VALUES(remaining)
            """,
            (int(balance.employee_id), int(balance.year), leave_type.value, a.total, a.used, a.remaining),
        )


class MySQLLeaveBalanceRepository(LeaveBalanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_year(self, employee_id: int, year: int) -> Optional[LeaveBalance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT leave_type, total, used, remaining
                FROM leave_balances
                WHERE employee_id=%s AND year=%s
                """,
                (int(employee_id), int(year)),
            )
            rows = fetchall(cur)
            if not rows:
                return None
            return LeaveBalance(
                employee_id=int(employee_id),
                year=int(year),
                allowances={
                    LeaveType(r["leave_type"]): LeaveAllowance(
                        total=int(r["total"]), used=int(r["used"]), remaining=int(r["remaining"])
                    )
                    for r in rows
                },
            )

    def save(self, balance: LeaveBalance) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            _write_balance(cur, balance)

    def save_leave(self, balance: LeaveBalance, records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            stored = [upsert_record(cur, r) for r in records]
            _write_balance(cur, balance)
            return stored
