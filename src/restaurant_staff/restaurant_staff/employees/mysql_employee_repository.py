from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from ..core.enums import PayrollType, StaffRole
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, normalize_mysql_time
from .model import Compensation, Employee, PerformanceReview, ShiftConfig
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, employee_code, name, email, phone, role, department,
    payroll_type, base_salary, hourly_rate, overtime_rate, bonus, deductions,
    shift_start, shift_end, break_minutes, weekly_offs,
    is_active, join_date, termination_date, termination_reason, last_login,
    address, emergency_contact
"""


def _row_to_employee(r: dict[str, Any]) -> Employee:
    offs = [w.strip() for w in (r.get("weekly_offs") or "").split(",") if w.strip()]
    return Employee(
        employee_id=int(r["employee_id"]),
        employee_code=r["employee_code"],
        name=r["name"],
        email=r["email"],
        phone=r["phone"],
        role=StaffRole(r["role"]),
        department=r.get("department"),
        join_date=normalize_mysql_date(r["join_date"]),
        compensation=Compensation(
            payroll_type=PayrollType(r["payroll_type"]),
            base_salary=float(r.get("base_salary") or 0),
            hourly_rate=float(r.get("hourly_rate") or 0),
            overtime_rate=float(r.get("overtime_rate") or 0),
            bonus=float(r.get("bonus") or 0),
            deductions=float(r.get("deductions") or 0),
        ),
        shift=ShiftConfig(
            start_time=normalize_mysql_time(r["shift_start"]),
            end_time=normalize_mysql_time(r["shift_end"]),
            break_minutes=int(r.get("break_minutes") or 0),
            weekly_offs=frozenset(offs),
        ),
        is_active=bool(r["is_active"]),
        termination_date=normalize_mysql_date(r.get("termination_date")),
        termination_reason=r.get("termination_reason"),
        last_login=r.get("last_login"),
        address=r.get("address"),
        emergency_contact=r.get("emergency_contact"),
    )


def _employee_params(e: Employee) -> tuple:
    c, s = e.compensation, e.shift
    return (
        e.employee_code,
        e.name,
        e.email,
        e.phone,
        e.role.value,
        e.department,
        c.payroll_type.value,
        c.base_salary,
        c.hourly_rate,
        c.overtime_rate,
        c.bonus,
        c.deductions,
        s.start_time,
        s.end_time,
        s.break_minutes,
        ",".join(sorted(s.weekly_offs)),
        int(e.is_active),
        e.join_date,
        e.termination_date,
        e.termination_reason,
        e.address,
        e.emergency_contact,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_where(self, clause: str, value: Any) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE {clause}", (value,))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._get_where("employee_id=%s", int(employee_id))

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        return self._get_where("employee_code=%s", employee_code)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self._get_where("email=%s", email.lower())

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees")
            return int(fetchone(cur)["n"])

    def list(
        self,
        *,
        active: Optional[bool] = None,
        role: Optional[StaffRole] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> tuple[Sequence[Employee], int]:
        clauses: list[str] = []
        params: list[object] = []
        if active is not None:
            clauses.append("is_active=%s")
            params.append(int(active))
        if role is not None:
            clauses.append("role=%s")
            params.append(role.value)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM employees {where}", tuple(params))
            total = int(fetchone(cur)["n"])

            sql = f"SELECT {_COLUMNS} FROM employees {where} ORDER BY created_at DESC, employee_id DESC"
            page_params = list(params)
            if limit is not None:
                sql += " LIMIT %s OFFSET %s"
                page_params += [int(limit), int(offset)]
            cur.execute(sql, tuple(page_params))
            return [_row_to_employee(r) for r in fetchall(cur)], total

    def create(self, employee: Employee) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(
                    employee_code, name, email, phone, role, department,
                    payroll_type, base_salary, hourly_rate, overtime_rate, bonus, deductions,
                    shift_start, shift_end, break_minutes, weekly_offs,
                    is_active, join_date, termination_date, termination_reason,
                    address, emergency_contact
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _employee_params(employee),
            )
            return int(cur.lastrowid)

    def update(self, employee: Employee) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET employee_code=%s, name=%s, email=%s, phone=%s, role=%s, department=%s,
                    payroll_type=%s, base_salary=%s, hourly_rate=%s, overtime_rate=%s, bonus=%s, deductions=%s,
                    shift_start=%s, shift_end=%s, break_minutes=%s, weekly_offs=%s,
                    is_active=%s, join_date=%s, termination_date=%s, termination_reason=%s,
                    address=%s, emergency_contact=%s
                WHERE employee_id=%s
                """,
                _employee_params(employee) + (int(employee.employee_id),),
            )
            return cur.rowcount > 0

    def set_last_login(self, employee_id: int, when: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET last_login=%s WHERE employee_id=%s", (when, int(employee_id)))
            return cur.rowcount > 0

    def add_review(self, review: PerformanceReview) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO performance_reviews(employee_id, review_date, reviewer, rating, comments)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(review.employee_id), review.review_date, review.reviewer, int(review.rating), review.comments),
            )
            return int(cur.lastrowid)

    def list_reviews(self, employee_id: int) -> Sequence[PerformanceReview]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT review_id, employee_id, review_date, reviewer, rating, comments
                FROM performance_reviews
                WHERE employee_id=%s
                ORDER BY review_date DESC, review_id DESC
                """,
                (int(employee_id),),
            )
            return [
                PerformanceReview(
                    review_id=int(r["review_id"]),
                    employee_id=int(r["employee_id"]),
                    review_date=normalize_mysql_date(r["review_date"]),
                    reviewer=r["reviewer"],
                    rating=int(r["rating"]),
                    comments=r.get("comments"),
                )
                for r in fetchall(cur)
            ]
