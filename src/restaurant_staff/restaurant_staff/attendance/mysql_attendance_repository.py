from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Optional, Sequence

from ..core.enums import AttendanceStatus, BreakType, LeaveType
from ..core.exceptions import AlreadyCheckedInError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, placeholders
from .model import AttendanceRecord, BreakInterval, GeoLocation
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, work_date, login_time, logout_time, is_present,
    hours_worked, overtime_hours, late_minutes, early_leave_minutes, status, total_break_time,
    work_location, check_in_lat, check_in_lng, check_in_address,
    check_out_lat, check_out_lng, check_out_address,
    leave_type, leave_reason, approved_by
"""


def _geo(r: dict[str, Any], prefix: str) -> Optional[GeoLocation]:
    lat, lng = r.get(f"{prefix}_lat"), r.get(f"{prefix}_lng")
    if lat is None or lng is None:
        return None
    return GeoLocation(latitude=float(lat), longitude=float(lng), address=r.get(f"{prefix}_address"))


def _row_to_record(r: dict[str, Any], breaks: Sequence[BreakInterval]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=normalize_mysql_date(r["work_date"]),
        login_time=r.get("login_time"),
        logout_time=r.get("logout_time"),
        is_present=bool(r["is_present"]),
        hours_worked=float(r.get("hours_worked") or 0),
        overtime_hours=float(r.get("overtime_hours") or 0),
        late_minutes=int(r.get("late_minutes") or 0),
        early_leave_minutes=int(r.get("early_leave_minutes") or 0),
        status=AttendanceStatus(r["status"]),
        breaks=tuple(breaks),
        total_break_time=int(r.get("total_break_time") or 0),
        work_location=r.get("work_location"),
        check_in_location=_geo(r, "check_in"),
        check_out_location=_geo(r, "check_out"),
        leave_type=LeaveType(r["leave_type"]) if r.get("leave_type") else None,
        leave_reason=r.get("leave_reason"),
        approved_by=r.get("approved_by"),
    )


def _geo_params(geo: Optional[GeoLocation]) -> tuple:
    if geo is None:
        return (None, None, None)
    return (geo.latitude, geo.longitude, geo.address)


def upsert_record(cur, record: AttendanceRecord) -> AttendanceRecord:
    """Upsert one day by (employee_id, work_date) on an open cursor, replacing its breaks."""
    cur.execute(
        """
        INSERT INTO attendance_records(
            employee_id, work_date, login_time, logout_time, is_present,
            hours_worked, overtime_hours, late_minutes, early_leave_minutes, status, total_break_time,
            work_location, check_in_lat, check_in_lng, check_in_address,
            check_out_lat, check_out_lng, check_out_address,
            leave_type, leave_reason, approved_by
        )
        VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
        ON DUPLICATE KEY UPDATE
            login_time=VALUES(login_time), logout_time=VALUES(logout_time),
            is_present=VALUES(is_present), hours_worked=VALUES(hours_worked),
            overtime_hours=VALUES(overtime_hours), late_minutes=VALUES(late_minutes),
            early_leave_minutes=VALUES(early_leave_minutes), status=VALUES(status),
            total_break_time=VALUES(total_break_time), work_location=VALUES(work_location),
            check_in_lat=VALUES(check_in_lat), check_in_lng=VALUES(check_in_lng),
            check_in_address=VALUES(check_in_address), check_out_lat=VALUES(check_out_lat),
            check_out_lng=VALUES(check_out_lng), check_out_address=VALUES(check_out_address),
            leave_type=VALUES(leave_type), leave_reason=VALUES(leave_reason),
            approved_by=VALUES(approved_by)
        """,
        (
            int(record.employee_id),
            record.work_date,
            record.login_time,
            record.logout_time,
            int(record.is_present),
            record.hours_worked,
            record.overtime_hours,
            int(record.late_minutes),
            int(record.early_leave_minutes),
            record.status.value,
            int(record.total_break_time),
            record.work_location,
            *_geo_params(record.check_in_location),
            *_geo_params(record.check_out_location),
            record.leave_type.value if record.leave_type else None,
            record.leave_reason,
            record.approved_by,
        ),
    )
    cur.execute(
        "SELECT attendance_id FROM attendance_records WHERE employee_id=%s AND work_date=%s",
        (int(record.employee_id), record.work_date),
    )
    attendance_id = int(fetchone(cur)["attendance_id"])

    cur.execute("DELETE FROM break_intervals WHERE attendance_id=%s", (attendance_id,))
    for seq, b in enumerate(record.breaks):
        cur.execute(
            """
            INSERT INTO break_intervals(attendance_id, seq, break_type, start_time, end_time, duration)
            VALUES(%s,%s,%s,%s,%s,%s)
            """,
            (attendance_id, seq, b.break_type.value, b.start_time, b.end_time, int(b.duration)),
        )
    return replace(record, attendance_id=attendance_id)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load(self, cur, where: str, params: tuple) -> list[AttendanceRecord]:
        cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE {where} ORDER BY work_date", params)
        rows = fetchall(cur)
        if not rows:
            return []

        ids = [int(r["attendance_id"]) for r in rows]
        cur.execute(
            f"""
            SELECT attendance_id, break_type, start_time, end_time, duration
            FROM break_intervals
            WHERE attendance_id IN ({placeholders(len(ids))})
            ORDER BY attendance_id, seq
            """,
            tuple(ids),
        )
        breaks_by_id: dict[int, list[BreakInterval]] = {}
        for b in fetchall(cur):
            breaks_by_id.setdefault(int(b["attendance_id"]), []).append(
                BreakInterval(
                    start_time=b["start_time"],
                    break_type=BreakType(b["break_type"]),
                    end_time=b.get("end_time"),
                    duration=int(b.get("duration") or 0),
                )
            )
        return [_row_to_record(r, breaks_by_id.get(int(r["attendance_id"]), [])) for r in rows]

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            found = self._load(cur, "employee_id=%s AND work_date=%s", (int(employee_id), work_date))
            return found[0] if found else None

    def list_for_employee_month(self, employee_id: int, month: int, year: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load(
                cur,
                "employee_id=%s AND MONTH(work_date)=%s AND YEAR(work_date)=%s",
                (int(employee_id), int(month), int(year)),
            )

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load(cur, "work_date=%s", (work_date,))

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            return upsert_record(cur, record)

    def save_many(self, records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return [upsert_record(cur, r) for r in records]

    def claim_check_in(self, record: AttendanceRecord) -> AttendanceRecord:
        key = (int(record.employee_id), record.work_date)
        with db_cursor(self._conn_factory) as (_, cur):
            # The day's row must exist before it can be locked; a concurrent insert waits on the unique key.
            cur.execute("INSERT IGNORE INTO attendance_records(employee_id, work_date) VALUES(%s,%s)", key)
            cur.execute(
                "SELECT login_time FROM attendance_records WHERE employee_id=%s AND work_date=%s FOR UPDATE",
                key,
            )
            row = fetchone(cur)
            if row and row["login_time"] is not None:
                raise AlreadyCheckedInError(
                    "Already checked in today", employee_id=record.employee_id, work_date=record.work_date
                )
            return upsert_record(cur, record)
