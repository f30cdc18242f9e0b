from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime
from typing import Any, Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..common.http import json_body, jsonable
from ..common.validators import require_enum, require_month, require_year
from ..container import Container
from ..core.enums import BreakType
from ..core.exceptions import ValidationError
from .model import AttendanceRecord, BreakInterval, GeoLocation


def break_json(b: BreakInterval) -> dict:
    return jsonable(
        {
            "type": b.break_type,
            "start_time": b.start_time,
            "end_time": b.end_time,
            "duration": b.duration,
        }
    )


def record_json(r: AttendanceRecord) -> dict:
    return jsonable(
        {
            "id": r.attendance_id,
            "employee_id": r.employee_id,
            "date": r.work_date,
            "login_time": r.login_time,
            "logout_time": r.logout_time,
            "is_present": r.is_present,
            "hours_worked": r.hours_worked,
            "overtime_hours": r.overtime_hours,
            "late_minutes": r.late_minutes,
            "early_leave_minutes": r.early_leave_minutes,
            "status": r.status,
            "breaks": [break_json(b) for b in r.breaks],
            "total_break_time": r.total_break_time,
            "work_location": r.work_location,
            "check_in_location": asdict(r.check_in_location) if r.check_in_location else None,
            "check_out_location": asdict(r.check_out_location) if r.check_out_location else None,
            "leave_type": r.leave_type,
            "leave_reason": r.leave_reason,
            "approved_by": r.approved_by,
        }
    )


def _parse_location(value: Any) -> Optional[GeoLocation]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValidationError("location must be an object", field="location")
    try:
        return GeoLocation(
            latitude=float(value["latitude"]),
            longitude=float(value["longitude"]),
            address=value.get("address"),
        )
    except (KeyError, TypeError, ValueError):
        raise ValidationError("location needs numeric latitude and longitude", field="location")


def _parse_timestamp(body: dict) -> Optional[datetime]:
    value = body.get("timestamp")
    return parse_iso_datetime(value) if value else None


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/employees/<int:employee_id>/checkin", methods=["POST"], endpoint="attendance_checkin")
    def attendance_checkin(employee_id: int):
        body = json_body()
        record = service.check_in(
            employee_id,
            now=_parse_timestamp(body),
            location=_parse_location(body.get("location")),
            work_location=body.get("work_location"),
        )
        return jsonify({"message": "Check-in successful", "attendance": record_json(record)})

    @app.route("/api/employees/<int:employee_id>/checkout", methods=["POST"], endpoint="attendance_checkout")
    def attendance_checkout(employee_id: int):
        body = json_body()
        record = service.check_out(
            employee_id,
            now=_parse_timestamp(body),
            location=_parse_location(body.get("location")),
        )
        return jsonify({"message": "Check-out successful", "attendance": record_json(record)})

    @app.route("/api/employees/<int:employee_id>/breaks/start", methods=["POST"], endpoint="attendance_break_start")
    def attendance_break_start(employee_id: int):
        body = json_body()
        break_type = require_enum(BreakType, body.get("type", BreakType.OTHER.value), "type")
        item = service.start_break(employee_id, break_type, now=_parse_timestamp(body))
        return jsonify({"message": "Break started", "break": break_json(item)})

    @app.route("/api/employees/<int:employee_id>/breaks/end", methods=["POST"], endpoint="attendance_break_end")
    def attendance_break_end(employee_id: int):
        item = service.end_break(employee_id, now=_parse_timestamp(json_body()))
        return jsonify({"message": "Break ended", "break": break_json(item)})

    @app.route("/api/employees/<int:employee_id>/attendance", methods=["GET"], endpoint="attendance_report")
    def attendance_report(employee_id: int):
        today = date.today()
        month = require_month(request.args.get("month", today.month))
        year = require_year(request.args.get("year", today.year))
        report = service.get_monthly_report(employee_id, month, year)
        e = report.employee
        return jsonify(
            {
                "employee": {
                    "id": e.employee_id,
                    "employee_code": e.employee_code,
                    "name": e.name,
                    "role": e.role.value,
                    "payroll_type": e.compensation.payroll_type.value,
                },
                "attendance": [record_json(r) for r in report.records],
                "summary": report.aggregate.to_dict(),
            }
        )

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    def attendance_today():
        day_s = request.args.get("date")
        roster = service.get_daily_roster(parse_iso_date(day_s) if day_s else None)
        return jsonify(
            {
                "date": roster.work_date.isoformat(),
                "attendance_summary": [jsonable(asdict(row)) for row in roster.rows],
                "summary": {"present": roster.present, "absent": roster.absent, "total": roster.total},
            }
        )

    @app.route("/api/attendance/bulk-checkin", methods=["POST"], endpoint="attendance_bulk_checkin")
    def attendance_bulk_checkin():
        body = json_body()
        ids = body.get("employee_ids")
        if not isinstance(ids, list) or not ids:
            raise ValidationError("employee_ids must be a non-empty list", field="employee_ids")
        try:
            ids = [int(i) for i in ids]
        except (TypeError, ValueError):
            raise ValidationError("employee_ids must contain integers", field="employee_ids")

        results = service.bulk_check_in(ids, now=_parse_timestamp(body), work_location=body.get("work_location"))
        return jsonify(
            {
                "results": [
                    {
                        "employee_id": r.employee_id,
                        "success": r.success,
                        "attendance": record_json(r.record) if r.record else None,
                        "error": r.error,
                    }
                    for r in results
                ],
                "succeeded": sum(1 for r in results if r.success),
                "failed": sum(1 for r in results if not r.success),
            }
        )
