from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, jsonable
from ..common.validators import require_bool, require_enum, require_non_empty, require_year
from ..container import Container
from ..core.enums import LeaveType


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/employees/<int:employee_id>/leave", methods=["POST"], endpoint="leave_apply")
    def leave_apply(employee_id: int):
        body = json_body()
        outcome = service.apply_leave(
            employee_id,
            require_enum(LeaveType, body.get("leave_type"), "leave_type"),
            parse_iso_date(require_non_empty(body.get("start_date"), "start_date"), field="start_date"),
            parse_iso_date(require_non_empty(body.get("end_date"), "end_date"), field="end_date"),
            reason=body.get("reason"),
            is_emergency=require_bool(body.get("is_emergency", False), "is_emergency"),
            actor=body.get("approved_by"),
        )
        return jsonify(
            {
                "message": "Leave applied",
                "days_applied": outcome.days_applied,
                "requires_approval": outcome.requires_approval,
                "balance_deducted": outcome.balance_deducted,
                "start_date": jsonable(outcome.start_date),
                "end_date": jsonable(outcome.end_date),
                "balance": outcome.balance.to_dict(),
            }
        )

    @app.route("/api/employees/<int:employee_id>/leave/balance", methods=["GET"], endpoint="leave_balance")
    def leave_balance(employee_id: int):
        year = request.args.get("year")
        balance = service.get_balance(employee_id, require_year(year) if year else None)
        return jsonify({"employee_id": balance.employee_id, "year": balance.year, "balance": balance.to_dict()})
