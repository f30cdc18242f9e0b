from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, jsonable
from ..common.validators import require_bool
from ..container import Container
from .model import Employee, PerformanceReview


def employee_json(e: Employee) -> dict:
    c, s = e.compensation, e.shift
    return jsonable(
        {
            "id": e.employee_id,
            "employee_code": e.employee_code,
            "name": e.name,
            "email": e.email,
            "phone": e.phone,
            "role": e.role,
            "department": e.department,
            "payroll_type": c.payroll_type,
            "base_salary": c.base_salary,
            "hourly_rate": c.hourly_rate,
            "overtime_rate": c.overtime_rate,
            "bonus": c.bonus,
            "deductions": c.deductions,
            "shift_start": s.start_time.strftime("%H:%M"),
            "shift_end": s.end_time.strftime("%H:%M"),
            "break_minutes": s.break_minutes,
            "weekly_offs": s.weekly_offs,
            "is_active": e.is_active,
            "join_date": e.join_date,
            "termination_date": e.termination_date,
            "termination_reason": e.termination_reason,
            "last_login": e.last_login,
            "address": e.address,
            "emergency_contact": e.emergency_contact,
        }
    )


def review_json(r: PerformanceReview) -> dict:
    return jsonable(
        {
            "id": r.review_id,
            "employee_id": r.employee_id,
            "review_date": r.review_date,
            "reviewer": r.reviewer,
            "rating": r.rating,
            "comments": r.comments,
        }
    )


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    def employees_list():
        active = request.args.get("active")
        result = service.list(
            active=require_bool(active, "active") if active is not None else None,
            role=request.args.get("role") or None,
            page=request.args.get("page", 1, type=int),
            limit=request.args.get("limit", 20, type=int),
        )
        return jsonify(
            {
                "employees": [employee_json(e) for e in result.employees],
                "total": result.total,
                "total_pages": result.total_pages,
                "current_page": result.page,
            }
        )

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    def employees_create():
        employee = service.hire(**json_body())
        return jsonify({"message": "Employee created successfully", "employee": employee_json(employee)}), 201

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    def employees_get(employee_id: int):
        return jsonify(employee_json(service.get(employee_id)))

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    def employees_update(employee_id: int):
        employee = service.update(employee_id, **json_body())
        return jsonify({"message": "Employee updated successfully", "employee": employee_json(employee)})

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_terminate")
    def employees_terminate(employee_id: int):
        body = json_body()
        employee = service.terminate(
            employee_id,
            reason=body.get("reason", ""),
            termination_date=body.get("termination_date"),
        )
        return jsonify({"message": "Employee deactivated successfully", "employee": employee_json(employee)})

    @app.route("/api/employees/<int:employee_id>/reviews", methods=["GET"], endpoint="employees_reviews")
    def employees_reviews(employee_id: int):
        return jsonify({"reviews": [review_json(r) for r in service.list_reviews(employee_id)]})

    @app.route("/api/employees/<int:employee_id>/reviews", methods=["POST"], endpoint="employees_add_review")
    def employees_add_review(employee_id: int):
        body = json_body()
        review = service.add_review(
            employee_id,
            reviewer=body.get("reviewer"),
            rating=body.get("rating"),
            comments=body.get("comments"),
            review_date=body.get("review_date"),
        )
        return jsonify({"message": "Review added", "review": review_json(review)}), 201
