from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.route("/api/employees/<int:employee_id>/salary/<int:month>/<int:year>", methods=["GET"], endpoint="payroll_salary")
    def payroll_salary(employee_id: int, month: int, year: int):
        return jsonify(service.calculate_salary(employee_id, month, year).to_dict())

    @app.route("/api/payroll/<int:month>/<int:year>", methods=["GET"], endpoint="payroll_report")
    def payroll_report(month: int, year: int):
        report = service.build_payroll_report(month, year)
        return jsonify(
            {
                "period": f"{report.month}/{report.year}",
                "rows": [
                    {
                        "employee_id": r.employee_id,
                        "employee_code": r.employee_code,
                        "name": r.name,
                        "salary": r.breakdown.to_dict() if r.breakdown else None,
                        "error": r.error,
                    }
                    for r in report.rows
                ],
                "total_net": report.total_net,
                "failed": report.failed,
            }
        )
