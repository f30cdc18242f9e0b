"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.restaurant_staff.restaurant_staff.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    today = date.today()

    for row in container.payroll_service.build_payroll_report(today.month, today.year).rows:
        if row.breakdown:
            print(row.employee_code, row.name, row.breakdown.net_salary)
        else:
            print(row.employee_code, row.name, "ERROR", row.error)


if __name__ == "__main__":
    main()
