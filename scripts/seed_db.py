"""Hire a small demo crew through the service layer (skips emails that already exist)."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.restaurant_staff.restaurant_staff.container import build_container
from src.restaurant_staff.restaurant_staff.core.exceptions import ValidationError

DEMO_STAFF = [
    dict(name="Asha Rao", email="asha@example.com", phone="9000000001", role="manager",
         payroll_type="monthly", base_salary=40000, overtime_rate=200),
    dict(name="Ben Ortiz", email="ben@example.com", phone="9000000002", role="cook",
         payroll_type="monthly", base_salary=25000, overtime_rate=120, shift_start="10:00", shift_end="19:00"),
    dict(name="Chen Li", email="chen@example.com", phone="9000000003", role="waiter",
         payroll_type="hourly", hourly_rate=150, shift_start="12:00", shift_end="21:00",
         weekly_offs=["monday"]),
    dict(name="Dana Kim", email="dana@example.com", phone="9000000004", role="cashier",
         payroll_type="hourly", hourly_rate=140),
]


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    for staff in DEMO_STAFF:
        try:
            e = container.employee_service.hire(**staff)
            print(f"hired {e.employee_code} {e.name}")
        except ValidationError as err:
            print(f"skip {staff['email']}: {err.message}")


if __name__ == "__main__":
    main()
