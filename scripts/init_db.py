from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.restaurant_staff.restaurant_staff.database.bootstrap import apply_schema
from src.restaurant_staff.restaurant_staff.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(settings.DB_CONFIG)

    count = apply_schema(DatabaseConnection.get_instance(config), schema_path=REPO_ROOT / "database" / "schema.sql")
    print(f"OK: Applied schema.sql ({count} statements) -> {config.user}@{config.host}:{config.port}/{config.database}")


if __name__ == "__main__":
    main()
