from __future__ import annotations

from src.restaurant_staff.restaurant_staff.database.bootstrap import iter_sql_statements
from src.restaurant_staff.restaurant_staff.main import SCHEMA_PATH


def test_schema_file_yields_only_table_statements():
    statements = list(iter_sql_statements(SCHEMA_PATH.read_text(encoding="utf-8")))

    assert len(statements) == 5
    assert all(s.upper().startswith("CREATE TABLE IF NOT EXISTS") for s in statements)


def test_semicolons_inside_quotes_do_not_split():
    sql = "-- seed; ignored\nUSE other;\nINSERT INTO t VALUES ('a;b', \"c;d\");\nSELECT 1"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b', \"c;d\")", "SELECT 1"]
