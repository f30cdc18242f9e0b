"""Create the database and apply database/schema.sql."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# A statement is any run of quoted strings or non-';' characters.
_STATEMENT = re.compile(r"""(?:'(?:\\.|[^'\\])*'|"(?:\\.|[^"\\])*"|[^;'"])+""")
# The target database comes from settings, never from the script.
_SKIP = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def iter_sql_statements(sql: str) -> Iterator[str]:
    lines = [line for line in sql.splitlines() if not line.lstrip().startswith("--")]
    for match in _STATEMENT.finditer("\n".join(lines)):
        statement = match.group(0).strip()
        if statement and not _SKIP.match(statement):
            yield statement


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        cur.close()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> int:
    """Run every statement of the schema file. Tables use IF NOT EXISTS, so reruns are harmless."""
    ensure_database_exists(conn_factory)
    statements = list(iter_sql_statements(Path(schema_path).read_text(encoding="utf-8")))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for statement in statements:
            cur.execute(statement)
        conn.commit()
        cur.close()
    finally:
        conn.close()

    logger.info("Applied %d schema statements to %s", len(statements), conn_factory.config.database)
    return len(statements)
