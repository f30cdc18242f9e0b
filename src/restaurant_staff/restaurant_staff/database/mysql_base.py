"""Helpers shared by the MySQL repositories."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from typing import Any, Iterator, Optional

from .connection import DatabaseConnection

Row = dict[str, Any]


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[tuple[Any, Any]]:
    """One connection, one transaction: commit on success, rollback on error."""
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
    except Exception:
        conn.rollback()
        raise
    else:
        conn.commit()
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Row]:
    return cur.fetchone() or None


def fetchall(cur) -> list[Row]:
    return list(cur.fetchall() or ())


def placeholders(count: int) -> str:
    return ", ".join("%s" for _ in range(count))


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns arrive as timedelta from mysql-connector; shift times are kept as wall-clock time."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        minutes = int(value.total_seconds()) // 60 % (24 * 60)
        return time(minutes // 60, minutes % 60)
    return time.fromisoformat(str(value).strip())


def normalize_mysql_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])
