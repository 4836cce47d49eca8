from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_value(value: Any, *, as_bool: bool = False) -> Any:
    """Normalize driver values into plain Python scalars.

    mysql-connector returns BOOLEAN columns as 0/1 ints and DECIMAL columns
    as ``decimal.Decimal``.
    """

    if value is None:
        return None
    if as_bool:
        return bool(value)
    if isinstance(value, Decimal):
        return float(value)
    return value
