from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction: commit on success, rollback on any error.

    Row locks taken with ``SELECT ... FOR UPDATE`` inside the block are held until
    the commit/rollback here.
    """
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


def dump_dates(values: Sequence[date]) -> str:
    """Serialize a date list into the JSON text stored in DATE-list columns."""
    return json.dumps([d.strftime("%Y-%m-%d") for d in values])


def load_dates(value: Any) -> tuple[date, ...]:
    """Inverse of ``dump_dates``; accepts the raw column value (str/bytes/list)."""
    if value is None:
        return ()
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    items = json.loads(value) if isinstance(value, str) else value
    return tuple(date.fromisoformat(str(v)[:10]) for v in items)
