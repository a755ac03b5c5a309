from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional, Sequence
import uuid

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


def new_id() -> str:
    """Primary keys are UUID strings generated application-side."""
    return str(uuid.uuid4())


def update_columns(
    conn_factory: DatabaseConnection,
    *,
    table: str,
    key_column: str,
    key: str,
    changes: Dict[str, Any],
    allowed: Sequence[str],
    touch_updated_at: bool = False,
) -> bool:
    """UPDATE only whitelisted columns; returns True when the row exists."""

    cols = [c for c in changes if c in allowed]
    assignments = [f"{c}=%s" for c in cols]
    params: list[Any] = [changes[c] for c in cols]
    if touch_updated_at:
        assignments.append("updated_at=CURRENT_TIMESTAMP")

    with db_cursor(conn_factory) as (_, cur):
        if assignments:
            cur.execute(
                f"UPDATE {table} SET {', '.join(assignments)} WHERE {key_column}=%s",
                (*params, key),
            )
        cur.execute(f"SELECT 1 AS found FROM {table} WHERE {key_column}=%s", (key,))
        return fetchone(cur) is not None


def encode_json_list(values: Optional[Sequence[Any]]) -> Optional[str]:
    """Array columns (character ids, poll options, audience counts) are stored as JSON text."""
    if values is None:
        return None
    return json.dumps(list(values))


def decode_json_list(value: Any) -> list:
    if value is None or value == "":
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return list(json.loads(value))
    return list(value)


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
