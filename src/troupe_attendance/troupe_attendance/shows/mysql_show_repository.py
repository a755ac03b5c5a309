from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import EventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    decode_json_list,
    encode_json_list,
    fetchall,
    fetchone,
    new_id,
    update_columns,
)
from .model import Show
from .repository import ShowRepository

_FIELDS = (
    "date",
    "story_id",
    "number_of_shows",
    "audience_per_show",
    "total_audience",
    "is_school",
    "school_name",
    "school_place",
    "number_of_students",
    "as_planned",
    "cancelled_reason",
    "not_as_planned_reason",
    "event_type",
    "event_custom",
    "created_by_id",
)
_COLUMNS = "show_id, " + ", ".join(_FIELDS)


def _row_to_show(r: dict) -> Show:
    return Show(
        show_id=str(r["show_id"]),
        date=r["date"],
        story_id=str(r["story_id"]),
        number_of_shows=int(r.get("number_of_shows") or 1),
        audience_per_show=tuple(int(a) for a in decode_json_list(r.get("audience_per_show"))),
        total_audience=r.get("total_audience"),
        is_school=bool(r.get("is_school")),
        school_name=r.get("school_name"),
        school_place=r.get("school_place"),
        number_of_students=r.get("number_of_students"),
        as_planned=bool(r.get("as_planned", True)),
        cancelled_reason=r.get("cancelled_reason"),
        not_as_planned_reason=r.get("not_as_planned_reason"),
        event_type=EventType(r["event_type"]) if r.get("event_type") else None,
        event_custom=r.get("event_custom"),
        created_by_id=r.get("created_by_id"),
    )


def _to_db(fields: Mapping[str, Any]) -> dict:
    out = dict(fields)
    if "audience_per_show" in out:
        out["audience_per_show"] = encode_json_list(out["audience_per_show"])
    if isinstance(out.get("event_type"), EventType):
        out["event_type"] = out["event_type"].value
    for flag in ("is_school", "as_planned"):
        if flag in out:
            out[flag] = int(bool(out[flag]))
    return out


class MySQLShowRepository(ShowRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, show_id: str) -> Optional[Show]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shows WHERE show_id=%s", (show_id,))
            r = fetchone(cur)
            return _row_to_show(r) if r else None

    def list_all(self) -> Sequence[Show]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shows ORDER BY date DESC, created_at DESC")
            return [_row_to_show(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM shows")
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def create(self, fields: Mapping[str, Any]) -> Show:
        show_id = new_id()
        values = _to_db(fields)
        cols = [c for c in _FIELDS if c in values]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO shows (show_id, {', '.join(cols)}) VALUES ({', '.join(['%s'] * (len(cols) + 1))})",
                (show_id, *[values[c] for c in cols]),
            )
        created = self.get_by_id(show_id)
        if not created:
            raise RuntimeError(f"show row {show_id} vanished after insert")
        return created

    def update(self, show_id: str, changes: Mapping[str, Any]) -> Optional[Show]:
        found = update_columns(
            self._conn_factory,
            table="shows",
            key_column="show_id",
            key=show_id,
            changes=_to_db(changes),
            allowed=_FIELDS,
            touch_updated_at=True,
        )
        return self.get_by_id(show_id) if found else None

    def delete(self, show_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shows WHERE show_id=%s", (show_id,))
            return cur.rowcount > 0
