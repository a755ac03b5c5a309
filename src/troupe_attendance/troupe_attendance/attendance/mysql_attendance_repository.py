from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, EventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    decode_json_list,
    encode_json_list,
    fetchall,
    fetchone,
    new_id,
    normalize_mysql_time,
)
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, member_id, date, status, story_id, role_id, character_ids,
    time_in, time_out, reason, reason_visible_to_admins, replaced_member_id,
    event_type, event_custom, created_at
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=str(r["attendance_id"]),
        member_id=str(r["member_id"]),
        date=r["date"],
        status=AttendanceStatus(r["status"]),
        story_id=r.get("story_id"),
        role_id=r.get("role_id"),
        character_ids=tuple(str(c) for c in decode_json_list(r.get("character_ids"))),
        time_in=normalize_mysql_time(r.get("time_in")),
        time_out=normalize_mysql_time(r.get("time_out")),
        reason=r.get("reason"),
        reason_visible_to_admins=bool(r.get("reason_visible_to_admins")),
        replaced_member_id=r.get("replaced_member_id"),
        event_type=EventType(r["event_type"]) if r.get("event_type") else None,
        event_custom=r.get("event_custom"),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = ()) -> list[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance {where} ORDER BY date DESC, created_at DESC",
                params,
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE attendance_id=%s", (attendance_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_for_member(self, member_id: str) -> Sequence[AttendanceRecord]:
        return self._select("WHERE member_id=%s", (member_id,))

    def list_all(self) -> Sequence[AttendanceRecord]:
        return self._select()

    def list_since(self, start: date) -> Sequence[AttendanceRecord]:
        return self._select("WHERE date >= %s", (start,))

    def create(
        self,
        *,
        member_id: str,
        date: date,
        status: AttendanceStatus,
        story_id: Optional[str],
        role_id: Optional[str],
        character_ids: Sequence[str],
        time_in: Optional[time],
        time_out: Optional[time],
        reason: Optional[str],
        reason_visible_to_admins: bool,
        replaced_member_id: Optional[str],
        event_type: Optional[EventType],
        event_custom: Optional[str],
    ) -> AttendanceRecord:
        attendance_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(
                    attendance_id, member_id, date, status, story_id, role_id, character_ids,
                    time_in, time_out, reason, reason_visible_to_admins, replaced_member_id,
                    event_type, event_custom
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    attendance_id,
                    member_id,
                    date,
                    status.value,
                    story_id,
                    role_id,
                    encode_json_list(character_ids),
                    time_in,
                    time_out,
                    reason,
                    int(bool(reason_visible_to_admins)),
                    replaced_member_id,
                    event_type.value if event_type else None,
                    event_custom,
                ),
            )
        created = self.get_by_id(attendance_id)
        if not created:
            raise RuntimeError(f"attendance row {attendance_id} vanished after insert")
        return created
