from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import EventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id
from .model import Submission
from .repository import SubmissionRepository

_COLUMNS = "submission_id, member_id, content, event_type, event_custom, is_read, created_at"


def _row_to_submission(r: dict) -> Submission:
    return Submission(
        submission_id=str(r["submission_id"]),
        member_id=str(r["member_id"]),
        content=r["content"],
        event_type=EventType(r["event_type"]) if r.get("event_type") else None,
        event_custom=r.get("event_custom"),
        is_read=bool(r.get("is_read")),
        created_at=r.get("created_at"),
    )


class MySQLSubmissionRepository(SubmissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = ()) -> list[Submission]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM submissions {where} ORDER BY created_at DESC", params)
            return [_row_to_submission(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Submission]:
        return self._select()

    def list_for_member(self, member_id: str) -> Sequence[Submission]:
        return self._select("WHERE member_id=%s", (member_id,))

    def create(
        self,
        *,
        member_id: str,
        content: str,
        event_type: Optional[EventType],
        event_custom: Optional[str],
    ) -> Submission:
        submission_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO submissions(submission_id, member_id, content, event_type, event_custom)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (submission_id, member_id, content, event_type.value if event_type else None, event_custom),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM submissions WHERE submission_id=%s", (submission_id,))
            return _row_to_submission(fetchone(cur))

    def mark_read(self, submission_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE submissions SET is_read=1 WHERE submission_id=%s", (submission_id,))
            cur.execute("SELECT 1 AS found FROM submissions WHERE submission_id=%s", (submission_id,))
            return fetchone(cur) is not None
