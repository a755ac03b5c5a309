from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, decode_json_list, encode_json_list, fetchall, fetchone, new_id
from .model import Poll, PollResponse
from .repository import PollRepository

_POLL_COLUMNS = "poll_id, question, options, notification_id, is_active, created_by_id, created_at, expires_at"
_RESPONSE_COLUMNS = "response_id, poll_id, member_id, selected_option, created_at"


def _row_to_poll(r: dict) -> Poll:
    return Poll(
        poll_id=str(r["poll_id"]),
        question=r["question"],
        options=tuple(str(o) for o in decode_json_list(r.get("options"))),
        notification_id=r.get("notification_id"),
        is_active=bool(r.get("is_active", True)),
        created_by_id=r.get("created_by_id"),
        created_at=r.get("created_at"),
        expires_at=r.get("expires_at"),
    )


def _row_to_response(r: dict) -> PollResponse:
    return PollResponse(
        response_id=str(r["response_id"]),
        poll_id=str(r["poll_id"]),
        member_id=str(r["member_id"]),
        selected_option=int(r["selected_option"]),
        created_at=r.get("created_at"),
    )


class MySQLPollRepository(PollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = ()) -> list[Poll]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_POLL_COLUMNS} FROM polls {where} ORDER BY created_at DESC", params)
            return [_row_to_poll(r) for r in fetchall(cur)]

    def get_by_id(self, poll_id: str) -> Optional[Poll]:
        rows = self._select("WHERE poll_id=%s", (poll_id,))
        return rows[0] if rows else None

    def list_all(self) -> Sequence[Poll]:
        return self._select()

    def get_by_notification(self, notification_id: str) -> Optional[Poll]:
        rows = self._select("WHERE notification_id=%s", (notification_id,))
        return rows[0] if rows else None

    def create(
        self,
        *,
        question: str,
        options: Sequence[str],
        notification_id: Optional[str],
        created_by_id: Optional[str],
        expires_at: Optional[datetime] = None,
    ) -> Poll:
        poll_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO polls(poll_id, question, options, notification_id, created_by_id, expires_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (poll_id, question, encode_json_list(options), notification_id, created_by_id, expires_at),
            )
        created = self.get_by_id(poll_id)
        if not created:
            raise RuntimeError(f"poll row {poll_id} vanished after insert")
        return created

    def list_responses(self, poll_id: str) -> Sequence[PollResponse]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RESPONSE_COLUMNS} FROM poll_responses WHERE poll_id=%s ORDER BY created_at DESC",
                (poll_id,),
            )
            return [_row_to_response(r) for r in fetchall(cur)]

    def save_response(self, *, poll_id: str, member_id: str, selected_option: int) -> PollResponse:
        response_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM poll_responses WHERE poll_id=%s AND member_id=%s", (poll_id, member_id))
            cur.execute(
                "INSERT INTO poll_responses(response_id, poll_id, member_id, selected_option) VALUES(%s,%s,%s,%s)",
                (response_id, poll_id, member_id, int(selected_option)),
            )
            cur.execute(f"SELECT {_RESPONSE_COLUMNS} FROM poll_responses WHERE response_id=%s", (response_id,))
            return _row_to_response(fetchone(cur))
