from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import EventType, NotificationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id
from .model import Notification
from .repository import NotificationRepository

_COLUMNS = """
    notification_id, title, content, type, event_type, event_custom,
    created_by_id, is_active, expires_at, created_at
"""


def _row_to_notification(r: dict) -> Notification:
    return Notification(
        notification_id=str(r["notification_id"]),
        title=r["title"],
        content=r["content"],
        type=NotificationType(r["type"]),
        event_type=EventType(r["event_type"]) if r.get("event_type") else None,
        event_custom=r.get("event_custom"),
        created_by_id=r.get("created_by_id"),
        is_active=bool(r.get("is_active", True)),
        expires_at=r.get("expires_at"),
        created_at=r.get("created_at"),
    )


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = ()) -> list[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM notifications {where} ORDER BY created_at DESC", params)
            return [_row_to_notification(r) for r in fetchall(cur)]

    def get_by_id(self, notification_id: str) -> Optional[Notification]:
        rows = self._select("WHERE notification_id=%s", (notification_id,))
        return rows[0] if rows else None

    def list_all(self) -> Sequence[Notification]:
        return self._select()

    def list_active(self) -> Sequence[Notification]:
        return self._select("WHERE is_active=1")

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM notifications WHERE is_active=1")
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def create(
        self,
        *,
        title: str,
        content: str,
        type: NotificationType,
        event_type: Optional[EventType],
        event_custom: Optional[str],
        created_by_id: Optional[str],
        expires_at: Optional[datetime],
    ) -> Notification:
        notification_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(
                    notification_id, title, content, type, event_type, event_custom, created_by_id, expires_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    notification_id,
                    title,
                    content,
                    type.value,
                    event_type.value if event_type else None,
                    event_custom,
                    created_by_id,
                    expires_at,
                ),
            )
        created = self.get_by_id(notification_id)
        if not created:
            raise RuntimeError(f"notification row {notification_id} vanished after insert")
        return created

    def deactivate(self, notification_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE notifications SET is_active=0 WHERE notification_id=%s", (notification_id,))
            cur.execute("SELECT 1 AS found FROM notifications WHERE notification_id=%s", (notification_id,))
            return fetchone(cur) is not None
