from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, new_id, update_columns
from .model import PracticeLink
from .repository import PracticeLinkRepository

_COLUMNS = "link_id, story_id, title, url, created_by_id"


def _row_to_link(r: dict) -> PracticeLink:
    return PracticeLink(
        link_id=str(r["link_id"]),
        story_id=str(r["story_id"]),
        title=r["title"],
        url=r["url"],
        created_by_id=r.get("created_by_id"),
    )


class MySQLPracticeLinkRepository(PracticeLinkRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get(self, link_id: str) -> Optional[PracticeLink]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM practice_links WHERE link_id=%s", (link_id,))
            rows = fetchall(cur)
            return _row_to_link(rows[0]) if rows else None

    def list_all(self) -> Sequence[PracticeLink]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM practice_links ORDER BY title")
            return [_row_to_link(r) for r in fetchall(cur)]

    def create(self, *, story_id: str, title: str, url: str, created_by_id: Optional[str]) -> PracticeLink:
        link_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO practice_links (link_id, story_id, title, url, created_by_id)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (link_id, story_id, title, url, created_by_id),
            )
        return PracticeLink(link_id=link_id, story_id=story_id, title=title, url=url, created_by_id=created_by_id)

    def update(self, link_id: str, changes: Mapping[str, Any]) -> Optional[PracticeLink]:
        found = update_columns(
            self._conn_factory,
            table="practice_links",
            key_column="link_id",
            key=link_id,
            changes=changes,
            allowed=("story_id", "title", "url"),
            touch_updated_at=True,
        )
        return self._get(link_id) if found else None

    def delete(self, link_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM practice_links WHERE link_id=%s", (link_id,))
            return cur.rowcount > 0
