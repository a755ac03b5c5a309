from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import EventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, new_id, update_columns
from .model import Character, Story
from .repository import StoryRepository

_COLUMNS = "story_id, name, description, is_active, event_type, event_custom"


def _row_to_story(r: dict) -> Story:
    return Story(
        story_id=str(r["story_id"]),
        name=r["name"],
        description=r.get("description"),
        is_active=bool(r.get("is_active", True)),
        event_type=EventType(r["event_type"]) if r.get("event_type") else None,
        event_custom=r.get("event_custom"),
    )


class MySQLStoryRepository(StoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = ()) -> list[Story]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM stories {where} ORDER BY name", params)
            return [_row_to_story(r) for r in fetchall(cur)]

    def get_by_id(self, story_id: str) -> Optional[Story]:
        rows = self._select("WHERE story_id=%s", (story_id,))
        return rows[0] if rows else None

    def get_by_name(self, name: str) -> Optional[Story]:
        rows = self._select("WHERE name=%s", (name,))
        return rows[0] if rows else None

    def list_active(self) -> Sequence[Story]:
        return self._select("WHERE is_active=1")

    def list_all(self) -> Sequence[Story]:
        return self._select()

    def create(
        self,
        *,
        name: str,
        description: Optional[str],
        event_type: Optional[EventType],
        event_custom: Optional[str],
    ) -> Story:
        story_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO stories (story_id, name, description, event_type, event_custom)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (story_id, name, description, event_type.value if event_type else None, event_custom),
            )
        return Story(
            story_id=story_id,
            name=name,
            description=description,
            event_type=event_type,
            event_custom=event_custom,
        )

    def update(self, story_id: str, changes: Mapping[str, Any]) -> Optional[Story]:
        changes = dict(changes)
        if isinstance(changes.get("event_type"), EventType):
            changes["event_type"] = changes["event_type"].value
        if "is_active" in changes:
            changes["is_active"] = int(bool(changes["is_active"]))
        found = update_columns(
            self._conn_factory,
            table="stories",
            key_column="story_id",
            key=story_id,
            changes=changes,
            allowed=("name", "description", "is_active", "event_type", "event_custom"),
        )
        return self.get_by_id(story_id) if found else None

    def set_active(self, story_id: str, *, is_active: bool) -> bool:
        return self.update(story_id, {"is_active": is_active}) is not None

    def list_characters(self, story_id: Optional[str] = None) -> Sequence[Character]:
        with db_cursor(self._conn_factory) as (_, cur):
            if story_id:
                cur.execute(
                    "SELECT character_id, story_id, name FROM characters WHERE story_id=%s ORDER BY name",
                    (story_id,),
                )
            else:
                cur.execute("SELECT character_id, story_id, name FROM characters ORDER BY name")
            return [
                Character(character_id=str(r["character_id"]), story_id=str(r["story_id"]), name=r["name"])
                for r in fetchall(cur)
            ]

    def create_character(self, *, story_id: str, name: str) -> Character:
        character_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO characters (character_id, story_id, name) VALUES (%s, %s, %s)",
                (character_id, story_id, name),
            )
        return Character(character_id=character_id, story_id=story_id, name=name)

    def delete_character(self, character_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM characters WHERE character_id=%s", (character_id,))
            return cur.rowcount > 0
