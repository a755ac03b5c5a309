from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import EventType
from .model import Character, PracticeLink, Role, Story


class StoryRepository(Protocol):
    def get_by_id(self, story_id: str) -> Optional[Story]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Story]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Story]:
        """Active stories ordered by name."""
        raise NotImplementedError

    def list_all(self) -> Sequence[Story]:
        """Every story including soft-deleted ones (history joins need them)."""
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        description: Optional[str],
        event_type: Optional[EventType],
        event_custom: Optional[str],
    ) -> Story:
        raise NotImplementedError

    def update(self, story_id: str, changes: Mapping[str, Any]) -> Optional[Story]:
        raise NotImplementedError

    def set_active(self, story_id: str, *, is_active: bool) -> bool:
        raise NotImplementedError

    def list_characters(self, story_id: Optional[str] = None) -> Sequence[Character]:
        raise NotImplementedError

    def create_character(self, *, story_id: str, name: str) -> Character:
        raise NotImplementedError

    def delete_character(self, character_id: str) -> bool:
        raise NotImplementedError


class RoleRepository(Protocol):
    def list_active(self) -> Sequence[Role]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Role]:
        raise NotImplementedError

    def create(self, *, name: str, description: Optional[str]) -> Role:
        raise NotImplementedError


class PracticeLinkRepository(Protocol):
    def list_all(self) -> Sequence[PracticeLink]:
        """Ordered by title."""
        raise NotImplementedError

    def create(self, *, story_id: str, title: str, url: str, created_by_id: Optional[str]) -> PracticeLink:
        raise NotImplementedError

    def update(self, link_id: str, changes: Mapping[str, Any]) -> Optional[PracticeLink]:
        raise NotImplementedError

    def delete(self, link_id: str) -> bool:
        raise NotImplementedError
