from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import EventType


@dataclass(frozen=True)
class Story:
    """A puppet-show story. Removal is a soft delete (`is_active=False`)."""

    story_id: str
    name: str
    description: Optional[str] = None
    is_active: bool = True
    event_type: Optional[EventType] = None
    event_custom: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.story_id,
            "name": self.name,
            "description": self.description,
            "isActive": self.is_active,
            "eventType": self.event_type.value if self.event_type else None,
            "eventCustom": self.event_custom,
        }


@dataclass(frozen=True)
class Character:
    character_id: str
    story_id: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.character_id, "storyId": self.story_id, "name": self.name}


@dataclass(frozen=True)
class Role:
    """Production duty (Character, AV, Management, Announcement, Counting, ...)."""

    role_id: str
    name: str
    description: Optional[str] = None
    is_active: bool = True

    def to_dict(self) -> dict:
        return {"id": self.role_id, "name": self.name, "description": self.description, "isActive": self.is_active}


@dataclass(frozen=True)
class PracticeLink:
    link_id: str
    story_id: str
    title: str
    url: str
    created_by_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.link_id,
            "storyId": self.story_id,
            "title": self.title,
            "url": self.url,
            "createdById": self.created_by_id,
        }


@dataclass(frozen=True)
class StoryWithCharacters:
    story: Story
    characters: list[Character] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = self.story.to_dict()
        data["characters"] = [c.to_dict() for c in self.characters]
        return data


@dataclass(frozen=True)
class PracticeLinkWithStory:
    link: PracticeLink
    story: Optional[Story] = None

    def to_dict(self) -> dict:
        data = self.link.to_dict()
        data["story"] = self.story.to_dict() if self.story else None
        return data
