from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..attendance.joiner import join_practice_links, stories_with_characters
from ..common.validators import blank_to_none, parse_bool, parse_event_type, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Character, PracticeLink, PracticeLinkWithStory, Role, Story, StoryWithCharacters
from .repository import PracticeLinkRepository, RoleRepository, StoryRepository

logger = logging.getLogger(__name__)


class StoryService:
    """Stories, their characters, production roles and practice links."""

    def __init__(self, stories: StoryRepository, roles: RoleRepository, practice_links: PracticeLinkRepository):
        self._stories = stories
        self._roles = roles
        self._links = practice_links

    def list_stories(self) -> list[Story]:
        return list(self._stories.list_active())

    def list_with_characters(self) -> list[StoryWithCharacters]:
        return stories_with_characters(list(self._stories.list_active()), self._stories.list_characters())

    def create_story(
        self,
        *,
        name: str,
        description: Optional[str] = None,
        event_type: Any = None,
        event_custom: Optional[str] = None,
    ) -> Story:
        name = require_non_empty(name, "Name")
        if self._stories.get_by_name(name):
            raise ValidationError(f"Story {name} already exists")
        story = self._stories.create(
            name=name,
            description=blank_to_none(description),
            event_type=parse_event_type(event_type),
            event_custom=blank_to_none(event_custom),
        )
        logger.info("story created: %s", story.name)
        return story

    def update_story(self, story_id: str, payload: Mapping[str, Any]) -> Story:
        changes: dict[str, Any] = {}
        if "name" in payload:
            changes["name"] = require_non_empty(payload["name"], "Name")
        if "description" in payload:
            changes["description"] = blank_to_none(payload["description"])
        if "isActive" in payload:
            changes["is_active"] = parse_bool(payload["isActive"])
        if "eventType" in payload:
            changes["event_type"] = parse_event_type(payload["eventType"])
        if "eventCustom" in payload:
            changes["event_custom"] = blank_to_none(payload["eventCustom"])

        story = self._stories.update(story_id, changes)
        if not story:
            raise NotFoundError("Story not found")
        return story

    def delete_story(self, story_id: str) -> None:
        # Soft delete: attendance history keeps resolving the story.
        if not self._stories.set_active(story_id, is_active=False):
            raise NotFoundError("Story not found")
        logger.info("story deactivated: %s", story_id)

    def list_characters(self, story_id: str) -> list[Character]:
        return list(self._stories.list_characters(story_id))

    def add_character(self, story_id: str, name: str) -> Character:
        if not self._stories.get_by_id(story_id):
            raise NotFoundError("Story not found")
        return self._stories.create_character(story_id=story_id, name=require_non_empty(name, "Name"))

    def delete_character(self, character_id: str) -> None:
        if not self._stories.delete_character(character_id):
            raise NotFoundError("Character not found")

    def list_roles(self) -> list[Role]:
        return list(self._roles.list_active())

    def list_practice_links(self) -> list[PracticeLinkWithStory]:
        return join_practice_links(list(self._links.list_all()), stories=self._stories.list_all())

    def create_practice_link(
        self, *, story_id: str, title: str, url: str, created_by_id: Optional[str] = None
    ) -> PracticeLink:
        story_id = require_non_empty(story_id, "Story")
        if not self._stories.get_by_id(story_id):
            raise NotFoundError("Story not found")
        return self._links.create(
            story_id=story_id,
            title=require_non_empty(title, "Title"),
            url=require_non_empty(url, "URL"),
            created_by_id=created_by_id,
        )

    def update_practice_link(self, link_id: str, payload: Mapping[str, Any]) -> PracticeLink:
        field_map = {"storyId": "story_id", "title": "title", "url": "url"}
        changes = {
            column: require_non_empty(payload[key], key) for key, column in field_map.items() if key in payload
        }
        link = self._links.update(link_id, changes)
        if not link:
            raise NotFoundError("Practice link not found")
        return link

    def delete_practice_link(self, link_id: str) -> None:
        if not self._links.delete(link_id):
            raise NotFoundError("Practice link not found")
