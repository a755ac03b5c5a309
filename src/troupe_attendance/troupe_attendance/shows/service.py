from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..attendance.joiner import join_shows
from ..common.datetime_utils import coerce_date
from ..common.validators import blank_to_none, parse_bool, parse_event_type, require_non_empty
from ..core.constants import RECENT_SHOWS_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from ..members.repository import MemberRepository
from ..stories.repository import StoryRepository
from .model import Show, ShowWithDetails
from .repository import ShowRepository

logger = logging.getLogger(__name__)

# camelCase request key -> Show attribute
_FIELD_MAP = {
    "date": "date",
    "storyId": "story_id",
    "numberOfShows": "number_of_shows",
    "audiencePerShow": "audience_per_show",
    "totalAudience": "total_audience",
    "isSchool": "is_school",
    "schoolName": "school_name",
    "schoolPlace": "school_place",
    "numberOfStudents": "number_of_students",
    "asPlanned": "as_planned",
    "cancelledReason": "cancelled_reason",
    "notAsPlannedReason": "not_as_planned_reason",
    "eventType": "event_type",
    "eventCustom": "event_custom",
}


def _optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return number


class ShowService:
    def __init__(self, shows: ShowRepository, stories: StoryRepository, members: MemberRepository):
        self._shows = shows
        self._stories = stories
        self._members = members

    def _clean(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, column in _FIELD_MAP.items():
            if key not in payload:
                continue
            value = payload[key]
            if column == "date":
                try:
                    value = coerce_date(require_non_empty(value, "Date"))
                except ValueError:
                    raise ValidationError("Date must be a YYYY-MM-DD date") from None
            elif column == "story_id":
                value = require_non_empty(value, "Story")
            elif column == "number_of_shows":
                value = _optional_int(value, "Number of shows") or 1
            elif column == "audience_per_show":
                value = tuple(_optional_int(v, "Audience") or 0 for v in (value or []))
            elif column in ("total_audience", "number_of_students"):
                value = _optional_int(value, key)
            elif column in ("is_school", "as_planned"):
                value = parse_bool(value)
            elif column == "event_type":
                value = parse_event_type(value)
            else:
                value = blank_to_none(value)
            out[column] = value
        return out

    def list_with_details(self) -> list[ShowWithDetails]:
        return join_shows(
            list(self._shows.list_all()), stories=self._stories.list_all(), members=self._members.list_all()
        )

    def recent(self, limit: int = RECENT_SHOWS_LIMIT) -> list[ShowWithDetails]:
        return self.list_with_details()[:limit]

    def create_show(self, payload: Mapping[str, Any], *, created_by_id: Optional[str] = None) -> Show:
        fields = self._clean(payload)
        if "date" not in fields:
            raise ValidationError("Date is required")
        if "story_id" not in fields:
            raise ValidationError("Story is required")
        if not self._stories.get_by_id(fields["story_id"]):
            raise NotFoundError("Story not found")

        if fields.get("total_audience") is None and fields.get("audience_per_show"):
            fields["total_audience"] = sum(fields["audience_per_show"])
        fields["created_by_id"] = created_by_id

        show = self._shows.create(fields)
        logger.info("show created: %s on %s", show.show_id, show.date)
        return show

    def update_show(self, show_id: str, payload: Mapping[str, Any]) -> Show:
        changes = self._clean(payload)
        if "story_id" in changes and not self._stories.get_by_id(changes["story_id"]):
            raise NotFoundError("Story not found")
        show = self._shows.update(show_id, changes)
        if not show:
            raise NotFoundError("Show not found")
        return show

    def delete_show(self, show_id: str) -> None:
        if not self._shows.delete(show_id):
            raise NotFoundError("Show not found")
        logger.info("show deleted: %s", show_id)
