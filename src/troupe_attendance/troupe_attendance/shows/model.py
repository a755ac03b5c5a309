from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import EventType
from ..members.model import Member
from ..stories.model import Story


@dataclass(frozen=True)
class Show:
    """A performance day for one story (possibly several back-to-back shows)."""

    show_id: str
    date: date
    story_id: str
    number_of_shows: int = 1
    audience_per_show: tuple[int, ...] = ()
    total_audience: Optional[int] = None
    is_school: bool = False
    school_name: Optional[str] = None
    school_place: Optional[str] = None
    number_of_students: Optional[int] = None
    as_planned: bool = True
    cancelled_reason: Optional[str] = None
    not_as_planned_reason: Optional[str] = None
    event_type: Optional[EventType] = None
    event_custom: Optional[str] = None
    created_by_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.show_id,
            "date": self.date.isoformat(),
            "storyId": self.story_id,
            "numberOfShows": self.number_of_shows,
            "audiencePerShow": list(self.audience_per_show),
            "totalAudience": self.total_audience,
            "isSchool": self.is_school,
            "schoolName": self.school_name,
            "schoolPlace": self.school_place,
            "numberOfStudents": self.number_of_students,
            "asPlanned": self.as_planned,
            "cancelledReason": self.cancelled_reason,
            "notAsPlannedReason": self.not_as_planned_reason,
            "eventType": self.event_type.value if self.event_type else None,
            "eventCustom": self.event_custom,
            "createdById": self.created_by_id,
        }


@dataclass(frozen=True)
class ShowWithDetails:
    show: Show
    story: Optional[Story] = None
    created_by: Optional[Member] = None

    def to_dict(self) -> dict:
        data = self.show.to_dict()
        data["story"] = self.story.to_dict() if self.story else None
        data["createdBy"] = self.created_by.to_dict() if self.created_by else None
        return data
