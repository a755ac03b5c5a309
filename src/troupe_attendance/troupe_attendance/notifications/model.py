from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import EventType, NotificationType
from ..members.model import Member


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class Notification:
    notification_id: str
    title: str
    content: str
    type: NotificationType
    event_type: Optional[EventType] = None
    event_custom: Optional[str] = None
    created_by_id: Optional[str] = None
    is_active: bool = True
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.notification_id,
            "title": self.title,
            "content": self.content,
            "type": self.type.value,
            "eventType": self.event_type.value if self.event_type else None,
            "eventCustom": self.event_custom,
            "createdById": self.created_by_id,
            "isActive": self.is_active,
            "expiresAt": _iso(self.expires_at),
            "createdAt": _iso(self.created_at),
        }


@dataclass(frozen=True)
class Poll:
    """A question with an ordered option list; responses refer to options by index."""

    poll_id: str
    question: str
    options: tuple[str, ...]
    notification_id: Optional[str] = None
    is_active: bool = True
    created_by_id: Optional[str] = None
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    def option_label(self, index: int) -> Optional[str]:
        if 0 <= index < len(self.options):
            return self.options[index]
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.poll_id,
            "question": self.question,
            "options": list(self.options),
            "notificationId": self.notification_id,
            "isActive": self.is_active,
            "createdById": self.created_by_id,
            "createdAt": _iso(self.created_at),
            "expiresAt": _iso(self.expires_at),
        }


@dataclass(frozen=True)
class PollResponse:
    response_id: str
    poll_id: str
    member_id: str
    selected_option: int
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.response_id,
            "pollId": self.poll_id,
            "memberId": self.member_id,
            "selectedOption": self.selected_option,
            "createdAt": _iso(self.created_at),
        }


@dataclass(frozen=True)
class PollResponseWithMember:
    response: PollResponse
    member: Optional[Member] = None

    def to_dict(self) -> dict:
        data = self.response.to_dict()
        data["member"] = self.member.to_dict() if self.member else None
        return data


@dataclass(frozen=True)
class PollWithResponses:
    poll: Poll
    responses: list[PollResponseWithMember] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = self.poll.to_dict()
        data["responses"] = [r.to_dict() for r in self.responses]
        return data


@dataclass(frozen=True)
class PollTally:
    """Per-option vote counts and half-up rounded percentages."""

    poll: Poll
    total_responses: int
    option_counts: list[int]
    percentages: list[int]

    def to_dict(self) -> dict:
        return {
            "pollId": self.poll.poll_id,
            "question": self.poll.question,
            "options": list(self.poll.options),
            "totalResponses": self.total_responses,
            "optionCounts": list(self.option_counts),
            "percentages": list(self.percentages),
        }
