from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EventType
from ..members.model import Member


@dataclass(frozen=True)
class Submission:
    """Free-text report a member sends to the admins."""

    submission_id: str
    member_id: str
    content: str
    event_type: Optional[EventType] = None
    event_custom: Optional[str] = None
    is_read: bool = False
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.submission_id,
            "memberId": self.member_id,
            "content": self.content,
            "eventType": self.event_type.value if self.event_type else None,
            "eventCustom": self.event_custom,
            "isRead": self.is_read,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class SubmissionWithMember:
    submission: Submission
    member: Optional[Member] = None

    def to_dict(self) -> dict:
        data = self.submission.to_dict()
        data["member"] = self.member.to_dict() if self.member else None
        return data
