from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import AttendanceStatus, EventType
from ..members.model import Member
from ..stories.model import Role, Story


def _hhmm(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M") if value else None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one member's attendance on one date.

    `reason` only carries meaning for ABSENT, `replaced_member_id` (whom this
    member stood in for) only for REPLACED. AttendanceService enforces this on write.
    """

    attendance_id: str
    member_id: str
    date: date
    status: AttendanceStatus
    story_id: Optional[str] = None
    role_id: Optional[str] = None
    character_ids: tuple[str, ...] = ()
    time_in: Optional[time] = None
    time_out: Optional[time] = None
    reason: Optional[str] = None
    reason_visible_to_admins: bool = False
    replaced_member_id: Optional[str] = None
    event_type: Optional[EventType] = None
    event_custom: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "memberId": self.member_id,
            "date": self.date.isoformat(),
            "status": self.status.value,
            "storyId": self.story_id,
            "roleId": self.role_id,
            "characterIds": list(self.character_ids),
            "timeIn": _hhmm(self.time_in),
            "timeOut": _hhmm(self.time_out),
            "reason": self.reason,
            "reasonVisibleToAdmins": self.reason_visible_to_admins,
            "replacedMemberId": self.replaced_member_id,
            "eventType": self.event_type.value if self.event_type else None,
            "eventCustom": self.event_custom,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class AttendanceWithRelations:
    """Read-model: a record plus whichever related entities could be resolved.

    Every relation is optional; a dangling foreign key simply leaves it None.
    """

    record: AttendanceRecord
    member: Optional[Member] = None
    story: Optional[Story] = None
    role: Optional[Role] = None
    replaced_member: Optional[Member] = None

    @property
    def date(self) -> date:
        return self.record.date

    @property
    def status(self) -> AttendanceStatus:
        return self.record.status

    @property
    def member_id(self) -> str:
        return self.record.member_id

    @property
    def story_id(self) -> Optional[str]:
        return self.record.story_id

    @property
    def event_type(self) -> Optional[EventType]:
        return self.record.event_type

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data["member"] = self.member.to_dict() if self.member else None
        data["story"] = self.story.to_dict() if self.story else None
        data["role"] = self.role.to_dict() if self.role else None
        data["replacedMember"] = self.replaced_member.to_dict() if self.replaced_member else None
        return data
