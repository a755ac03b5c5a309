from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ...core.enums import AttendanceStatus, EventType


@dataclass(frozen=True)
class AttendanceDraft:
    """Cleaned attendance input, before it is written."""

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


class StatusPolicy(ABC):
    """Strategy Pattern: what each attendance status allows on a record."""

    @abstractmethod
    def normalise(self, draft: AttendanceDraft) -> AttendanceDraft:
        raise NotImplementedError
