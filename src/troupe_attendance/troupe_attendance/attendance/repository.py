from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, EventType
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_member(self, member_id: str) -> Sequence[AttendanceRecord]:
        """Newest date first."""
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        """Newest date first."""
        raise NotImplementedError

    def list_since(self, start: date) -> Sequence[AttendanceRecord]:
        """Records dated on or after `start`."""
        raise NotImplementedError

    def create(
        self,
        *,
        member_id: str,
        date: date,
        status: AttendanceStatus,
        story_id: Optional[str],
        role_id: Optional[str],
        character_ids: Sequence[str],
        time_in: Optional[time],
        time_out: Optional[time],
        reason: Optional[str],
        reason_visible_to_admins: bool,
        replaced_member_id: Optional[str],
        event_type: Optional[EventType],
        event_custom: Optional[str],
    ) -> AttendanceRecord:
        raise NotImplementedError
