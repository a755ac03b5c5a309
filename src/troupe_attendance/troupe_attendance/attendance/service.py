from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Any, Mapping, Optional

from ..common.datetime_utils import coerce_date
from ..common.validators import blank_to_none, parse_bool, parse_event_type, require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..members.repository import MemberRepository
from ..stories.repository import RoleRepository, StoryRepository
from .factory import StatusPolicyFactory
from .joiner import join_attendance
from .model import AttendanceRecord, AttendanceWithRelations
from .repository import AttendanceRepository
from .strategies.base import AttendanceDraft

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        members: MemberRepository,
        stories: StoryRepository,
        roles: RoleRepository,
        policy_factory: Optional[StatusPolicyFactory] = None,
    ):
        self._attendance = attendance
        self._members = members
        self._stories = stories
        self._roles = roles
        self._policies = policy_factory or StatusPolicyFactory()

    @staticmethod
    def _parse_time(value: Any) -> Optional[time]:
        v = blank_to_none(value)
        if not v:
            return None
        for fmt in ("%H:%M", "%H:%M:%S"):
            try:
                return datetime.strptime(v, fmt).time()
            except ValueError:
                continue
        raise ValidationError("Invalid time (HH:MM)")

    @staticmethod
    def _parse_status(value: Any) -> AttendanceStatus:
        raw = require_non_empty(value, "Status").lower()
        try:
            return AttendanceStatus(raw)
        except ValueError:
            raise ValidationError(f"Invalid status: {value}") from None

    def _build_draft(self, member_id: str, payload: Mapping[str, Any]) -> AttendanceDraft:
        try:
            day = coerce_date(require_non_empty(payload.get("date"), "Date"))
        except ValueError:
            raise ValidationError("Date must be a YYYY-MM-DD date") from None

        character_ids = payload.get("characterIds") or []
        if isinstance(character_ids, str):
            character_ids = [character_ids]

        return AttendanceDraft(
            member_id=member_id,
            date=day,
            status=self._parse_status(payload.get("status")),
            story_id=blank_to_none(payload.get("storyId")),
            role_id=blank_to_none(payload.get("roleId")),
            character_ids=tuple(str(c) for c in character_ids if str(c).strip()),
            time_in=self._parse_time(payload.get("timeIn")),
            time_out=self._parse_time(payload.get("timeOut")),
            reason=blank_to_none(payload.get("reason")),
            reason_visible_to_admins=parse_bool(payload.get("reasonVisibleToAdmins")),
            replaced_member_id=blank_to_none(payload.get("replacedMemberId")),
            event_type=parse_event_type(payload.get("eventType")),
            event_custom=blank_to_none(payload.get("eventCustom")),
        )

    def _save(self, draft: AttendanceDraft) -> AttendanceRecord:
        draft = self._policies.for_status(draft.status).normalise(draft)
        if draft.replaced_member_id and not self._members.get_by_id(draft.replaced_member_id):
            raise NotFoundError("Replaced member not found")

        record = self._attendance.create(
            member_id=draft.member_id,
            date=draft.date,
            status=draft.status,
            story_id=draft.story_id,
            role_id=draft.role_id,
            character_ids=draft.character_ids,
            time_in=draft.time_in,
            time_out=draft.time_out,
            reason=draft.reason,
            reason_visible_to_admins=draft.reason_visible_to_admins,
            replaced_member_id=draft.replaced_member_id,
            event_type=draft.event_type,
            event_custom=draft.event_custom,
        )
        logger.info(
            "attendance recorded: member=%s date=%s status=%s", record.member_id, record.date, record.status.value
        )
        return record

    def record_for_member(self, member_id: str, payload: Mapping[str, Any]) -> AttendanceRecord:
        """Member self-service; the member id always comes from the session."""
        if not self._members.get_by_id(member_id):
            raise NotFoundError("Member not found")
        return self._save(self._build_draft(member_id, payload))

    def record_as_admin(self, payload: Mapping[str, Any]) -> AttendanceRecord:
        member_id = require_non_empty(payload.get("memberId"), "Member")
        if not self._members.get_by_id(member_id):
            raise NotFoundError("Member not found")
        return self._save(self._build_draft(member_id, payload))

    def history_for_member(self, member_id: str) -> list[AttendanceRecord]:
        return list(self._attendance.list_for_member(member_id))

    def list_with_details(self) -> list[AttendanceWithRelations]:
        return join_attendance(
            list(self._attendance.list_all()),
            members=self._members.list_all(),
            stories=self._stories.list_all(),
            roles=self._roles.list_all(),
        )
