from __future__ import annotations

from typing import Any, Optional, Union

from ..attendance.joiner import join_submissions
from ..common.validators import blank_to_none, parse_event_type, require_non_empty
from ..core.exceptions import NotFoundError
from ..members.model import Member
from ..members.repository import MemberRepository
from .model import Submission, SubmissionWithMember
from .repository import SubmissionRepository


class SubmissionService:
    """Free-text reports members send to the admins."""

    def __init__(self, submissions: SubmissionRepository, members: MemberRepository):
        self._submissions = submissions
        self._members = members

    def submit(
        self,
        member_id: str,
        *,
        content: str,
        event_type: Any = None,
        event_custom: Optional[str] = None,
    ) -> Submission:
        if not self._members.get_by_id(member_id):
            raise NotFoundError("Member not found")
        return self._submissions.create(
            member_id=member_id,
            content=require_non_empty(content, "Content"),
            event_type=parse_event_type(event_type),
            event_custom=blank_to_none(event_custom),
        )

    def list_for(self, member: Member) -> list[Union[Submission, SubmissionWithMember]]:
        """Admins see everyone's submissions with the author attached; others only their own."""
        if member.is_admin:
            return join_submissions(list(self._submissions.list_all()), members=self._members.list_all())
        return list(self._submissions.list_for_member(member.member_id))

    def mark_read(self, submission_id: str) -> None:
        if not self._submissions.mark_read(submission_id):
            raise NotFoundError("Report not found")
