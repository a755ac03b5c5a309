from __future__ import annotations

from dataclasses import replace

from ...core.exceptions import ValidationError
from .base import AttendanceDraft, StatusPolicy


class ReplacedPolicy(StatusPolicy):
    """Replaced: the member stood in for someone else, so that someone is required."""

    def normalise(self, draft: AttendanceDraft) -> AttendanceDraft:
        if not draft.replaced_member_id:
            raise ValidationError("Replaced member is required when status is replaced")
        if draft.replaced_member_id == draft.member_id:
            raise ValidationError("A member cannot replace themselves")
        return replace(draft, reason=None, reason_visible_to_admins=False)
