from __future__ import annotations

from dataclasses import replace

from .base import AttendanceDraft, StatusPolicy


class AbsentPolicy(StatusPolicy):
    """Absent: keeps the reason, never a replaced member."""

    def normalise(self, draft: AttendanceDraft) -> AttendanceDraft:
        return replace(
            draft,
            replaced_member_id=None,
            reason_visible_to_admins=draft.reason_visible_to_admins and bool(draft.reason),
        )
