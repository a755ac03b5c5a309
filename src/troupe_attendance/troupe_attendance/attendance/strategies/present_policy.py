from __future__ import annotations

from dataclasses import replace

from .base import AttendanceDraft, StatusPolicy


class PresentPolicy(StatusPolicy):
    """Present: no absence reason, nobody replaced."""

    def normalise(self, draft: AttendanceDraft) -> AttendanceDraft:
        return replace(draft, reason=None, reason_visible_to_admins=False, replaced_member_id=None)
