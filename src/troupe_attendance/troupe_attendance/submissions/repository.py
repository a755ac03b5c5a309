from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EventType
from .model import Submission


class SubmissionRepository(Protocol):
    def list_all(self) -> Sequence[Submission]:
        """Newest first."""
        raise NotImplementedError

    def list_for_member(self, member_id: str) -> Sequence[Submission]:
        raise NotImplementedError

    def create(
        self,
        *,
        member_id: str,
        content: str,
        event_type: Optional[EventType],
        event_custom: Optional[str],
    ) -> Submission:
        raise NotImplementedError

    def mark_read(self, submission_id: str) -> bool:
        raise NotImplementedError
