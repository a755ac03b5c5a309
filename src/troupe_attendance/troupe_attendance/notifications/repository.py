from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import EventType, NotificationType
from .model import Notification, Poll, PollResponse


class NotificationRepository(Protocol):
    def get_by_id(self, notification_id: str) -> Optional[Notification]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Notification]:
        """Newest first."""
        raise NotImplementedError

    def list_active(self) -> Sequence[Notification]:
        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError

    def create(
        self,
        *,
        title: str,
        content: str,
        type: NotificationType,
        event_type: Optional[EventType],
        event_custom: Optional[str],
        created_by_id: Optional[str],
        expires_at: Optional[datetime],
    ) -> Notification:
        raise NotImplementedError

    def deactivate(self, notification_id: str) -> bool:
        raise NotImplementedError


class PollRepository(Protocol):
    def get_by_id(self, poll_id: str) -> Optional[Poll]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Poll]:
        """Newest first."""
        raise NotImplementedError

    def get_by_notification(self, notification_id: str) -> Optional[Poll]:
        raise NotImplementedError

    def create(
        self,
        *,
        question: str,
        options: Sequence[str],
        notification_id: Optional[str],
        created_by_id: Optional[str],
        expires_at: Optional[datetime] = None,
    ) -> Poll:
        raise NotImplementedError

    def list_responses(self, poll_id: str) -> Sequence[PollResponse]:
        """Newest first."""
        raise NotImplementedError

    def save_response(self, *, poll_id: str, member_id: str, selected_option: int) -> PollResponse:
        """Store the member's answer, replacing an earlier one for the same poll."""
        raise NotImplementedError
