from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, Optional, Sequence

from ..analytics.aggregator import tally_poll
from ..attendance.joiner import join_poll_responses
from ..common.validators import blank_to_none, parse_event_type, require_non_empty
from ..core.constants import MIN_POLL_OPTIONS
from ..core.enums import NotificationType
from ..core.exceptions import NotFoundError, ValidationError
from ..members.repository import MemberRepository
from .model import Notification, Poll, PollResponse, PollTally, PollWithResponses
from .repository import NotificationRepository, PollRepository

logger = logging.getLogger(__name__)


def clean_options(options: Optional[Iterable[Any]]) -> list[str]:
    """Drop blank options, keep order."""
    return [str(o).strip() for o in (options or []) if o is not None and str(o).strip()]


def _parse_datetime(value: Any, field_name: str) -> Optional[datetime]:
    v = blank_to_none(value)
    if not v:
        return None
    try:
        return datetime.fromisoformat(v.replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO date-time") from None


def _option_index(value: Any) -> int:
    """Whole-number option index: an int (not a bool) or a string of digits."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        return int(value.strip())
    raise ValidationError("Selected option must be a whole number")


class PollService:
    def __init__(self, polls: PollRepository, members: MemberRepository):
        self._polls = polls
        self._members = members

    def get_poll(self, poll_id: str) -> Poll:
        poll = self._polls.get_by_id(poll_id)
        if not poll:
            raise NotFoundError("Poll not found")
        return poll

    def _with_responses(self, polls: Sequence[Poll]) -> list[PollWithResponses]:
        members = list(self._members.list_all())
        return [
            PollWithResponses(
                poll=p,
                responses=join_poll_responses(list(self._polls.list_responses(p.poll_id)), members=members),
            )
            for p in polls
        ]

    def active_polls_with_responses(self) -> list[PollWithResponses]:
        return self._with_responses([p for p in self._polls.list_all() if p.is_active])

    def all_polls_with_responses(self) -> list[PollWithResponses]:
        return self._with_responses(list(self._polls.list_all()))

    def poll_for_notification(self, notification_id: str) -> Optional[Poll]:
        return self._polls.get_by_notification(notification_id)

    def create_poll(
        self,
        *,
        question: str,
        options: Optional[Iterable[Any]],
        notification_id: Optional[str] = None,
        created_by_id: Optional[str] = None,
        expires_at: Any = None,
    ) -> Poll:
        question = require_non_empty(question, "Question")
        cleaned = clean_options(options)
        if len(cleaned) < MIN_POLL_OPTIONS:
            raise ValidationError(f"A poll needs at least {MIN_POLL_OPTIONS} options")

        poll = self._polls.create(
            question=question,
            options=cleaned,
            notification_id=blank_to_none(notification_id),
            created_by_id=created_by_id,
            expires_at=_parse_datetime(expires_at, "Expires at"),
        )
        logger.info("poll created: %s with %d options", poll.poll_id, len(poll.options))
        return poll

    def respond(self, poll_id: str, *, member_id: str, selected_option: Any) -> PollResponse:
        poll = self.get_poll(poll_id)
        if not poll.is_active:
            raise ValidationError("Poll is closed")
        index = _option_index(selected_option)
        if poll.option_label(index) is None:
            raise ValidationError("Selected option is out of range")

        return self._polls.save_response(poll_id=poll.poll_id, member_id=member_id, selected_option=index)

    def responses(self, poll_id: str) -> list[PollResponse]:
        return list(self._polls.list_responses(poll_id))

    def results(self, poll_id: str) -> PollTally:
        poll = self.get_poll(poll_id)
        return tally_poll(poll, self.responses(poll.poll_id))


class NotificationService:
    def __init__(self, notifications: NotificationRepository, polls: PollService):
        self._notifications = notifications
        self._polls = polls

    def list_all(self) -> list[Notification]:
        return list(self._notifications.list_all())

    def list_active(self) -> list[Notification]:
        return list(self._notifications.list_active())

    def create_notification(
        self,
        *,
        title: str,
        content: str,
        type: Any,
        event_type: Any = None,
        event_custom: Optional[str] = None,
        expires_at: Any = None,
        poll_options: Optional[Iterable[Any]] = None,
        created_by_id: Optional[str] = None,
    ) -> Notification:
        title = require_non_empty(title, "Title")
        content = require_non_empty(content, "Content")
        try:
            kind = NotificationType(require_non_empty(type, "Type").lower())
        except ValueError:
            raise ValidationError(f"Unknown notification type: {type}") from None

        notification = self._notifications.create(
            title=title,
            content=content,
            type=kind,
            event_type=parse_event_type(event_type),
            event_custom=blank_to_none(event_custom),
            created_by_id=created_by_id,
            expires_at=_parse_datetime(expires_at, "Expires at"),
        )
        logger.info("notification created: %s (%s)", notification.notification_id, kind.value)

        # Poll notifications carry their own poll; the title is the question.
        if kind == NotificationType.POLL and len(clean_options(poll_options)) >= MIN_POLL_OPTIONS:
            self._polls.create_poll(
                question=title,
                options=poll_options,
                notification_id=notification.notification_id,
                created_by_id=created_by_id,
            )
        return notification

    def deactivate(self, notification_id: str) -> None:
        if not self._notifications.deactivate(notification_id):
            raise NotFoundError("Notification not found")
        logger.info("notification deactivated: %s", notification_id)

    def count_active(self) -> int:
        return self._notifications.count_active()
