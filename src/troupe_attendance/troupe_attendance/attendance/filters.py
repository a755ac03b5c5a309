"""Filter Engine for joined attendance collections."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Mapping, Optional, TypeVar

from ..common.datetime_utils import coerce_date
from ..core.constants import ALL_FILTER
from ..core.enums import AttendanceStatus, EventType

logger = logging.getLogger(__name__)

R = TypeVar("R")


def _selector(value: Any) -> Optional[str]:
    """None for 'no constraint': missing, blank or the 'all' sentinel."""
    if value is None:
        return None
    value = str(value).strip()
    if not value or value.lower() == ALL_FILTER:
        return None
    return value


def _date_bound(value: Any, name: str) -> Optional[date]:
    if _selector(value) is None:
        return None
    try:
        return coerce_date(value)
    except ValueError:
        logger.warning("ignoring unparseable %s filter: %r", name, value)
        return None


@dataclass(frozen=True)
class AttendanceFilter:
    """Conjunctive predicate set; a None field places no constraint.

    Both date bounds are inclusive and compare calendar dates only.
    """

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    status: Optional[AttendanceStatus] = None
    story_id: Optional[str] = None
    member_id: Optional[str] = None
    event_type: Optional[EventType] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "AttendanceFilter":
        """Build from the export request shape (dateFrom, statusFilter, ...).

        Malformed values degrade to "no constraint" instead of failing the request.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            logger.warning("ignoring filters that are not an object: %r", data)
            return cls()

        status = None
        raw_status = _selector(data.get("statusFilter"))
        if raw_status:
            try:
                status = AttendanceStatus(raw_status.lower())
            except ValueError:
                logger.warning("ignoring unknown status filter: %r", raw_status)

        event_type = None
        raw_event = _selector(data.get("eventFilter"))
        if raw_event:
            try:
                event_type = EventType(raw_event)
            except ValueError:
                logger.warning("ignoring unknown event filter: %r", raw_event)

        return cls(
            date_from=_date_bound(data.get("dateFrom"), "dateFrom"),
            date_to=_date_bound(data.get("dateTo"), "dateTo"),
            status=status,
            story_id=_selector(data.get("storyFilter")),
            member_id=_selector(data.get("memberFilter")),
            event_type=event_type,
        )

    @property
    def is_empty(self) -> bool:
        return self == AttendanceFilter()

    def matches(self, record) -> bool:
        d = record.date
        if self.date_from and d < self.date_from:
            return False
        if self.date_to and d > self.date_to:
            return False
        if self.status and record.status != self.status:
            return False
        if self.story_id and record.story_id != self.story_id:
            return False
        if self.member_id and record.member_id != self.member_id:
            return False
        if self.event_type and record.event_type != self.event_type:
            return False
        return True

    def apply(self, records: Iterable[R]) -> list[R]:
        """Stable: keeps the input's relative order."""
        return [r for r in records if self.matches(r)]
