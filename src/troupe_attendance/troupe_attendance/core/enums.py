from __future__ import annotations

from enum import Enum

from .exceptions import UnsupportedFormatError


class AttendanceStatus(str, Enum):
    """Attendance outcome stored per member per date."""

    PRESENT = "present"
    ABSENT = "absent"
    REPLACED = "replaced"

    @property
    def counts_as_attended(self) -> bool:
        return self in (AttendanceStatus.PRESENT, AttendanceStatus.REPLACED)


class EventType(str, Enum):
    JJ = "JJ"
    JANMASHTAMI = "Janmashtami"
    HOLI = "Holi"
    OTHER = "Other"


class NotificationType(str, Enum):
    ANNOUNCEMENT = "announcement"
    PLANNER = "planner"
    MEETING = "meeting"
    POLL = "poll"


class ExportFormat(str, Enum):
    """Encodings accepted by the export endpoints."""

    EXCEL = "excel"
    PDF = "pdf"
    IMAGE = "image"

    @classmethod
    def parse(cls, value) -> "ExportFormat":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            raise UnsupportedFormatError(f"Unsupported export format: {value!r}") from None
