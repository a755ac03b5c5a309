from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from ..notifications.model import Poll, PollTally


@dataclass(frozen=True)
class ExportFile:
    content: bytes
    mimetype: str
    filename: str


@dataclass(frozen=True)
class AttendanceRow:
    """One display row; None where a relation could not be resolved."""

    date: str
    status: AttendanceStatus
    member: Optional[str] = None
    story: Optional[str] = None
    role: Optional[str] = None
    replaced_by: Optional[str] = None


@dataclass(frozen=True)
class AttendanceReport:
    generated_at: datetime
    rows: list[AttendanceRow] = field(default_factory=list)
    status_counts: dict[AttendanceStatus, int] = field(default_factory=dict)
    title: str = "Attendance Report"

    @property
    def total(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class PollRow:
    member: Optional[str]
    option: Optional[str]
    responded_at: Optional[datetime] = None


@dataclass(frozen=True)
class PollReport:
    poll: Poll
    tally: PollTally
    generated_at: datetime
    rows: list[PollRow] = field(default_factory=list)
