from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import BinaryIO, Optional

from ..model import AttendanceReport, PollReport

UNKNOWN = "Unknown"


def truncate(text: str, max_len: int) -> str:
    """Cut to `max_len` characters, marking the cut with '..'."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 2] + ".."


def fmt_timestamp(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else ""


class ReportRenderer(ABC):
    """Strategy Pattern: one encoding of attendance and poll reports.

    Renderers write into a binary stream and return nothing.
    """

    mimetype: str
    extension: str

    @abstractmethod
    def render_attendance(self, report: AttendanceReport, stream: BinaryIO) -> None:
        raise NotImplementedError

    @abstractmethod
    def render_poll(self, report: PollReport, stream: BinaryIO) -> None:
        raise NotImplementedError
