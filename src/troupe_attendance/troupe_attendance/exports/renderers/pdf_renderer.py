from __future__ import annotations

from typing import BinaryIO

from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from ...core.constants import EXPORT_ROW_LIMIT, PDF_ROWS_PER_PAGE
from ..model import AttendanceReport, PollReport
from .base import UNKNOWN, ReportRenderer, fmt_timestamp

LEFT = 50
LINE_HEIGHT = 16
POLL_LINE_HEIGHT = 20
POLL_PAGE_BOTTOM = 700


class _Page:
    """Top-down text cursor over a reportlab canvas (which measures from the bottom)."""

    def __init__(self, stream: BinaryIO, title: str):
        self.canvas = canvas.Canvas(stream, pagesize=letter)
        self.canvas.setTitle(title)
        self.height = letter[1]

    def text(self, y: float, value: str, *, size: int = 10, bold: bool = False) -> None:
        self.canvas.setFont("Helvetica-Bold" if bold else "Helvetica", size)
        self.canvas.drawString(LEFT, self.height - y, value)

    def new_page(self) -> None:
        self.canvas.showPage()

    def save(self) -> None:
        self.canvas.save()


class PdfRenderer(ReportRenderer):
    """Paginated text document, first 100 rows only."""

    mimetype = "application/pdf"
    extension = "pdf"

    def render_attendance(self, report: AttendanceReport, stream: BinaryIO) -> None:
        page = _Page(stream, report.title)
        page.text(50, report.title, size=16, bold=True)
        page.text(72, f"Generated: {fmt_timestamp(report.generated_at)}")

        y = 104
        for idx, r in enumerate(report.rows[:EXPORT_ROW_LIMIT]):
            if idx and idx % PDF_ROWS_PER_PAGE == 0:
                page.new_page()
                y = 50
            line = f"{r.date} - {r.member or UNKNOWN} - {r.story or UNKNOWN} - {r.status.value.upper()}"
            page.text(y, line)
            y += LINE_HEIGHT
        page.save()

    def render_poll(self, report: PollReport, stream: BinaryIO) -> None:
        page = _Page(stream, "Poll Results")
        page.text(50, report.poll.question, size=16, bold=True)
        page.text(100, f"Total Responses: {report.tally.total_responses}")
        page.text(114, f"Generated: {fmt_timestamp(report.generated_at)}")

        y = 150
        for r in report.rows[:EXPORT_ROW_LIMIT]:
            if y > POLL_PAGE_BOTTOM:
                page.new_page()
                y = 50
            page.text(y, f"{r.member or UNKNOWN}: {r.option or UNKNOWN}")
            y += POLL_LINE_HEIGHT
        page.save()
