from __future__ import annotations

import logging
from functools import lru_cache
from typing import BinaryIO

from PIL import Image, ImageDraw, ImageFont

from ...core.constants import EXPORT_ROW_LIMIT, IMAGE_BAR_MAX_WIDTH, IMAGE_HEIGHT, IMAGE_WIDTH
from ...core.enums import AttendanceStatus
from ..model import AttendanceReport, PollReport
from .base import UNKNOWN, ReportRenderer, fmt_timestamp, truncate

logger = logging.getLogger(__name__)

LEFT = 50
BORDER = (30, 30, IMAGE_WIDTH - 30, IMAGE_HEIGHT - 30)
TABLE_TOP = 280
TABLE_BOTTOM = 1500
ROW_HEIGHT = 25
BAR_HEIGHT = 15
OPTION_STEP = 35
FOOTER_Y = 1560

# (header, x offset, max characters)
COLUMNS = [
    ("Date", 50, 15),
    ("Member", 200, 20),
    ("Story", 450, 25),
    ("Role", 800, 12),
    ("Status", 950, 10),
    ("Replaced By", 1050, 15),
]

_FONT_FILES = {
    False: ("DejaVuSans.ttf", "Arial.ttf", "arial.ttf"),
    True: ("DejaVuSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf"),
}


@lru_cache(maxsize=None)
def _font(size: int, bold: bool = False):
    for name in _FONT_FILES[bold]:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


class _Canvas:
    """Baseline-positioned text drawing, like an HTML canvas."""

    def __init__(self):
        self.image = Image.new("RGB", (IMAGE_WIDTH, IMAGE_HEIGHT), "#ffffff")
        self.draw = ImageDraw.Draw(self.image)
        self.draw.rectangle(BORDER, outline="#cccccc", width=2)

    def text(self, x: int, baseline: int, value: str, *, size: int, bold: bool = False, fill: str = "#000000") -> None:
        self.draw.text((x, baseline - size), value, font=_font(size, bold), fill=fill)

    def footer(self, value: str) -> None:
        self.text(LEFT, FOOTER_Y, value, size=11, fill="#999999")

    def save(self, stream: BinaryIO) -> None:
        self.image.save(stream, format="JPEG", quality=95)


class ImageRenderer(ReportRenderer):
    """Fixed 1200x1600 JPEG; rows that do not fit the table area are left out."""

    mimetype = "image/jpeg"
    extension = "jpg"

    def render_attendance(self, report: AttendanceReport, stream: BinaryIO) -> None:
        c = _Canvas()
        c.text(LEFT, 80, report.title, size=32, bold=True)
        c.text(LEFT, 110, f"Generated: {fmt_timestamp(report.generated_at)}", size=14, fill="#666666")
        c.text(LEFT, 160, f"Total Records: {report.total}", size=16, bold=True)

        counts = report.status_counts
        c.text(
            LEFT,
            190,
            f"Present: {counts.get(AttendanceStatus.PRESENT, 0)} | "
            f"Absent: {counts.get(AttendanceStatus.ABSENT, 0)} | "
            f"Replaced: {counts.get(AttendanceStatus.REPLACED, 0)}",
            size=14,
        )

        for header, x, _ in COLUMNS:
            c.text(x, 240, header, size=13, bold=True, fill="#333333")
        c.draw.line([(LEFT, 255), (IMAGE_WIDTH - 50, 255)], fill="#cccccc", width=1)

        y = TABLE_TOP
        drawn = 0
        for r in report.rows[:EXPORT_ROW_LIMIT]:
            if y > TABLE_BOTTOM:
                break
            values = [r.date, r.member or UNKNOWN, r.story or "-", r.role or "-", r.status.value, r.replaced_by or "-"]
            for (_, x, max_len), value in zip(COLUMNS, values):
                c.text(x, y, truncate(value, max_len), size=12)
            y += ROW_HEIGHT
            drawn += 1

        if drawn < report.total:
            logger.info("attendance image shows %d of %d rows", drawn, report.total)
        c.footer("GNC Puppet - Attendance Management System")
        c.save(stream)

    def render_poll(self, report: PollReport, stream: BinaryIO) -> None:
        c = _Canvas()
        tally = report.tally
        c.text(LEFT, 80, "Poll Results", size=32, bold=True)
        c.text(LEFT, 120, report.poll.question, size=18)
        c.text(
            LEFT,
            160,
            f"Total Responses: {tally.total_responses} | Generated: {fmt_timestamp(report.generated_at)}",
            size=14,
            fill="#666666",
        )

        y = 220
        for option, count, pct in zip(report.poll.options, tally.option_counts, tally.percentages):
            if y > TABLE_BOTTOM:
                break
            c.text(LEFT, y, f"{option}: {count} votes ({pct}%)", size=14, bold=True, fill="#333333")
            bar_width = round(pct / 100 * IMAGE_BAR_MAX_WIDTH)
            if bar_width > 0:
                c.draw.rectangle((LEFT, y + 10, LEFT + bar_width, y + 10 + BAR_HEIGHT), fill="#4CAF50")
            c.draw.rectangle((LEFT, y + 10, LEFT + IMAGE_BAR_MAX_WIDTH, y + 10 + BAR_HEIGHT), outline="#cccccc")
            y += OPTION_STEP

        c.footer("GNC Puppet - Poll Management System")
        c.save(stream)
