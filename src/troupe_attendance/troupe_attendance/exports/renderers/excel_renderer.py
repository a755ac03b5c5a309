from __future__ import annotations

from typing import BinaryIO

import pandas as pd

from ..model import AttendanceReport, PollReport
from .base import UNKNOWN, ReportRenderer, fmt_timestamp

ATTENDANCE_COLUMNS = ["Date", "Member", "Story", "Role", "Status", "Replaced By"]
POLL_COLUMNS = ["Member Name", "Selected Option", "Response Time"]


def write_frames(stream: BinaryIO, sheets: dict[str, pd.DataFrame]) -> None:
    with pd.ExcelWriter(stream, engine="openpyxl") as writer:
        for name, frame in sheets.items():
            frame.to_excel(writer, index=False, sheet_name=name)


class ExcelRenderer(ReportRenderer):
    """Spreadsheet: every row, no cap."""

    mimetype = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    extension = "xlsx"

    def render_attendance(self, report: AttendanceReport, stream: BinaryIO) -> None:
        data = [
            {
                "Date": r.date,
                "Member": r.member or "",
                "Story": r.story or "",
                "Role": r.role or "",
                "Status": r.status.value,
                "Replaced By": r.replaced_by or "",
            }
            for r in report.rows
        ]
        write_frames(stream, {"Attendance": pd.DataFrame(data, columns=ATTENDANCE_COLUMNS)})

    def render_poll(self, report: PollReport, stream: BinaryIO) -> None:
        responses = pd.DataFrame(
            [
                {
                    "Member Name": r.member or UNKNOWN,
                    "Selected Option": r.option or UNKNOWN,
                    "Response Time": fmt_timestamp(r.responded_at),
                }
                for r in report.rows
            ],
            columns=POLL_COLUMNS,
        )
        tally = report.tally
        summary = pd.DataFrame(
            {
                "Option": list(report.poll.options),
                "Votes": tally.option_counts,
                "Percentage": tally.percentages,
            }
        )
        header = pd.DataFrame(
            [
                {"Field": "Poll Question", "Value": report.poll.question},
                {"Field": "Total Responses", "Value": tally.total_responses},
                {"Field": "Generated", "Value": fmt_timestamp(report.generated_at)},
            ]
        )
        write_frames(stream, {"Poll Results": responses, "Summary": summary, "Poll": header})
