from __future__ import annotations

import io
import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Union

import pandas as pd

from ..analytics.aggregator import status_counts, tally_poll
from ..attendance.filters import AttendanceFilter
from ..attendance.joiner import index_by
from ..attendance.service import AttendanceService
from ..common.datetime_utils import now_local
from ..members.repository import MemberRepository
from ..members.service import MEMBER_SHEET_COLUMNS
from ..notifications.service import PollService
from .factory import RendererFactory
from .model import AttendanceReport, AttendanceRow, ExportFile, PollReport, PollRow
from .renderers.excel_renderer import ExcelRenderer, write_frames

logger = logging.getLogger(__name__)


def _iso(value) -> str:
    return value.isoformat() if value else ""


class ExportService:
    """Filter, aggregate and render attendance, poll and member exports."""

    def __init__(
        self,
        attendance: AttendanceService,
        polls: PollService,
        members: MemberRepository,
        renderers: Optional[RendererFactory] = None,
    ):
        self._attendance = attendance
        self._polls = polls
        self._members = members
        self._renderers = renderers or RendererFactory()

    def build_attendance_report(
        self, filters: Union[AttendanceFilter, Mapping[str, Any], None], now: datetime
    ) -> AttendanceReport:
        if not isinstance(filters, AttendanceFilter):
            filters = AttendanceFilter.from_mapping(filters)
        records = filters.apply(self._attendance.list_with_details())
        rows = [
            AttendanceRow(
                date=r.date.isoformat(),
                status=r.status,
                member=r.member.name if r.member else None,
                story=r.story.name if r.story else None,
                role=r.role.name if r.role else None,
                replaced_by=r.replaced_member.name if r.replaced_member else None,
            )
            for r in records
        ]
        return AttendanceReport(generated_at=now, rows=rows, status_counts=status_counts(records))

    def export_attendance(
        self,
        fmt: Any,
        filters: Union[AttendanceFilter, Mapping[str, Any], None] = None,
        now: Optional[datetime] = None,
    ) -> ExportFile:
        renderer = self._renderers.for_format(fmt)
        report = self.build_attendance_report(filters, now or now_local())

        out = io.BytesIO()
        renderer.render_attendance(report, out)
        logger.info("attendance export rendered: %s, %d rows", renderer.extension, report.total)
        return ExportFile(
            content=out.getvalue(),
            mimetype=renderer.mimetype,
            filename=f"attendance-report.{renderer.extension}",
        )

    def build_poll_report(self, poll_id: str, now: datetime) -> PollReport:
        poll = self._polls.get_poll(poll_id)
        responses = self._polls.responses(poll.poll_id)
        members_by_id = index_by(self._members.list_all(), lambda m: m.member_id)
        rows = []
        for r in responses:
            member = members_by_id.get(r.member_id)
            rows.append(
                PollRow(
                    member=member.name if member else None,
                    option=poll.option_label(r.selected_option),
                    responded_at=r.created_at,
                )
            )
        return PollReport(poll=poll, tally=tally_poll(poll, responses), generated_at=now, rows=rows)

    def export_poll(self, poll_id: str, fmt: Any, now: Optional[datetime] = None) -> ExportFile:
        renderer = self._renderers.for_format(fmt)
        # Raises NotFoundError before anything is rendered.
        report = self.build_poll_report(poll_id, now or now_local())

        out = io.BytesIO()
        renderer.render_poll(report, out)
        logger.info("poll export rendered: %s, poll %s", renderer.extension, poll_id)
        return ExportFile(
            content=out.getvalue(),
            mimetype=renderer.mimetype,
            filename=f"poll-results.{renderer.extension}",
        )

    def export_members(self) -> ExportFile:
        frame = pd.DataFrame(
            [
                {
                    "MHT ID": m.mht_id,
                    "Name": m.name,
                    "Email": m.email or "",
                    "Mobile": m.mobile or "",
                    "Birthday": _iso(m.birthday),
                    "G-Day": _iso(m.g_day),
                    "Is Admin": "YES" if m.is_admin else "NO",
                }
                for m in self._members.list_all()
            ],
            columns=MEMBER_SHEET_COLUMNS,
        )
        out = io.BytesIO()
        write_frames(out, {"Members": frame})
        return ExportFile(content=out.getvalue(), mimetype=ExcelRenderer.mimetype, filename="members.xlsx")
