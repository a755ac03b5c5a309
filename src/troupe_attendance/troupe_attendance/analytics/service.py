from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.constants import RECENT_ATTENDANCE_DAYS
from ..members.repository import MemberRepository
from ..notifications.repository import NotificationRepository
from ..shows.repository import ShowRepository
from . import aggregator
from .model import DashboardStats, ReportStats


class StatsService:
    """Dashboard and report figures, computed from fresh snapshots on every call."""

    def __init__(
        self,
        members: MemberRepository,
        attendance: AttendanceRepository,
        shows: ShowRepository,
        notifications: NotificationRepository,
    ):
        self._members = members
        self._attendance = attendance
        self._shows = shows
        self._notifications = notifications

    def dashboard_stats(self, today: Optional[date] = None) -> DashboardStats:
        today = today or now_local().date()
        recent = self._attendance.list_since(today - timedelta(days=RECENT_ATTENDANCE_DAYS))
        return DashboardStats(
            total_members=len(self._members.list_all()),
            total_shows=self._shows.count(),
            recent_attendance=aggregator.recent_attendance_percentage(recent, today),
            active_notifications=self._notifications.count_active(),
        )

    def report_stats(self) -> ReportStats:
        members = list(self._members.list_all())
        per_member = aggregator.member_percentages(members, self._attendance.list_all())
        top, low = aggregator.rank_performers(per_member)
        return ReportStats(
            total_members=len(members),
            average_attendance=aggregator.average_attendance(per_member),
            top_performers=top,
            low_performers=low,
        )
