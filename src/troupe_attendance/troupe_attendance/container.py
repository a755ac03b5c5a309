from __future__ import annotations

from dataclasses import dataclass

from .analytics.service import StatsService
from .attendance.factory import StatusPolicyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .exports.factory import RendererFactory
from .exports.service import ExportService
from .members.mysql_member_repository import MySQLMemberRepository
from .members.service import AuthService, MemberService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.mysql_poll_repository import MySQLPollRepository
from .notifications.service import NotificationService, PollService
from .shows.mysql_show_repository import MySQLShowRepository
from .shows.service import ShowService
from .stories.mysql_practice_link_repository import MySQLPracticeLinkRepository
from .stories.mysql_role_repository import MySQLRoleRepository
from .stories.mysql_story_repository import MySQLStoryRepository
from .stories.service import StoryService
from .submissions.mysql_submission_repository import MySQLSubmissionRepository
from .submissions.service import SubmissionService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    members_repo: MySQLMemberRepository
    stories_repo: MySQLStoryRepository
    roles_repo: MySQLRoleRepository
    practice_links_repo: MySQLPracticeLinkRepository
    attendance_repo: MySQLAttendanceRepository
    shows_repo: MySQLShowRepository
    notifications_repo: MySQLNotificationRepository
    polls_repo: MySQLPollRepository
    submissions_repo: MySQLSubmissionRepository

    auth_service: AuthService
    member_service: MemberService
    story_service: StoryService
    attendance_service: AttendanceService
    show_service: ShowService
    poll_service: PollService
    notification_service: NotificationService
    submission_service: SubmissionService
    stats_service: StatsService
    export_service: ExportService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))

    members_repo = MySQLMemberRepository(conn)
    stories_repo = MySQLStoryRepository(conn)
    roles_repo = MySQLRoleRepository(conn)
    practice_links_repo = MySQLPracticeLinkRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    shows_repo = MySQLShowRepository(conn)
    notifications_repo = MySQLNotificationRepository(conn)
    polls_repo = MySQLPollRepository(conn)
    submissions_repo = MySQLSubmissionRepository(conn)

    attendance_service = AttendanceService(
        attendance_repo,
        members_repo,
        stories_repo,
        roles_repo,
        policy_factory=StatusPolicyFactory(),
    )
    poll_service = PollService(polls_repo, members_repo)

    return Container(
        conn=conn,
        members_repo=members_repo,
        stories_repo=stories_repo,
        roles_repo=roles_repo,
        practice_links_repo=practice_links_repo,
        attendance_repo=attendance_repo,
        shows_repo=shows_repo,
        notifications_repo=notifications_repo,
        polls_repo=polls_repo,
        submissions_repo=submissions_repo,
        auth_service=AuthService(members_repo),
        member_service=MemberService(members_repo),
        story_service=StoryService(stories_repo, roles_repo, practice_links_repo),
        attendance_service=attendance_service,
        show_service=ShowService(shows_repo, stories_repo, members_repo),
        poll_service=poll_service,
        notification_service=NotificationService(notifications_repo, poll_service),
        submission_service=SubmissionService(submissions_repo, members_repo),
        stats_service=StatsService(members_repo, attendance_repo, shows_repo, notifications_repo),
        export_service=ExportService(attendance_service, poll_service, members_repo, renderers=RendererFactory()),
    )
