from __future__ import annotations

from dataclasses import fields, replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.troupe_attendance.troupe_attendance.attendance.model import AttendanceRecord
from src.troupe_attendance.troupe_attendance.members.model import Member
from src.troupe_attendance.troupe_attendance.notifications.model import Notification, Poll, PollResponse
from src.troupe_attendance.troupe_attendance.shows.model import Show
from src.troupe_attendance.troupe_attendance.stories.model import Character, PracticeLink, Role, Story
from src.troupe_attendance.troupe_attendance.submissions.model import Submission


def _known(cls, changes: dict) -> dict:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in changes.items() if k in names}


class _Ids:
    def __init__(self, prefix: str):
        self._prefix = prefix
        self._n = 0

    def next(self, taken=()) -> str:
        """Next free id; skips ids already present in `taken`."""
        while True:
            self._n += 1
            candidate = f"{self._prefix}{self._n}"
            if candidate not in taken:
                return candidate


class InMemoryMembers:
    def __init__(self):
        self.members: dict[str, Member] = {}
        self.users: list[dict] = []
        self._ids = _Ids("m")

    def add(self, member: Member) -> Member:
        self.members[member.member_id] = member
        return member

    def get_by_id(self, member_id: str) -> Optional[Member]:
        return self.members.get(member_id)

    def get_by_mht_id(self, mht_id: str) -> Optional[Member]:
        return next((m for m in self.members.values() if m.mht_id == mht_id), None)

    def find_by_login(self, *, email_or_mobile: str, mht_id: str) -> Optional[Member]:
        for m in self.members.values():
            if email_or_mobile in (m.email, m.mobile) and m.mht_id == mht_id:
                return m
        return None

    def list_all(self):
        return sorted(self.members.values(), key=lambda m: m.name)

    def create(self, **kwargs) -> Member:
        return self.add(Member(member_id=self._ids.next(self.members), **kwargs))

    def update(self, member_id: str, changes) -> Optional[Member]:
        current = self.members.get(member_id)
        if not current:
            return None
        self.members[member_id] = replace(current, **_known(Member, dict(changes)))
        return self.members[member_id]

    def delete(self, member_id: str) -> bool:
        return self.members.pop(member_id, None) is not None

    def create_user(self, *, email, first_name, last_name) -> str:
        user_id = f"u{len(self.users) + 1}"
        self.users.append({"user_id": user_id, "email": email, "first_name": first_name, "last_name": last_name})
        return user_id


class InMemoryStories:
    def __init__(self):
        self.stories: dict[str, Story] = {}
        self.characters: dict[str, Character] = {}
        self._ids = _Ids("s")
        self._char_ids = _Ids("c")

    def add(self, story: Story) -> Story:
        self.stories[story.story_id] = story
        return story

    def get_by_id(self, story_id: str) -> Optional[Story]:
        return self.stories.get(story_id)

    def get_by_name(self, name: str) -> Optional[Story]:
        return next((s for s in self.stories.values() if s.name == name), None)

    def list_active(self):
        return sorted((s for s in self.stories.values() if s.is_active), key=lambda s: s.name)

    def list_all(self):
        return sorted(self.stories.values(), key=lambda s: s.name)

    def create(self, *, name, description, event_type, event_custom) -> Story:
        return self.add(
            Story(
                story_id=self._ids.next(self.stories),
                name=name,
                description=description,
                event_type=event_type,
                event_custom=event_custom,
            )
        )

    def update(self, story_id: str, changes) -> Optional[Story]:
        current = self.stories.get(story_id)
        if not current:
            return None
        self.stories[story_id] = replace(current, **_known(Story, dict(changes)))
        return self.stories[story_id]

    def set_active(self, story_id: str, *, is_active: bool) -> bool:
        return self.update(story_id, {"is_active": is_active}) is not None

    def list_characters(self, story_id: Optional[str] = None):
        chars = [c for c in self.characters.values() if story_id is None or c.story_id == story_id]
        return sorted(chars, key=lambda c: c.name)

    def create_character(self, *, story_id: str, name: str) -> Character:
        ch = Character(character_id=self._char_ids.next(self.characters), story_id=story_id, name=name)
        self.characters[ch.character_id] = ch
        return ch

    def delete_character(self, character_id: str) -> bool:
        return self.characters.pop(character_id, None) is not None


class InMemoryRoles:
    def __init__(self):
        self.roles: dict[str, Role] = {}
        self._ids = _Ids("r")

    def add(self, role: Role) -> Role:
        self.roles[role.role_id] = role
        return role

    def list_active(self):
        return sorted((r for r in self.roles.values() if r.is_active), key=lambda r: r.name)

    def list_all(self):
        return sorted(self.roles.values(), key=lambda r: r.name)

    def create(self, *, name, description) -> Role:
        return self.add(Role(role_id=self._ids.next(self.roles), name=name, description=description))


class InMemoryPracticeLinks:
    def __init__(self):
        self.links: dict[str, PracticeLink] = {}
        self._ids = _Ids("l")

    def list_all(self):
        return sorted(self.links.values(), key=lambda link: link.title)

    def create(self, *, story_id, title, url, created_by_id) -> PracticeLink:
        link = PracticeLink(link_id=self._ids.next(self.links), story_id=story_id, title=title, url=url, created_by_id=created_by_id)
        self.links[link.link_id] = link
        return link

    def update(self, link_id: str, changes) -> Optional[PracticeLink]:
        current = self.links.get(link_id)
        if not current:
            return None
        self.links[link_id] = replace(current, **_known(PracticeLink, dict(changes)))
        return self.links[link_id]

    def delete(self, link_id: str) -> bool:
        return self.links.pop(link_id, None) is not None


class InMemoryAttendance:
    def __init__(self):
        self.records: list[AttendanceRecord] = []
        self._ids = _Ids("a")

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        self.records.append(record)
        return record

    def _newest_first(self, records):
        return sorted(records, key=lambda r: r.date, reverse=True)

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        return next((r for r in self.records if r.attendance_id == attendance_id), None)

    def list_for_member(self, member_id: str):
        return self._newest_first(r for r in self.records if r.member_id == member_id)

    def list_all(self):
        return self._newest_first(self.records)

    def list_since(self, start: date):
        return self._newest_first(r for r in self.records if r.date >= start)

    def create(self, **kwargs) -> AttendanceRecord:
        return self.add(AttendanceRecord(attendance_id=self._ids.next({r.attendance_id for r in self.records}), **kwargs))


class InMemoryShows:
    def __init__(self):
        self.shows: dict[str, Show] = {}
        self._ids = _Ids("sh")

    def add(self, show: Show) -> Show:
        self.shows[show.show_id] = show
        return show

    def get_by_id(self, show_id: str) -> Optional[Show]:
        return self.shows.get(show_id)

    def list_all(self):
        return sorted(self.shows.values(), key=lambda s: s.date, reverse=True)

    def count(self) -> int:
        return len(self.shows)

    def create(self, fields_) -> Show:
        return self.add(Show(show_id=self._ids.next(self.shows), **dict(fields_)))

    def update(self, show_id: str, changes) -> Optional[Show]:
        current = self.shows.get(show_id)
        if not current:
            return None
        self.shows[show_id] = replace(current, **_known(Show, dict(changes)))
        return self.shows[show_id]

    def delete(self, show_id: str) -> bool:
        return self.shows.pop(show_id, None) is not None


class InMemoryNotifications:
    def __init__(self):
        self.notifications: dict[str, Notification] = {}
        self._ids = _Ids("n")

    def add(self, notification: Notification) -> Notification:
        self.notifications[notification.notification_id] = notification
        return notification

    def get_by_id(self, notification_id: str) -> Optional[Notification]:
        return self.notifications.get(notification_id)

    def list_all(self):
        return list(reversed(list(self.notifications.values())))

    def list_active(self):
        return [n for n in self.list_all() if n.is_active]

    def count_active(self) -> int:
        return len(self.list_active())

    def create(self, **kwargs) -> Notification:
        return self.add(Notification(notification_id=self._ids.next(self.notifications), **kwargs))

    def deactivate(self, notification_id: str) -> bool:
        current = self.notifications.get(notification_id)
        if not current:
            return False
        self.notifications[notification_id] = replace(current, is_active=False)
        return True


class InMemoryPolls:
    def __init__(self):
        self.polls: dict[str, Poll] = {}
        self.responses: list[PollResponse] = []
        self._ids = _Ids("p")
        self._response_ids = _Ids("pr")

    def add(self, poll: Poll) -> Poll:
        self.polls[poll.poll_id] = poll
        return poll

    def add_response(self, poll_id: str, member_id: str, selected_option: int, created_at=None) -> PollResponse:
        response = PollResponse(
            response_id=self._response_ids.next({r.response_id for r in self.responses}),
            poll_id=poll_id,
            member_id=member_id,
            selected_option=selected_option,
            created_at=created_at,
        )
        self.responses.append(response)
        return response

    def get_by_id(self, poll_id: str) -> Optional[Poll]:
        return self.polls.get(poll_id)

    def list_all(self):
        return list(reversed(list(self.polls.values())))

    def get_by_notification(self, notification_id: str) -> Optional[Poll]:
        return next((p for p in self.polls.values() if p.notification_id == notification_id), None)

    def create(self, *, question, options, notification_id, created_by_id, expires_at=None) -> Poll:
        return self.add(
            Poll(
                poll_id=self._ids.next(self.polls),
                question=question,
                options=tuple(options),
                notification_id=notification_id,
                created_by_id=created_by_id,
                expires_at=expires_at,
            )
        )

    def list_responses(self, poll_id: str):
        return list(reversed([r for r in self.responses if r.poll_id == poll_id]))

    def save_response(self, *, poll_id: str, member_id: str, selected_option: int) -> PollResponse:
        self.responses = [r for r in self.responses if not (r.poll_id == poll_id and r.member_id == member_id)]
        return self.add_response(poll_id, member_id, selected_option)


class InMemorySubmissions:
    def __init__(self):
        self.submissions: dict[str, Submission] = {}
        self._ids = _Ids("rep")

    def list_all(self):
        return list(reversed(list(self.submissions.values())))

    def list_for_member(self, member_id: str):
        return [s for s in self.list_all() if s.member_id == member_id]

    def create(self, *, member_id, content, event_type, event_custom) -> Submission:
        s = Submission(
            submission_id=self._ids.next(self.submissions),
            member_id=member_id,
            content=content,
            event_type=event_type,
            event_custom=event_custom,
        )
        self.submissions[s.submission_id] = s
        return s

    def mark_read(self, submission_id: str) -> bool:
        current = self.submissions.get(submission_id)
        if not current:
            return False
        self.submissions[submission_id] = replace(current, is_read=True)
        return True


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 15, 10, 0, 0)


@pytest.fixture
def members_repo() -> InMemoryMembers:
    return InMemoryMembers()


@pytest.fixture
def stories_repo() -> InMemoryStories:
    return InMemoryStories()


@pytest.fixture
def roles_repo() -> InMemoryRoles:
    return InMemoryRoles()


@pytest.fixture
def links_repo() -> InMemoryPracticeLinks:
    return InMemoryPracticeLinks()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def shows_repo() -> InMemoryShows:
    return InMemoryShows()


@pytest.fixture
def notifications_repo() -> InMemoryNotifications:
    return InMemoryNotifications()


@pytest.fixture
def polls_repo() -> InMemoryPolls:
    return InMemoryPolls()


@pytest.fixture
def submissions_repo() -> InMemorySubmissions:
    return InMemorySubmissions()


@pytest.fixture
def other_members_repo() -> InMemoryMembers:
    return InMemoryMembers()
