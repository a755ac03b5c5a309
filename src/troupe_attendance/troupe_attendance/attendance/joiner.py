"""Relation Joiner: enrich flat entity snapshots with their related entities.

Every function builds one id-keyed index per related collection and then walks
the primary records once. A foreign key that matches nothing leaves the
relation as None; joining never raises for dangling references.
"""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, Optional, Sequence, TypeVar

from ..members.model import Member
from ..notifications.model import PollResponse, PollResponseWithMember
from ..shows.model import Show, ShowWithDetails
from ..stories.model import Character, PracticeLink, PracticeLinkWithStory, Role, Story, StoryWithCharacters
from ..submissions.model import Submission, SubmissionWithMember
from .model import AttendanceRecord, AttendanceWithRelations

T = TypeVar("T")


def index_by(items: Iterable[T], key: Callable[[T], Hashable]) -> dict:
    """Map key -> item. On duplicate keys the first item wins."""
    index: dict = {}
    for item in items:
        index.setdefault(key(item), item)
    return index


def _lookup(index: dict, key: Optional[str]):
    if not key:
        return None
    return index.get(key)


def join_attendance(
    records: Sequence[AttendanceRecord],
    *,
    members: Iterable[Member],
    stories: Iterable[Story],
    roles: Iterable[Role],
) -> list[AttendanceWithRelations]:
    members_by_id = index_by(members, lambda m: m.member_id)
    stories_by_id = index_by(stories, lambda s: s.story_id)
    roles_by_id = index_by(roles, lambda r: r.role_id)

    return [
        AttendanceWithRelations(
            record=rec,
            member=_lookup(members_by_id, rec.member_id),
            story=_lookup(stories_by_id, rec.story_id),
            role=_lookup(roles_by_id, rec.role_id),
            replaced_member=_lookup(members_by_id, rec.replaced_member_id),
        )
        for rec in records
    ]


def join_poll_responses(
    responses: Sequence[PollResponse], *, members: Iterable[Member]
) -> list[PollResponseWithMember]:
    members_by_id = index_by(members, lambda m: m.member_id)
    return [PollResponseWithMember(response=r, member=_lookup(members_by_id, r.member_id)) for r in responses]


def join_shows(shows: Sequence[Show], *, stories: Iterable[Story], members: Iterable[Member]) -> list[ShowWithDetails]:
    stories_by_id = index_by(stories, lambda s: s.story_id)
    members_by_id = index_by(members, lambda m: m.member_id)
    return [
        ShowWithDetails(
            show=s,
            story=_lookup(stories_by_id, s.story_id),
            created_by=_lookup(members_by_id, s.created_by_id),
        )
        for s in shows
    ]


def join_practice_links(
    links: Sequence[PracticeLink], *, stories: Iterable[Story]
) -> list[PracticeLinkWithStory]:
    stories_by_id = index_by(stories, lambda s: s.story_id)
    return [PracticeLinkWithStory(link=link, story=_lookup(stories_by_id, link.story_id)) for link in links]


def join_submissions(
    submissions: Sequence[Submission], *, members: Iterable[Member]
) -> list[SubmissionWithMember]:
    members_by_id = index_by(members, lambda m: m.member_id)
    return [SubmissionWithMember(submission=s, member=_lookup(members_by_id, s.member_id)) for s in submissions]


def stories_with_characters(
    stories: Sequence[Story], characters: Iterable[Character]
) -> list[StoryWithCharacters]:
    """Group characters under their story; characters of unknown stories are dropped."""
    grouped: dict[str, list[Character]] = {s.story_id: [] for s in stories}
    for ch in characters:
        bucket = grouped.get(ch.story_id)
        if bucket is not None:
            bucket.append(ch)
    return [StoryWithCharacters(story=s, characters=grouped[s.story_id]) for s in stories]
