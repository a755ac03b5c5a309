from __future__ import annotations

from datetime import date

from src.troupe_attendance.troupe_attendance.attendance.joiner import (
    index_by,
    join_attendance,
    join_poll_responses,
    join_practice_links,
    join_shows,
    stories_with_characters,
)
from src.troupe_attendance.troupe_attendance.attendance.model import AttendanceRecord
from src.troupe_attendance.troupe_attendance.core.enums import AttendanceStatus
from src.troupe_attendance.troupe_attendance.members.model import Member
from src.troupe_attendance.troupe_attendance.notifications.model import PollResponse
from src.troupe_attendance.troupe_attendance.shows.model import Show
from src.troupe_attendance.troupe_attendance.stories.model import Character, PracticeLink, Role, Story

ASHA = Member(member_id="m1", mht_id="100", name="Asha")
BINA = Member(member_id="m2", mht_id="200", name="Bina")
KRISHNA = Story(story_id="s1", name="Krishna Leela")
RETIRED = Story(story_id="s2", name="Old Tale", is_active=False)
AV = Role(role_id="r1", name="AV")


def test_attendance_relations_are_resolved():
    rec = AttendanceRecord(
        "a1", "m1", date(2024, 1, 5), AttendanceStatus.REPLACED, story_id="s1", role_id="r1", replaced_member_id="m2"
    )

    [joined] = join_attendance([rec], members=[ASHA, BINA], stories=[KRISHNA], roles=[AV])

    assert joined.member is ASHA
    assert joined.story is KRISHNA
    assert joined.role is AV
    assert joined.replaced_member is BINA
    assert joined.to_dict()["replacedMember"]["name"] == "Bina"


def test_dangling_references_become_none():
    rec = AttendanceRecord("a1", "m9", date(2024, 1, 5), AttendanceStatus.PRESENT, story_id="missing")

    [joined] = join_attendance([rec], members=[ASHA], stories=[KRISHNA], roles=[])

    assert joined.member is None
    assert joined.story is None
    assert joined.role is None
    assert joined.replaced_member is None
    assert joined.to_dict()["story"] is None


def test_soft_deleted_story_still_resolves():
    rec = AttendanceRecord("a1", "m1", date(2024, 1, 5), AttendanceStatus.PRESENT, story_id="s2")
    [joined] = join_attendance([rec], members=[ASHA], stories=[KRISHNA, RETIRED], roles=[])
    assert joined.story is RETIRED


def test_join_preserves_order_and_length():
    records = [
        AttendanceRecord(f"a{i}", "m1", date(2024, 1, i), AttendanceStatus.PRESENT) for i in (3, 1, 2)
    ]
    joined = join_attendance(records, members=[], stories=[], roles=[])
    assert [j.record.attendance_id for j in joined] == ["a3", "a1", "a2"]


def test_index_by_first_duplicate_wins():
    twin = Member(member_id="m1", mht_id="999", name="Shadow")
    index = index_by([ASHA, twin], lambda m: m.member_id)
    assert index["m1"] is ASHA


def test_poll_responses_and_shows():
    response = PollResponse(response_id="pr1", poll_id="p1", member_id="m2", selected_option=0)
    [joined_response] = join_poll_responses([response], members=[ASHA, BINA])
    assert joined_response.member is BINA

    show = Show(show_id="sh1", date=date(2024, 1, 5), story_id="s1", created_by_id="m9")
    [joined_show] = join_shows([show], stories=[KRISHNA], members=[ASHA])
    assert joined_show.story is KRISHNA
    assert joined_show.created_by is None


def test_practice_links_join_their_story():
    link = PracticeLink(link_id="l1", story_id="s1", title="Song", url="https://example.org/song")
    [joined] = join_practice_links([link], stories=[KRISHNA])
    assert joined.to_dict()["story"]["name"] == "Krishna Leela"


def test_stories_with_characters_groups_and_drops_orphans():
    chars = [
        Character(character_id="c1", story_id="s1", name="Krishna"),
        Character(character_id="c2", story_id="s9", name="Nobody"),
        Character(character_id="c3", story_id="s1", name="Radha"),
    ]
    [grouped] = stories_with_characters([KRISHNA], chars)
    assert [c.name for c in grouped.characters] == ["Krishna", "Radha"]
