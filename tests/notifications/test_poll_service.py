from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from src.troupe_attendance.troupe_attendance.core.enums import NotificationType
from src.troupe_attendance.troupe_attendance.core.exceptions import NotFoundError, ValidationError
from src.troupe_attendance.troupe_attendance.members.model import Member
from src.troupe_attendance.troupe_attendance.notifications.service import (
    NotificationService,
    PollService,
    clean_options,
)


@pytest.fixture
def polls(polls_repo, members_repo):
    members_repo.add(Member(member_id="m1", mht_id="100", name="Asha"))
    members_repo.add(Member(member_id="m2", mht_id="200", name="Bina"))
    return PollService(polls_repo, members_repo)


@pytest.fixture
def notifications(notifications_repo, polls):
    return NotificationService(notifications_repo, polls)


def test_clean_options_drops_blanks():
    assert clean_options([" Yes ", "", None, "No", "   "]) == ["Yes", "No"]
    assert clean_options(None) == []


def test_create_poll_needs_two_real_options(polls):
    with pytest.raises(ValidationError):
        polls.create_poll(question="Which day?", options=["Sunday", " "])

    poll = polls.create_poll(question="Which day?", options=["Sunday", "", "Monday"], expires_at="2024-02-01T10:00:00Z")
    assert poll.options == ("Sunday", "Monday")
    assert poll.expires_at == datetime(2024, 2, 1, 10, 0)


def test_respond_replaces_earlier_answer(polls, polls_repo):
    poll = polls.create_poll(question="Which day?", options=["Sunday", "Monday"])

    polls.respond(poll.poll_id, member_id="m1", selected_option=0)
    polls.respond(poll.poll_id, member_id="m1", selected_option="1")
    polls.respond(poll.poll_id, member_id="m2", selected_option=1)

    tally = polls.results(poll.poll_id)
    assert tally.total_responses == 2
    assert tally.option_counts == [0, 2]
    assert tally.percentages == [0, 100]


@pytest.mark.parametrize("choice", [2, -1, "x", None, True, 1.9, "1.5", 1.0, " "])
def test_respond_rejects_bad_option(polls, choice):
    poll = polls.create_poll(question="Q", options=["A", "B"])
    with pytest.raises(ValidationError):
        polls.respond(poll.poll_id, member_id="m1", selected_option=choice)


def test_respond_to_closed_or_missing_poll(polls, polls_repo):
    poll = polls.create_poll(question="Q", options=["A", "B"])
    polls_repo.add(replace(poll, is_active=False))

    with pytest.raises(ValidationError):
        polls.respond(poll.poll_id, member_id="m1", selected_option=0)
    with pytest.raises(NotFoundError):
        polls.respond("p404", member_id="m1", selected_option=0)
    with pytest.raises(NotFoundError):
        polls.results("p404")


def test_active_polls_carry_joined_responses(polls, polls_repo):
    open_poll = polls.create_poll(question="Open", options=["A", "B"])
    closed = polls.create_poll(question="Closed", options=["A", "B"])
    polls_repo.add(replace(closed, is_active=False))
    polls_repo.add_response(open_poll.poll_id, "m2", 1)
    polls_repo.add_response(open_poll.poll_id, "m9", 0)

    [item] = polls.active_polls_with_responses()

    assert item.poll.question == "Open"
    names = sorted(r.member.name if r.member else "?" for r in item.responses)
    assert names == ["?", "Bina"]
    assert len(polls.all_polls_with_responses()) == 2


def test_poll_notification_creates_linked_poll(notifications, polls):
    n = notifications.create_notification(
        title="Rehearsal slot?", content="Pick one", type="Poll", poll_options=["Sat", "Sun"], created_by_id="m1"
    )

    assert n.type is NotificationType.POLL
    poll = polls.poll_for_notification(n.notification_id)
    assert poll.question == "Rehearsal slot?"
    assert poll.options == ("Sat", "Sun")


def test_poll_notification_without_options_has_no_poll(notifications, polls):
    n = notifications.create_notification(title="T", content="C", type="poll", poll_options=["only one"])
    assert polls.poll_for_notification(n.notification_id) is None


def test_notification_validation_and_deactivate(notifications):
    with pytest.raises(ValidationError):
        notifications.create_notification(title="T", content="C", type="gossip")
    with pytest.raises(ValidationError):
        notifications.create_notification(title="", content="C", type="announcement")

    n = notifications.create_notification(title="T", content="C", type="announcement", event_type="Holi")
    assert notifications.count_active() == 1

    notifications.deactivate(n.notification_id)
    assert notifications.count_active() == 0
    assert notifications.list_active() == []
    assert len(notifications.list_all()) == 1

    with pytest.raises(NotFoundError):
        notifications.deactivate("n404")


def test_respond_accepts_digit_string_index(polls):
    poll = polls.create_poll(question="Q", options=["A", "B"])
    response = polls.respond(poll.poll_id, member_id="m1", selected_option=" 1 ")
    assert response.selected_option == 1
