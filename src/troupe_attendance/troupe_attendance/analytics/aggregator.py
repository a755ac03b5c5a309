"""Derived attendance and poll statistics.

Pure functions over in-memory snapshots. Empty inputs give zeros, never errors,
so dashboards stay renderable on an empty database.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Sequence

from ..common.percentages import mean_rounded, percent
from ..core.constants import PERFORMER_LIST_SIZE, RECENT_ATTENDANCE_DAYS
from ..core.enums import AttendanceStatus
from ..members.model import Member
from ..notifications.model import Poll, PollResponse, PollTally
from .model import MemberPercentage

logger = logging.getLogger(__name__)


def attendance_percentage(records: Iterable) -> int:
    """Share of records that count as attended (present or replaced)."""
    total = 0
    attended = 0
    for r in records:
        total += 1
        if r.status.counts_as_attended:
            attended += 1
    return percent(attended, total)


def member_percentages(members: Sequence[Member], records: Iterable) -> list[MemberPercentage]:
    """One entry per member, in the members' order; no records means 0%."""
    by_member: dict[str, list] = defaultdict(list)
    for r in records:
        by_member[r.member_id].append(r)
    return [
        MemberPercentage(
            member_id=m.member_id,
            name=m.name,
            percentage=attendance_percentage(by_member.get(m.member_id, ())),
        )
        for m in members
    ]


def average_attendance(stats: Sequence[MemberPercentage]) -> int:
    """Unweighted mean of member percentages."""
    return mean_rounded(s.percentage for s in stats)


def rank_performers(
    stats: Sequence[MemberPercentage], size: int = PERFORMER_LIST_SIZE
) -> tuple[list[MemberPercentage], list[MemberPercentage]]:
    """(top, low) performers.

    Ranking is by percentage descending; sorted() is stable so ties keep the
    input order. `low` is the tail of that same ranking, reversed so the worst
    comes first. With few members the two lists may share entries.
    """
    if size <= 0:
        return [], []
    ranked = sorted(stats, key=lambda s: s.percentage, reverse=True)
    return ranked[:size], list(reversed(ranked[-size:]))


def recent_attendance_percentage(records: Iterable, today: date, days: int = RECENT_ATTENDANCE_DAYS) -> int:
    start = today - timedelta(days=days)
    return attendance_percentage(r for r in records if r.date >= start)


def status_counts(records: Iterable) -> dict[AttendanceStatus, int]:
    counts = {status: 0 for status in AttendanceStatus}
    for r in records:
        counts[r.status] += 1
    return counts


def tally_poll(poll: Poll, responses: Sequence[PollResponse]) -> PollTally:
    """Votes per option index; percentages are over all responses."""
    counts = [0] * len(poll.options)
    for r in responses:
        if 0 <= r.selected_option < len(counts):
            counts[r.selected_option] += 1
        else:
            logger.warning(
                "poll %s: response %s points at missing option %s", poll.poll_id, r.response_id, r.selected_option
            )

    total = len(responses)
    return PollTally(
        poll=poll,
        total_responses=total,
        option_counts=counts,
        percentages=[percent(c, total) for c in counts],
    )
