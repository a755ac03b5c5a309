from __future__ import annotations

from datetime import date

import pytest

from src.troupe_attendance.troupe_attendance.attendance.filters import AttendanceFilter
from src.troupe_attendance.troupe_attendance.attendance.model import AttendanceRecord
from src.troupe_attendance.troupe_attendance.core.enums import AttendanceStatus, EventType


def _records() -> list[AttendanceRecord]:
    return [
        AttendanceRecord("a1", "m1", date(2024, 1, 12), AttendanceStatus.PRESENT, story_id="s1"),
        AttendanceRecord("a2", "m2", date(2024, 1, 11), AttendanceStatus.ABSENT, story_id="s2"),
        AttendanceRecord("a3", "m1", date(2024, 1, 10), AttendanceStatus.PRESENT, event_type=EventType.HOLI),
        AttendanceRecord("a4", "m3", date(2024, 1, 9), AttendanceStatus.REPLACED, story_id="s1"),
        AttendanceRecord("a5", "m2", date(2024, 1, 8), AttendanceStatus.PRESENT, story_id="s1"),
    ]


def _ids(records) -> list[str]:
    return [r.attendance_id for r in records]


def test_status_filter_keeps_input_order():
    flt = AttendanceFilter.from_mapping({"statusFilter": "present"})
    assert _ids(flt.apply(_records())) == ["a1", "a3", "a5"]


def test_date_from_is_inclusive():
    flt = AttendanceFilter.from_mapping({"dateFrom": "2024-01-10"})
    result = _ids(flt.apply(_records()))
    assert "a3" in result
    assert "a4" not in result


def test_date_range_is_inclusive_on_both_ends():
    flt = AttendanceFilter.from_mapping({"dateFrom": "2024-01-09", "dateTo": "2024-01-11"})
    assert _ids(flt.apply(_records())) == ["a2", "a3", "a4"]


def test_all_and_blank_selectors_place_no_constraint():
    flt = AttendanceFilter.from_mapping(
        {"statusFilter": "all", "storyFilter": "", "memberFilter": "ALL", "eventFilter": None}
    )
    assert flt.is_empty
    assert _ids(flt.apply(_records())) == _ids(_records())


def test_missing_mapping_is_empty_filter():
    assert AttendanceFilter.from_mapping(None).is_empty


def test_filters_combine_conjunctively():
    flt = AttendanceFilter.from_mapping({"storyFilter": "s1", "memberFilter": "m2"})
    assert _ids(flt.apply(_records())) == ["a5"]


def test_event_filter():
    flt = AttendanceFilter.from_mapping({"eventFilter": "Holi"})
    assert _ids(flt.apply(_records())) == ["a3"]


def test_malformed_values_are_ignored():
    flt = AttendanceFilter.from_mapping({"dateFrom": "not-a-date", "statusFilter": "late", "eventFilter": "Diwali"})
    assert flt.is_empty


def test_status_filter_is_case_insensitive():
    flt = AttendanceFilter.from_mapping({"statusFilter": "Replaced"})
    assert flt.status is AttendanceStatus.REPLACED


def test_empty_input_gives_empty_output():
    assert AttendanceFilter.from_mapping({"statusFilter": "absent"}).apply([]) == []


@pytest.mark.parametrize("raw", ["present", ["statusFilter"], 42])
def test_non_object_filters_place_no_constraint(raw):
    flt = AttendanceFilter.from_mapping(raw)
    assert flt.is_empty
    assert _ids(flt.apply(_records())) == _ids(_records())
