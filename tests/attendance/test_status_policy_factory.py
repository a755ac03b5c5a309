from datetime import date

import pytest

from src.troupe_attendance.troupe_attendance.attendance.factory import StatusPolicyFactory
from src.troupe_attendance.troupe_attendance.attendance.strategies.absent_policy import AbsentPolicy
from src.troupe_attendance.troupe_attendance.attendance.strategies.base import AttendanceDraft
from src.troupe_attendance.troupe_attendance.attendance.strategies.present_policy import PresentPolicy
from src.troupe_attendance.troupe_attendance.attendance.strategies.replaced_policy import ReplacedPolicy
from src.troupe_attendance.troupe_attendance.core.enums import AttendanceStatus
from src.troupe_attendance.troupe_attendance.core.exceptions import ValidationError


def _draft(status: AttendanceStatus, **kwargs) -> AttendanceDraft:
    return AttendanceDraft(member_id="m1", date=date(2024, 1, 5), status=status, **kwargs)


def test_factory_returns_policy_per_status():
    f = StatusPolicyFactory()
    assert isinstance(f.for_status(AttendanceStatus.PRESENT), PresentPolicy)
    assert isinstance(f.for_status(AttendanceStatus.ABSENT), AbsentPolicy)
    assert isinstance(f.for_status(AttendanceStatus.REPLACED), ReplacedPolicy)


def test_present_clears_reason_and_replacement():
    d = PresentPolicy().normalise(
        _draft(AttendanceStatus.PRESENT, reason="sick", reason_visible_to_admins=True, replaced_member_id="m2")
    )
    assert d.reason is None
    assert d.reason_visible_to_admins is False
    assert d.replaced_member_id is None


def test_absent_keeps_reason_drops_replacement():
    d = AbsentPolicy().normalise(
        _draft(AttendanceStatus.ABSENT, reason="exam", reason_visible_to_admins=True, replaced_member_id="m2")
    )
    assert d.reason == "exam"
    assert d.reason_visible_to_admins is True
    assert d.replaced_member_id is None


def test_absent_without_reason_is_never_visible():
    d = AbsentPolicy().normalise(_draft(AttendanceStatus.ABSENT, reason_visible_to_admins=True))
    assert d.reason_visible_to_admins is False


def test_replaced_requires_other_member():
    with pytest.raises(ValidationError):
        ReplacedPolicy().normalise(_draft(AttendanceStatus.REPLACED))
    with pytest.raises(ValidationError):
        ReplacedPolicy().normalise(_draft(AttendanceStatus.REPLACED, replaced_member_id="m1"))

    d = ReplacedPolicy().normalise(_draft(AttendanceStatus.REPLACED, replaced_member_id="m2", reason="x"))
    assert d.replaced_member_id == "m2"
    assert d.reason is None
