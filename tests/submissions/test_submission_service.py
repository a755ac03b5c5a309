import pytest

from src.troupe_attendance.troupe_attendance.core.exceptions import NotFoundError, ValidationError
from src.troupe_attendance.troupe_attendance.members.model import Member
from src.troupe_attendance.troupe_attendance.submissions.service import SubmissionService

ADMIN = Member(member_id="m1", mht_id="100", name="Asha", is_admin=True)
BINA = Member(member_id="m2", mht_id="200", name="Bina")


@pytest.fixture
def service(submissions_repo, members_repo):
    members_repo.add(ADMIN)
    members_repo.add(BINA)
    return SubmissionService(submissions_repo, members_repo)


def test_members_see_own_and_admins_see_all(service):
    service.submit("m2", content="Mic was broken", event_type="JJ")
    service.submit("m1", content="Thanks all")

    own = service.list_for(BINA)
    assert [s.content for s in own] == ["Mic was broken"]

    everything = service.list_for(ADMIN)
    assert [s.member.name for s in everything] == ["Asha", "Bina"]
    assert everything[1].to_dict()["eventType"] == "JJ"


def test_submit_requires_content_and_member(service):
    with pytest.raises(ValidationError):
        service.submit("m2", content="  ")
    with pytest.raises(NotFoundError):
        service.submit("m9", content="hi")


def test_mark_read(service, submissions_repo):
    s = service.submit("m2", content="note")
    service.mark_read(s.submission_id)
    assert submissions_repo.submissions[s.submission_id].is_read is True

    with pytest.raises(NotFoundError):
        service.mark_read("rep404")
