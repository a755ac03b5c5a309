from __future__ import annotations

import io
import re
from datetime import date, datetime

import pandas as pd
import pytest
from PIL import Image

from src.troupe_attendance.troupe_attendance.attendance.model import AttendanceRecord
from src.troupe_attendance.troupe_attendance.attendance.service import AttendanceService
from src.troupe_attendance.troupe_attendance.core.enums import AttendanceStatus
from src.troupe_attendance.troupe_attendance.core.exceptions import NotFoundError, UnsupportedFormatError
from src.troupe_attendance.troupe_attendance.exports.service import ExportService
from src.troupe_attendance.troupe_attendance.members.model import Member
from src.troupe_attendance.troupe_attendance.members.service import MemberService
from src.troupe_attendance.troupe_attendance.notifications.model import Poll
from src.troupe_attendance.troupe_attendance.notifications.service import PollService
from src.troupe_attendance.troupe_attendance.stories.model import Role, Story


def _page_count(pdf: bytes) -> int:
    return len(re.findall(rb"/Type\s*/Page(?!s)", pdf))


@pytest.fixture
def exports(attendance_repo, members_repo, stories_repo, roles_repo, polls_repo):
    members_repo.add(Member(member_id="m1", mht_id="100", name="Asha", email="asha@x.org", is_admin=True))
    members_repo.add(Member(member_id="m2", mht_id="200", name="Bina", mobile="98765"))
    stories_repo.add(Story(story_id="s1", name="Krishna Leela"))
    roles_repo.add(Role(role_id="r1", name="AV"))
    attendance = AttendanceService(attendance_repo, members_repo, stories_repo, roles_repo)
    polls = PollService(polls_repo, members_repo)
    return ExportService(attendance, polls, members_repo)


def _seed_attendance(attendance_repo, count: int = 3):
    statuses = [AttendanceStatus.PRESENT, AttendanceStatus.ABSENT, AttendanceStatus.REPLACED]
    for i in range(count):
        status = statuses[i % 3]
        attendance_repo.add(
            AttendanceRecord(
                f"a{i}",
                "m1" if i % 2 == 0 else "m9",
                date(2024, 1, 1 + i % 28),
                status,
                story_id="s1" if i % 2 == 0 else None,
                role_id="r1",
                replaced_member_id="m2" if status is AttendanceStatus.REPLACED else None,
            )
        )


def test_excel_export_matches_filtered_rows(exports, attendance_repo, fixed_now):
    _seed_attendance(attendance_repo)

    out = exports.export_attendance("excel", {"statusFilter": "all", "dateFrom": "2024-01-02"}, now=fixed_now)

    assert out.filename == "attendance-report.xlsx"
    assert out.mimetype.endswith("spreadsheetml.sheet")
    df = pd.read_excel(io.BytesIO(out.content), sheet_name="Attendance", dtype=str, keep_default_na=False)
    assert list(df.columns) == ["Date", "Member", "Story", "Role", "Status", "Replaced By"]
    assert df.to_dict(orient="records") == [
        {"Date": "2024-01-03", "Member": "Asha", "Story": "Krishna Leela", "Role": "AV", "Status": "replaced", "Replaced By": "Bina"},
        {"Date": "2024-01-02", "Member": "", "Story": "", "Role": "AV", "Status": "absent", "Replaced By": ""},
    ]


def test_excel_export_has_no_row_cap(exports, attendance_repo, fixed_now):
    _seed_attendance(attendance_repo, count=130)
    out = exports.export_attendance("EXCEL", now=fixed_now)
    df = pd.read_excel(io.BytesIO(out.content), dtype=str, keep_default_na=False)
    assert len(df) == 130


def test_empty_excel_export_keeps_headers(exports, fixed_now):
    out = exports.export_attendance("excel", now=fixed_now)
    df = pd.read_excel(io.BytesIO(out.content), dtype=str, keep_default_na=False)
    assert len(df) == 0
    assert "Replaced By" in df.columns


def test_pdf_export_paginates_and_caps_rows(exports, attendance_repo, fixed_now):
    _seed_attendance(attendance_repo, count=25)
    small = exports.export_attendance("pdf", now=fixed_now)
    assert small.content.startswith(b"%PDF")
    assert small.filename == "attendance-report.pdf"
    assert _page_count(small.content) == 3

    _seed_attendance(attendance_repo, count=150)
    big = exports.export_attendance("pdf", now=fixed_now)
    assert _page_count(big.content) == 10


def test_image_export_is_fixed_size_jpeg(exports, attendance_repo, fixed_now):
    _seed_attendance(attendance_repo, count=60)

    out = exports.export_attendance("image", {"memberFilter": "m1"}, now=fixed_now)

    assert out.mimetype == "image/jpeg"
    assert out.filename == "attendance-report.jpg"
    img = Image.open(io.BytesIO(out.content))
    assert img.format == "JPEG"
    assert img.size == (1200, 1600)


def test_unsupported_format(exports):
    with pytest.raises(UnsupportedFormatError):
        exports.export_attendance("csv")
    with pytest.raises(UnsupportedFormatError):
        exports.export_poll("p1", "docx")


def test_missing_poll_is_not_found(exports):
    with pytest.raises(NotFoundError):
        exports.export_poll("p404", "excel")


def test_poll_excel_has_results_and_summary(exports, polls_repo, fixed_now):
    polls_repo.add(Poll(poll_id="p1", question="Which slot?", options=("Morning", "Evening")))
    polls_repo.add_response("p1", "m1", 0, created_at=datetime(2024, 1, 10, 9, 30))
    polls_repo.add_response("p1", "m9", 1)
    polls_repo.add_response("p1", "m2", 0)

    out = exports.export_poll("p1", "excel", now=fixed_now)

    assert out.filename == "poll-results.xlsx"
    sheets = pd.read_excel(io.BytesIO(out.content), sheet_name=None, dtype=str, keep_default_na=False)
    assert list(sheets) == ["Poll Results", "Summary", "Poll"]
    results = sheets["Poll Results"]
    assert sorted(results["Member Name"]) == ["Asha", "Bina", "Unknown"]
    assert "2024-01-10 09:30" in list(results["Response Time"])
    summary = sheets["Summary"].to_dict(orient="records")
    assert summary == [
        {"Option": "Morning", "Votes": "2", "Percentage": "67"},
        {"Option": "Evening", "Votes": "1", "Percentage": "33"},
    ]


def test_poll_pdf_and_image(exports, polls_repo, fixed_now):
    polls_repo.add(Poll(poll_id="p1", question="Which slot?", options=("Morning", "Evening", "Night")))
    for i in range(40):
        polls_repo.add_response("p1", f"x{i}", i % 3)

    pdf = exports.export_poll("p1", "pdf", now=fixed_now)
    assert pdf.content.startswith(b"%PDF")
    assert _page_count(pdf.content) == 2

    image = exports.export_poll("p1", "image", now=fixed_now)
    assert Image.open(io.BytesIO(image.content)).size == (1200, 1600)


def test_member_sheet_imports_back(exports, other_members_repo):
    out = exports.export_members()
    assert out.filename == "members.xlsx"

    fresh = other_members_repo
    result = MemberService(fresh).import_members_from_excel(io.BytesIO(out.content))

    assert result.success == 2
    assert result.failed == 0
    asha = fresh.get_by_mht_id("100")
    assert asha.is_admin is True
    assert asha.email == "asha@x.org"
    assert fresh.get_by_mht_id("200").mobile == "98765"
