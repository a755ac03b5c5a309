from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, BinaryIO, Iterable, Mapping, Optional

import pandas as pd

from ..common.datetime_utils import coerce_date
from ..common.validators import blank_to_none, parse_bool, require_non_empty
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import ImportResult, Member
from .repository import MemberRepository

logger = logging.getLogger(__name__)

# Spreadsheet layout shared by member export and import.
MEMBER_SHEET_COLUMNS = ["MHT ID", "Name", "Email", "Mobile", "Birthday", "G-Day", "Is Admin"]


@dataclass(frozen=True)
class SessionMember:
    """What we store into the Flask session after login."""

    member_id: str
    name: str
    is_admin: bool


def _split_name(name: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    parts = (name or "").split(" ")
    return (parts[0] or None), (" ".join(parts[1:]) or None)


def _parse_date_field(value: Any, field_name: str):
    try:
        return coerce_date(blank_to_none(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date") from None


class AuthService:
    """Use case: log a member in with email-or-mobile plus MHT ID."""

    def __init__(self, members: MemberRepository):
        self._members = members

    def login(self, email_or_mobile: str, mht_id: str) -> SessionMember:
        if not (email_or_mobile or "").strip() or not (mht_id or "").strip():
            raise ValidationError("Missing credentials")

        member = self._members.find_by_login(email_or_mobile=email_or_mobile.strip(), mht_id=mht_id.strip())
        if not member:
            raise AuthenticationError("Invalid credentials")

        if not member.user_id:
            # Two separate writes; a failure in between leaves an unlinked identity row.
            first, last = _split_name(member.name)
            user_id = self._members.create_user(email=member.email, first_name=first, last_name=last)
            self._members.update(member.member_id, {"user_id": user_id})
            logger.info("provisioned login identity for member %s", member.member_id)

        return SessionMember(member_id=member.member_id, name=member.name, is_admin=member.is_admin)


class MemberService:
    """Use case: manage members (admin) and member profiles."""

    def __init__(self, members: MemberRepository):
        self._members = members

    def list_members(self) -> list[Member]:
        return list(self._members.list_all())

    def get_member(self, member_id: str) -> Member:
        member = self._members.get_by_id(member_id)
        if not member:
            raise NotFoundError("Member not found")
        return member

    def create_member(
        self,
        *,
        mht_id: str,
        name: str,
        email: Optional[str] = None,
        mobile: Optional[str] = None,
        birthday: Any = None,
        g_day: Any = None,
        is_admin: bool = False,
        user_id: Optional[str] = None,
    ) -> Member:
        mht_id = require_non_empty(mht_id, "MHT ID")
        name = require_non_empty(name, "Name")
        email = blank_to_none(email)
        if self._members.get_by_mht_id(mht_id):
            raise ValidationError(f"MHT ID {mht_id} already exists")

        birthday = _parse_date_field(birthday, "Birthday")
        g_day = _parse_date_field(g_day, "G-Day")

        if not user_id:
            first, last = _split_name(name)
            user_id = self._members.create_user(email=email, first_name=first, last_name=last)

        member = self._members.create(
            mht_id=mht_id,
            name=name,
            email=email,
            mobile=blank_to_none(mobile),
            birthday=birthday,
            g_day=g_day,
            is_admin=parse_bool(is_admin),
            user_id=user_id,
        )
        logger.info("member created: %s (%s)", member.name, member.mht_id)
        return member

    def update_profile(self, member_id: str, payload: Mapping[str, Any]) -> Member:
        """Self-service edit: only personal fields, blanks cleared to NULL."""
        changes = {
            "name": require_non_empty(payload.get("name"), "Name"),
            "email": blank_to_none(payload.get("email")),
            "mobile": blank_to_none(payload.get("mobile")),
            "birthday": _parse_date_field(payload.get("birthday"), "Birthday"),
            "g_day": _parse_date_field(payload.get("gDay"), "G-Day"),
        }
        updated = self._members.update(member_id, changes)
        if not updated:
            raise NotFoundError("Member not found")
        return updated

    def update_member(self, member_id: str, payload: Mapping[str, Any]) -> Member:
        field_map = {
            "mhtId": "mht_id",
            "name": "name",
            "email": "email",
            "mobile": "mobile",
            "birthday": "birthday",
            "gDay": "g_day",
            "isAdmin": "is_admin",
        }
        changes: dict[str, Any] = {}
        for key, column in field_map.items():
            if key not in payload:
                continue
            value = payload[key]
            if column in ("mht_id", "name"):
                value = require_non_empty(value, key)
            elif column == "is_admin":
                value = parse_bool(value)
            elif column in ("birthday", "g_day"):
                value = _parse_date_field(value, key)
            else:
                value = blank_to_none(value)
            changes[column] = value

        if "mht_id" in changes:
            other = self._members.get_by_mht_id(changes["mht_id"])
            if other and other.member_id != member_id:
                raise ValidationError(f"MHT ID {changes['mht_id']} already exists")

        updated = self._members.update(member_id, changes)
        if not updated:
            raise NotFoundError("Member not found")
        return updated

    def delete_member(self, member_id: str) -> None:
        # Attendance history is left in place; joins degrade to an absent member.
        if not self._members.delete(member_id):
            raise NotFoundError("Member not found")
        logger.info("member deleted: %s", member_id)

    def import_members(self, rows: Iterable[Mapping[str, Any]]) -> ImportResult:
        success = 0
        failed = 0
        errors: list[str] = []

        for row in rows:
            mht_id = str(row.get("MHT ID") or "").strip()
            name = str(row.get("Name") or "").strip()
            if not mht_id or not name:
                failed += 1
                errors.append(f"Row with MHT ID {mht_id or 'N/A'}: MHT ID and Name are required")
                continue
            if self._members.get_by_mht_id(mht_id):
                failed += 1
                errors.append(f"MHT ID {mht_id}: Already exists")
                continue

            try:
                self.create_member(
                    mht_id=mht_id,
                    name=name,
                    email=row.get("Email"),
                    mobile=row.get("Mobile"),
                    birthday=row.get("Birthday"),
                    g_day=row.get("G-Day"),
                    is_admin=str(row.get("Is Admin") or "NO").strip().upper() == "YES",
                )
                success += 1
            except ValidationError as e:
                failed += 1
                errors.append(f"MHT ID {mht_id}: {e}")
            except Exception as e:
                logger.exception("member import failed for MHT ID %s", mht_id)
                failed += 1
                errors.append(f"Error processing row: {e}")

        logger.info("member import finished: %d created, %d failed", success, failed)
        return ImportResult(success=success, failed=failed, errors=errors)

    def import_members_from_excel(self, stream: BinaryIO) -> ImportResult:
        try:
            df = pd.read_excel(stream, sheet_name=0, dtype=str)
        except Exception as e:
            raise ValidationError(f"Could not read spreadsheet: {e}") from None
        df = df.fillna("")
        return self.import_members(df.to_dict(orient="records"))
