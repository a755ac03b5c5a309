from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id, update_columns
from .model import Member
from .repository import MemberRepository

_COLUMNS = "member_id, mht_id, name, email, mobile, birthday, g_day, is_admin, user_id"
_UPDATABLE = ("mht_id", "name", "email", "mobile", "birthday", "g_day", "is_admin", "user_id")


def _row_to_member(r: dict) -> Member:
    return Member(
        member_id=str(r["member_id"]),
        mht_id=r["mht_id"],
        name=r["name"],
        email=r.get("email"),
        mobile=r.get("mobile"),
        birthday=r.get("birthday"),
        g_day=r.get("g_day"),
        is_admin=bool(r.get("is_admin")),
        user_id=r.get("user_id"),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, params: tuple) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE {where} LIMIT 1", params)
            row = fetchone(cur)
            return _row_to_member(row) if row else None

    def get_by_id(self, member_id: str) -> Optional[Member]:
        return self._get_one("member_id=%s", (member_id,))

    def get_by_mht_id(self, mht_id: str) -> Optional[Member]:
        return self._get_one("mht_id=%s", (mht_id,))

    def find_by_login(self, *, email_or_mobile: str, mht_id: str) -> Optional[Member]:
        return self._get_one(
            "(email=%s OR mobile=%s) AND mht_id=%s",
            (email_or_mobile, email_or_mobile, mht_id),
        )

    def list_all(self) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members ORDER BY name")
            return [_row_to_member(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        mht_id: str,
        name: str,
        email: Optional[str],
        mobile: Optional[str],
        birthday: Optional[date],
        g_day: Optional[date],
        is_admin: bool,
        user_id: Optional[str],
    ) -> Member:
        member_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO members (member_id, mht_id, name, email, mobile, birthday, g_day, is_admin, user_id)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                """,
                (member_id, mht_id, name, email, mobile, birthday, g_day, int(bool(is_admin)), user_id),
            )
        return Member(
            member_id=member_id,
            mht_id=mht_id,
            name=name,
            email=email,
            mobile=mobile,
            birthday=birthday,
            g_day=g_day,
            is_admin=bool(is_admin),
            user_id=user_id,
        )

    def update(self, member_id: str, changes: Mapping[str, Any]) -> Optional[Member]:
        changes = dict(changes)
        if "is_admin" in changes:
            changes["is_admin"] = int(bool(changes["is_admin"]))
        found = update_columns(
            self._conn_factory,
            table="members",
            key_column="member_id",
            key=member_id,
            changes=changes,
            allowed=_UPDATABLE,
            touch_updated_at=True,
        )
        return self.get_by_id(member_id) if found else None

    def delete(self, member_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM members WHERE member_id=%s", (member_id,))
            return cur.rowcount > 0

    def create_user(self, *, email: Optional[str], first_name: Optional[str], last_name: Optional[str]) -> str:
        user_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO users (user_id, email, first_name, last_name) VALUES (%s, %s, %s, %s)",
                (user_id, email, first_name, last_name),
            )
        return user_id
