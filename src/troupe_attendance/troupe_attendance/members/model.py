from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class Member:
    """A sevarthi (troupe volunteer).

    `mht_id` is the external identifier members log in with; `member_id` is the
    internal key every other table references.
    """

    member_id: str
    mht_id: str
    name: str
    email: Optional[str] = None
    mobile: Optional[str] = None
    birthday: Optional[date] = None
    g_day: Optional[date] = None
    is_admin: bool = False
    user_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.member_id,
            "mhtId": self.mht_id,
            "name": self.name,
            "email": self.email,
            "mobile": self.mobile,
            "birthday": _iso(self.birthday),
            "gDay": _iso(self.g_day),
            "isAdmin": self.is_admin,
            "userId": self.user_id,
        }


@dataclass(frozen=True)
class ImportResult:
    success: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"success": self.success, "failed": self.failed, "errors": list(self.errors)}
