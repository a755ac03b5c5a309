from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Member


class MemberRepository(Protocol):
    """Repository interface for members and their login identities.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, member_id: str) -> Optional[Member]:
        raise NotImplementedError

    def get_by_mht_id(self, mht_id: str) -> Optional[Member]:
        raise NotImplementedError

    def find_by_login(self, *, email_or_mobile: str, mht_id: str) -> Optional[Member]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Member]:
        """All members ordered by name."""
        raise NotImplementedError

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
        raise NotImplementedError

    def update(self, member_id: str, changes: Mapping[str, Any]) -> Optional[Member]:
        raise NotImplementedError

    def delete(self, member_id: str) -> bool:
        raise NotImplementedError

    def create_user(self, *, email: Optional[str], first_name: Optional[str], last_name: Optional[str]) -> str:
        """Create the auth identity row a member logs in through; returns its id."""
        raise NotImplementedError
