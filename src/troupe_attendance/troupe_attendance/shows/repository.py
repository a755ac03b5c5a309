from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Show


class ShowRepository(Protocol):
    def get_by_id(self, show_id: str) -> Optional[Show]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Show]:
        """Newest date first."""
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def create(self, fields: Mapping[str, Any]) -> Show:
        """`fields` uses Show attribute names (minus show_id)."""
        raise NotImplementedError

    def update(self, show_id: str, changes: Mapping[str, Any]) -> Optional[Show]:
        raise NotImplementedError

    def delete(self, show_id: str) -> bool:
        raise NotImplementedError
