from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, new_id
from .model import Role
from .repository import RoleRepository


class MySQLRoleRepository(RoleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "") -> list[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT role_id, name, description, is_active FROM roles {where} ORDER BY name")
            return [
                Role(
                    role_id=str(r["role_id"]),
                    name=r["name"],
                    description=r.get("description"),
                    is_active=bool(r.get("is_active", True)),
                )
                for r in fetchall(cur)
            ]

    def list_active(self) -> Sequence[Role]:
        return self._select("WHERE is_active=1")

    def list_all(self) -> Sequence[Role]:
        return self._select()

    def create(self, *, name: str, description: Optional[str]) -> Role:
        role_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO roles (role_id, name, description) VALUES (%s, %s, %s)",
                (role_id, name, description),
            )
        return Role(role_id=role_id, name=name, description=description)
