from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchone, new_id

logger = logging.getLogger(__name__)

SAMPLE_ADMIN_MHT_ID = "MHT001"

SAMPLE_STORIES: dict[str, list[str]] = {
    "Lumpy & Pooh": ["Tiger", "Lumpy", "Pooh", "Smarty", "Jimmy", "Mikey", "Honey Bee"],
    "Sonu & Meow (Aatali J Vat)": ["Sonu", "Meow", "Aman", "Karan", "Mayadidi", "Kudamji", "Mithumiya", "Patangiyu"],
    "Dukh Se Sukh Ki Aur (Shreck & Donkey)": ["Shrek", "Donkey", "Nimo"],
    "Dalo Tarwadi": ["Dalo", "Pasha Patel", "Shethani"],
    "Jealousy Ki Remedy": ["Mr. Trevor", "Poly", "Fiyona", "Sporty", "Flory", "Teacher"],
    "Mashkari Na Jokhamo": ["Dhruv", "Parth", "Mona", "Pinki", "Teacher", "Principal"],
}


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_sql_file(conn_factory: DatabaseConnection, *, path: str | Path) -> int:
    """Run every statement of a schema/seed file; returns the statement count."""
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    count = 0
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
    return count


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> None:
    ensure_database_exists(conn_factory)
    count = apply_sql_file(conn_factory, path=schema_path)
    logger.info("schema applied (%d statements)", count)


def ensure_sample_data(conn_factory: DatabaseConnection) -> None:
    """Idempotent demo data: one admin member (login admin@gnc.org / MHT001) and the stock stories."""

    with db_cursor(conn_factory) as (_, cur):
        cur.execute("SELECT member_id FROM members WHERE mht_id=%s", (SAMPLE_ADMIN_MHT_ID,))
        if fetchone(cur):
            logger.info("sample admin already exists")
        else:
            user_id = new_id()
            cur.execute(
                "INSERT INTO users (user_id, email, first_name, last_name) VALUES (%s, %s, %s, %s)",
                (user_id, "admin@gnc.org", "Admin", "User"),
            )
            cur.execute(
                """
                INSERT INTO members (member_id, mht_id, name, email, mobile, is_admin, user_id)
                VALUES (%s, %s, %s, %s, %s, 1, %s)
                """,
                (new_id(), SAMPLE_ADMIN_MHT_ID, "Admin User", "admin@gnc.org", "9876543210", user_id),
            )
            logger.info("sample admin created (login admin@gnc.org / %s)", SAMPLE_ADMIN_MHT_ID)

        for story_name, characters in SAMPLE_STORIES.items():
            cur.execute("SELECT story_id FROM stories WHERE name=%s", (story_name,))
            if fetchone(cur):
                continue
            story_id = new_id()
            cur.execute(
                "INSERT INTO stories (story_id, name, description) VALUES (%s, %s, %s)",
                (story_id, story_name, f"{story_name} - GNC Puppet Performance"),
            )
            for character in characters:
                cur.execute(
                    "INSERT INTO characters (character_id, story_id, name) VALUES (%s, %s, %s)",
                    (new_id(), story_id, character),
                )
            logger.info("story added: %s", story_name)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
