from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.troupe_attendance.troupe_attendance.database.bootstrap import apply_sql_file, ensure_sample_data
from src.troupe_attendance.troupe_attendance.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_mapping(dict(settings.DB_CONFIG))
    conn = DatabaseConnection(config)

    apply_sql_file(conn, path=REPO_ROOT / "database" / "seed.sql")
    ensure_sample_data(conn)
    print(f"OK: seeded roles, sample admin and stories -> {config.user}@{config.host}:{config.port}/{config.database}")


if __name__ == "__main__":
    main()
