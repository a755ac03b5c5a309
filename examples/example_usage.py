"""Using the service layer without Flask: print the admin report figures."""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.troupe_attendance.troupe_attendance.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    stats = container.stats_service.report_stats()
    print(f"members={stats.total_members} average={stats.average_attendance}%")
    for p in stats.top_performers:
        print(f"  top  {p.name}: {p.percentage}%")
    for p in stats.low_performers:
        print(f"  low  {p.name}: {p.percentage}%")


if __name__ == "__main__":
    main()
