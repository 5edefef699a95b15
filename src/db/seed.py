"""Demo fixtures inserted on first start with an empty fixtures table."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone

from src.db.connection import transaction
from src.logging_config import get_logger
from src.repositories.fixtures import Fixture
from src.repositories.sqlite.fixtures_sqlite import FixturesRepoSqlite

logger = get_logger()

DEMO_FIXTURES: list[tuple[str, str, datetime]] = [
    ("FC Bayern München", "Borussia Dortmund", datetime(2025, 3, 8, 15, 30, tzinfo=timezone.utc)),
    ("RB Leipzig", "Bayer 04 Leverkusen", datetime(2025, 3, 9, 15, 30, tzinfo=timezone.utc)),
    ("VfB Stuttgart", "Eintracht Frankfurt", datetime(2025, 3, 9, 17, 30, tzinfo=timezone.utc)),
    (
        "Borussia Mönchengladbach",
        "VfL Wolfsburg",
        datetime(2025, 3, 10, 18, 30, tzinfo=timezone.utc),
    ),
    ("Union Berlin", "SC Freiburg", datetime(2025, 3, 11, 18, 30, tzinfo=timezone.utc)),
]


def seed_demo_fixtures(conn: sqlite3.Connection) -> int:
    """Insert the demo fixtures if no fixture exists yet; return how many were added."""
    repo = FixturesRepoSqlite(conn)
    with transaction(conn):
        if repo.count() > 0:
            return 0
        for home, away, kickoff in DEMO_FIXTURES:
            repo.insert(Fixture(id=None, home_team=home, away_team=away, kickoff_utc=kickoff))
    logger.info("Seeded demo fixtures", extra={"count": len(DEMO_FIXTURES)})
    return len(DEMO_FIXTURES)
