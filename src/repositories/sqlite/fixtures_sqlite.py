from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from src.logging_config import get_logger

from ..fixtures import Fixture, FixturesRepo

logger = get_logger()

_COLUMNS = "fixture_id, home_team, away_team, kickoff_utc, home_score, away_score, is_finished"


def to_utc_iso(dt: datetime) -> str:
    """Serialise a kickoff; naive values are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="seconds")


def parse_kickoff(value: Any) -> datetime:
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            logger.warning("Unparseable kickoff stored", extra={"kickoff_raw": str(value)})
            dt = datetime.fromtimestamp(0, tz=timezone.utc)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _row_to_fixture(row: Sequence[Any]) -> Fixture:
    # row: (fixture_id, home_team, away_team, kickoff_utc, home_score, away_score, is_finished)
    return Fixture(
        id=int(row[0]),
        home_team=str(row[1]),
        away_team=str(row[2]),
        kickoff_utc=parse_kickoff(row[3]),
        home_score=row[4],
        away_score=row[5],
        is_finished=bool(row[6]),
    )


class FixturesRepoSqlite(FixturesRepo):
    """SQLite implementation of :class:`FixturesRepo`.

    Example:
        >>> from src.db.connection import connect
        >>> conn = connect(":memory:")
        >>> repo = FixturesRepoSqlite(conn)
        >>> fixture_id = repo.insert(Fixture(None, "A", "B", datetime(2025, 3, 8, 15, 30)))
        >>> repo.get_by_id(fixture_id).is_finished
        False
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._conn.execute("PRAGMA foreign_keys = ON;")
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS fixtures (
                fixture_id INTEGER PRIMARY KEY,
                home_team TEXT NOT NULL,
                away_team TEXT NOT NULL,
                kickoff_utc TEXT NOT NULL,
                home_score INTEGER CHECK(home_score >= 0),
                away_score INTEGER CHECK(away_score >= 0),
                is_finished INTEGER NOT NULL DEFAULT 0 CHECK(is_finished IN (0,1)),
                CHECK (
                    (is_finished = 1 AND home_score IS NOT NULL AND away_score IS NOT NULL)
                    OR (is_finished = 0 AND home_score IS NULL AND away_score IS NULL)
                )
            )
            """
        )
        self._conn.execute(
            "CREATE INDEX IF NOT EXISTS ix_fixtures_kickoff ON fixtures(kickoff_utc)"
        )

    def get_by_id(self, fixture_id: int) -> Optional[Fixture]:
        cur = self._conn.execute(
            f"SELECT {_COLUMNS} FROM fixtures WHERE fixture_id = ?",
            (fixture_id,),
        )
        row = cur.fetchone()
        if row:
            return _row_to_fixture(row)
        return None

    def list_all(self) -> list[Fixture]:
        cur = self._conn.execute(
            f"SELECT {_COLUMNS} FROM fixtures ORDER BY kickoff_utc ASC, fixture_id ASC"
        )
        return [_row_to_fixture(r) for r in cur.fetchall()]

    def insert(self, fixture: Fixture) -> int:
        if (fixture.home_score is None) != (fixture.away_score is None):
            raise ValueError("home_score and away_score must be set together")
        finished = fixture.home_score is not None
        cur = self._conn.execute(
            """
            INSERT INTO fixtures (fixture_id, home_team, away_team, kickoff_utc, home_score, away_score, is_finished)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                fixture.id,
                fixture.home_team,
                fixture.away_team,
                to_utc_iso(fixture.kickoff_utc),
                fixture.home_score,
                fixture.away_score,
                int(finished),
            ),
        )
        rowid = cur.lastrowid
        if rowid is None:
            raise RuntimeError("SQLite insert failed: no lastrowid (table: fixtures)")
        return int(rowid)

    def record_result(self, fixture_id: int, home_score: int, away_score: int) -> None:
        self._conn.execute(
            """
            UPDATE fixtures SET home_score = ?, away_score = ?, is_finished = 1
            WHERE fixture_id = ?
            """,
            (home_score, away_score, fixture_id),
        )

    def count(self) -> int:
        row = self._conn.execute("SELECT COUNT(*) FROM fixtures").fetchone()
        return int(row[0])
