from __future__ import annotations

import sqlite3
from typing import Any, Optional, Sequence

from ..predictions import Prediction, PredictionsRepo, PredictionView
from .fixtures_sqlite import parse_kickoff

_COLUMNS = "prediction_id, fixture_id, user_id, predicted_home, predicted_away, points_earned"


def _row_to_prediction(row: Sequence[Any]) -> Prediction:
    return Prediction(
        id=int(row[0]),
        fixture_id=int(row[1]),
        user_id=int(row[2]),
        predicted_home=int(row[3]),
        predicted_away=int(row[4]),
        points_earned=int(row[5]) if row[5] is not None else 0,
    )


class PredictionsRepoSqlite(PredictionsRepo):
    """SQLite implementation of :class:`PredictionsRepo`."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._conn.execute("PRAGMA foreign_keys = ON;")
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS predictions (
                prediction_id INTEGER PRIMARY KEY,
                fixture_id INTEGER NOT NULL,
                user_id INTEGER NOT NULL,
                predicted_home INTEGER NOT NULL CHECK(predicted_home >= 0),
                predicted_away INTEGER NOT NULL CHECK(predicted_away >= 0),
                points_earned INTEGER NOT NULL DEFAULT 0,
                FOREIGN KEY (fixture_id) REFERENCES fixtures(fixture_id)
            )
            """
        )
        # One prediction per (fixture, user)
        self._conn.execute(
            "CREATE UNIQUE INDEX IF NOT EXISTS ux_predictions_fixture_user ON predictions(fixture_id, user_id)"
        )
        self._conn.execute(
            "CREATE INDEX IF NOT EXISTS ix_predictions_user ON predictions(user_id)"
        )

    def get_by_id(self, prediction_id: int) -> Optional[Prediction]:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM predictions WHERE prediction_id = ?",
            (prediction_id,),
        ).fetchone()
        return _row_to_prediction(row) if row else None

    def get_for_user(self, fixture_id: int, user_id: int) -> Optional[Prediction]:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM predictions WHERE fixture_id = ? AND user_id = ?",
            (fixture_id, user_id),
        ).fetchone()
        return _row_to_prediction(row) if row else None

    def list_by_fixture(self, fixture_id: int) -> list[Prediction]:
        cur = self._conn.execute(
            f"SELECT {_COLUMNS} FROM predictions WHERE fixture_id = ? ORDER BY prediction_id",
            (fixture_id,),
        )
        return [_row_to_prediction(r) for r in cur.fetchall()]

    def list_for_user(self, user_id: int) -> list[PredictionView]:
        cur = self._conn.execute(
            """
            SELECT p.prediction_id, p.fixture_id, p.user_id, p.predicted_home, p.predicted_away,
                   p.points_earned, f.home_team, f.away_team, f.kickoff_utc, f.home_score,
                   f.away_score, f.is_finished
            FROM predictions p
            JOIN fixtures f ON p.fixture_id = f.fixture_id
            WHERE p.user_id = ?
            ORDER BY f.kickoff_utc ASC, f.fixture_id ASC
            """,
            (user_id,),
        )
        return [
            PredictionView(
                prediction=_row_to_prediction(r[:6]),
                home_team=str(r[6]),
                away_team=str(r[7]),
                kickoff_utc=parse_kickoff(r[8]),
                home_score=r[9],
                away_score=r[10],
                is_finished=bool(r[11]),
            )
            for r in cur.fetchall()
        ]

    def insert(self, prediction: Prediction) -> int:
        cur = self._conn.execute(
            """
            INSERT INTO predictions (fixture_id, user_id, predicted_home, predicted_away, points_earned)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                prediction.fixture_id,
                prediction.user_id,
                prediction.predicted_home,
                prediction.predicted_away,
                prediction.points_earned,
            ),
        )
        rowid = cur.lastrowid
        if rowid is None:
            raise RuntimeError("SQLite insert failed: no lastrowid (table: predictions)")
        return int(rowid)

    def update_scoreline(self, prediction_id: int, predicted_home: int, predicted_away: int) -> None:
        self._conn.execute(
            "UPDATE predictions SET predicted_home = ?, predicted_away = ? WHERE prediction_id = ?",
            (predicted_home, predicted_away, prediction_id),
        )

    def set_points(self, prediction_id: int, points: int) -> None:
        self._conn.execute(
            "UPDATE predictions SET points_earned = ? WHERE prediction_id = ?",
            (points, prediction_id),
        )

    def total_points(self, user_id: int) -> int:
        row = self._conn.execute(
            "SELECT COALESCE(SUM(points_earned), 0) FROM predictions WHERE user_id = ?",
            (user_id,),
        ).fetchone()
        return int(row[0])
