"""Fixture lifecycle: result submission and the prediction lock.

A fixture starts OPEN and becomes FINISHED when its result is submitted.
Finishing rescores every prediction for the fixture in the same transaction,
so a failure part-way leaves neither the result nor any points behind.
Re-submitting a result overwrites the scoreline and recomputes all points.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass

from src.application.validation import ensure_id, ensure_score
from src.db.connection import storage_errors, transaction
from src.domain.errors import FixtureNotFoundError
from src.domain.scoring import score_prediction
from src.logging_config import get_logger
from src.repositories.fixtures import Fixture, FixturesRepo
from src.repositories.predictions import PredictionsRepo
from src.repositories.sqlite.fixtures_sqlite import FixturesRepoSqlite
from src.repositories.sqlite.predictions_sqlite import PredictionsRepoSqlite

logger = get_logger()


@dataclass(frozen=True)
class ResultSummary:
    fixture_id: int
    home_score: int
    away_score: int
    predictions_scored: int


class FixtureLifecycleService:
    def __init__(
        self,
        conn: sqlite3.Connection,
        fixtures: FixturesRepo | None = None,
        predictions: PredictionsRepo | None = None,
    ) -> None:
        self._conn = conn
        self._fixtures = fixtures if fixtures is not None else FixturesRepoSqlite(conn)
        self._predictions = (
            predictions if predictions is not None else PredictionsRepoSqlite(conn)
        )

    def _require_fixture(self, fixture_id: int) -> Fixture:
        fixture = self._fixtures.get_by_id(fixture_id)
        if fixture is None:
            raise FixtureNotFoundError(fixture_id)
        return fixture

    def can_accept_prediction(self, fixture_id: int) -> bool:
        """True unless the fixture is finished; raises if it does not exist."""
        ensure_id("fixture_id", fixture_id)
        with storage_errors("can_accept_prediction"):
            return not self._require_fixture(fixture_id).is_finished

    def submit_result(self, fixture_id: int, home_score: int, away_score: int) -> ResultSummary:
        ensure_id("fixture_id", fixture_id)
        ensure_score("home_score", home_score)
        ensure_score("away_score", away_score)

        with storage_errors("submit_result"), transaction(self._conn):
            self._require_fixture(fixture_id)
            self._fixtures.record_result(fixture_id, home_score, away_score)
            predictions = self._predictions.list_by_fixture(fixture_id)
            for p in predictions:
                assert p.id is not None
                points = score_prediction(
                    p.predicted_home, p.predicted_away, home_score, away_score
                )
                self._predictions.set_points(p.id, points)

        logger.info(
            "Result recorded",
            extra={
                "fixture_id": fixture_id,
                "home_score": home_score,
                "away_score": away_score,
                "predictions_scored": len(predictions),
            },
        )
        return ResultSummary(
            fixture_id=fixture_id,
            home_score=home_score,
            away_score=away_score,
            predictions_scored=len(predictions),
        )
