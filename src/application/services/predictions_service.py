from __future__ import annotations

import sqlite3
from dataclasses import dataclass

from src.application.services.lifecycle_service import FixtureLifecycleService
from src.application.validation import ensure_id, ensure_score
from src.db.connection import storage_errors, transaction
from src.domain.errors import PredictionLockedError
from src.domain.value_objects.enums import SubmissionOutcome
from src.logging_config import get_logger
from src.repositories.predictions import Prediction, PredictionsRepo, PredictionView
from src.repositories.sqlite.predictions_sqlite import PredictionsRepoSqlite

logger = get_logger()


@dataclass(frozen=True)
class SubmissionResult:
    outcome: SubmissionOutcome
    prediction: Prediction


class PredictionsService:
    """One prediction per (fixture, user), kept with upsert semantics.

    The lock check and the write share one transaction so a result recorded in
    between cannot slip past the guard.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        lifecycle: FixtureLifecycleService | None = None,
        repo: PredictionsRepo | None = None,
    ) -> None:
        self._conn = conn
        self._repo = repo if repo is not None else PredictionsRepoSqlite(conn)
        self._lifecycle = (
            lifecycle
            if lifecycle is not None
            else FixtureLifecycleService(conn, predictions=self._repo)
        )

    def submit_prediction(
        self, fixture_id: int, user_id: int, predicted_home: int, predicted_away: int
    ) -> SubmissionResult:
        ensure_id("fixture_id", fixture_id)
        ensure_id("user_id", user_id)
        ensure_score("predicted_home", predicted_home)
        ensure_score("predicted_away", predicted_away)

        with storage_errors("submit_prediction"), transaction(self._conn):
            if not self._lifecycle.can_accept_prediction(fixture_id):
                raise PredictionLockedError(fixture_id)

            existing = self._repo.get_for_user(fixture_id, user_id)
            if existing is not None:
                assert existing.id is not None
                self._repo.update_scoreline(existing.id, predicted_home, predicted_away)
                existing.predicted_home = predicted_home
                existing.predicted_away = predicted_away
                outcome, prediction = SubmissionOutcome.UPDATED, existing
            else:
                prediction = Prediction(
                    id=None,
                    fixture_id=fixture_id,
                    user_id=user_id,
                    predicted_home=predicted_home,
                    predicted_away=predicted_away,
                )
                prediction.id = self._repo.insert(prediction)
                outcome = SubmissionOutcome.CREATED

        logger.info(
            "Prediction saved",
            extra={
                "outcome": outcome.value,
                "prediction_id": prediction.id,
                "fixture_id": fixture_id,
                "user_id": user_id,
            },
        )
        return SubmissionResult(outcome=outcome, prediction=prediction)

    def list_for_user(self, user_id: int) -> list[PredictionView]:
        ensure_id("user_id", user_id)
        with storage_errors("list_predictions"):
            return self._repo.list_for_user(user_id)

    def total_points(self, user_id: int) -> int:
        ensure_id("user_id", user_id)
        with storage_errors("total_points"):
            return self._repo.total_points(user_id)
