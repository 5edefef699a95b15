from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Prediction:
    id: int | None
    fixture_id: int
    user_id: int
    predicted_home: int
    predicted_away: int
    points_earned: int = 0


@dataclass
class PredictionView:
    """A prediction joined with the fixture it belongs to."""

    prediction: Prediction
    home_team: str
    away_team: str
    kickoff_utc: datetime
    home_score: int | None
    away_score: int | None
    is_finished: bool


class PredictionsRepo(ABC):
    """Repository interface for predictions."""

    @abstractmethod
    def get_by_id(self, prediction_id: int) -> Optional[Prediction]:
        """Return a prediction by its identifier."""

    @abstractmethod
    def get_for_user(self, fixture_id: int, user_id: int) -> Optional[Prediction]:
        """Return the user's prediction for a fixture, if any."""

    @abstractmethod
    def list_by_fixture(self, fixture_id: int) -> list[Prediction]:
        """List every prediction made for a fixture."""

    @abstractmethod
    def list_for_user(self, user_id: int) -> list[PredictionView]:
        """List the user's predictions joined with fixtures, ordered by kickoff."""

    @abstractmethod
    def insert(self, prediction: Prediction) -> int:
        """Persist a new prediction."""

    @abstractmethod
    def update_scoreline(self, prediction_id: int, predicted_home: int, predicted_away: int) -> None:
        """Replace the predicted scoreline, leaving earned points untouched."""

    @abstractmethod
    def set_points(self, prediction_id: int, points: int) -> None:
        """Store the points earned by a prediction."""

    @abstractmethod
    def total_points(self, user_id: int) -> int:
        """Sum the points earned by a user; 0 when there are none."""
