from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from src.application.services.lifecycle_service import ResultSummary
from src.repositories.fixtures import Fixture
from src.repositories.predictions import Prediction, PredictionView


class ErrorResponse(BaseModel):
    error: str
    message: str
    fields: list[str] = []
    request_id: str | None = None


class FixtureOut(BaseModel):
    id: int
    home_team: str
    away_team: str
    kickoff_utc: datetime
    home_score: int | None
    away_score: int | None
    is_finished: bool

    @classmethod
    def from_fixture(cls, f: Fixture) -> "FixtureOut":
        assert f.id is not None
        return cls(
            id=f.id,
            home_team=f.home_team,
            away_team=f.away_team,
            kickoff_utc=f.kickoff_utc,
            home_score=f.home_score,
            away_score=f.away_score,
            is_finished=f.is_finished,
        )


class PredictionOut(BaseModel):
    id: int
    fixture_id: int
    user_id: int
    predicted_home: int
    predicted_away: int
    points_earned: int

    @classmethod
    def from_prediction(cls, p: Prediction) -> "PredictionOut":
        assert p.id is not None
        return cls(
            id=p.id,
            fixture_id=p.fixture_id,
            user_id=p.user_id,
            predicted_home=p.predicted_home,
            predicted_away=p.predicted_away,
            points_earned=p.points_earned,
        )


class SubmissionOut(BaseModel):
    message: str
    outcome: str
    prediction: PredictionOut


class PredictionViewOut(PredictionOut):
    home_team: str
    away_team: str
    kickoff_utc: datetime
    home_score: int | None
    away_score: int | None
    is_finished: bool

    @classmethod
    def from_view(cls, v: PredictionView) -> "PredictionViewOut":
        base = PredictionOut.from_prediction(v.prediction)
        return cls(
            **base.model_dump(),
            home_team=v.home_team,
            away_team=v.away_team,
            kickoff_utc=v.kickoff_utc,
            home_score=v.home_score,
            away_score=v.away_score,
            is_finished=v.is_finished,
        )


class PointsOut(BaseModel):
    user_id: int
    points: int


class ResultOut(BaseModel):
    message: str
    fixture_id: int
    home_score: int
    away_score: int
    predictions_scored: int

    @classmethod
    def from_summary(cls, s: ResultSummary) -> "ResultOut":
        return cls(
            message="Result saved and points updated",
            fixture_id=s.fixture_id,
            home_score=s.home_score,
            away_score=s.away_score,
            predictions_scored=s.predictions_scored,
        )
