"""Parsing of raw request payloads into typed commands.

Everything here runs before the store is touched; failures raise
:class:`InvalidInputError` naming each offending field.
"""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.domain.errors import InvalidInputError

# Largest value SQLite can bind as INTEGER
MAX_ID = 2**63 - 1
MAX_GOALS = 99


def _reject_bool(value: Any) -> Any:
    # lax mode would read true/false as 1/0
    if isinstance(value, bool):
        raise ValueError("booleans are not accepted as numbers")
    return value


class PredictionCommand(BaseModel):
    fixture_id: int = Field(..., ge=1, le=MAX_ID)
    user_id: int = Field(..., ge=1, le=MAX_ID)
    predicted_home: int = Field(..., ge=0, le=MAX_GOALS)
    predicted_away: int = Field(..., ge=0, le=MAX_GOALS)

    model_config = ConfigDict(frozen=True)

    @field_validator(
        "fixture_id", "user_id", "predicted_home", "predicted_away", mode="before"
    )
    @classmethod
    def _no_bools(cls, v: Any) -> Any:
        return _reject_bool(v)


class ResultCommand(BaseModel):
    fixture_id: int = Field(..., ge=1, le=MAX_ID)
    home_score: int = Field(..., ge=0, le=MAX_GOALS)
    away_score: int = Field(..., ge=0, le=MAX_GOALS)

    model_config = ConfigDict(frozen=True)

    @field_validator("fixture_id", "home_score", "away_score", mode="before")
    @classmethod
    def _no_bools(cls, v: Any) -> Any:
        return _reject_bool(v)


_M = TypeVar("_M", bound=BaseModel)


def _parse(model: type[_M], data: Mapping[str, Any], message: str) -> _M:
    try:
        return model.model_validate(dict(data))
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        raise InvalidInputError(f"{message}: {', '.join(fields)}", fields=fields) from None


def parse_prediction(payload: Mapping[str, Any], *, default_user_id: int) -> PredictionCommand:
    """Validate a prediction payload; ``user_id`` falls back to ``default_user_id``."""
    data = dict(payload)
    if data.get("user_id") is None:
        data["user_id"] = default_user_id
    return _parse(
        PredictionCommand,
        data,
        f"fixture_id, predicted_home and predicted_away are required integers "
        f"(scores 0-{MAX_GOALS})",
    )


def parse_result(fixture_id: Any, payload: Mapping[str, Any]) -> ResultCommand:
    data = dict(payload)
    data["fixture_id"] = fixture_id
    return _parse(
        ResultCommand,
        data,
        f"home_score and away_score must be given as integers between 0 and {MAX_GOALS}",
    )


def ensure_score(name: str, value: Any) -> int:
    """Reject anything but an ``int`` within ``0..MAX_GOALS`` for a score argument."""
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_GOALS:
        raise InvalidInputError(
            f"{name} must be an integer between 0 and {MAX_GOALS}", fields=[name]
        )
    return value


def ensure_id(name: str, value: Any) -> int:
    """Reject anything but an ``int`` within ``1..MAX_ID`` for an identifier."""
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= MAX_ID:
        raise InvalidInputError(f"{name} must be a positive integer", fields=[name])
    return value
