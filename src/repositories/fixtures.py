from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from src.domain.value_objects.enums import FixtureState


@dataclass
class Fixture:
    """A scheduled match between two named teams."""

    id: int | None
    home_team: str
    away_team: str
    kickoff_utc: datetime
    home_score: int | None = None
    away_score: int | None = None
    is_finished: bool = False

    @property
    def state(self) -> FixtureState:
        return FixtureState.FINISHED if self.is_finished else FixtureState.OPEN


class FixturesRepo(ABC):
    """Abstract repository interface for :class:`Fixture` entities."""

    @abstractmethod
    def get_by_id(self, fixture_id: int) -> Optional[Fixture]:
        """Return a fixture by its identifier if present."""

    @abstractmethod
    def list_all(self) -> list[Fixture]:
        """List every fixture ordered by kickoff ascending."""

    @abstractmethod
    def insert(self, fixture: Fixture) -> int:
        """Persist a new fixture and return the assigned identifier."""

    @abstractmethod
    def record_result(self, fixture_id: int, home_score: int, away_score: int) -> None:
        """Store the final scoreline and mark the fixture finished."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored fixtures."""
