"""Error taxonomy shared by the services, the CLI and the HTTP layer."""

from __future__ import annotations

from typing import Sequence


class TippspielError(Exception):
    """Base for all application-level errors."""

    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(TippspielError):
    """Missing or malformed input; ``fields`` names every offending field."""

    code = "INVALID_INPUT"

    def __init__(self, message: str, fields: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.fields: list[str] = list(fields)


class FixtureNotFoundError(TippspielError):
    code = "NOT_FOUND"

    def __init__(self, fixture_id: int) -> None:
        super().__init__(f"Fixture {fixture_id} not found")
        self.fixture_id = fixture_id


class PredictionLockedError(TippspielError):
    """Raised when a prediction is submitted for a finished fixture."""

    code = "LOCKED"

    def __init__(self, fixture_id: int) -> None:
        super().__init__(
            f"Fixture {fixture_id} is already finished; predictions are locked"
        )
        self.fixture_id = fixture_id


class StorageError(TippspielError):
    code = "STORAGE_FAILURE"
