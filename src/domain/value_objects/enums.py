from enum import Enum


class FixtureState(str, Enum):
    OPEN = "OPEN"
    FINISHED = "FINISHED"


class SubmissionOutcome(str, Enum):
    CREATED = "CREATED"
    UPDATED = "UPDATED"
