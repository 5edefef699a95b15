"""Point calculation for a predicted scoreline against the final result."""

from __future__ import annotations

EXACT_SCORE_POINTS = 3
TENDENCY_POINTS = 1
MISS_POINTS = 0


def tendency(home: int, away: int) -> int:
    """Return the sign of ``home - away``: 1 home win, 0 draw, -1 away win."""
    diff = home - away
    return (diff > 0) - (diff < 0)


def score_prediction(
    predicted_home: int, predicted_away: int, actual_home: int, actual_away: int
) -> int:
    """Award points for a prediction.

    - exact scoreline: 3 points
    - correct winner or draw with a wrong scoreline: 1 point
    - anything else: 0 points
    """
    if predicted_home == actual_home and predicted_away == actual_away:
        return EXACT_SCORE_POINTS
    if tendency(predicted_home, predicted_away) == tendency(actual_home, actual_away):
        return TENDENCY_POINTS
    return MISS_POINTS
