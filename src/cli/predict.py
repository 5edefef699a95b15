from __future__ import annotations

import argparse
from contextlib import closing
from typing import Sequence

from src.application.services.predictions_service import PredictionsService
from src.cli._common import add_db_argument, open_db, report_error
from src.config.settings import settings
from src.domain.errors import TippspielError
from src.domain.value_objects.enums import SubmissionOutcome


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Submit or update a score prediction")
    add_db_argument(p)
    p.add_argument("--fixture", type=int, required=True, help="Fixture id")
    p.add_argument("--home", type=int, required=True, help="Predicted home goals")
    p.add_argument("--away", type=int, required=True, help="Predicted away goals")
    p.add_argument(
        "--user",
        type=int,
        default=settings.default_user_id,
        help=f"User id (default: {settings.default_user_id})",
    )
    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        with closing(open_db(args.db)) as conn:
            result = PredictionsService(conn).submit_prediction(
                args.fixture, args.user, args.home, args.away
            )
    except TippspielError as exc:
        return report_error(exc)

    verb = "saved" if result.outcome is SubmissionOutcome.CREATED else "updated"
    p = result.prediction
    print(f"Prediction {verb}: fixture {p.fixture_id} -> {p.predicted_home}:{p.predicted_away} (id={p.id})")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
