from __future__ import annotations

import argparse
from contextlib import closing
from typing import Sequence

from src.application.services.lifecycle_service import FixtureLifecycleService
from src.cli._common import add_db_argument, open_db, report_error
from src.domain.errors import TippspielError


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Record the final score of a fixture and rescore its predictions"
    )
    add_db_argument(p)
    p.add_argument("--fixture", type=int, required=True, help="Fixture id")
    p.add_argument("--home", type=int, required=True, help="Home goals")
    p.add_argument("--away", type=int, required=True, help="Away goals")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        with closing(open_db(args.db)) as conn:
            summary = FixtureLifecycleService(conn).submit_result(
                args.fixture, args.home, args.away
            )
    except TippspielError as exc:
        return report_error(exc)

    print(
        f"Result saved: fixture {summary.fixture_id} ended "
        f"{summary.home_score}:{summary.away_score}, "
        f"{summary.predictions_scored} prediction(s) scored"
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
