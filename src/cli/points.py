from __future__ import annotations

import argparse
from contextlib import closing
from typing import Sequence

from src.application.services.predictions_service import PredictionsService
from src.cli._common import add_db_argument, fmt_kickoff, fmt_score, open_db, report_error
from src.config.settings import settings
from src.domain.errors import TippspielError


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Show a user's predictions and total points")
    add_db_argument(p)
    p.add_argument(
        "--user",
        type=int,
        default=settings.default_user_id,
        help=f"User id (default: {settings.default_user_id})",
    )
    p.add_argument("--timezone", default="UTC", help="Display timezone (default: UTC)")
    p.add_argument(
        "--total-only", action="store_true", help="Print only the total points"
    )
    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        with closing(open_db(args.db)) as conn:
            svc = PredictionsService(conn)
            views = [] if args.total_only else svc.list_for_user(args.user)
            total = svc.total_points(args.user)
    except TippspielError as exc:
        return report_error(exc)

    if not args.total_only:
        if not views:
            print("No predictions yet.")
        for v in views:
            p = v.prediction
            print(
                f"{fmt_kickoff(v.kickoff_utc, args.timezone)} | {v.home_team} vs {v.away_team} "
                f"{fmt_score(v.home_score, v.away_score)} | "
                f"tip {p.predicted_home}:{p.predicted_away} -> {p.points_earned} pt"
            )
    print(f"Total points: {total}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
