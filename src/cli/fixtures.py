from __future__ import annotations

import argparse
from contextlib import closing
from typing import Iterable, Sequence

from src.application.services.fixtures_service import FixtureCatalog
from src.cli._common import add_db_argument, fmt_kickoff, fmt_score, open_db, report_error
from src.domain.errors import TippspielError
from src.repositories.fixtures import Fixture


def _format_rows(rows: Iterable[Fixture], out_tz: str = "UTC") -> str:
    lines: list[str] = []
    for f in rows:
        lines.append(
            f"{fmt_kickoff(f.kickoff_utc, out_tz)} | {f.home_team} vs {f.away_team} "
            f"{fmt_score(f.home_score, f.away_score)} [{f.state.value}] (id={f.id})"
        )
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="List all fixtures ordered by kickoff")
    add_db_argument(p)
    p.add_argument(
        "--timezone",
        default="UTC",
        help="Timezone for displaying kickoff times (default: UTC)",
    )
    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        with closing(open_db(args.db)) as conn:
            rows = FixtureCatalog(conn).list_all()
    except TippspielError as exc:
        return report_error(exc)

    if not rows:
        print("No fixtures found.")
    else:
        print(_format_rows(rows, out_tz=str(args.timezone)))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
