from __future__ import annotations

import argparse
import sqlite3
import sys
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.config.settings import settings
from src.db.connection import connect, init_database
from src.domain.errors import TippspielError


def add_db_argument(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--db",
        default=str(settings.db_path),
        help=f"Path to SQLite DB file (default: {settings.db_path})",
    )


def open_db(path: str) -> sqlite3.Connection:
    conn = connect(path)
    init_database(conn, seed=settings.seed_demo_data)
    return conn


def fmt_kickoff(dt: datetime, tz: str) -> str:
    try:
        return dt.astimezone(ZoneInfo(tz)).isoformat(timespec="minutes")
    except (ZoneInfoNotFoundError, ValueError):
        return dt.isoformat(timespec="minutes")


def fmt_score(home: int | None, away: int | None) -> str:
    if home is None or away is None:
        return "-:-"
    return f"{home}:{away}"


def report_error(exc: TippspielError) -> int:
    print(f"Error: {exc.message}", file=sys.stderr)
    return 1
