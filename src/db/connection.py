"""SQLite connection helpers: opening, schema bootstrap and transactions."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from src.domain.errors import StorageError
from src.logging_config import get_logger

logger = get_logger()


def connect(db_path: str | Path, *, check_same_thread: bool = True) -> sqlite3.Connection:
    """Open a connection in autocommit mode; writes go through :func:`transaction`."""
    path = str(db_path)
    if path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path, isolation_level=None, check_same_thread=check_same_thread)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    conn.execute("PRAGMA busy_timeout = 30000;")
    return conn


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Run the enclosed statements as one unit: commit on success, roll back on error.

    ``BEGIN IMMEDIATE`` takes the write lock up front so reads made inside the
    block cannot go stale before the writes that depend on them.
    """
    conn.execute("BEGIN IMMEDIATE")
    try:
        yield conn
    except BaseException:
        conn.rollback()
        raise
    else:
        try:
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Translate ``sqlite3.Error`` raised in the block into :class:`StorageError`."""
    try:
        yield
    except sqlite3.Error as exc:
        logger.error(
            "Storage failure",
            extra={"operation": operation, "error": f"{type(exc).__name__}: {exc}"},
        )
        raise StorageError(f"Storage failure during {operation}") from exc


def ensure_schema(conn: sqlite3.Connection) -> None:
    # Programmatic schema init via repos so it always matches code
    from src.repositories.sqlite.fixtures_sqlite import FixturesRepoSqlite
    from src.repositories.sqlite.predictions_sqlite import PredictionsRepoSqlite

    FixturesRepoSqlite(conn)
    PredictionsRepoSqlite(conn)


def init_database(conn: sqlite3.Connection, *, seed: bool = True) -> int:
    """Create the schema and, if requested, seed demo fixtures into an empty table.

    Returns the number of fixtures inserted by the seed.
    """
    from src.db.seed import seed_demo_fixtures

    with storage_errors("init_database"):
        ensure_schema(conn)
        return seed_demo_fixtures(conn) if seed else 0
