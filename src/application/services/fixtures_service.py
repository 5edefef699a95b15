from __future__ import annotations

import sqlite3

from src.db.connection import storage_errors
from src.repositories.fixtures import Fixture, FixturesRepo
from src.repositories.sqlite.fixtures_sqlite import FixturesRepoSqlite


class FixtureCatalog:
    """Read-only view over the stored fixtures."""

    def __init__(self, conn: sqlite3.Connection, repo: FixturesRepo | None = None) -> None:
        self._repo = repo if repo is not None else FixturesRepoSqlite(conn)

    def list_all(self) -> list[Fixture]:
        """Return every fixture ordered by kickoff ascending."""
        with storage_errors("list_fixtures"):
            return self._repo.list_all()
