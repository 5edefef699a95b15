# mypy: ignore-errors

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from src.db.connection import connect
from src.logging_config import LOG_NAME, get_logger
from src.repositories.fixtures import Fixture
from src.repositories.predictions import Prediction
from src.repositories.sqlite.fixtures_sqlite import FixturesRepoSqlite, parse_kickoff
from src.repositories.sqlite.predictions_sqlite import PredictionsRepoSqlite

KICKOFF = datetime(2025, 3, 8, 15, 30, tzinfo=timezone.utc)


def _conn() -> sqlite3.Connection:
    return connect(":memory:")


def test_fixtures_insert_get_and_result() -> None:
    conn = _conn()
    repo = FixturesRepoSqlite(conn)

    fid = repo.insert(Fixture(id=None, home_team="H", away_team="A", kickoff_utc=KICKOFF))
    fetched = repo.get_by_id(fid)
    assert fetched is not None
    assert fetched.home_team == "H" and fetched.kickoff_utc == KICKOFF
    assert fetched.is_finished is False
    assert fetched.home_score is None and fetched.away_score is None

    repo.record_result(fid, 2, 0)
    done = repo.get_by_id(fid)
    assert done.is_finished is True
    assert (done.home_score, done.away_score) == (2, 0)
    assert repo.get_by_id(999) is None
    assert repo.count() == 1
    conn.close()


def test_fixtures_list_all_sorted_by_kickoff_regardless_of_insert_order() -> None:
    conn = _conn()
    repo = FixturesRepoSqlite(conn)
    repo.insert(Fixture(None, "Late", "X", KICKOFF + timedelta(days=2)))
    repo.insert(Fixture(None, "Early", "X", KICKOFF - timedelta(days=1)))
    # +02:00 offset normalises to 13:30 UTC, before KICKOFF
    repo.insert(Fixture(None, "Offset", "X", datetime(2025, 3, 8, 15, 30, tzinfo=timezone(timedelta(hours=2)))))
    repo.insert(Fixture(None, "Middle", "X", KICKOFF))

    names = [f.home_team for f in repo.list_all()]
    assert names == ["Early", "Offset", "Middle", "Late"]
    conn.close()


def test_fixture_scores_must_be_set_together() -> None:
    conn = _conn()
    repo = FixturesRepoSqlite(conn)
    with pytest.raises(ValueError):
        repo.insert(Fixture(None, "H", "A", KICKOFF, home_score=1))
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute(
            "INSERT INTO fixtures (home_team, away_team, kickoff_utc, home_score, is_finished) "
            "VALUES ('H', 'A', '2025-01-01T00:00:00+00:00', 1, 1)"
        )
    conn.close()


def test_parse_kickoff_handles_naive_and_bad_strings() -> None:
    assert parse_kickoff("2025-03-08T15:30:00.000Z") == KICKOFF
    assert parse_kickoff("2025-03-08T15:30:00") == KICKOFF
    assert parse_kickoff("not-a-date") == datetime.fromtimestamp(0, tz=timezone.utc)


def test_unparseable_kickoff_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger()
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.WARNING, logger=LOG_NAME)
    try:
        parse_kickoff("32.13.2025")
    finally:
        logger.removeHandler(caplog.handler)

    (record,) = [r for r in caplog.records if r.getMessage() == "Unparseable kickoff stored"]
    assert record.levelno == logging.WARNING
    assert record.kickoff_raw == "32.13.2025"


def test_predictions_crud_and_join() -> None:
    conn = _conn()
    frepo = FixturesRepoSqlite(conn)
    prepo = PredictionsRepoSqlite(conn)
    f1 = frepo.insert(Fixture(None, "B", "X", KICKOFF + timedelta(days=1)))
    f2 = frepo.insert(Fixture(None, "A", "Y", KICKOFF))

    p1 = prepo.insert(Prediction(None, f1, 1, 2, 1))
    p2 = prepo.insert(Prediction(None, f2, 1, 0, 0))
    prepo.insert(Prediction(None, f2, 2, 1, 1))

    assert prepo.get_by_id(p1).predicted_home == 2
    assert prepo.get_for_user(f2, 1).id == p2
    assert prepo.get_for_user(f1, 2) is None
    assert [p.user_id for p in prepo.list_by_fixture(f2)] == [1, 2]

    prepo.update_scoreline(p1, 3, 3)
    prepo.set_points(p1, 1)
    updated = prepo.get_by_id(p1)
    assert (updated.predicted_home, updated.predicted_away, updated.points_earned) == (3, 3, 1)

    views = prepo.list_for_user(1)
    assert [v.home_team for v in views] == ["A", "B"]
    assert views[1].prediction.points_earned == 1
    assert views[0].is_finished is False
    conn.close()


def test_predictions_unique_per_fixture_and_user() -> None:
    conn = _conn()
    fid = FixturesRepoSqlite(conn).insert(Fixture(None, "H", "A", KICKOFF))
    prepo = PredictionsRepoSqlite(conn)
    prepo.insert(Prediction(None, fid, 1, 1, 0))
    with pytest.raises(sqlite3.IntegrityError):
        prepo.insert(Prediction(None, fid, 1, 2, 0))
    conn.close()


def test_predictions_require_existing_fixture() -> None:
    conn = _conn()
    FixturesRepoSqlite(conn)
    prepo = PredictionsRepoSqlite(conn)
    with pytest.raises(sqlite3.IntegrityError):
        prepo.insert(Prediction(None, 42, 1, 1, 0))
    conn.close()


def test_total_points_is_zero_without_predictions() -> None:
    conn = _conn()
    FixturesRepoSqlite(conn)
    prepo = PredictionsRepoSqlite(conn)
    assert prepo.total_points(7) == 0
    conn.close()


def test_insert_raises_when_lastrowid_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    conn = _conn()
    repo = FixturesRepoSqlite(conn)

    class DummyCur:
        lastrowid = None

    class StubConn:
        def execute(self, *a, **kw):
            return DummyCur()

    monkeypatch.setattr(repo, "_conn", StubConn())
    with pytest.raises(RuntimeError):
        repo.insert(Fixture(None, "H", "A", KICKOFF))
    conn.close()
