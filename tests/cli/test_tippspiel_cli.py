from __future__ import annotations

from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

import src.cli.fixtures as fixtures_cli
import src.cli.points as points_cli
import src.cli.predict as predict_cli
import src.cli.results as results_cli
from src.repositories.fixtures import Fixture


@pytest.fixture
def db(tmp_path: Path) -> str:
    return str(tmp_path / "tippspiel.sqlite3")


def test_fixtures_cli_lists_seeded_fixtures(db: str, capsys: pytest.CaptureFixture[str]) -> None:
    rc = fixtures_cli.main(["--db", db])
    assert rc == 0
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 5
    assert "FC Bayern München vs Borussia Dortmund -:- [OPEN] (id=1)" in out[0]
    assert out[0].startswith("2025-03-08T15:30+00:00")


def test_fixtures_cli_timezone_display(db: str, capsys: pytest.CaptureFixture[str]) -> None:
    try:
        ZoneInfo("Europe/Berlin")
    except ZoneInfoNotFoundError:
        pytest.skip("tz database not available")
    fixtures_cli.main(["--db", db, "--timezone", "Europe/Berlin"])
    first = capsys.readouterr().out.splitlines()[0]
    assert first.startswith("2025-03-08T16:30+01:00")


def test_fixtures_cli_empty(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], db: str) -> None:
    class _FakeCatalog:
        def __init__(self, conn: object) -> None:
            pass

        def list_all(self) -> list[Fixture]:
            return []

    monkeypatch.setattr(fixtures_cli, "FixtureCatalog", _FakeCatalog)
    rc = fixtures_cli.main(["--db", db])
    assert rc == 0
    assert "No fixtures found." in capsys.readouterr().out


def test_predict_then_update(db: str, capsys: pytest.CaptureFixture[str]) -> None:
    assert predict_cli.main(["--db", db, "--fixture", "1", "--home", "2", "--away", "1"]) == 0
    assert "Prediction saved" in capsys.readouterr().out
    assert predict_cli.main(["--db", db, "--fixture", "1", "--home", "0", "--away", "0"]) == 0
    assert "Prediction updated: fixture 1 -> 0:0" in capsys.readouterr().out


def test_predict_unknown_fixture(db: str, capsys: pytest.CaptureFixture[str]) -> None:
    rc = predict_cli.main(["--db", db, "--fixture", "99", "--home", "1", "--away", "0"])
    assert rc == 1
    assert "Fixture 99 not found" in capsys.readouterr().err


def test_predict_non_numeric_argument_exits(db: str) -> None:
    with pytest.raises(SystemExit) as excinfo:
        predict_cli.main(["--db", db, "--fixture", "1", "--home", "two", "--away", "0"])
    assert excinfo.value.code == 2


def test_result_locks_and_scores(db: str, capsys: pytest.CaptureFixture[str]) -> None:
    predict_cli.main(["--db", db, "--fixture", "1", "--home", "2", "--away", "1"])
    predict_cli.main(["--db", db, "--fixture", "2", "--home", "1", "--away", "1"])
    capsys.readouterr()

    assert results_cli.main(["--db", db, "--fixture", "1", "--home", "3", "--away", "0"]) == 0
    assert "1 prediction(s) scored" in capsys.readouterr().out

    rc = predict_cli.main(["--db", db, "--fixture", "1", "--home", "3", "--away", "0"])
    assert rc == 1
    assert "predictions are locked" in capsys.readouterr().err

    assert points_cli.main(["--db", db]) == 0
    out = capsys.readouterr().out
    assert "FC Bayern München vs Borussia Dortmund 3:0 | tip 2:1 -> 1 pt" in out
    assert "RB Leipzig vs Bayer 04 Leverkusen -:- | tip 1:1 -> 0 pt" in out
    assert out.strip().endswith("Total points: 1")


def test_result_unknown_fixture(db: str, capsys: pytest.CaptureFixture[str]) -> None:
    assert results_cli.main(["--db", db, "--fixture", "77", "--home", "1", "--away", "0"]) == 1
    assert "not found" in capsys.readouterr().err


def test_points_for_new_user(db: str, capsys: pytest.CaptureFixture[str]) -> None:
    assert points_cli.main(["--db", db, "--user", "5"]) == 0
    out = capsys.readouterr().out
    assert "No predictions yet." in out and "Total points: 0" in out

    assert points_cli.main(["--db", db, "--user", "5", "--total-only"]) == 0
    assert capsys.readouterr().out.strip() == "Total points: 0"


def test_result_with_oversized_fixture_id(db: str, capsys: pytest.CaptureFixture[str]) -> None:
    rc = results_cli.main(
        ["--db", db, "--fixture", "100000000000000000000", "--home", "1", "--away", "0"]
    )
    assert rc == 1
    assert "fixture_id must be a positive integer" in capsys.readouterr().err
