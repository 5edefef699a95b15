from __future__ import annotations

import importlib
import sys
from pathlib import Path
from typing import Any

import pytest

_ENV_VARS = (
    "TIPPSPIEL_DB_PATH",
    "TIPPSPIEL_USER_ID",
    "TIPPSPIEL_SEED_DEMO",
    "TIPPSPIEL_HOST",
    "TIPPSPIEL_PORT",
    "TIPPSPIEL_CORS_ORIGINS",
)


def _reload_settings() -> Any:
    # Remove cached module to force re-evaluation of settings on import
    if "src.config.settings" in sys.modules:
        del sys.modules["src.config.settings"]
    import src.config.settings as settings_module

    importlib.reload(settings_module)
    return settings_module


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Prevent picking up values from a real .env during the test
    monkeypatch.setattr("dotenv.load_dotenv", lambda *a, **k: None, raising=False)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings_module = _reload_settings()
    s = settings_module.settings
    assert s.db_path == settings_module.DEFAULT_DB_PATH
    assert s.default_user_id == 1
    assert s.seed_demo_data is True
    assert (s.host, s.port) == ("127.0.0.1", 3000)
    assert s.cors_origins == ("*",)


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIPPSPIEL_DB_PATH", "/tmp/other.sqlite3")
    monkeypatch.setenv("TIPPSPIEL_USER_ID", "7")
    monkeypatch.setenv("TIPPSPIEL_SEED_DEMO", "off")
    monkeypatch.setenv("TIPPSPIEL_PORT", "8080")

    s = _reload_settings().settings
    assert s.db_path == Path("/tmp/other.sqlite3")
    assert s.default_user_id == 7
    assert s.seed_demo_data is False
    assert s.port == 8080


@pytest.mark.parametrize(
    "name, value",
    [
        ("TIPPSPIEL_USER_ID", "abc"),
        ("TIPPSPIEL_USER_ID", "0"),
        ("TIPPSPIEL_PORT", "70000"),
        ("TIPPSPIEL_SEED_DEMO", "maybe"),
        ("TIPPSPIEL_CORS_ORIGINS", " , "),
    ],
)
def test_malformed_values_raise(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(RuntimeError):
        _reload_settings()


def test_settings_are_frozen() -> None:
    s = _reload_settings().settings
    with pytest.raises(Exception):
        s.port = 1  # type: ignore[misc]


def test_cors_origins_from_comma_list(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIPPSPIEL_CORS_ORIGINS", "http://localhost:5173, https://tipp.example ,")
    s = _reload_settings().settings
    assert s.cors_origins == ("http://localhost:5173", "https://tipp.example")
