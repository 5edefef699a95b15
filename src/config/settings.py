"""Application settings for the Tippspiel backend.

Environment variables are loaded from a ``.env`` file using ``python-dotenv``
and exposed through an immutable Pydantic settings object.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# Load environment variables from a .env file if present
load_dotenv()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_DB_PATH = Path("data") / "tippspiel.sqlite3"
DEFAULT_USER_ID = 1
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_CORS_ORIGINS: tuple[str, ...] = ("*",)


class Settings(BaseModel):
    """Immutable settings object used across the application."""

    db_path: Path = DEFAULT_DB_PATH
    default_user_id: int = Field(default=DEFAULT_USER_ID, ge=1)
    seed_demo_data: bool = True
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS

    model_config = ConfigDict(frozen=True)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    raise RuntimeError(f"{name} must be a boolean flag, got {raw!r}")


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    if not items:
        raise RuntimeError(f"{name} must list at least one origin")
    return items


def _build_settings() -> Settings:
    """Construct the ``Settings`` instance based on environment variables."""

    user_id = _env_int("TIPPSPIEL_USER_ID", DEFAULT_USER_ID)
    if user_id < 1:
        raise RuntimeError("TIPPSPIEL_USER_ID must be a positive integer")
    port = _env_int("TIPPSPIEL_PORT", DEFAULT_PORT)
    if not 1 <= port <= 65535:
        raise RuntimeError("TIPPSPIEL_PORT must be between 1 and 65535")

    return Settings(
        db_path=Path(os.getenv("TIPPSPIEL_DB_PATH") or DEFAULT_DB_PATH),
        default_user_id=user_id,
        seed_demo_data=_env_bool("TIPPSPIEL_SEED_DEMO", True),
        host=os.getenv("TIPPSPIEL_HOST") or DEFAULT_HOST,
        port=port,
        cors_origins=_env_list("TIPPSPIEL_CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
    )


# Public settings instance
settings = _build_settings()
