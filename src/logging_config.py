"""JSON logging for the Tippspiel backend.

Every module logs through the ``tippspiel`` logger returned by
:func:`get_logger`. Records are rendered as one JSON object per line; keys
passed through ``extra=`` land under ``"extra"`` except ``request_id``, which
the HTTP layer attaches to correlate lines of one request and is kept at the
top level.

``TIPPSPIEL_LOG_FILE`` picks the rotating log file (``logs/app.log`` by
default); set it to an empty string to log to stderr only.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

LOG_NAME = "tippspiel"
DEFAULT_LOG_FILE = Path("logs/app.log")
MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 5

# Keys promoted out of "extra" into the top level of a log line
TOP_LEVEL_KEYS = ("request_id",)

# Attribute names of a bare LogRecord; anything beyond these came from ``extra=``
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - short description
        line: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extras = {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}
        for key in TOP_LEVEL_KEYS:
            value = extras.pop(key, None)
            if value is not None:
                line[key] = value
        if extras:
            line["extra"] = extras
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def log_file_path() -> Path | None:
    raw = os.getenv("TIPPSPIEL_LOG_FILE")
    if raw is None:
        return DEFAULT_LOG_FILE
    return Path(raw) if raw.strip() else None


def get_logger() -> logging.Logger:
    """Return the project logger, attaching its handlers on first use."""
    logger = logging.getLogger(LOG_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    formatter = JsonFormatter()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(logging.DEBUG)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    path = log_file_path()
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
        )
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    return logger
