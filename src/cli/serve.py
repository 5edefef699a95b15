from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

import uvicorn

from src.api.app import create_app
from src.config.settings import settings


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Run the Tippspiel HTTP API")
    p.add_argument("--host", default=settings.host, help=f"Bind host (default: {settings.host})")
    p.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    p.add_argument("--db", default=str(settings.db_path), help="Path to SQLite DB file")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = settings.model_copy(update={"db_path": Path(args.db), "host": args.host, "port": args.port})
    uvicorn.run(create_app(cfg), host=cfg.host, port=cfg.port)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
