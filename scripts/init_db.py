from __future__ import annotations

import argparse
import sys
from pathlib import Path


def main() -> int:
    # Ensure project root (containing 'src') is importable
    project_root = Path(__file__).resolve().parents[1]
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))

    from src.config.settings import settings
    from src.db.connection import connect, init_database

    parser = argparse.ArgumentParser(description="Initialize SQLite database schema")
    parser.add_argument(
        "--db",
        default=str(settings.db_path),
        help="Path to SQLite DB file (will be created if missing)",
    )
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Skip inserting the demo fixtures into an empty database",
    )
    args = parser.parse_args()

    db_path = Path(args.db).resolve()
    conn = connect(db_path)
    try:
        seeded = init_database(conn, seed=not args.no_seed)
    finally:
        conn.close()

    print(f"Initialized schema at: {db_path}")
    if seeded:
        print(f"Inserted {seeded} demo fixtures.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
