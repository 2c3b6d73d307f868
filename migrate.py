#!/usr/bin/env python3
"""
Run Alembic migrations against the configured database.

Usage:
    python migrate.py current                      # Show current migration
    python migrate.py upgrade head                 # Apply all migrations
    python migrate.py downgrade -1                 # Downgrade one migration
    python migrate.py revision -m "Description"    # New migration (--autogenerate is added automatically)
    python migrate.py history                      # Show migration history
"""

import sys
from pathlib import Path

from alembic.config import main as alembic_main
from dotenv import load_dotenv

load_dotenv(override=True)

CONFIG_PATH = Path(__file__).parent / "migrations" / "alembic.ini"


def main(argv: list[str]) -> None:
    args = list(argv)
    if args and args[0] == "revision" and "--autogenerate" not in args:
        args.insert(1, "--autogenerate")

    alembic_main(argv=["-c", str(CONFIG_PATH), *args])


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    main(sys.argv[1:])
