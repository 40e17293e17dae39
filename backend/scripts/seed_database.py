#!/usr/bin/env python3
"""Create tables and seed default roles, permissions and demo users."""

import argparse
import logging
import sys
from pathlib import Path

# Make the backend package importable when run from a checkout
BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BASE_DIR))

from sqlmodel import Session

from schedule_server.core.config import settings
from schedule_server.db import engine, init_db
from schedule_server.services.seed import seed_database


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--no-demo-users",
        action="store_true",
        help="seed roles and permissions only",
    )
    args = parser.parse_args()

    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    init_db()
    with Session(engine) as session:
        seed_database(session, with_demo_users=not args.no_demo_users)
    print("Seed complete.")


if __name__ == "__main__":
    main()
