"""
Delete every event, keeping users, roles and event types.

Attendance links go with the events.

Usage:
    python scripts/delete_all_events.py [--yes]
"""

import argparse
import logging
import sys
from pathlib import Path

# Make the backend package importable when run from a checkout
BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BASE_DIR))

from sqlmodel import Session

from schedule_server.db import engine, init_db
from schedule_server.repositories import EventRepository, UserEventRepository

logger = logging.getLogger("delete_all_events")


def delete_all_events(assume_yes: bool = False) -> int:
    init_db()
    with Session(engine) as session:
        events = EventRepository(session)
        events_count = events.count()
        links_count = UserEventRepository(session).count()
        print(f"Found {events_count} events and {links_count} attendance links.")

        if events_count == 0:
            print("Nothing to delete.")
            return 0

        if not assume_yes:
            answer = input(f"Delete all {events_count} events? (yes/no): ")
            if answer.strip().lower() not in ("yes", "y"):
                print("Cancelled.")
                return 0

        events.delete_all()
        print(f"Deleted {events_count} events.")
        return events_count


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--yes", action="store_true", help="skip the confirmation")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    delete_all_events(assume_yes=args.yes)


if __name__ == "__main__":
    main()
