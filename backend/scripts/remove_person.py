#!/usr/bin/env python3
"""Remove one person and all of their availability. Irreversible.
Run from backend: python scripts/remove_person.py <person_id>
You are asked to type the person's name; there is no flag to skip the prompt.
"""
import argparse
import sys
from pathlib import Path

# Ensure backend is on path when run as script
backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from team_availability.core.errors import AvailabilityError
from team_availability.db.session import SessionLocal
from team_availability.services.admin_service import remove_identity
from team_availability.services.availability_store import dates_for_person
from team_availability.services.identity_store import require_person
from team_availability.services.store_guard import store_errors


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("person_id")
    args = parser.parse_args()

    db = SessionLocal()
    try:
        with store_errors(db, "remove_person"):
            person = require_person(db, args.person_id)
        marks = dates_for_person(db, person.id)
        print(f"About to delete {person.name} (id={person.id}) and {len(marks)} availability marks.")
        confirm = input("Type the name to confirm: ")
        result = remove_identity(db, person.id, confirm)
        print(f"Removed {result['person_id']}: {result['marks_deleted']} marks deleted.")
    except AvailabilityError as e:
        print(f"Error ({e.code}): {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
