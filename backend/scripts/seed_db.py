#!/usr/bin/env python3
"""Insert the initial roster (ten people, a few marks) when the people table is empty.
Run from backend: python scripts/seed_db.py
"""
import sys
from pathlib import Path

# Ensure backend is on path when run as script
backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from team_availability.db.session import SessionLocal, create_all
from team_availability.services.seed_service import seed_if_empty


def main():
    create_all()
    db = SessionLocal()
    try:
        if seed_if_empty(db):
            print("Database seeded.")
        else:
            print("People already exist; nothing seeded.")
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
