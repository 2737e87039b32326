#!/usr/bin/env python3
"""
Quick checks so the backend can start. Run from backend/:
  python scripts/check_backend.py
"""
import os
import sys
from pathlib import Path

# Run from backend/
backend_dir = Path(__file__).resolve().parent.parent
os.chdir(backend_dir)
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))


def main():
    errors = []

    # 1) .env
    env_file = backend_dir / ".env"
    if not env_file.exists():
        print("WARN backend/.env missing; using defaults (copy .env.example to set ADMIN_SECRET, DATABASE_URL)")
    else:
        print("OK  .env exists")

    # 2) Settings
    try:
        from team_availability.config import settings
        print(f"OK  Settings (window {settings.calendar_year} months {settings.start_month}-{settings.end_month})")
        if not settings.admin_secret:
            print("WARN ADMIN_SECRET is empty: privileged view disabled")
    except Exception as e:
        errors.append(f"Settings: {e}")
        print("FAIL Settings:", e)
        return 1

    # 3) DB connection
    try:
        from sqlalchemy import text
        from team_availability.db.session import engine
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("OK  Database connection (DATABASE_URL)")
    except Exception as e:
        errors.append(f"Database: {e}")
        print("FAIL Database:", e)

    # 4) App import (catches missing deps, bad imports)
    try:
        from team_availability.main import app  # noqa: F401
        print("OK  App import (team_availability.main)")
    except Exception as e:
        errors.append(f"App import: {e}")
        print("FAIL App import:", e)

    if errors:
        print("\n---")
        for e in errors:
            print("•", e)
        return 1

    print("\nAll checks passed. Start with: uvicorn team_availability.main:app --reload --port 8000")
    return 0


if __name__ == "__main__":
    sys.exit(main())
