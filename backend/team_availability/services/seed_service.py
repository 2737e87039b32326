"""
Initial roster: ten people and a few known unavailable dates.

Inserted once, only when the people table is empty. Seeded people have no secret;
each claims one on first login (see auth_service).
"""
import logging

from sqlalchemy.orm import Session

from team_availability.models.availability_mark import AvailabilityMark
from team_availability.models.person import Person
from team_availability.services.identity_store import add_person

logger = logging.getLogger(__name__)

SEED_PEOPLE: list[dict[str, str]] = [
    {"id": "1", "name": "Jan", "color": "#3b82f6"},
    {"id": "2", "name": "Kevin", "color": "#ef4444"},
    {"id": "3", "name": "Dom", "color": "#10b981"},
    {"id": "4", "name": "Stephan", "color": "#f59e0b"},
    {"id": "5", "name": "David", "color": "#8b5cf6"},
    {"id": "6", "name": "Niko", "color": "#ec4899"},
    {"id": "7", "name": "Luki", "color": "#06b6d4"},
    {"id": "8", "name": "Julian", "color": "#f97316"},
    {"id": "9", "name": "Florian", "color": "#6366f1"},
    {"id": "10", "name": "Mike", "color": "#84cc16"},
]

SEED_UNAVAILABILITY: list[tuple[str, str]] = [
    ("1", "2026-05-01"),
    ("1", "2026-05-02"),
    ("1", "2026-05-30"),
    ("1", "2026-06-12"),
    ("1", "2026-07-17"),
    ("1", "2026-08-14"),
    ("2", "2026-05-30"),
    ("2", "2026-06-25"),
    ("2", "2026-08-14"),
    ("2", "2026-09-05"),
    ("3", "2026-05-30"),
    ("3", "2026-08-22"),
]


def seed_if_empty(db: Session) -> bool:
    """Insert the roster in one transaction. Returns False (no-op) when any person exists."""
    if db.query(Person).count() > 0:
        return False
    try:
        for p in SEED_PEOPLE:
            add_person(db, p["name"], None, person_id=p["id"], color=p["color"])
        for person_id, date in SEED_UNAVAILABILITY:
            db.add(AvailabilityMark(person_id=person_id, date=date))
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Database seeded: %s people, %s marks", len(SEED_PEOPLE), len(SEED_UNAVAILABILITY))
    return True
