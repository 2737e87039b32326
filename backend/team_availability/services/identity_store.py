"""
Identity Store: participant records (id, display name, color tag, secret).

Only the Authentication Resolver creates rows and only Administrative Removal deletes them.
Lookups by name are case-insensitive through the unique name_key column.
"""
import uuid

from sqlalchemy.orm import Session

from team_availability.core.constants import COLOR_PALETTE
from team_availability.core.errors import NotFound
from team_availability.domain import Identity
from team_availability.models.person import Person


def name_key(name: str) -> str:
    """Case-insensitive lookup key for a display name."""
    return (name or "").strip().casefold()


def list_people(db: Session) -> list[Person]:
    return db.query(Person).order_by(Person.created_at, Person.id).all()


def list_identities(db: Session) -> list[Identity]:
    """All identities in creation order, secrets stripped."""
    return [Identity.from_row(p) for p in list_people(db)]


def get_person(db: Session, person_id: str) -> Person | None:
    return db.query(Person).filter(Person.id == person_id).first()


def require_person(db: Session, person_id: str) -> Person:
    person = get_person(db, person_id)
    if person is None:
        raise NotFound(f"Unknown identity {person_id!r}")
    return person


def find_by_name(db: Session, name: str) -> Person | None:
    return db.query(Person).filter(Person.name_key == name_key(name)).first()


def next_color(db: Session) -> str:
    """Rotate through the palette by creation order."""
    return COLOR_PALETTE[db.query(Person).count() % len(COLOR_PALETTE)]


def add_person(
    db: Session,
    name: str,
    secret: str | None,
    *,
    person_id: str | None = None,
    color: str | None = None,
) -> Person:
    """
    Stage a new Person and flush so the unique name_key constraint is checked now.
    Raises IntegrityError when another row already holds the name; caller owns commit/rollback.
    """
    row = Person(
        id=person_id or str(uuid.uuid4()),
        name=name.strip(),
        name_key=name_key(name),
        color=color or next_color(db),
        secret=secret,
    )
    db.add(row)
    db.flush()
    return row
