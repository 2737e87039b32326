"""
Availability Store: set of (person_id, date) pairs meaning "unavailable on date".

The composite primary key is the authority on uniqueness. Inserts go through
INSERT ... ON CONFLICT DO NOTHING so racing writers collapse to one row; deletes of
absent rows are no-ops. Both report whether the row set actually changed.
"""
import logging
from collections import defaultdict

from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from team_availability.core.calendar_window import CalendarWindow
from team_availability.domain import AvailabilityChange, ClearUnavailable, Mark, SetUnavailable
from team_availability.models.availability_mark import AvailabilityMark
from team_availability.services.identity_store import list_people, require_person
from team_availability.services.store_guard import store_errors

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def list_marks(db: Session) -> list[Mark]:
    rows = db.query(AvailabilityMark).order_by(AvailabilityMark.person_id, AvailabilityMark.date).all()
    return [Mark.from_row(r) for r in rows]


def dates_for_person(db: Session, person_id: str) -> list[str]:
    """Sorted dates the person is unavailable. NotFound for an unknown person."""
    with store_errors(db, "dates_for_person"):
        require_person(db, person_id)
        rows = (
            db.query(AvailabilityMark.date)
            .filter(AvailabilityMark.person_id == person_id)
            .order_by(AvailabilityMark.date)
            .all()
        )
    return [r.date for r in rows]


def all_marks_by_person(db: Session) -> dict[str, list[str]]:
    """
    person_id -> sorted dates for every known person (people with no marks map to []).
    Marks whose person no longer exists are left out.
    """
    with store_errors(db, "all_marks_by_person"):
        out: dict[str, list[str]] = {p.id: [] for p in list_people(db)}
        grouped: dict[str, list[str]] = defaultdict(list)
        for m in list_marks(db):
            grouped[m.person_id].append(m.date)
    for person_id, dates in grouped.items():
        if person_id in out:
            out[person_id] = dates
        else:
            logger.warning("Orphaned availability marks for missing person_id=%s (%s rows)", person_id, len(dates))
    return out


def _insert_mark(db: Session, person_id: str, date: str) -> bool:
    insert = _UPSERT_INSERTS.get(db.get_bind().dialect.name)
    if insert is not None:
        stmt = insert(AvailabilityMark).values(person_id=person_id, date=date).on_conflict_do_nothing(
            index_elements=["person_id", "date"]
        )
        return db.execute(stmt).rowcount > 0
    # Other dialects: plain insert inside a savepoint; duplicate is a benign no-op
    try:
        with db.begin_nested():
            db.add(AvailabilityMark(person_id=person_id, date=date))
        return True
    except IntegrityError as e:
        logger.debug("Availability insert skip (duplicate): %s", e)
        return False


def set_unavailable(db: Session, change: SetUnavailable) -> bool:
    """Insert the mark if absent. Returns True when a row was inserted. Does not commit."""
    return _insert_mark(db, change.person_id, change.date)


def clear_unavailable(db: Session, change: ClearUnavailable) -> bool:
    """Delete the mark if present. Returns True when a row was deleted. Does not commit."""
    result = db.execute(
        delete(AvailabilityMark).where(
            AvailabilityMark.person_id == change.person_id,
            AvailabilityMark.date == change.date,
        )
    )
    return result.rowcount > 0


def apply_change(db: Session, change: AvailabilityChange, window: CalendarWindow | None = None) -> bool:
    """
    Validate and durably apply one SetUnavailable/ClearUnavailable, then commit.
    Returns whether the stored set changed; repeating a change is a successful no-op.
    """
    window = window or CalendarWindow.from_settings()
    day = window.validate(change.date)
    change = type(change)(person_id=change.person_id, date=day)
    with store_errors(db, "apply_change"):
        require_person(db, change.person_id)
        if isinstance(change, SetUnavailable):
            changed = set_unavailable(db, change)
        else:
            changed = clear_unavailable(db, change)
        db.commit()
    logger.debug("%s person_id=%s date=%s changed=%s", type(change).__name__, change.person_id, day, changed)
    return changed


def delete_marks_for(db: Session, person_id: str) -> int:
    """Stage deletion of every mark of one person. Returns row count. Does not commit."""
    result = db.execute(delete(AvailabilityMark).where(AvailabilityMark.person_id == person_id))
    return result.rowcount or 0
