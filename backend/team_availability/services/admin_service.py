"""
Admin: remove an identity (marks first, then the person) and export the full snapshot.
Both are privileged-view operations; routes check the admin secret before calling.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from team_availability.core.errors import ConfirmationRequired, StoreUnavailable
from team_availability.services.availability_store import all_marks_by_person, delete_marks_for
from team_availability.services.identity_store import list_identities, name_key, require_person
from team_availability.services.store_guard import store_errors

logger = logging.getLogger(__name__)


def remove_identity(db: Session, person_id: str, confirm: str | None) -> dict[str, int | str]:
    """
    Irreversibly delete one identity and all of its availability marks.

    `confirm` must equal the person's display name (case-insensitive); anything else, the id included,
    raises ConfirmationRequired before any row is touched. Marks are deleted before the
    person; if that step fails nothing is committed and the person is kept.
    """
    with store_errors(db, "remove_identity"):
        person = require_person(db, person_id)
    if not confirm or name_key(confirm) != person.name_key:
        raise ConfirmationRequired(f"Confirm removal by passing the name {person.name!r}")

    person_name = person.name
    try:
        marks_deleted = delete_marks_for(db, person_id)
        db.flush()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("remove_identity: deleting marks for %s failed: %s", person_id, e)
        raise StoreUnavailable("Deleting availability failed; identity was not removed") from e

    try:
        db.delete(person)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("remove_identity: deleting identity %s failed: %s", person_id, e)
        raise StoreUnavailable("Deleting identity failed; nothing was removed") from e

    logger.info("Removed identity %s (%s) and %s availability marks", person_id, person_name, marks_deleted)
    return {"person_id": person_id, "marks_deleted": marks_deleted}


def export_snapshot(db: Session) -> dict:
    """Everything the privileged view sees: people (no secrets) and person_id -> dates."""
    return {
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "people": [i.to_dict() for i in list_identities(db)],
        "availability": all_marks_by_person(db),
    }
