"""Shared route dependencies: privileged-view check and participant write check."""
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from team_availability.core.calendar_window import CalendarWindow
from team_availability.core.constants import ADMIN_SECRET_HEADER, PARTICIPANT_SECRET_HEADER
from team_availability.db.session import get_db
from team_availability.models.person import Person
from team_availability.services.auth_service import authenticate_admin, check_participant_secret
from team_availability.services.identity_store import require_person
from team_availability.services.store_guard import store_errors


def require_admin(x_admin_secret: str | None = Header(None, alias=ADMIN_SECRET_HEADER)) -> None:
    authenticate_admin(x_admin_secret)


def require_owner(
    person_id: str,
    x_participant_secret: str | None = Header(None, alias=PARTICIPANT_SECRET_HEADER),
    db: Session = Depends(get_db),
) -> Person:
    """The target person, provided the caller holds that person's secret."""
    with store_errors(db, "require_owner"):
        person = require_person(db, person_id)
    check_participant_secret(person, x_participant_secret)
    return person


def get_window() -> CalendarWindow:
    return CalendarWindow.from_settings()
