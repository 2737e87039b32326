"""
People and calendar window: public reads, no secrets.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from team_availability.api.deps import get_window
from team_availability.core.calendar_window import CalendarWindow
from team_availability.db.session import get_db
from team_availability.services.identity_store import list_identities
from team_availability.services.store_guard import store_errors

router = APIRouter()


@router.get("/people")
def list_people(db: Session = Depends(get_db)) -> list[dict[str, str]]:
    """All identities in creation order (id, name, color)."""
    with store_errors(db, "list_people"):
        return [i.to_dict() for i in list_identities(db)]


@router.get("/calendar")
def calendar_window(window: CalendarWindow = Depends(get_window)) -> dict:
    """The supported date window: year, months and every date in it."""
    return window.to_dict()
