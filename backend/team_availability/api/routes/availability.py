"""
Availability marks: read one person's dates, set/clear one date, and the privileged
aggregate (all marks + conflict classification).

PUT /availability/{person_id}/{date}    -> SetUnavailable (insert if absent)
DELETE /availability/{person_id}/{date} -> ClearUnavailable (delete if present)
Both are idempotent and answer {"ok": true, "changed": bool}.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from team_availability.api.deps import get_window, require_admin, require_owner
from team_availability.core.calendar_window import CalendarWindow
from team_availability.db.session import get_db
from team_availability.domain import ClearUnavailable, SetUnavailable
from team_availability.models.person import Person
from team_availability.services.availability_store import all_marks_by_person, apply_change, dates_for_person
from team_availability.services.conflicts import ConflictMode, highlight_states, is_flagged

router = APIRouter()


@router.get("/availability", dependencies=[Depends(require_admin)])
def all_availability(db: Session = Depends(get_db)) -> dict[str, list[str]]:
    """person_id -> dates, for every person (privileged view)."""
    return all_marks_by_person(db)


@router.get("/availability/{person_id}")
def person_availability(person_id: str, db: Session = Depends(get_db)) -> list[str]:
    """Dates one person is unavailable, sorted."""
    return dates_for_person(db, person_id)


@router.put("/availability/{person_id}/{date}")
def set_unavailable(
    date: str,
    person: Person = Depends(require_owner),
    db: Session = Depends(get_db),
    window: CalendarWindow = Depends(get_window),
) -> dict:
    changed = apply_change(db, SetUnavailable(person_id=person.id, date=date), window)
    return {"ok": True, "changed": changed}


@router.delete("/availability/{person_id}/{date}")
def clear_unavailable(
    date: str,
    person: Person = Depends(require_owner),
    db: Session = Depends(get_db),
    window: CalendarWindow = Depends(get_window),
) -> dict:
    changed = apply_change(db, ClearUnavailable(person_id=person.id, date=date), window)
    return {"ok": True, "changed": changed}


@router.get("/conflicts", dependencies=[Depends(require_admin)])
def conflicts(
    mode: ConflictMode = Query(ConflictMode.ANY),
    db: Session = Depends(get_db),
    window: CalendarWindow = Depends(get_window),
) -> dict:
    """
    Highlight state for every date in the window, and the dates flagged under `mode`.
    states: none = nobody unavailable, any = some, all = every person.
    """
    snapshot = all_marks_by_person(db)
    states = highlight_states(snapshot, window.dates())
    return {
        "mode": mode.value,
        "participants": len(snapshot),
        "flagged": [d for d, s in states.items() if is_flagged(s, mode)],
        "states": {d: s.value for d, s in states.items()},
    }
