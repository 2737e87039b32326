"""
Admin: remove a person (cascade to their marks) and export the full snapshot.
Every route requires X-Admin-Secret.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from team_availability.api.deps import require_admin
from team_availability.db.session import get_db
from team_availability.services.admin_service import export_snapshot, remove_identity

router = APIRouter(dependencies=[Depends(require_admin)])


@router.delete("/admin/people/{person_id}")
def delete_person(
    person_id: str,
    confirm: str | None = Query(None, description="Display name of the person, to confirm"),
    db: Session = Depends(get_db),
) -> dict:
    """
    Irreversible: delete all availability of the person, then the person.
    Without a matching `confirm` nothing is deleted (409 confirmation_required).
    """
    result = remove_identity(db, person_id, confirm)
    return {"ok": True, **result}


@router.get("/admin/export")
def export(db: Session = Depends(get_db)) -> dict:
    """People and everyone's availability as one JSON document."""
    return export_snapshot(db)
