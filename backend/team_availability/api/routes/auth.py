"""
Login: participants by name + secret (registering on first use), admin by configured secret.
Failures are returned verbatim: 401 invalid_credential vs 422 missing_field.
"""
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from team_availability.core.constants import MAX_NAME_LENGTH, MAX_SECRET_LENGTH
from team_availability.db.session import get_db
from team_availability.services.auth_service import authenticate, authenticate_admin

router = APIRouter()
logger = logging.getLogger(__name__)


class LoginBody(BaseModel):
    name: str = Field("", max_length=MAX_NAME_LENGTH)
    secret: str = Field("", max_length=MAX_SECRET_LENGTH)


class AdminLoginBody(BaseModel):
    secret: str = Field("", max_length=MAX_SECRET_LENGTH)


@router.post("/auth/login")
def login(body: LoginBody, db: Session = Depends(get_db)) -> dict[str, str]:
    """Return the identity for (name, secret); first login with a new name creates it."""
    return authenticate(db, body.name, body.secret).to_dict()


@router.post("/auth/admin")
def admin_login(body: AdminLoginBody) -> dict[str, bool]:
    """Check the privileged-view secret. The client then sends it as X-Admin-Secret."""
    authenticate_admin(body.secret)
    logger.info("Privileged view unlocked")
    return {"ok": True}
