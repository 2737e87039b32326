"""
Authentication Resolver: claimed name + secret -> Identity.

First login with an unseen name registers it. The unique name_key column is the
authority when two first logins for the same name race: the loser re-reads the
winner's row and is checked against its secret like any returning participant.
"""
import hmac
import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from team_availability.config import settings
from team_availability.core.errors import Forbidden, InvalidCredential, MissingField, StoreUnavailable
from team_availability.domain import Identity
from team_availability.models.person import Person
from team_availability.services.identity_store import add_person, find_by_name
from team_availability.services.store_guard import store_errors

logger = logging.getLogger(__name__)


def secrets_match(stored: str, given: str) -> bool:
    """Byte-for-byte equality, constant time."""
    return hmac.compare_digest(stored.encode("utf-8"), given.encode("utf-8"))


def _claim_secret(db: Session, person: Person, secret: str) -> bool:
    """
    Set the credential of a seeded/legacy row, only while it is still NULL.
    Returns False when a concurrent login claimed it first.
    """
    result = db.execute(
        update(Person).where(Person.id == person.id, Person.secret.is_(None)).values(secret=secret)
    )
    db.commit()
    return result.rowcount > 0


def _check_secret(db: Session, person: Person, secret: str) -> Identity:
    if person.secret is None:
        if _claim_secret(db, person, secret):
            logger.info("Legacy identity %s claimed its credential", person.id)
            return Identity.from_row(person)
        # Lost the claim: compare against what the winner stored
        db.refresh(person)
    if person.secret is None or not secrets_match(person.secret, secret):
        logger.info("Rejected login for identity %s: credential mismatch", person.id)
        raise InvalidCredential("Incorrect credential")
    return Identity.from_row(person)


def authenticate(db: Session, name: str | None, secret: str | None) -> Identity:
    """
    Resolve (name, secret) to an Identity, creating it on first use.
    Raises MissingField, InvalidCredential or StoreUnavailable; never returns the secret.
    """
    name = (name or "").strip()
    if not name:
        raise MissingField("Name is required")
    if not secret or not secret.strip():
        raise MissingField("Secret is required")

    with store_errors(db, "authenticate"):
        person = find_by_name(db, name)
        if person is not None:
            return _check_secret(db, person, secret)
        try:
            person = add_person(db, name, secret)
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent first login for the same name
            db.rollback()
            person = find_by_name(db, name)
            if person is None:
                raise StoreUnavailable("Identity creation conflicted but no row is visible; retry")
            return _check_secret(db, person, secret)
    logger.info("Registered new identity %s (%s)", person.id, person.name)
    return Identity.from_row(person)


def authenticate_admin(secret: str | None, configured: str | None = None) -> bool:
    """Privileged view check against the configured ADMIN_SECRET (same discipline as participants)."""
    configured = settings.admin_secret if configured is None else configured
    if not secret:
        raise MissingField("Secret is required")
    if not configured:
        raise Forbidden("Privileged view is not configured")
    if not secrets_match(configured, secret):
        raise InvalidCredential("Incorrect credential")
    return True


def check_participant_secret(person: Person, secret: str | None) -> None:
    """
    A participant may only write their own marks: the caller must hold the person's secret.
    Unclaimed (seeded) identities accept no writes until their first login sets one.
    """
    if person.secret is None:
        raise Forbidden("Log in to claim this identity before changing its availability")
    if not secret or not secrets_match(person.secret, secret):
        raise Forbidden("You may only change your own availability")
