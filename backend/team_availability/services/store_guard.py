"""Translate infrastructure failures from SQLAlchemy into StoreUnavailable."""
import logging
from contextlib import contextmanager

from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm import Session

from team_availability.core.errors import StoreUnavailable

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(db: Session, operation: str):
    """
    Roll back and raise StoreUnavailable on connection/driver failures.
    IntegrityError passes through untouched: callers decide whether a constraint hit is benign.
    """
    try:
        yield
    except IntegrityError:
        raise
    except (OperationalError, DBAPIError) as e:
        db.rollback()
        logger.exception("%s: store failure: %s", operation, e)
        raise StoreUnavailable(f"{operation} failed: store unavailable") from e
