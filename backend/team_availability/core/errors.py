"""
Centralized error handling for availability operations.

Domain exceptions are raised by services and the client; the rule table below maps
them to HTTP status codes so routes stay thin and new error types are easy to add.
"""
from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------


class AvailabilityError(Exception):
    """Base class for every error the availability engine raises on purpose."""

    code = "error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.__class__.__doc__ or self.code)
        self.message = str(self.args[0])


class MissingField(AvailabilityError):
    """A required field was empty or missing."""

    code = "missing_field"


class InvalidCredential(AvailabilityError):
    """Incorrect credential."""

    code = "invalid_credential"


class Forbidden(AvailabilityError):
    """The acting identity may not perform this operation."""

    code = "forbidden"


class NotFound(AvailabilityError):
    """Unknown identity."""

    code = "not_found"


class StoreUnavailable(AvailabilityError):
    """The underlying store could not be reached. Retry later."""

    code = "store_unavailable"


class ConstraintViolation(AvailabilityError):
    """A uniqueness constraint rejected the write."""

    code = "constraint_violation"


class ConfirmationRequired(AvailabilityError):
    """Irreversible operation was not confirmed."""

    code = "confirmation_required"


class DateOutOfRange(AvailabilityError):
    """Date is malformed or outside the supported window."""

    code = "date_out_of_range"


# ---------------------------------------------------------------------------
# Error rules: exception class -> HTTP status. First match wins.
# ---------------------------------------------------------------------------

STATUS_UNPROCESSABLE = 422
STATUS_UNAUTHORIZED = 401
STATUS_FORBIDDEN = 403
STATUS_NOT_FOUND = 404
STATUS_CONFLICT = 409
STATUS_SERVICE_UNAVAILABLE = 503
STATUS_INTERNAL_ERROR = 500

ERROR_STATUS_RULES: list[tuple[type[AvailabilityError], int]] = [
    (MissingField, STATUS_UNPROCESSABLE),
    (DateOutOfRange, STATUS_UNPROCESSABLE),
    (InvalidCredential, STATUS_UNAUTHORIZED),
    (Forbidden, STATUS_FORBIDDEN),
    (NotFound, STATUS_NOT_FOUND),
    (ConfirmationRequired, STATUS_CONFLICT),
    (ConstraintViolation, STATUS_CONFLICT),
    (StoreUnavailable, STATUS_SERVICE_UNAVAILABLE),
]

# Reverse lookup for the client: error code in a response body -> exception class
ERROR_CLASSES_BY_CODE: dict[str, type[AvailabilityError]] = {
    cls.code: cls for cls, _ in ERROR_STATUS_RULES
}


def status_for(exc: AvailabilityError) -> int:
    for cls, status_code in ERROR_STATUS_RULES:
        if isinstance(exc, cls):
            return status_code
    return STATUS_INTERNAL_ERROR


async def availability_error_handler(request: Request, exc: AvailabilityError) -> JSONResponse:
    """FastAPI exception handler: {"error": code, "detail": message}."""
    return JSONResponse(
        status_code=status_for(exc),
        content={"error": exc.code, "detail": exc.message},
    )
