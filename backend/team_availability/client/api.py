"""Availability API client: lowest level, sends requests and maps failures to domain errors."""
import logging
from typing import Any
from urllib.parse import quote

import httpx

from team_availability.core.constants import ADMIN_SECRET_HEADER, API_PREFIX, PARTICIPANT_SECRET_HEADER
from team_availability.core.errors import (
    ERROR_CLASSES_BY_CODE,
    AvailabilityError,
    ConfirmationRequired,
    Forbidden,
    InvalidCredential,
    MissingField,
    NotFound,
    StoreUnavailable,
)
from team_availability.domain import AvailabilityChange, Identity, SetUnavailable

logger = logging.getLogger(__name__)

# Fallback when the body carries no error code (e.g. FastAPI request validation)
_STATUS_ERRORS: dict[int, type[AvailabilityError]] = {
    401: InvalidCredential,
    403: Forbidden,
    404: NotFound,
    409: ConfirmationRequired,
    422: MissingField,
}


def error_from_response(r: httpx.Response) -> AvailabilityError:
    try:
        body = r.json() if r.content else {}
    except ValueError:
        body = {}
    detail = body.get("detail") if isinstance(body, dict) else None
    message = detail if isinstance(detail, str) else f"HTTP {r.status_code}: {(r.text or '')[:500]}"
    cls = ERROR_CLASSES_BY_CODE.get(body.get("error")) if isinstance(body, dict) else None
    if cls is None:
        cls = StoreUnavailable if r.status_code >= 500 else _STATUS_ERRORS.get(r.status_code, StoreUnavailable)
    return cls(message)


class AvailabilityApi:
    """Async client for the /api routes. Transport errors and 5xx become StoreUnavailable."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if base_url is None:
            from team_availability.config import settings

            base_url = settings.api_base_url
        self._client = httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AvailabilityApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        try:
            r = await self._client.request(method, f"{API_PREFIX}{path}", json=json, params=params, headers=headers)
        except httpx.HTTPError as e:
            raise StoreUnavailable(f"{method} {path}: {e}") from e
        if not r.is_success:
            raise error_from_response(r)
        return r.json() if r.content else None

    async def health(self) -> bool:
        try:
            body = await self._request("GET", "/health")
        except AvailabilityError:
            return False
        return (body or {}).get("status") == "ok"

    async def calendar(self) -> dict[str, Any]:
        return await self._request("GET", "/calendar")

    async def list_people(self) -> list[Identity]:
        return [Identity.from_dict(p) for p in await self._request("GET", "/people")]

    async def login(self, name: str, secret: str) -> Identity:
        return Identity.from_dict(await self._request("POST", "/auth/login", json={"name": name, "secret": secret}))

    async def admin_login(self, secret: str) -> bool:
        body = await self._request("POST", "/auth/admin", json={"secret": secret})
        return bool(body and body.get("ok"))

    async def fetch_dates(self, person_id: str) -> list[str]:
        return list(await self._request("GET", f"/availability/{quote(person_id, safe='')}"))

    async def fetch_all(self, admin_secret: str) -> dict[str, list[str]]:
        return dict(await self._request("GET", "/availability", headers={ADMIN_SECRET_HEADER: admin_secret}))

    async def apply(self, change: AvailabilityChange, secret: str | None) -> bool:
        """PUT for SetUnavailable, DELETE for ClearUnavailable. Returns whether the server's set changed."""
        method = "PUT" if isinstance(change, SetUnavailable) else "DELETE"
        headers = {PARTICIPANT_SECRET_HEADER: secret} if secret else None
        path = f"/availability/{quote(change.person_id, safe='')}/{quote(change.date, safe='')}"
        body = await self._request(method, path, headers=headers)
        return bool(body and body.get("changed"))

    async def remove_person(self, person_id: str, confirm: str, admin_secret: str) -> dict[str, Any]:
        return await self._request(
            "DELETE",
            f"/admin/people/{quote(person_id, safe='')}",
            params={"confirm": confirm},
            headers={ADMIN_SECRET_HEADER: admin_secret},
        )

    async def export(self, admin_secret: str) -> dict[str, Any]:
        return await self._request("GET", "/admin/export", headers={ADMIN_SECRET_HEADER: admin_secret})
