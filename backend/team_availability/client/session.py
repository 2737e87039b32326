"""
Session coordinator: login / personal / admin modes over one API client and one local cache.

Every mode switch refetches what the new mode shows; the cache is never trusted across modes.
"""
from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Any, Callable, Iterable

from team_availability.client.api import AvailabilityApi
from team_availability.client.cache import LocalCache
from team_availability.client.engine import ToggleRangeEngine
from team_availability.client.sync import SyncController
from team_availability.config import settings
from team_availability.core.calendar_window import CalendarWindow
from team_availability.core.errors import ConfirmationRequired, Forbidden
from team_availability.domain import Identity
from team_availability.services.conflicts import ConflictMode, HighlightState, classify, highlight_states

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    LOGIN = "login"
    PERSONAL = "personal"
    ADMIN_LOGIN = "admin-login"
    ADMIN = "admin"


class AvailabilitySession:
    def __init__(
        self,
        api: AvailabilityApi,
        *,
        window: CalendarWindow | None = None,
        debounce_ms: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.api = api
        self.window = window
        self.cache = LocalCache()
        self.sync = SyncController(api, self.cache)
        self.engine = ToggleRangeEngine(
            self.cache,
            self.sync,
            window=window,
            debounce_ms=settings.toggle_debounce_ms if debounce_ms is None else debounce_ms,
            clock=clock,
        )
        self.mode = Mode.LOGIN
        self.people: list[Identity] = []
        self.conflict_mode = ConflictMode.ANY
        self._admin_secret: str | None = None

    @property
    def identity(self) -> Identity | None:
        return self.cache.identity

    async def load_people(self) -> list[Identity]:
        self.people = await self.api.list_people()
        return self.people

    async def load_window(self) -> CalendarWindow:
        data = await self.api.calendar()
        self.window = CalendarWindow(data["year"], data["start_month"], data["end_month"])
        self.engine.window = self.window
        return self.window

    # --- personal ---

    async def login(self, name: str, secret: str) -> Identity:
        """Authenticate (registering on first use) and load the personal dates. Errors propagate."""
        identity = await self.api.login(name, secret)
        self.cache.set_identity(identity)
        self.sync.set_credential(secret)
        self._admin_secret = None
        self.mode = Mode.PERSONAL
        await self.sync.refetch()
        logger.info("Logged in as %s", identity.name)
        return identity

    def logout(self) -> None:
        self.cache.clear()
        self.sync.set_credential(None)
        self._admin_secret = None
        self.mode = Mode.LOGIN

    async def toggle(self, date: str) -> bool:
        if self.mode is not Mode.PERSONAL:
            return False
        return await self.engine.toggle(date)

    def drag_start(self, date: str) -> None:
        if self.mode is Mode.PERSONAL:
            self.engine.drag_start(date)

    def drag_enter(self, date: str) -> None:
        if self.mode is Mode.PERSONAL:
            self.engine.drag_enter(date)

    async def finish_drag(self) -> list[str]:
        return await self.engine.finish_drag()

    def my_dates(self) -> list[str]:
        return sorted(self.cache.mine())

    # --- privileged view ---

    def start_admin_login(self) -> None:
        self.mode = Mode.ADMIN_LOGIN

    async def admin_login(self, secret: str) -> None:
        await self.api.admin_login(secret)
        self.cache.clear()
        self.sync.set_credential(None)
        self._admin_secret = secret
        self.mode = Mode.ADMIN
        await self.refresh_all()

    def _require_admin(self) -> str:
        if self.mode is not Mode.ADMIN or not self._admin_secret:
            raise Forbidden("Privileged view is locked")
        return self._admin_secret

    async def refresh_all(self) -> dict[str, frozenset[str]]:
        """Invalidate and rebuild the aggregate view from the store."""
        secret = self._require_admin()
        self.cache.invalidate()
        self.people = await self.api.list_people()
        self.cache.replace_everyone(await self.api.fetch_all(secret))
        return self.cache.everyone()

    async def switch_mode(self, mode: Mode) -> None:
        """Leave the current view; anything cached for the old view is refetched or dropped."""
        if mode is Mode.LOGIN:
            self.logout()
        elif mode is Mode.ADMIN_LOGIN:
            self.logout()
            self.start_admin_login()
        elif mode is Mode.ADMIN:
            self._require_admin()
            await self.refresh_all()
        elif mode is Mode.PERSONAL:
            if self.cache.identity is None:
                raise Forbidden("Log in first")
            self.mode = Mode.PERSONAL
            self.cache.invalidate()
            await self.sync.refetch()

    def _dates(self, dates: Iterable[str] | None) -> list[str]:
        if dates is not None:
            return list(dates)
        if self.window is None:
            raise ValueError("No calendar window loaded; pass dates or call load_window()")
        return self.window.dates()

    def conflicts(self, dates: Iterable[str] | None = None, mode: ConflictMode | str | None = None) -> dict[str, bool]:
        """date -> flagged, against all known people (people without marks count)."""
        return classify(
            self.cache.everyone(),
            self._dates(dates),
            mode or self.conflict_mode,
            [p.id for p in self.people],
        )

    def highlight_states(self, dates: Iterable[str] | None = None) -> dict[str, HighlightState]:
        return highlight_states(self.cache.everyone(), self._dates(dates), [p.id for p in self.people])

    def set_conflict_mode(self, mode: ConflictMode | str) -> None:
        self.conflict_mode = ConflictMode(mode)

    async def remove_person(self, person_id: str, confirm: str | None) -> dict[str, Any]:
        """Irreversible removal. `confirm` must be the person's name; checked here and on the server."""
        secret = self._require_admin()
        if not confirm:
            raise ConfirmationRequired("Removal must be confirmed with the person's name")
        result = await self.api.remove_person(person_id, confirm, secret)
        await self.refresh_all()
        return result

    async def export(self) -> dict[str, Any]:
        return await self.api.export(self._require_admin())
