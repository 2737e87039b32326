"""
Sync Controller: persist optimistic changes and converge on server truth after failures.

A failed request is not rolled back to its pre-toggle value. Instead the acting identity's
whole availability set is refetched and replaces the local copy, so several silent failures
during one drag still end in the state the server actually holds.
"""
import asyncio
import logging
from typing import Sequence

from team_availability.client.api import AvailabilityApi
from team_availability.client.cache import LocalCache
from team_availability.core.errors import AvailabilityError
from team_availability.domain import AvailabilityChange

logger = logging.getLogger(__name__)


class SyncController:
    def __init__(self, api: AvailabilityApi, cache: LocalCache) -> None:
        self.api = api
        self.cache = cache
        self._secret: str | None = None
        self.failures = 0

    def set_credential(self, secret: str | None) -> None:
        self._secret = secret

    async def _send(self, change: AvailabilityChange) -> bool:
        try:
            await self.api.apply(change, self._secret)
            return True
        except AvailabilityError as e:
            self.failures += 1
            logger.warning(
                "%s person_id=%s date=%s failed: %s",
                type(change).__name__,
                change.person_id,
                change.date,
                e,
                exc_info=True,
            )
            return False

    async def persist(self, change: AvailabilityChange) -> bool:
        return (await self.persist_many([change]))[0]

    async def persist_many(self, changes: Sequence[AvailabilityChange]) -> list[bool]:
        """
        Send every change concurrently; no atomicity across the batch.
        One recovery refetch follows if any of them failed. Never raises for store errors.
        """
        if not changes:
            return []
        results = list(await asyncio.gather(*(self._send(c) for c in changes)))
        if not all(results):
            await self.recover()
        return results

    async def refetch(self) -> bool:
        """Replace the personal dates with the server's. Raises AvailabilityError on failure."""
        identity = self.cache.identity
        if identity is None:
            return False
        dates = await self.api.fetch_dates(identity.id)
        if self.cache.identity != identity:
            # Logged out or switched identity while the fetch was in flight
            return False
        self.cache.replace_mine(dates)
        return True

    async def recover(self) -> bool:
        """Invalidate, then refetch. A failed refetch leaves the cache marked stale."""
        self.cache.invalidate()
        try:
            return await self.refetch()
        except AvailabilityError as e:
            logger.warning("Recovery refetch failed; local availability stays stale: %s", e, exc_info=True)
            return False
