"""In-memory stand-in for AvailabilityApi used by client-side tests."""
from __future__ import annotations

import asyncio

from team_availability.core.errors import StoreUnavailable
from team_availability.domain import AvailabilityChange, Identity, SetUnavailable


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


class FakeApi:
    def __init__(self) -> None:
        self.marks: dict[str, set[str]] = {}
        self.applied: list[AvailabilityChange] = []
        self.fail_dates: set[str] = set()
        self.fail_fetch = False
        self.fetches = 0

    async def apply(self, change: AvailabilityChange, secret: str | None) -> bool:
        await asyncio.sleep(0)
        self.applied.append(change)
        if change.date in self.fail_dates:
            raise StoreUnavailable("store down")
        dates = self.marks.setdefault(change.person_id, set())
        if isinstance(change, SetUnavailable):
            changed = change.date not in dates
            dates.add(change.date)
        else:
            changed = change.date in dates
            dates.discard(change.date)
        return changed

    async def fetch_dates(self, person_id: str) -> list[str]:
        self.fetches += 1
        if self.fail_fetch:
            raise StoreUnavailable("store down")
        return sorted(self.marks.get(person_id, set()))


ALICE = Identity(id="alice", name="Alice", color="#3b82f6")
