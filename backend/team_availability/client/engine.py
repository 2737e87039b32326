"""
Toggle/Range Engine: turns clicks and drags into the minimal set of mark changes.

- toggle(date): flip one date locally, then persist the new state. Repeats of the same
  date inside the debounce window are dropped.
- mark_range(a, b): mark every not-yet-unavailable date between a and b (either order).
  Drags only ever add; clearing is a single click on an unavailable date.
- drag_start/drag_enter/finish_drag: pointer gesture; a press and release on one date
  without movement is a toggle, not a range.

Nothing happens without an acting identity, or when the target identity is someone else.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from team_availability.client.cache import LocalCache
from team_availability.client.sync import SyncController
from team_availability.core.calendar_window import CalendarWindow, days_between, format_day, parse_day
from team_availability.core.constants import TOGGLE_DEBOUNCE_MS
from team_availability.core.errors import DateOutOfRange
from team_availability.domain import SetUnavailable, change_for_toggle

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DragState:
    start: str
    end: str
    moved: bool = False


class ToggleRangeEngine:
    def __init__(
        self,
        cache: LocalCache,
        sync: SyncController,
        *,
        window: CalendarWindow | None = None,
        debounce_ms: int = TOGGLE_DEBOUNCE_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.cache = cache
        self.sync = sync
        self.window = window
        self.debounce_ms = debounce_ms
        self._clock = clock
        self._last_toggle: dict[str, float] = {}
        self._drag: DragState | None = None

    def _acting_id(self, target_person_id: str | None) -> str | None:
        identity = self.cache.identity
        if identity is None:
            return None
        if target_person_id is not None and target_person_id != identity.id:
            return None
        return identity.id

    def _normalize(self, date: str) -> str | None:
        try:
            day = format_day(parse_day(date))
        except DateOutOfRange:
            logger.debug("Ignoring malformed date %r", date)
            return None
        if self.window is not None and not self.window.contains(day):
            return None
        return day

    def _debounced(self, date: str) -> bool:
        now = self._clock()
        last = self._last_toggle.get(date)
        if last is not None and (now - last) * 1000 < self.debounce_ms:
            return True
        self._last_toggle[date] = now
        return False

    async def toggle(self, date: str, target_person_id: str | None = None) -> bool:
        """Flip one date. Returns True when a flip was applied (False: no-op or debounced)."""
        person_id = self._acting_id(target_person_id)
        day = self._normalize(date)
        if person_id is None or day is None:
            return False
        if self._debounced(day):
            logger.debug("Dropped duplicate toggle for %s", day)
            return False

        currently_unavailable = self.cache.is_unavailable(day)
        if currently_unavailable:
            self.cache.discard(day)
        else:
            self.cache.add(day)
        await self.sync.persist(change_for_toggle(person_id, day, currently_unavailable))
        return True

    async def mark_range(self, start: str, end: str, target_person_id: str | None = None) -> list[str]:
        """Mark [min(start, end), max(start, end)] unavailable. Returns the newly marked dates."""
        person_id = self._acting_id(target_person_id)
        a, b = self._normalize_anchor(start), self._normalize_anchor(end)
        if person_id is None or a is None or b is None:
            return []
        low, high = (a, b) if a <= b else (b, a)
        new_dates = [
            d
            for d in days_between(low, high)
            if not self.cache.is_unavailable(d) and (self.window is None or self.window.contains(d))
        ]
        if not new_dates:
            return []
        for d in new_dates:
            self.cache.add(d)
        await self.sync.persist_many([SetUnavailable(person_id=person_id, date=d) for d in new_dates])
        return new_dates

    def _normalize_anchor(self, date: str) -> str | None:
        # Anchors may sit outside the window; the range is clipped afterwards
        try:
            return format_day(parse_day(date))
        except DateOutOfRange:
            return None

    # --- pointer gesture ---

    @property
    def dragging(self) -> DragState | None:
        return self._drag

    def drag_start(self, date: str) -> None:
        if self.cache.identity is None:
            return
        self._drag = DragState(start=date, end=date)

    def drag_enter(self, date: str) -> None:
        if self._drag is None:
            return
        if date != self._drag.end:
            self._drag.moved = True
        self._drag.end = date

    def in_selection(self, date: str) -> bool:
        """Whether `date` lies in the current drag's span (for highlighting)."""
        if self._drag is None:
            return False
        low, high = sorted((self._drag.start, self._drag.end))
        return low <= date <= high

    async def finish_drag(self) -> list[str]:
        """Pointer released: toggle for a still click, range-mark otherwise. Returns dates changed."""
        drag, self._drag = self._drag, None
        if drag is None:
            return []
        if drag.start == drag.end and not drag.moved:
            return [drag.start] if await self.toggle(drag.start) else []
        return await self.mark_range(drag.start, drag.end)
