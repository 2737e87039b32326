"""
Versioned local cache of the two stores, as seen by one client.

Never authoritative: every mutation bumps `version`, and `invalidate()` marks the
contents stale until the next wholesale replace from a refetch.
"""
from __future__ import annotations

from typing import Iterable, Mapping

from team_availability.domain import Identity


class LocalCache:
    def __init__(self) -> None:
        self._identity: Identity | None = None
        self._mine: set[str] = set()
        self._everyone: dict[str, frozenset[str]] = {}
        self.version = 0
        self.stale = True

    def _bump(self) -> None:
        self.version += 1

    @property
    def identity(self) -> Identity | None:
        return self._identity

    def set_identity(self, identity: Identity | None) -> None:
        """Switch the acting identity; personal dates are dropped until refetched."""
        self._identity = identity
        self._mine = set()
        self.stale = True
        self._bump()

    # --- personal view ---

    def is_unavailable(self, date: str) -> bool:
        return date in self._mine

    def mine(self) -> frozenset[str]:
        return frozenset(self._mine)

    def add(self, date: str) -> None:
        self._mine.add(date)
        self._bump()

    def discard(self, date: str) -> None:
        self._mine.discard(date)
        self._bump()

    def replace_mine(self, dates: Iterable[str]) -> None:
        self._mine = set(dates)
        self.stale = False
        self._bump()

    # --- privileged view ---

    def everyone(self) -> dict[str, frozenset[str]]:
        return dict(self._everyone)

    def replace_everyone(self, snapshot: Mapping[str, Iterable[str]]) -> None:
        self._everyone = {person_id: frozenset(dates) for person_id, dates in snapshot.items()}
        self.stale = False
        self._bump()

    def invalidate(self) -> None:
        self.stale = True
        self._bump()

    def clear(self) -> None:
        self._identity = None
        self._mine = set()
        self._everyone = {}
        self.stale = True
        self._bump()
