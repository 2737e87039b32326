"""
Conflict Classifier: per-date highlight state from the full availability snapshot.

Pure functions of (snapshot, participants, mode). No caching; callers recompute whenever
the snapshot or mode changes.
"""
from collections import Counter
from enum import Enum
from typing import Iterable, Mapping


class ConflictMode(str, Enum):
    NONE = "none"  # never flag
    ANY = "any"  # flag when at least one participant is unavailable
    ALL = "all"  # flag only when every known participant is unavailable


class HighlightState(str, Enum):
    NONE = "none"  # nobody unavailable
    ANY = "any"  # some, not all
    ALL = "all"  # every known participant (and there is at least one)


def unavailable_counts(
    snapshot: Mapping[str, Iterable[str]],
    participant_ids: Iterable[str] | None = None,
) -> tuple[Counter, int]:
    """
    date -> number of distinct participants unavailable that day, plus the participant count.
    participant_ids defaults to the snapshot keys; marks of ids outside it are ignored.
    """
    ids = set(snapshot.keys() if participant_ids is None else participant_ids)
    counts: Counter = Counter()
    for person_id in ids:
        counts.update(set(snapshot.get(person_id, ())))
    return counts, len(ids)


def _state(count: int, total: int) -> HighlightState:
    if count == 0:
        return HighlightState.NONE
    if total > 0 and count >= total:
        return HighlightState.ALL
    return HighlightState.ANY


def highlight_state(
    snapshot: Mapping[str, Iterable[str]],
    date: str,
    participant_ids: Iterable[str] | None = None,
) -> HighlightState:
    counts, total = unavailable_counts(snapshot, participant_ids)
    return _state(counts[date], total)


def is_flagged(state: HighlightState, mode: ConflictMode | str) -> bool:
    mode = ConflictMode(mode)
    if mode is ConflictMode.ANY:
        return state is not HighlightState.NONE
    if mode is ConflictMode.ALL:
        return state is HighlightState.ALL
    return False


def classify(
    snapshot: Mapping[str, Iterable[str]],
    dates: Iterable[str],
    mode: ConflictMode | str,
    participant_ids: Iterable[str] | None = None,
) -> dict[str, bool]:
    """date -> flagged under `mode`, for every date in `dates`."""
    counts, total = unavailable_counts(snapshot, participant_ids)
    return {d: is_flagged(_state(counts[d], total), mode) for d in dates}


def highlight_states(
    snapshot: Mapping[str, Iterable[str]],
    dates: Iterable[str],
    participant_ids: Iterable[str] | None = None,
) -> dict[str, HighlightState]:
    counts, total = unavailable_counts(snapshot, participant_ids)
    return {d: _state(counts[d], total) for d in dates}
