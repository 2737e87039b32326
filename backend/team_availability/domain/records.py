"""
Structured records shared by the server and the client.

Rows coming out of the store and JSON coming off the wire are validated here;
nothing downstream reads raw dicts or ORM rows.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from team_availability.core.errors import MissingField


def _required(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None or not str(value).strip():
        raise MissingField(f"Record is missing required field {key!r}")
    return str(value)


@dataclass(frozen=True, slots=True)
class Identity:
    """A participant as seen outside the Identity Store. Never carries the secret."""

    id: str
    name: str
    color: str

    @classmethod
    def from_row(cls, row: Any) -> "Identity":
        """Build from a Person ORM row (or anything with id/name/color attributes)."""
        return cls.from_dict({"id": row.id, "name": row.name, "color": row.color})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Identity":
        return cls(id=_required(data, "id"), name=_required(data, "name"), color=_required(data, "color"))

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "color": self.color}


@dataclass(frozen=True, slots=True)
class Mark:
    """Participant `person_id` is unavailable on `date` (YYYY-MM-DD)."""

    person_id: str
    date: str

    @classmethod
    def from_row(cls, row: Any) -> "Mark":
        data = {"person_id": row.person_id, "date": row.date}
        return cls(person_id=_required(data, "person_id"), date=_required(data, "date"))


@dataclass(frozen=True, slots=True)
class SetUnavailable:
    """Insert the mark if absent. Idempotent."""

    person_id: str
    date: str


@dataclass(frozen=True, slots=True)
class ClearUnavailable:
    """Delete the mark if present. Idempotent."""

    person_id: str
    date: str


AvailabilityChange = Union[SetUnavailable, ClearUnavailable]


def change_for_toggle(person_id: str, date: str, currently_unavailable: bool) -> AvailabilityChange:
    """The change that flips one date: unavailable -> clear, available -> set."""
    if currently_unavailable:
        return ClearUnavailable(person_id=person_id, date=date)
    return SetUnavailable(person_id=person_id, date=date)
