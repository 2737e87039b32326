"""
Supported date window: a configured start/end month of a single fixed year.

Dates travel as YYYY-MM-DD strings everywhere; lexicographic order equals
chronological order for that format, which the range engine relies on.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from team_availability.config import Settings, settings
from team_availability.core.constants import DATE_FORMAT
from team_availability.core.errors import DateOutOfRange


def parse_day(value: str) -> date:
    """Parse a YYYY-MM-DD string. Raises DateOutOfRange when malformed."""
    try:
        return datetime.strptime((value or "").strip(), DATE_FORMAT).date()
    except ValueError as e:
        raise DateOutOfRange(f"Invalid date {value!r}: expected YYYY-MM-DD") from e


def format_day(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def days_between(low: str, high: str) -> list[str]:
    """Every calendar day from low to high inclusive, as strings. Empty when low > high."""
    start, end = parse_day(low), parse_day(high)
    out: list[str] = []
    d = start
    while d <= end:
        out.append(format_day(d))
        d += timedelta(days=1)
    return out


@dataclass(frozen=True, slots=True)
class CalendarWindow:
    year: int
    start_month: int
    end_month: int

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> "CalendarWindow":
        s = s or settings
        return cls(year=s.calendar_year, start_month=s.start_month, end_month=s.end_month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.start_month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.end_month, calendar.monthrange(self.year, self.end_month)[1])

    def months(self) -> list[str]:
        """Month keys (YYYY-MM) in the window, in order."""
        return [f"{self.year:04d}-{m:02d}" for m in range(self.start_month, self.end_month + 1)]

    def dates(self) -> list[str]:
        return days_between(format_day(self.first_day), format_day(self.last_day))

    def contains(self, day: str) -> bool:
        try:
            d = parse_day(day)
        except DateOutOfRange:
            return False
        return self.first_day <= d <= self.last_day

    def validate(self, day: str) -> str:
        """Return the normalized date string or raise DateOutOfRange."""
        d = parse_day(day)
        if not self.first_day <= d <= self.last_day:
            raise DateOutOfRange(
                f"{format_day(d)} is outside {format_day(self.first_day)}..{format_day(self.last_day)}"
            )
        return format_day(d)

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "start_month": self.start_month,
            "end_month": self.end_month,
            "first_day": format_day(self.first_day),
            "last_day": format_day(self.last_day),
            "months": self.months(),
            "dates": self.dates(),
        }
