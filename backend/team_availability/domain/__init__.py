from team_availability.domain.records import (
    AvailabilityChange,
    ClearUnavailable,
    Identity,
    Mark,
    SetUnavailable,
    change_for_toggle,
)

__all__ = [
    "AvailabilityChange",
    "ClearUnavailable",
    "Identity",
    "Mark",
    "SetUnavailable",
    "change_for_toggle",
]
