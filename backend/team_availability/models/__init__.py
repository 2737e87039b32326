from team_availability.models.availability_mark import AvailabilityMark
from team_availability.models.person import Person

__all__ = [
    "AvailabilityMark",
    "Person",
]
