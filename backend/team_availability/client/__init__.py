"""
Client side of the availability protocol: optimistic local edits, persistence over
HTTP and refetch-based recovery. Rendering consumes AvailabilitySession state.
"""
from team_availability.client.api import AvailabilityApi
from team_availability.client.cache import LocalCache
from team_availability.client.engine import ToggleRangeEngine
from team_availability.client.session import AvailabilitySession, Mode
from team_availability.client.sync import SyncController

__all__ = [
    "AvailabilityApi",
    "AvailabilitySession",
    "LocalCache",
    "Mode",
    "SyncController",
    "ToggleRangeEngine",
]
