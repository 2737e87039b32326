"""
Centralized constants (Encapsulate What Changes).

Change palette, debounce window or API prefix here instead of scattering literals
across services, routes and the client.
"""

API_PREFIX = "/api"

# Colors handed out to new identities, rotating by creation order.
COLOR_PALETTE: tuple[str, ...] = (
    "#3b82f6",
    "#ef4444",
    "#10b981",
    "#f59e0b",
    "#8b5cf6",
    "#ec4899",
    "#06b6d4",
    "#f97316",
    "#6366f1",
    "#84cc16",
)

# Two toggles of the same date closer than this are one gesture (duplicate input events).
TOGGLE_DEBOUNCE_MS = 300

DATE_FORMAT = "%Y-%m-%d"

# Request headers carrying credentials for writes and the privileged view
PARTICIPANT_SECRET_HEADER = "X-Participant-Secret"
ADMIN_SECRET_HEADER = "X-Admin-Secret"

# Upper bounds on user-supplied text (must match models and migrations)
MAX_NAME_LENGTH = 128
MAX_SECRET_LENGTH = 256
