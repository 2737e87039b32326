"""Team availability: who is unavailable when, and which dates are still open."""

__version__ = "0.1.0"
