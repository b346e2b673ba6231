"""API route handlers."""
from . import activities, me, records, statistics

__all__ = ["activities", "me", "records", "statistics"]
