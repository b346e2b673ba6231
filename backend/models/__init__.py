"""SQLAlchemy ORM models."""

from .activity import Activity
from .activity_record import ActivityRecord, RecordSource
from .utils import generate_uuid

__all__ = ["Activity", "ActivityRecord", "RecordSource", "generate_uuid"]
