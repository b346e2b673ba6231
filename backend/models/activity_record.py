"""ActivityRecord model - one stretch of time spent on an activity."""

from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship

from database import Base
from models.utils import generate_uuid, utcnow


class RecordSource(str, Enum):
    """How a record was captured."""

    LIVE = "LIVE"  # started with a timer, duration set when finished
    MANUAL = "MANUAL"  # entered after the fact with a known duration


class ActivityRecord(Base):
    """A time record for an activity.

    A LIVE record with ``duration IS NULL`` is *running*. At most one
    running record may exist per (user, activity); the partial unique
    index below enforces that at the store level as well.
    """

    __tablename__ = "activity_records"
    __table_args__ = (
        Index(
            "uix_activity_record_running",
            "user_id",
            "activity_id",
            unique=True,
            sqlite_where=text("source = 'LIVE' AND duration IS NULL"),
            postgresql_where=text("source = 'LIVE' AND duration IS NULL"),
        ),
        Index("ix_activity_record_user_executed", "user_id", "executed_at"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(64), nullable=False, index=True)
    activity_id = Column(
        String(36), ForeignKey("activities.id", ondelete="CASCADE"), nullable=False, index=True
    )
    source = Column(SAEnum(RecordSource, native_enum=False, length=16), nullable=False)
    duration = Column(Integer, nullable=True)  # seconds, NULL while a LIVE record runs
    executed_at = Column(DateTime, nullable=False)  # when it happened / started
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    activity = relationship("Activity", back_populates="records")

    @property
    def is_running(self) -> bool:
        return self.source == RecordSource.LIVE and self.duration is None
