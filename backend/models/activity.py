"""Activity model - a user-defined thing to spend time on."""

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from database import Base
from models.utils import generate_uuid, utcnow


class Activity(Base):
    """An activity owned by one user, with a weekly time target.

    ``target_time`` is stored in seconds; the API speaks minutes.
    Names are unique per owner, not globally.
    """

    __tablename__ = "activities"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uix_activity_user_name"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(64), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    target_time = Column(Integer, nullable=False, default=0)  # seconds per week
    color = Column(String(16), nullable=True)  # e.g. "#3b82f6"
    icon = Column(String(16), nullable=True)  # e.g. "book"
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    records = relationship(
        "ActivityRecord",
        back_populates="activity",
        cascade="all, delete-orphan",
    )
