"""Test fixtures and sample data."""
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest
from sqlalchemy.orm import Session

from models import Activity, ActivityRecord, RecordSource
from models.utils import to_storage
from utils.clock import Clock

USER_ID = "user-1"
OTHER_USER_ID = "user-2"
TAIPEI = ZoneInfo("Asia/Taipei")

# Wednesday 2025-09-03 10:00 in Taipei; the current week starts Monday 2025-09-01
NOW = datetime(2025, 9, 3, 10, 0, tzinfo=TAIPEI)


class FixedClock(Clock):
    """Clock pinned to a single instant."""

    def __init__(self, now: datetime = NOW, zone: ZoneInfo = TAIPEI):
        super().__init__(zone)
        self._now = now.astimezone(zone)

    def now(self) -> datetime:
        return self._now


def create_activity(
    db: Session,
    user_id: str = USER_ID,
    name: str = "Reading",
    target_minutes: int = 420,
    color: str = "#3b82f6",
    icon: str = "book",
) -> Activity:
    """Insert an activity directly, bypassing the service."""
    activity = Activity(
        user_id=user_id,
        name=name,
        target_time=target_minutes * 60,
        color=color,
        icon=icon,
    )
    db.add(activity)
    db.commit()
    db.refresh(activity)
    return activity


def create_record(
    db: Session,
    activity: Activity,
    executed_at: datetime,
    duration: int | None = 3600,
    source: RecordSource = RecordSource.MANUAL,
    created_at: datetime | None = None,
) -> ActivityRecord:
    """Insert a record for ``activity`` directly, bypassing the service."""
    record = ActivityRecord(
        user_id=activity.user_id,
        activity_id=activity.id,
        source=source,
        duration=duration,
        executed_at=to_storage(executed_at),
    )
    if created_at is not None:
        record.created_at = to_storage(created_at)
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def local(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    """Aware datetime in the reporting zone."""
    return datetime(year, month, day, hour, minute, tzinfo=TAIPEI)


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    """Clock fixed at NOW in Asia/Taipei."""
    return FixedClock()


@pytest.fixture
def activity(db):
    """Activity 'Reading' with a 420 minute weekly target."""
    return create_activity(db)


@pytest.fixture
def other_activity(db):
    """Second activity for the same user."""
    return create_activity(db, name="Running", target_minutes=0, color="#ef4444", icon="run")


@pytest.fixture
def foreign_activity(db):
    """Activity owned by a different user."""
    return create_activity(db, user_id=OTHER_USER_ID, name="Reading")


@pytest.fixture
def manual_record(db, activity):
    """Finished one-hour MANUAL record this week."""
    return create_record(db, activity, NOW - timedelta(hours=2))


@pytest.fixture
def running_record(db, activity):
    """LIVE record started an hour before NOW and still running."""
    return create_record(
        db, activity, NOW - timedelta(hours=1), duration=None, source=RecordSource.LIVE
    )
