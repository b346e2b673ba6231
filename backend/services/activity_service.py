"""Activity service - CRUD for a user's activities."""

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import Activity, ActivityRecord
from schemas.activity import ActivityResponse
from services.exceptions import BadRequestError, NotFoundError
from services.period_service import period_bounds
from utils.clock import Clock

logger = logging.getLogger(__name__)


def get_owned_activity(db: Session, user_id: str, activity_id: str) -> Activity:
    """Load an activity, treating someone else's activity as missing.

    Raises:
        NotFoundError: If no activity with this id belongs to ``user_id``.
    """
    activity = (
        db.query(Activity)
        .filter(Activity.id == activity_id, Activity.user_id == user_id)
        .first()
    )
    if activity is None:
        raise NotFoundError("Activity not found or does not belong to user")
    return activity


class ActivityService:
    """Service for managing activities and reporting their tracked minutes."""

    def __init__(self, clock: Clock):
        self.clock = clock

    def list_for_user(self, db: Session, user_id: str) -> list[ActivityResponse]:
        """All of a user's activities, oldest first, with their minute totals."""
        activities = (
            db.query(Activity)
            .filter(Activity.user_id == user_id)
            .order_by(Activity.created_at, Activity.id)
            .all()
        )
        if not activities:
            return []

        week = period_bounds("week", self.clock.now())
        totals = self._seconds_by_activity(db, user_id)
        weekly = self._seconds_by_activity(db, user_id, week.start_utc, week.end_utc)
        logger.debug("Listed %d activities for user %s", len(activities), user_id)
        return [
            self._to_response(a, totals.get(a.id, 0), weekly.get(a.id, 0))
            for a in activities
        ]

    def get(self, db: Session, user_id: str, activity_id: str) -> ActivityResponse:
        activity = get_owned_activity(db, user_id, activity_id)
        return self.to_response(db, activity)

    def create(
        self,
        db: Session,
        user_id: str,
        name: str,
        target_minutes: int,
        color: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> ActivityResponse:
        """
        Create a new activity.

        Args:
            db: Database session
            user_id: Owner
            name: Activity name (unique per owner)
            target_minutes: Weekly target in minutes
            color: Color tag
            icon: Icon tag

        Returns:
            The created activity

        Raises:
            BadRequestError: If the owner already has an activity with this name
        """
        self._assert_name_available(db, user_id, name)

        activity = Activity(
            user_id=user_id,
            name=name,
            target_time=target_minutes * 60,
            color=color,
            icon=icon,
        )
        db.add(activity)
        self._commit_or_duplicate(db, name)
        db.refresh(activity)
        logger.info("Activity created: %s (id=%s, user=%s)", name, activity.id, user_id)
        return self._to_response(activity, 0, 0)

    def update(
        self,
        db: Session,
        user_id: str,
        activity_id: str,
        name: Optional[str] = None,
        target_minutes: Optional[int] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> ActivityResponse:
        """
        Update the given fields of an activity; ``None`` leaves a field as is.

        Raises:
            NotFoundError: If the activity is missing or not owned by the user
            BadRequestError: If renaming onto another activity's name
        """
        activity = get_owned_activity(db, user_id, activity_id)

        if name is not None and name != activity.name:
            self._assert_name_available(db, user_id, name)
            activity.name = name
        if target_minutes is not None:
            activity.target_time = target_minutes * 60
        if color is not None:
            activity.color = color
        if icon is not None:
            activity.icon = icon

        self._commit_or_duplicate(db, activity.name)
        db.refresh(activity)
        logger.info("Activity updated: %s (id=%s)", activity.name, activity_id)
        return self.to_response(db, activity)

    def delete(self, db: Session, user_id: str, activity_id: str) -> None:
        """Delete an activity together with all of its records."""
        activity = get_owned_activity(db, user_id, activity_id)
        db.delete(activity)
        db.commit()
        logger.info("Activity deleted: %s (id=%s)", activity.name, activity_id)

    def to_response(self, db: Session, activity: Activity) -> ActivityResponse:
        week = period_bounds("week", self.clock.now())
        total = self._seconds_for_activity(db, activity.id)
        weekly = self._seconds_for_activity(db, activity.id, week.start_utc, week.end_utc)
        return self._to_response(activity, total, weekly)

    @staticmethod
    def _to_response(activity: Activity, total_seconds: int, weekly_seconds: int) -> ActivityResponse:
        return ActivityResponse(
            id=activity.id,
            name=activity.name,
            total_time=total_seconds // 60,
            weekly_time=weekly_seconds // 60,
            target_time=(activity.target_time or 0) // 60,
            color=activity.color,
            icon=activity.icon,
        )

    @staticmethod
    def _assert_name_available(db: Session, user_id: str, name: str) -> None:
        exists = (
            db.query(Activity.id)
            .filter(Activity.user_id == user_id, Activity.name == name)
            .first()
        )
        if exists:
            raise BadRequestError(f"Activity with name '{name}' already exists for this user")

    @staticmethod
    def _commit_or_duplicate(db: Session, name: str) -> None:
        """Commit, mapping a lost race on the (user, name) constraint to BadRequestError."""
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise BadRequestError(f"Activity with name '{name}' already exists for this user")

    @staticmethod
    def _seconds_for_activity(db: Session, activity_id: str, start=None, end=None) -> int:
        query = db.query(func.coalesce(func.sum(ActivityRecord.duration), 0)).filter(
            ActivityRecord.activity_id == activity_id,
            ActivityRecord.duration.isnot(None),
        )
        if start is not None:
            query = query.filter(ActivityRecord.executed_at >= start)
        if end is not None:
            query = query.filter(ActivityRecord.executed_at < end)
        return int(query.scalar() or 0)

    @staticmethod
    def _seconds_by_activity(db: Session, user_id: str, start=None, end=None) -> dict[str, int]:
        query = db.query(
            ActivityRecord.activity_id,
            func.coalesce(func.sum(ActivityRecord.duration), 0),
        ).filter(
            ActivityRecord.user_id == user_id,
            ActivityRecord.duration.isnot(None),
        )
        if start is not None:
            query = query.filter(ActivityRecord.executed_at >= start)
        if end is not None:
            query = query.filter(ActivityRecord.executed_at < end)
        rows = query.group_by(ActivityRecord.activity_id).all()
        return {activity_id: int(seconds or 0) for activity_id, seconds in rows}
