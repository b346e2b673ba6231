"""Statistics service - minute totals, completion rates and weekly trends.

All figures count finished records only (``duration IS NOT NULL``). Seconds
are summed first and converted to minutes with integer division.
"""

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from models import Activity, ActivityRecord
from models.utils import from_storage
from schemas.statistics import (
    ActivityStatisticsResponse,
    ActivityStatsSimpleResponse,
    SummaryResponse,
    WeeklyTrendItem,
)
from services.activity_service import get_owned_activity
from services.exceptions import BadRequestError
from services.period_service import (
    DEFAULT_PERIOD,
    PeriodBounds,
    date_range_bounds,
    period_bounds,
    trend_week_starts,
    week_start,
)
from utils.clock import Clock

logger = logging.getLogger(__name__)


def completion_rate(tracked_minutes: int, target_minutes: int, scale: float = 1.0) -> float:
    """Tracked time over the scaled target, 0.0 when there is no target."""
    denominator = target_minutes * scale
    if denominator <= 0:
        return 0.0
    return tracked_minutes / denominator


class StatisticsService:
    """Read-only aggregations over a user's records."""

    def __init__(self, clock: Clock):
        self.clock = clock

    def get_summary(
        self,
        db: Session,
        user_id: str,
        period: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> SummaryResponse:
        """
        Summarize all activities over a named period or an explicit date range.

        An explicit range takes precedence over ``period``.

        Raises:
            BadRequestError: If only one of ``start_date``/``end_date`` is given
            InvalidPeriodError: If ``period`` is not week, month or year
            InvalidDateFormatError: If a date is malformed or the range is reversed
        """
        bounds = self._resolve_bounds(period, start_date, end_date)

        total_seconds = self._sum_seconds(db, user_id, bounds=bounds)
        total_minutes = total_seconds // 60
        target_minutes = self._target_minutes(db, user_id)

        return SummaryResponse(
            total_time=total_minutes,
            most_frequent_activity=self._most_frequent_activity(db, user_id, bounds),
            completion_rate=completion_rate(total_minutes, target_minutes, bounds.scale),
            period_start=bounds.start.isoformat(),
            period_end=bounds.end.isoformat(),
            scale=bounds.scale,
        )

    def get_activity_statistics(
        self, db: Session, user_id: str, activity_id: str
    ) -> ActivityStatsSimpleResponse:
        """All-time and current-week minutes for one activity.

        Raises:
            NotFoundError: If the activity is missing or not owned by the user
        """
        activity = get_owned_activity(db, user_id, activity_id)
        week = period_bounds("week", self.clock.now())

        total_minutes = self._sum_seconds(db, user_id, activity_id=activity.id) // 60
        weekly_minutes = self._sum_seconds(db, user_id, bounds=week, activity_id=activity.id) // 60
        target_minutes = (activity.target_time or 0) // 60

        return ActivityStatsSimpleResponse(
            total_time=total_minutes,
            weekly_time=weekly_minutes,
            completion_rate=completion_rate(weekly_minutes, target_minutes),
        )

    def get_activity_statistics_detailed(
        self,
        db: Session,
        user_id: str,
        activity_id: str,
        period: Optional[str] = None,
    ) -> ActivityStatisticsResponse:
        """
        Period statistics for one activity, with its weekly trend.

        Raises:
            NotFoundError: If the activity is missing or not owned by the user
            InvalidPeriodError: If ``period`` is not week, month or year
        """
        activity = get_owned_activity(db, user_id, activity_id)
        bounds = period_bounds(period, self.clock.now())

        total_minutes = self._sum_seconds(db, user_id, bounds=bounds, activity_id=activity.id) // 60
        target_minutes = (activity.target_time or 0) // 60

        return ActivityStatisticsResponse(
            activity_id=activity.id,
            period=(period or DEFAULT_PERIOD).strip().lower(),
            period_start=bounds.start.isoformat(),
            period_end=bounds.end.isoformat(),
            total_time=total_minutes,
            weekly_target=target_minutes,
            scale=bounds.scale,
            completion_rate=completion_rate(total_minutes, target_minutes, bounds.scale),
            weekly_trend=self.get_weekly_trend(db, user_id, activity.id),
        )

    def get_weekly_trend(
        self, db: Session, user_id: str, activity_id: Optional[str] = None
    ) -> list[WeeklyTrendItem]:
        """
        Minutes per Monday-aligned week for the last eight weeks, oldest first.

        Weeks without records are reported with zero minutes. Records are
        bucketed by the local date of ``executed_at`` in the clock's zone.

        Raises:
            NotFoundError: If ``activity_id`` is given but not owned by the user
        """
        if activity_id is not None:
            get_owned_activity(db, user_id, activity_id)

        now = self.clock.now()
        weeks = trend_week_starts(now)
        window = date_range_bounds(weeks[0], weeks[-1] + timedelta(days=6), now.tzinfo)

        query = db.query(ActivityRecord.executed_at, ActivityRecord.duration).filter(
            ActivityRecord.user_id == user_id,
            ActivityRecord.duration.isnot(None),
            ActivityRecord.executed_at >= window.start_utc,
            ActivityRecord.executed_at < window.end_utc,
        )
        if activity_id is not None:
            query = query.filter(ActivityRecord.activity_id == activity_id)

        seconds_by_week: dict[date, int] = defaultdict(int)
        for executed_at, duration in query.all():
            local_day = from_storage(executed_at).astimezone(self.clock.zone).date()
            seconds_by_week[week_start(local_day)] += duration

        return [
            WeeklyTrendItem(week_start=monday.isoformat(), minutes=seconds_by_week[monday] // 60)
            for monday in weeks
        ]

    def _resolve_bounds(
        self,
        period: Optional[str],
        start_date: Optional[str],
        end_date: Optional[str],
    ) -> PeriodBounds:
        if start_date and end_date:
            return date_range_bounds(start_date, end_date, self.clock.zone)
        if start_date or end_date:
            raise BadRequestError("Both start_date and end_date are required for a custom range")
        return period_bounds(period, self.clock.now())

    @staticmethod
    def _sum_seconds(
        db: Session,
        user_id: str,
        bounds: Optional[PeriodBounds] = None,
        activity_id: Optional[str] = None,
    ) -> int:
        query = db.query(func.coalesce(func.sum(ActivityRecord.duration), 0)).filter(
            ActivityRecord.user_id == user_id,
            ActivityRecord.duration.isnot(None),
        )
        if bounds is not None:
            query = query.filter(
                ActivityRecord.executed_at >= bounds.start_utc,
                ActivityRecord.executed_at < bounds.end_utc,
            )
        if activity_id is not None:
            query = query.filter(ActivityRecord.activity_id == activity_id)
        return int(query.scalar() or 0)

    @staticmethod
    def _target_minutes(db: Session, user_id: str) -> int:
        """Sum of the user's weekly targets, in minutes."""
        seconds = (
            db.query(func.coalesce(func.sum(Activity.target_time), 0))
            .filter(Activity.user_id == user_id)
            .scalar()
        )
        return int(seconds or 0) // 60

    @staticmethod
    def _most_frequent_activity(db: Session, user_id: str, bounds: PeriodBounds) -> Optional[str]:
        """Name of the activity with the most tracked time in the window.

        Ties go to the activity executed most recently, then to the lowest id.
        """
        total = func.sum(ActivityRecord.duration)
        row = (
            db.query(Activity.name)
            .join(ActivityRecord, ActivityRecord.activity_id == Activity.id)
            .filter(
                ActivityRecord.user_id == user_id,
                ActivityRecord.duration.isnot(None),
                ActivityRecord.executed_at >= bounds.start_utc,
                ActivityRecord.executed_at < bounds.end_utc,
            )
            .group_by(Activity.id, Activity.name)
            .order_by(total.desc(), func.max(ActivityRecord.executed_at).desc(), Activity.id)
            .first()
        )
        if row is None:
            logger.debug("No finished records for user %s in window", user_id)
            return None
        return row[0]
