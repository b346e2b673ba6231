"""Statistics API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.helpers import get_current_user_id, get_statistics_service
from database import get_db
from schemas.statistics import (
    ActivityStatisticsResponse,
    ActivityStatsSimpleResponse,
    SummaryResponse,
    WeeklyTrendResponse,
)
from services.statistics_service import StatisticsService

router = APIRouter(prefix="/api/statistics", tags=["statistics"])


@router.get("/summary", response_model=SummaryResponse)
def get_summary(
    period: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: StatisticsService = Depends(get_statistics_service),
):
    """
    Summarize tracked time across all activities.

    Use ``period`` (week, month or year; default week) or an inclusive
    ``start_date``/``end_date`` pair in YYYY-MM-DD form.
    """
    return service.get_summary(
        db, user_id, period=period, start_date=start_date, end_date=end_date
    )


@router.get("/weekly-trend", response_model=WeeklyTrendResponse)
def get_weekly_trend(
    activity_id: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: StatisticsService = Depends(get_statistics_service),
):
    """Minutes per week for the last eight weeks, oldest first."""
    return {"data": service.get_weekly_trend(db, user_id, activity_id)}


@router.get("/activities/{activity_id}", response_model=ActivityStatsSimpleResponse)
def get_activity_statistics(
    activity_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: StatisticsService = Depends(get_statistics_service),
):
    """All-time and current-week minutes for one activity."""
    return service.get_activity_statistics(db, user_id, activity_id)


@router.get("/activities/{activity_id}/detailed", response_model=ActivityStatisticsResponse)
def get_activity_statistics_detailed(
    activity_id: str,
    period: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: StatisticsService = Depends(get_statistics_service),
):
    """Period totals, completion rate and weekly trend for one activity."""
    return service.get_activity_statistics_detailed(db, user_id, activity_id, period=period)
