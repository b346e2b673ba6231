"""Pydantic schemas for statistics API responses."""

from typing import Optional

from pydantic import BaseModel


class SummaryResponse(BaseModel):
    """Cross-activity summary for a period."""

    total_time: int  # finished minutes in the window
    most_frequent_activity: Optional[str]
    completion_rate: float  # total / (weekly target sum * scale), 0 if no target
    period_start: str  # ISO 8601 with offset, e.g. "2025-09-01T00:00:00+08:00"
    period_end: str
    scale: float


class ActivityStatsSimpleResponse(BaseModel):
    """All-time and current-week totals for one activity."""

    total_time: int
    weekly_time: int
    completion_rate: float


class WeeklyTrendItem(BaseModel):
    """Minutes tracked in one Monday-aligned week."""

    week_start: str  # YYYY-MM-DD
    minutes: int


class WeeklyTrendResponse(BaseModel):
    data: list[WeeklyTrendItem]


class ActivityStatisticsResponse(BaseModel):
    """Period statistics for one activity with its 8-week trend."""

    activity_id: str
    period: str
    period_start: str
    period_end: str
    total_time: int
    weekly_target: int
    scale: float
    completion_rate: float
    weekly_trend: list[WeeklyTrendItem]
