"""Shared API dependencies for route handlers.

Authentication and service providers. Providers are plain dependencies so
tests can swap them through ``app.dependency_overrides`` (for example to
pin the clock).
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import settings
from models import ActivityRecord
from schemas.record import PagedRecordResponse, RecordResponse
from services.activity_service import ActivityService
from services.record_query_service import RecordPage, RecordQueryService
from services.record_service import RecordService
from services.statistics_service import StatisticsService
from utils.clock import Clock
from utils.security import InvalidTokenError, decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Resolve the caller's user id from the bearer token.

    Raises:
        HTTPException: 401 if the token is missing or invalid.
    """
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return decode_access_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("Rejected bearer token: %s", e)
        raise HTTPException(
            status_code=401,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_clock() -> Clock:
    """Clock in the configured reporting zone."""
    return Clock(settings.zone)


def get_activity_service(clock: Clock = Depends(get_clock)) -> ActivityService:
    return ActivityService(clock)


def get_record_service() -> RecordService:
    return RecordService()


def get_record_query_service() -> RecordQueryService:
    return RecordQueryService()


def get_statistics_service(clock: Clock = Depends(get_clock)) -> StatisticsService:
    return StatisticsService(clock)


def record_response(record: ActivityRecord) -> RecordResponse:
    """Build a RecordResponse from an ActivityRecord."""
    return RecordResponse.model_validate(record)


def paged_record_response(page: RecordPage) -> PagedRecordResponse:
    """Build a PagedRecordResponse from a RecordPage."""
    return PagedRecordResponse(
        data=[record_response(r) for r in page.items],
        page=page.page,
        size=page.size,
        total=page.total,
    )
