"""Record query service - filtered, paginated record listings."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from models import ActivityRecord, RecordSource
from models.utils import to_storage

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
# Keeps page * size inside the store's OFFSET range
MAX_PAGE = 1_000_000


@dataclass
class RecordPage:
    """One page of a record listing."""

    items: list[ActivityRecord]
    page: int
    size: int
    total: int


class RecordQueryService:
    """Lists a user's records, newest first."""

    def list_records(
        self,
        db: Session,
        user_id: str,
        activity_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        source: Optional[RecordSource] = None,
        running: bool = False,
        page: int = 0,
        size: int = DEFAULT_PAGE_SIZE,
    ) -> RecordPage:
        """
        List records matching every given filter.

        Time bounds are half-open: ``start <= executed_at < end``. When
        ``running`` is set only ``activity_id`` is honoured and the result is
        limited to running LIVE records.

        Args:
            db: Database session
            user_id: Owner whose records are listed
            activity_id: Restrict to one activity
            start: Inclusive lower bound on ``executed_at``
            end: Exclusive upper bound on ``executed_at``
            source: Restrict to LIVE or MANUAL
            running: Only running LIVE records
            page: Zero-based page number
            size: Page size

        Returns:
            RecordPage with the requested slice and the total match count
        """
        conditions = self._build_conditions(
            user_id, activity_id, start, end, source, running
        )
        query = db.query(ActivityRecord).filter(*conditions)
        total = query.count()
        items = (
            query.order_by(
                ActivityRecord.executed_at.desc(),
                ActivityRecord.created_at.desc(),
                ActivityRecord.id.desc(),
            )
            .offset(page * size)
            .limit(size)
            .all()
        )
        logger.debug(
            "Listed %d of %d records for user %s (page=%d, size=%d)",
            len(items), total, user_id, page, size,
        )
        return RecordPage(items=items, page=page, size=size, total=total)

    def list_running(
        self,
        db: Session,
        user_id: str,
        activity_id: Optional[str] = None,
        page: int = 0,
        size: int = DEFAULT_PAGE_SIZE,
    ) -> RecordPage:
        """Running LIVE records, optionally for one activity."""
        return self.list_records(
            db, user_id, activity_id=activity_id, running=True, page=page, size=size
        )

    @staticmethod
    def _build_conditions(
        user_id: str,
        activity_id: Optional[str],
        start: Optional[datetime],
        end: Optional[datetime],
        source: Optional[RecordSource],
        running: bool,
    ) -> list:
        conditions = [ActivityRecord.user_id == user_id]
        if activity_id is not None:
            conditions.append(ActivityRecord.activity_id == activity_id)

        if running:
            conditions.append(ActivityRecord.source == RecordSource.LIVE)
            conditions.append(ActivityRecord.duration.is_(None))
            return conditions

        if start is not None:
            conditions.append(ActivityRecord.executed_at >= to_storage(start))
        if end is not None:
            conditions.append(ActivityRecord.executed_at < to_storage(end))
        if source is not None:
            conditions.append(ActivityRecord.source == source)
        return conditions
