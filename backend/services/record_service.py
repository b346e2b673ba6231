"""Record service - lifecycle rules for activity records.

A record is in exactly one of three states: LIVE running (duration is
NULL), LIVE finished, or MANUAL. Running records only move forward via
``finish``; they can be deleted but never edited in place.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import ActivityRecord, RecordSource
from models.utils import to_storage, utcnow
from services.activity_service import get_owned_activity
from services.exceptions import BadRequestError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)

# Durations live in a 32-bit signed integer column
MAX_DURATION_SECONDS = 2**31 - 1


def get_owned_record(db: Session, user_id: str, record_id: str) -> ActivityRecord:
    """Load a record by id and owner.

    Raises:
        NotFoundError: If no such record belongs to ``user_id``.
    """
    record = (
        db.query(ActivityRecord)
        .filter(ActivityRecord.id == record_id, ActivityRecord.user_id == user_id)
        .first()
    )
    if record is None:
        raise NotFoundError("Record not found or does not belong to user")
    return record


def validate_source_duration(source: RecordSource, duration: Optional[int]) -> None:
    """MANUAL needs a positive duration; LIVE must not carry one."""
    if source == RecordSource.MANUAL:
        if duration is None or duration <= 0:
            raise BadRequestError("Duration is required and must be positive for MANUAL records")
        if duration > MAX_DURATION_SECONDS:
            raise BadRequestError("Duration too large")
    elif source == RecordSource.LIVE:
        if duration is not None:
            raise BadRequestError("Duration must be null for LIVE records")


class RecordService:
    """Service enforcing create/finish/update/delete rules for records."""

    def get(self, db: Session, user_id: str, record_id: str) -> ActivityRecord:
        return get_owned_record(db, user_id, record_id)

    def create(
        self,
        db: Session,
        user_id: str,
        activity_id: str,
        source: RecordSource,
        duration: Optional[int],
        executed_at: datetime,
    ) -> ActivityRecord:
        """
        Create a MANUAL record or start a LIVE one.

        Raises:
            NotFoundError: If the activity is missing or not owned by the user
            BadRequestError: If duration does not fit the source
            ConflictError: If a LIVE record is already running for the activity
        """
        logger.info(
            "Creating record for user: %s, activity: %s, source: %s",
            user_id, activity_id, source.value,
        )
        get_owned_activity(db, user_id, activity_id)
        validate_source_duration(source, duration)

        if source == RecordSource.LIVE:
            self._assert_not_running(db, user_id, activity_id)

        record = ActivityRecord(
            user_id=user_id,
            activity_id=activity_id,
            source=source,
            duration=duration,
            executed_at=to_storage(executed_at),
        )
        db.add(record)
        self._commit_or_conflict(db)
        db.refresh(record)
        logger.info("Created record: %s", record.id)
        return record

    def finish(self, db: Session, user_id: str, record_id: str, end_at: datetime) -> ActivityRecord:
        """
        Stop a running LIVE record, setting its duration to ``end_at - executed_at``.

        The duration is written with a compare-and-set update so a second
        finish racing this one fails instead of overwriting.

        Raises:
            NotFoundError: If the record is missing or not owned by the user
            ConflictError: If the record is not a running LIVE record
            BadRequestError: If ``end_at`` is not after the start, or the
                duration overflows
        """
        logger.info("Finishing record: %s for user: %s", record_id, user_id)
        record = get_owned_record(db, user_id, record_id)

        if not record.is_running:
            raise ConflictError("Record is not a running LIVE record")

        start = to_storage(record.executed_at)
        end = to_storage(end_at)
        if end <= start:
            raise BadRequestError("End time must be after execution time")

        seconds = (end - start) // timedelta(seconds=1)
        if seconds > MAX_DURATION_SECONDS:
            raise BadRequestError("Duration too large")

        updated = (
            db.query(ActivityRecord)
            .filter(ActivityRecord.id == record.id, ActivityRecord.duration.is_(None))
            .update(
                {ActivityRecord.duration: seconds, ActivityRecord.updated_at: utcnow()},
                synchronize_session=False,
            )
        )
        if updated == 0:
            db.rollback()
            raise ConflictError("Record is not a running LIVE record")

        db.commit()
        db.refresh(record)
        logger.info("Finished record: %s with duration: %d seconds", record_id, seconds)
        return record

    def update(
        self,
        db: Session,
        user_id: str,
        record_id: str,
        activity_id: str,
        source: RecordSource,
        duration: Optional[int],
        executed_at: datetime,
    ) -> ActivityRecord:
        """
        Replace the activity, source, duration and start time of a record.

        Raises:
            NotFoundError: If the record or the target activity is missing
                or not owned by the user
            ConflictError: If the record is still running, or the update
                would start a second running record for the activity
            BadRequestError: If duration does not fit the source
        """
        logger.info("Updating record: %s for user: %s", record_id, user_id)
        record = get_owned_record(db, user_id, record_id)

        if record.is_running:
            raise ConflictError(
                "Cannot update a running LIVE record. Use finish endpoint or delete and recreate."
            )

        validate_source_duration(source, duration)

        if activity_id != record.activity_id:
            get_owned_activity(db, user_id, activity_id)

        if source == RecordSource.LIVE:
            self._assert_not_running(db, user_id, activity_id, exclude_record_id=record.id)

        record.activity_id = activity_id
        record.source = source
        record.duration = duration
        record.executed_at = to_storage(executed_at)
        self._commit_or_conflict(db)
        db.refresh(record)
        logger.info("Updated record: %s", record_id)
        return record

    def delete(self, db: Session, user_id: str, record_id: str) -> None:
        """Delete a record whatever its state."""
        logger.info("Deleting record: %s for user: %s", record_id, user_id)
        record = get_owned_record(db, user_id, record_id)
        db.delete(record)
        db.commit()
        logger.info("Deleted record: %s", record_id)

    @staticmethod
    def _assert_not_running(
        db: Session,
        user_id: str,
        activity_id: str,
        exclude_record_id: Optional[str] = None,
    ) -> None:
        query = db.query(ActivityRecord.id).filter(
            ActivityRecord.user_id == user_id,
            ActivityRecord.activity_id == activity_id,
            ActivityRecord.source == RecordSource.LIVE,
            ActivityRecord.duration.is_(None),
        )
        if exclude_record_id:
            query = query.filter(ActivityRecord.id != exclude_record_id)
        if query.first():
            raise ConflictError("A LIVE record is already running for this activity")

    @staticmethod
    def _commit_or_conflict(db: Session) -> None:
        """Commit, mapping a lost race on the running-record index to ConflictError."""
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning("Concurrent running record insert rejected by the store")
            raise ConflictError("A LIVE record is already running for this activity")
