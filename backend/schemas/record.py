"""Pydantic schemas for activity records."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from models.activity_record import RecordSource
from models.utils import from_storage


class RecordCreate(BaseModel):
    """Request body for creating a record.

    MANUAL records need a positive ``duration``; LIVE records must omit it
    and start running at ``executed_at``.
    """

    activity_id: str
    source: RecordSource
    duration: Optional[int] = Field(default=None, description="Seconds")
    executed_at: datetime


class RecordUpdate(RecordCreate):
    """Request body for replacing a finished or MANUAL record."""

    pass


class RecordFinish(BaseModel):
    """Request body for finishing a running LIVE record."""

    end_at: datetime


class RecordResponse(BaseModel):
    """Public fields of a record. Timestamps are reported in UTC."""

    id: str
    activity_id: str
    source: RecordSource
    duration: Optional[int] = None
    executed_at: datetime
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("executed_at", "created_at", "updated_at")
    def serialize_utc(self, value: datetime) -> str:
        return from_storage(value).isoformat()


class PagedRecordResponse(BaseModel):
    """One page of records plus the total match count."""

    data: list[RecordResponse]
    page: int
    size: int
    total: int
