"""Activity records API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.helpers import (
    get_current_user_id,
    get_record_query_service,
    get_record_service,
    paged_record_response,
    record_response,
)
from database import get_db
from models import RecordSource
from schemas.record import (
    PagedRecordResponse,
    RecordCreate,
    RecordFinish,
    RecordResponse,
    RecordUpdate,
)
from services.record_query_service import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE,
    MAX_PAGE_SIZE,
    RecordQueryService,
)
from services.record_service import RecordService
from utils.query_params import parse_datetime

router = APIRouter(prefix="/api/records", tags=["records"])


@router.post("", response_model=RecordResponse, status_code=201)
def create_record(
    record_data: RecordCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: RecordService = Depends(get_record_service),
):
    """
    Log a MANUAL record or start a LIVE one.

    MANUAL records need a positive ``duration`` in seconds. LIVE records
    must omit it; they run from ``executed_at`` until finished. Only one LIVE
    record per activity may run at a time (409 otherwise).
    """
    record = service.create(
        db,
        user_id,
        record_data.activity_id,
        record_data.source,
        record_data.duration,
        record_data.executed_at,
    )
    return record_response(record)


@router.get("", response_model=PagedRecordResponse)
def list_records(
    activity_id: Optional[str] = None,
    from_: Optional[str] = Query(None, alias="from", description="Inclusive lower bound (ISO 8601)"),
    to: Optional[str] = Query(None, description="Exclusive upper bound (ISO 8601)"),
    source: Optional[RecordSource] = None,
    running: bool = False,
    page: int = Query(0, ge=0, le=MAX_PAGE),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    query_service: RecordQueryService = Depends(get_record_query_service),
):
    """
    List records, newest ``executed_at`` first.

    With ``running=true`` only ``activity_id`` is applied and just the
    running LIVE records are returned.
    """
    result = query_service.list_records(
        db,
        user_id,
        activity_id=activity_id,
        start=parse_datetime(from_, "from"),
        end=parse_datetime(to, "to"),
        source=source,
        running=running,
        page=page,
        size=size,
    )
    return paged_record_response(result)


@router.get("/running", response_model=PagedRecordResponse)
def list_running_records(
    activity_id: Optional[str] = None,
    page: int = Query(0, ge=0, le=MAX_PAGE),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    query_service: RecordQueryService = Depends(get_record_query_service),
):
    """List running LIVE records, optionally for one activity."""
    result = query_service.list_running(
        db, user_id, activity_id=activity_id, page=page, size=size
    )
    return paged_record_response(result)


@router.get("/{record_id}", response_model=RecordResponse)
def get_record(
    record_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: RecordService = Depends(get_record_service),
):
    """Get a single record."""
    return record_response(service.get(db, user_id, record_id))


@router.patch("/{record_id}/finish", response_model=RecordResponse)
def finish_record(
    record_id: str,
    finish_data: RecordFinish,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: RecordService = Depends(get_record_service),
):
    """
    Finish a running LIVE record.

    The duration becomes ``end_at - executed_at`` in whole seconds.
    Finishing a record that is not running returns 409.
    """
    record = service.finish(db, user_id, record_id, finish_data.end_at)
    return record_response(record)


@router.put("/{record_id}", response_model=RecordResponse)
def update_record(
    record_id: str,
    update_data: RecordUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: RecordService = Depends(get_record_service),
):
    """
    Replace a finished or MANUAL record.

    Running LIVE records cannot be edited (409); finish or delete them.
    """
    record = service.update(
        db,
        user_id,
        record_id,
        update_data.activity_id,
        update_data.source,
        update_data.duration,
        update_data.executed_at,
    )
    return record_response(record)


@router.delete("/{record_id}", status_code=204)
def delete_record(
    record_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: RecordService = Depends(get_record_service),
):
    """Delete a record, running or not."""
    service.delete(db, user_id, record_id)
