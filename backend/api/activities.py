"""Activities API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.helpers import get_activity_service, get_current_user_id
from database import get_db
from schemas.activity import (
    ActivityCreate,
    ActivityListResponse,
    ActivityResponse,
    ActivityUpdate,
)
from services.activity_service import ActivityService

router = APIRouter(prefix="/api/activities", tags=["activities"])


@router.get("", response_model=ActivityListResponse)
def list_activities(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: ActivityService = Depends(get_activity_service),
):
    """List the caller's activities, oldest first, with tracked minutes."""
    return {"data": service.list_for_user(db, user_id)}


@router.post("", response_model=ActivityResponse, status_code=201)
def create_activity(
    activity_data: ActivityCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: ActivityService = Depends(get_activity_service),
):
    """
    Create a new activity.

    ``target_time`` is the weekly target in minutes. Names are unique per user.
    """
    return service.create(
        db,
        user_id,
        activity_data.name,
        activity_data.target_time,
        color=activity_data.color,
        icon=activity_data.icon,
    )


@router.get("/{activity_id}", response_model=ActivityResponse)
def get_activity(
    activity_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: ActivityService = Depends(get_activity_service),
):
    """Get one activity with its all-time and current-week minutes."""
    return service.get(db, user_id, activity_id)


@router.put("/{activity_id}", response_model=ActivityResponse)
def update_activity(
    activity_id: str,
    update_data: ActivityUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: ActivityService = Depends(get_activity_service),
):
    """
    Update an activity.

    Only the fields present in the body are changed.
    """
    return service.update(
        db,
        user_id,
        activity_id,
        name=update_data.name,
        target_minutes=update_data.target_time,
        color=update_data.color,
        icon=update_data.icon,
    )


@router.delete("/{activity_id}", status_code=204)
def delete_activity(
    activity_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: ActivityService = Depends(get_activity_service),
):
    """Delete an activity and all of its records."""
    service.delete(db, user_id, activity_id)
