"""Current user endpoint."""

from fastapi import APIRouter, Depends

from api.helpers import get_current_user_id

router = APIRouter(prefix="/api/me", tags=["auth"])


@router.get("")
def read_me(user_id: str = Depends(get_current_user_id)):
    """Return the user id resolved from the bearer token."""
    return {"user_id": user_id}
