"""Pydantic schemas for activities."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

# Targets are stored as seconds in a 32-bit signed integer column
MAX_TARGET_MINUTES = (2**31 - 1) // 60


class ActivityCreate(BaseModel):
    """Request body for creating an activity."""

    name: str = Field(min_length=1, max_length=100)
    target_time: int = Field(ge=0, le=MAX_TARGET_MINUTES, description="Weekly target in minutes")
    color: str = Field(min_length=1, max_length=16)  # e.g. "#3b82f6"
    icon: str = Field(min_length=1, max_length=16)  # e.g. "book"

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank names."""
        v = v.strip()
        if not v:
            raise ValueError("Activity name is required")
        return v


class ActivityUpdate(BaseModel):
    """Request body for a partial activity update."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    target_time: Optional[int] = Field(
        default=None, ge=0, le=MAX_TARGET_MINUTES, description="Minutes"
    )
    color: Optional[str] = Field(default=None, max_length=16)
    icon: Optional[str] = Field(default=None, max_length=16)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Activity name must not be blank")
        return v


class ActivityResponse(BaseModel):
    """Activity with its tracked and target minutes."""

    id: str
    name: str
    total_time: int  # all-time finished minutes
    weekly_time: int  # finished minutes in the current week
    target_time: int  # weekly target minutes
    color: Optional[str] = None
    icon: Optional[str] = None


class ActivityListResponse(BaseModel):
    """Envelope for the activity list."""

    data: list[ActivityResponse]
