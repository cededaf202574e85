"""
Workout Schemas

Request/response models for workout endpoints.

Create/update bodies arrive as the JSON `payload` field of a multipart form
(alongside the `photos` files) and are validated with these models.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from fitshare.shared.models.enums import WorkoutSplit
from fitshare.shared.schemas.common import BaseSchema, PhotosMixin, RemovedPhotosMixin


class Exercise(BaseSchema):
    """One exercise inside a workout."""

    name: str = Field(min_length=1, max_length=100)
    sets: int = Field(ge=1, le=10)
    reps: int = Field(ge=1, le=100)
    weight: float = Field(default=0, ge=0, le=1000)
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class WorkoutCreate(BaseSchema):
    """Schema for logging a workout."""

    title: str = Field(min_length=3, max_length=100)
    split: WorkoutSplit
    exercises: list[Exercise] = Field(min_length=1)
    date: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, ge=1, le=600, description="Minutes")
    notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class WorkoutUpdate(RemovedPhotosMixin):
    """Partial workout update; unset fields keep their stored values."""

    title: Optional[str] = Field(default=None, min_length=3, max_length=100)
    split: Optional[WorkoutSplit] = None
    exercises: Optional[list[Exercise]] = Field(default=None, min_length=1)
    date: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, ge=1, le=600)
    notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class WorkoutFilters(BaseSchema):
    """List filters for GET /workouts."""

    user_id: Optional[UUID] = None
    split: Optional[WorkoutSplit] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class WorkoutResponse(PhotosMixin):
    """Schema for workout response."""

    id: UUID
    user_id: UUID
    title: str
    split: WorkoutSplit
    exercises: list[Exercise]
    date: datetime
    duration: Optional[int] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
