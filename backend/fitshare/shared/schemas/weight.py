"""
Weight Log Schemas

Request/response models for /progress/weight. The log is private, so the
list filters carry no userId.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from fitshare.shared.schemas.common import BaseSchema, PhotosMixin, RemovedPhotosMixin


class WeightEntryCreate(BaseSchema):
    """Schema for logging a weigh-in."""

    weight: float = Field(ge=0.1, le=1100)
    date: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=1000)


class WeightEntryUpdate(RemovedPhotosMixin):
    """Partial weigh-in update."""

    weight: Optional[float] = Field(default=None, ge=0.1, le=1100)
    date: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=1000)


class WeightEntryFilters(BaseSchema):
    """List filters for GET /progress/weight."""

    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class WeightEntryResponse(PhotosMixin):
    """Schema for weight entry response."""

    id: UUID
    user_id: UUID
    weight: float
    date: datetime
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
