"""
Progress Schemas

Progress entries are a tagged union on `type`. Each variant carries only the
fields it requires, and pydantic picks the variant from the discriminator:

    {"type": "weight", "weight": 181.2}
    {"type": "pr", "exercise": "Deadlift", "prValue": 405}
    {"type": "measurement", "measurement": {"waist": 32}}
    {"type": "photo"}                      ← plus at least one uploaded photo

Usage:
======
    from fitshare.shared.schemas.progress import parse_progress_payload

    entry = parse_progress_payload({"type": "pr", "exercise": "Squat", "prValue": 315})
    isinstance(entry, PRProgressCreate)  # True
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union
from uuid import UUID

from pydantic import Field, TypeAdapter, field_validator, model_validator

from fitshare.shared.models.enums import ProgressType
from fitshare.shared.schemas.common import BaseSchema, PhotosMixin, RemovedPhotosMixin


class Measurement(BaseSchema):
    """Body measurements; at least one must be present."""

    chest: Optional[float] = Field(default=None, ge=0)
    waist: Optional[float] = Field(default=None, ge=0)
    hips: Optional[float] = Field(default=None, ge=0)
    arms: Optional[float] = Field(default=None, ge=0)
    legs: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def require_one(self) -> "Measurement":
        if all(value is None for value in self.model_dump().values()):
            raise ValueError("at least one measurement is required")
        return self


# ═══════════════════════════════════════════════════════════════════════════════
# CREATE VARIANTS
# ═══════════════════════════════════════════════════════════════════════════════


class ProgressCommon(BaseSchema):
    """Fields every progress variant accepts."""

    date: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=1000)


class WeightProgressCreate(ProgressCommon):
    type: Literal["weight"]
    weight: float = Field(ge=0.1, le=1100)


class PRProgressCreate(ProgressCommon):
    type: Literal["pr"]
    exercise: str = Field(min_length=1, max_length=100)
    pr_value: float = Field(ge=0, le=1000)

    @field_validator("exercise", mode="before")
    @classmethod
    def strip_exercise(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class MeasurementProgressCreate(ProgressCommon):
    type: Literal["measurement"]
    measurement: Measurement


class PhotoProgressCreate(ProgressCommon):
    type: Literal["photo"]


ProgressCreate = Annotated[
    Union[
        WeightProgressCreate,
        PRProgressCreate,
        MeasurementProgressCreate,
        PhotoProgressCreate,
    ],
    Field(discriminator="type"),
]

_progress_adapter: TypeAdapter[Any] = TypeAdapter(ProgressCreate)


def parse_progress_payload(data: Any) -> Union[
    WeightProgressCreate, PRProgressCreate, MeasurementProgressCreate, PhotoProgressCreate
]:
    """
    Validate a raw payload into its progress variant.

    Raises:
        pydantic.ValidationError: Unknown type or missing variant fields
    """
    return _progress_adapter.validate_python(data)


# ═══════════════════════════════════════════════════════════════════════════════
# UPDATE / FILTERS / RESPONSE
# ═══════════════════════════════════════════════════════════════════════════════


class ProgressUpdate(RemovedPhotosMixin):
    """
    Partial progress update.

    `type` is fixed at creation; the merged record is re-validated against
    its variant, so an update cannot leave a weight entry without a weight.
    """

    weight: Optional[float] = Field(default=None, ge=0.1, le=1100)
    exercise: Optional[str] = Field(default=None, min_length=1, max_length=100)
    pr_value: Optional[float] = Field(default=None, ge=0, le=1000)
    measurement: Optional[Measurement] = None
    date: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=1000)


class ProgressFilters(BaseSchema):
    """List filters for GET /progress."""

    user_id: Optional[UUID] = None
    type: Optional[ProgressType] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class ProgressResponse(PhotosMixin):
    """Schema for progress response."""

    id: UUID
    user_id: UUID
    type: ProgressType
    weight: Optional[float] = None
    exercise: Optional[str] = None
    pr_value: Optional[float] = None
    measurement: Optional[dict[str, Optional[float]]] = None
    date: datetime
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
