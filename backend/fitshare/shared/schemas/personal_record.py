"""
Personal Record Schemas

    POST /progress/pr/exercises   {"name": "Deadlift", "unit": "lbs"}
    POST /progress/pr/progress    {"exerciseId": "...", "value": 405}

History response:

    {"exercise": {...}, "prs": [newest, ..., oldest], "current": newest | null}
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from fitshare.shared.models.enums import PRUnit
from fitshare.shared.schemas.common import BaseSchema


def _strip(value: object) -> object:
    return value.strip() if isinstance(value, str) else value


class PRExerciseCreate(BaseSchema):
    """Add an exercise to the caller's PR catalog."""

    name: str = Field(min_length=1, max_length=100)
    unit: PRUnit = PRUnit.LBS

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: object) -> object:
        return _strip(value)


class PRExerciseUpdate(BaseSchema):
    """Rename an exercise or change its unit (only while it has no records)."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    unit: Optional[PRUnit] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: object) -> object:
        return _strip(value)


class PRExerciseResponse(BaseSchema):
    id: UUID
    user_id: UUID
    name: str
    unit: PRUnit
    created_at: datetime
    updated_at: datetime


class PRRecordCreate(BaseSchema):
    """
    Record a value for one of the caller's exercises.

    Whole numbers are enforced per unit by the service, since the unit
    lives on the exercise.
    """

    exercise_id: UUID
    value: float = Field(gt=0, allow_inf_nan=False)


class PRRecordResponse(BaseSchema):
    id: UUID
    user_id: UUID
    exercise_id: UUID
    value: float
    created_at: datetime


class PRHistory(BaseSchema):
    """An exercise with its records, newest first; `current` is the newest."""

    exercise: PRExerciseResponse
    prs: list[PRRecordResponse] = Field(default_factory=list)
    current: Optional[PRRecordResponse] = None
