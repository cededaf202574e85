"""
Meal Schemas

Request/response models for meal endpoints.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from fitshare.shared.models.enums import MealType
from fitshare.shared.schemas.common import BaseSchema, PhotosMixin, RemovedPhotosMixin


class Nutrition(BaseSchema):
    """Nutrition breakdown of a meal (grams, except calories)."""

    calories: float = Field(ge=0, le=5000)
    protein: float = Field(ge=0, le=1000)
    carbs: float = Field(ge=0, le=1000)
    fat: float = Field(ge=0, le=1000)
    fiber: Optional[float] = Field(default=None, ge=0, le=1000)
    sugar: Optional[float] = Field(default=None, ge=0, le=1000)


class MealCreate(BaseSchema):
    """Schema for logging a meal."""

    name: str = Field(min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    nutrition: Nutrition
    meal_type: MealType
    date: Optional[datetime] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class MealUpdate(RemovedPhotosMixin):
    """Partial meal update."""

    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    nutrition: Optional[Nutrition] = None
    meal_type: Optional[MealType] = None
    date: Optional[datetime] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class MealFilters(BaseSchema):
    """List filters for GET /meals."""

    user_id: Optional[UUID] = None
    meal_type: Optional[MealType] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class MealResponse(PhotosMixin):
    """Schema for meal response."""

    id: UUID
    user_id: UUID
    name: str
    description: Optional[str] = None
    nutrition: Nutrition
    meal_type: MealType
    date: datetime
    created_at: datetime
    updated_at: datetime
