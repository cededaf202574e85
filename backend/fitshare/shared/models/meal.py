"""
Meal Entity Model

A meal logged by its owner, with its nutrition breakdown.

SAMPLE MEAL RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 2a0e8400-e29b-41d4-a716-446655440000                      │
│ user_id          │ 550e8400-e29b-41d4-a716-446655440000                      │
│ name             │ "Chicken rice bowl"                                       │
│ meal_type        │ "lunch"                                                   │
│ nutrition        │ {"calories": 650, "protein": 45, "carbs": 70, "fat": 18} │
│ date             │ 2024-06-01T12:30:00Z                                      │
│ photos           │ []                                                        │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitshare.shared.models.base import Base, JSONType, TimestampMixin, enum_column, utcnow
from fitshare.shared.models.enums import MealType


if TYPE_CHECKING:
    from fitshare.shared.models.user import User


class Meal(Base, TimestampMixin):
    """
    Meal model.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Owning user
        name: Meal name
        description: Optional free text
        nutrition: {calories, protein, carbs, fat, fiber?, sugar?}
        meal_type: breakfast / lunch / dinner / snack
        date: When the meal was eaten
        photos: Object-storage keys of attached photos
    """

    __tablename__ = "meals"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    nutrition: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False)

    meal_type: Mapped[MealType] = mapped_column(
        enum_column(MealType, "meal_type"),
        nullable=False,
        index=True,
    )

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )

    photos: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)

    user: Mapped["User"] = relationship("User", back_populates="meals")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Meal(id={self.id}, user_id={self.user_id}, meal_type={self.meal_type})>"
