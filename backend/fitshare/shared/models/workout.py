"""
Workout Entity Model

A training session logged by its owner.

SAMPLE WORKOUT RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 1f0e8400-e29b-41d4-a716-446655440000                      │
│ user_id          │ 550e8400-e29b-41d4-a716-446655440000                      │
│ title            │ "Heavy push day"                                          │
│ split            │ "Push"                                                    │
│ exercises        │ [{"name": "Bench press", "sets": 5, "reps": 5,            │
│                  │   "weight": 185, "notes": null}]                          │
│ date             │ 2024-06-01T07:00:00Z                                      │
│ duration         │ 70 (minutes)                                              │
│ photos           │ ["550e8400-...-1717225200000-9f2c1a7b.jpg"]               │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitshare.shared.models.base import Base, JSONType, TimestampMixin, enum_column, utcnow
from fitshare.shared.models.enums import WorkoutSplit


if TYPE_CHECKING:
    from fitshare.shared.models.user import User


class Workout(Base, TimestampMixin):
    """
    Workout model - one logged training session.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Owning user, set at creation and never reassigned
        title: Short session title
        split: Targeted body-part split
        exercises: Ordered list of {name, sets, reps, weight, notes}
        date: When the session happened
        duration: Length in minutes (optional)
        notes: Free text
        photos: Object-storage keys of attached photos
    """

    __tablename__ = "workouts"

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

    title: Mapped[str] = mapped_column(String(100), nullable=False)

    split: Mapped[WorkoutSplit] = mapped_column(
        enum_column(WorkoutSplit, "workout_split"),
        nullable=False,
        index=True,
    )

    exercises: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )

    duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    photos: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)

    user: Mapped["User"] = relationship("User", back_populates="workouts")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Workout(id={self.id}, user_id={self.user_id}, split={self.split})>"
