"""
Weight Entry Model

The body-weight log: one dated weigh-in per row, optionally with photos.
Kept apart from `progress` so the log pages quickly by date without a type
filter.

SAMPLE WEIGHT ENTRY:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 7c2e8400-e29b-41d4-a716-446655440000                      │
│ user_id          │ 550e8400-e29b-41d4-a716-446655440000                      │
│ weight           │ 181.2                                                     │
│ date             │ 2024-06-01T07:00:00Z                                      │
│ notes            │ "After the long weekend"                                  │
│ photos           │ []                                                        │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import DateTime, Float, ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitshare.shared.models.base import Base, JSONType, TimestampMixin, utcnow


if TYPE_CHECKING:
    from fitshare.shared.models.user import User


class WeightEntry(Base, TimestampMixin):
    """
    Weight log entry.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Owning user
        weight: Body weight, 0.1-1100
        date: When the weigh-in happened
        notes: Free text
        photos: Object-storage keys of attached photos
    """

    __tablename__ = "weight_entries"

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

    weight: Mapped[float] = mapped_column(Float, nullable=False)

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    photos: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)

    user: Mapped["User"] = relationship("User", back_populates="weight_entries")

    def __repr__(self) -> str:
        return f"<WeightEntry(id={self.id}, user_id={self.user_id}, weight={self.weight})>"
