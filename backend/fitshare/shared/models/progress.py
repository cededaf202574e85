"""
Progress Entity Model

A progress entry: body weight, personal record, body measurements, or a
photo set. The `type` column selects which payload columns are populated;
the pydantic tagged union in `schemas/progress.py` enforces that on input.

SAMPLE PROGRESS RECORDS:
┌──────────────────────────────────────────────────────────────────────────────┐
│ type=weight      │ weight=182.4                                              │
│ type=pr          │ exercise="Deadlift", pr_value=405                         │
│ type=measurement │ measurement={"waist": 32, "chest": 42}                    │
│ type=photo       │ photos=["550e8400-...-1717225200000-0c1d2e3f.png"]        │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import DateTime, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitshare.shared.models.base import Base, JSONType, TimestampMixin, enum_column, utcnow
from fitshare.shared.models.enums import ProgressType


if TYPE_CHECKING:
    from fitshare.shared.models.user import User


class Progress(Base, TimestampMixin):
    """
    Progress model.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Owning user
        type: Discriminator (weight, pr, measurement, photo)
        weight: Body weight (type=weight)
        exercise / pr_value: Personal record (type=pr)
        measurement: {chest, waist, hips, arms, legs} (type=measurement)
        date: When the entry was recorded
        notes: Free text
        photos: Object-storage keys (required non-empty for type=photo)
    """

    __tablename__ = "progress"

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

    type: Mapped[ProgressType] = mapped_column(
        enum_column(ProgressType, "progress_type"),
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # TYPE-SPECIFIC PAYLOAD
    # ═══════════════════════════════════════════════════════════════════════════

    weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    exercise: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    pr_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    measurement: Mapped[Optional[dict[str, Any]]] = mapped_column(JSONType, nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # COMMON
    # ═══════════════════════════════════════════════════════════════════════════

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    photos: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)

    user: Mapped["User"] = relationship("User", back_populates="progress_entries")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Progress(id={self.id}, user_id={self.user_id}, type={self.type})>"
