"""
Personal Record Models

Each user keeps a catalog of PR exercises, and every exercise collects a
history of recorded values. The newest record is the current PR.

Model Hierarchy:
================
    PRExercise                 - unique (user_id, name)
       └── records (PRRecord[]) - newest first, deleted with the exercise

SAMPLE RECORDS:
┌──────────────────────────────────────────────────────────────────────────────┐
│ pr_exercises  │ name="Deadlift", unit="lbs"                                  │
│ pr_records    │ exercise_id=<Deadlift>, value=405                            │
│ pr_records    │ exercise_id=<Deadlift>, value=415  ← current                 │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING
import uuid

from sqlalchemy import Float, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitshare.shared.models.base import Base, TimestampMixin, enum_column
from fitshare.shared.models.enums import PRUnit


if TYPE_CHECKING:
    from fitshare.shared.models.user import User


class PRExercise(Base, TimestampMixin):
    """
    An exercise a user tracks personal records for.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Owning user
        name: Exercise name, unique per user
        unit: lbs / reps / time; frozen once a record exists
    """

    __tablename__ = "pr_exercises"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_pr_exercises_user_name"),)

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

    unit: Mapped[PRUnit] = mapped_column(
        enum_column(PRUnit, "pr_unit"),
        nullable=False,
        default=PRUnit.LBS,
    )

    user: Mapped["User"] = relationship("User", back_populates="pr_exercises")

    records: Mapped[list["PRRecord"]] = relationship(
        "PRRecord",
        back_populates="exercise",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<PRExercise(id={self.id}, user_id={self.user_id}, name={self.name})>"


class PRRecord(Base, TimestampMixin):
    """
    One recorded value for a PR exercise.

    `user_id` repeats the exercise owner so ownership checks and history
    queries never join.
    """

    __tablename__ = "pr_records"

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

    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("pr_exercises.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    value: Mapped[float] = mapped_column(Float, nullable=False)

    exercise: Mapped["PRExercise"] = relationship("PRExercise", back_populates="records")

    def __repr__(self) -> str:
        return f"<PRRecord(id={self.id}, exercise_id={self.exercise_id}, value={self.value})>"
