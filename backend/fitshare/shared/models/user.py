"""
User Entity Model

Represents a registered application user and their fitness profile.

Model Hierarchy:
================
    User
       ├── workouts (Workout[])
       ├── meals (Meal[])
       ├── progress_entries (Progress[])
       ├── weight_entries (WeightEntry[])
       ├── pr_exercises (PRExercise[])
       └── posts (Post[])

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ first_name       │ "Ada"                                                     │
│ last_name        │ "Lovelace"                                                │
│ email            │ "ada@example.com"                                         │
│ password_hash    │ "$2b$12$..."                                              │
│ age / height     │ 29 / 66.0 (inches)                                        │
│ weight           │ 140.0 (lbs)                                               │
│ goal_weight      │ 135.0                                                     │
│ profile_picture  │ "550e8400-...-1718000000000-1a2b3c4d.jpg"                 │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import Float, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitshare.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from fitshare.shared.models.workout import Workout
    from fitshare.shared.models.meal import Meal
    from fitshare.shared.models.progress import Progress
    from fitshare.shared.models.weight_entry import WeightEntry
    from fitshare.shared.models.personal_record import PRExercise
    from fitshare.shared.models.post import Post


class User(Base, TimestampMixin):
    """
    User model representing a registered application user.

    Users are never hard-deleted; their records own workouts, meals,
    progress entries and posts.

    Attributes:
        id: Unique identifier (UUID v4)
        first_name / last_name: Display name
        email: Login email (unique, indexed, stored lowercase)
        password_hash: Bcrypt hashed password
        age, height, weight, goal_weight: Optional profile attributes
        profile_picture: Object-storage key of the current profile picture
    """

    __tablename__ = "users"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # AUTHENTICATION
    # ═══════════════════════════════════════════════════════════════════════════

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILE
    # ═══════════════════════════════════════════════════════════════════════════

    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)

    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    # inches
    height: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    # lbs
    weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    goal_weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    profile_picture: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    workouts: Mapped[list["Workout"]] = relationship(
        "Workout",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    meals: Mapped[list["Meal"]] = relationship(
        "Meal",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    progress_entries: Mapped[list["Progress"]] = relationship(
        "Progress",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    weight_entries: Mapped[list["WeightEntry"]] = relationship(
        "WeightEntry",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    pr_exercises: Mapped[list["PRExercise"]] = relationship(
        "PRExercise",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    posts: Mapped[list["Post"]] = relationship(
        "Post",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @property
    def user_id(self) -> uuid.UUID:
        """Owner of a user record is the user itself."""
        return self.id

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, email={self.email})>"
