"""
Base Model Classes

Foundational classes for all SQLAlchemy models in FitShare: the declarative
base, the timestamp mixin, and the column types shared across tables.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       └── TimestampMixin   ← Automatic created_at/updated_at

Portable Column Types:
======================
    JSONType    → JSONB on PostgreSQL, JSON elsewhere (SQLite in tests)
    enum_column → String-valued SQL enum storing the Enum *values*

Usage:
======
    from fitshare.shared.models.base import Base, TimestampMixin, JSONType

    class Meal(Base, TimestampMixin):
        __tablename__ = "meals"
        id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
        nutrition: Mapped[dict[str, Any]] = mapped_column(JSONType)
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from sqlalchemy import JSON, DateTime, Enum as SQLEnum, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    """Timezone-aware current time (UTC)."""
    return datetime.now(timezone.utc)


def enum_column(enum_cls: type[Enum], name: str) -> SQLEnum:
    """
    SQL enum type that persists member values ("Upper Body") rather than names.

    Args:
        enum_cls: Python Enum class
        name: Database type name (PostgreSQL enum)
    """
    return SQLEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Example:
        class Workout(Base, TimestampMixin):
            __tablename__ = "workouts"

            id: Mapped[uuid.UUID] = mapped_column(
                Uuid(as_uuid=True),
                primary_key=True,
                default=uuid.uuid4
            )
    """

    type_annotation_map = {
        dict[str, Any]: JSONType,
        list[Any]: JSONType,
    }


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    - created_at: Set when the record is first inserted
    - updated_at: Updated whenever the record is modified

    Database Behavior:
    ==================
    Both columns carry a CURRENT_TIMESTAMP server default for raw SQL inserts,
    and a Python-side default so ORM inserts get sub-second precision. Feed
    ordering (newest first) relies on that precision.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
        index=True,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utcnow,
        nullable=False,
    )
