# pylint: skip-file
# ruff: noqa
"""Weight log and personal records

Revision ID: 002
Revises: 001
Create Date: 2025-02-01 00:00:00

Tables created:
- weight_entries: Dated weigh-ins with optional photos
- pr_exercises: Per-user PR exercise catalog, unique (user_id, name)
- pr_records: Recorded values per PR exercise

Enums created:
- pr_unit: lbs, reps, time
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


pr_unit_enum = postgresql.ENUM("lbs", "reps", "time", name="pr_unit", create_type=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def _owner_column() -> sa.Column:
    return sa.Column(
        "user_id",
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


def upgrade() -> None:
    """Upgrade database schema."""
    op.execute("CREATE TYPE pr_unit AS ENUM ('lbs', 'reps', 'time')")

    # Create weight_entries table
    op.create_table(
        "weight_entries",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _owner_column(),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("photos", postgresql.JSONB(), nullable=False),
        *_timestamps(),
    )

    # Create pr_exercises table
    op.create_table(
        "pr_exercises",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _owner_column(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("unit", pr_unit_enum, nullable=False, server_default="lbs"),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "name", name="uq_pr_exercises_user_name"),
    )

    # Create pr_records table
    op.create_table(
        "pr_records",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _owner_column(),
        sa.Column(
            "exercise_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("pr_exercises.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("value", sa.Float(), nullable=False),
        *_timestamps(),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("pr_records")
    op.drop_table("pr_exercises")
    op.drop_table("weight_entries")

    op.execute("DROP TYPE IF EXISTS pr_unit")
