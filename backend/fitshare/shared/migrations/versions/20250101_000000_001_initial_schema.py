# pylint: skip-file
# ruff: noqa
"""Initial schema - create all tables

Revision ID: 001
Revises:
Create Date: 2025-01-01 00:00:00

Tables created:
- users: Accounts and profile data
- workouts / meals / progress: Owner-scoped activity records (photos as JSONB key lists)
- posts: Feed entries, optionally referencing one activity record
- post_likes: (post_id, user_id) set of likes
- post_comments / comment_replies: Append-only thread

Enums created:
- workout_split: Push, Pull, Legs, Upper Body, Lower Body, Full Body, Chest, Back,
  Shoulders, Arms, Core, Cardio, Other
- meal_type: breakfast, lunch, dinner, snack
- progress_type: weight, pr, measurement, photo
- post_type: workout, meal, progress
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# Enum types
workout_split_enum = postgresql.ENUM(
    "Push",
    "Pull",
    "Legs",
    "Upper Body",
    "Lower Body",
    "Full Body",
    "Chest",
    "Back",
    "Shoulders",
    "Arms",
    "Core",
    "Cardio",
    "Other",
    name="workout_split",
    create_type=False,
)

meal_type_enum = postgresql.ENUM(
    "breakfast", "lunch", "dinner", "snack", name="meal_type", create_type=False
)

progress_type_enum = postgresql.ENUM(
    "weight", "pr", "measurement", "photo", name="progress_type", create_type=False
)

post_type_enum = postgresql.ENUM("workout", "meal", "progress", name="post_type", create_type=False)


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
    # Create enum types
    op.execute(
        "CREATE TYPE workout_split AS ENUM "
        "('Push', 'Pull', 'Legs', 'Upper Body', 'Lower Body', 'Full Body', "
        "'Chest', 'Back', 'Shoulders', 'Arms', 'Core', 'Cardio', 'Other')"
    )
    op.execute("CREATE TYPE meal_type AS ENUM ('breakfast', 'lunch', 'dinner', 'snack')")
    op.execute("CREATE TYPE progress_type AS ENUM ('weight', 'pr', 'measurement', 'photo')")
    op.execute("CREATE TYPE post_type AS ENUM ('workout', 'meal', 'progress')")

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("first_name", sa.String(50), nullable=False),
        sa.Column("last_name", sa.String(50), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("height", sa.Float(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("goal_weight", sa.Float(), nullable=True),
        sa.Column("profile_picture", sa.String(255), nullable=True),
        *_timestamps(),
    )

    # Create workouts table
    op.create_table(
        "workouts",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _owner_column(),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("split", workout_split_enum, nullable=False, index=True),
        sa.Column("exercises", postgresql.JSONB(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("photos", postgresql.JSONB(), nullable=False),
        *_timestamps(),
    )

    # Create meals table
    op.create_table(
        "meals",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _owner_column(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("nutrition", postgresql.JSONB(), nullable=False),
        sa.Column("meal_type", meal_type_enum, nullable=False, index=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("photos", postgresql.JSONB(), nullable=False),
        *_timestamps(),
    )

    # Create progress table
    op.create_table(
        "progress",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _owner_column(),
        sa.Column("type", progress_type_enum, nullable=False, index=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("exercise", sa.String(100), nullable=True),
        sa.Column("pr_value", sa.Float(), nullable=True),
        sa.Column("measurement", postgresql.JSONB(), nullable=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("photos", postgresql.JSONB(), nullable=False),
        *_timestamps(),
    )

    # Create posts table
    op.create_table(
        "posts",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _owner_column(),
        sa.Column("type", post_type_enum, nullable=False, index=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "workout_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("workouts.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        sa.Column(
            "meal_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("meals.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        sa.Column(
            "progress_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("progress.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        *_timestamps(),
    )

    # Create post_likes table (set of (post, user) pairs)
    op.create_table(
        "post_likes",
        sa.Column(
            "post_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("posts.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    )

    # Create post_comments table
    op.create_table(
        "post_comments",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "post_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("position", sa.Integer(), server_default="1", nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    )

    # Create comment_replies table
    op.create_table(
        "comment_replies",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "comment_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("post_comments.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("position", sa.Integer(), server_default="1", nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    # Drop tables in reverse order (respect foreign keys)
    op.drop_table("comment_replies")
    op.drop_table("post_comments")
    op.drop_table("post_likes")
    op.drop_table("posts")
    op.drop_table("progress")
    op.drop_table("meals")
    op.drop_table("workouts")
    op.drop_table("users")

    # Drop enum types
    op.execute("DROP TYPE IF EXISTS post_type")
    op.execute("DROP TYPE IF EXISTS progress_type")
    op.execute("DROP TYPE IF EXISTS meal_type")
    op.execute("DROP TYPE IF EXISTS workout_split")
