"""
Post Entity Models

The social layer: posts that share a workout, meal or progress entry, plus
their likes, comments and replies.

Model Hierarchy:
================
    Post
       ├── likes (PostLike[])        - one row per (post, user); set semantics
       └── comments (Comment[])      - insertion ordered
              └── replies (Reply[])  - insertion ordered, no further nesting

Likes, comments and replies live in their own tables so that every social
mutation is a single-row INSERT or DELETE. Toggling a like never rewrites a
list, and concurrent comments never overwrite each other.

SAMPLE POST RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 9b1c8400-e29b-41d4-a716-446655440000                      │
│ user_id          │ 550e8400-e29b-41d4-a716-446655440000                      │
│ type             │ "workout"                                                 │
│ content          │ "New bench PR!"                                           │
│ workout_id       │ 1f0e8400-e29b-41d4-a716-446655440000                      │
│ meal_id          │ null                                                      │
│ progress_id      │ null                                                      │
└──────────────────────────────────────────────────────────────────────────────┘

post_likes:
┌──────────────────────────────────────────────────────────────────────────────┐
│ post_id + user_id (composite primary key) │ created_at                       │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import DateTime, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitshare.shared.models.base import Base, TimestampMixin, enum_column, utcnow
from fitshare.shared.models.enums import PostType


if TYPE_CHECKING:
    from fitshare.shared.models.user import User
    from fitshare.shared.models.workout import Workout
    from fitshare.shared.models.meal import Meal
    from fitshare.shared.models.progress import Progress


class Post(Base, TimestampMixin):
    """
    Post model - a shared activity with free-text content.

    Invariant: a non-null reference points at a record owned by `user_id`
    at creation time. `type` and the references never change afterwards.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Author / owner
        type: workout, meal or progress
        content: Free text (1-1000 chars)
        workout_id / meal_id / progress_id: Optional reference matching `type`
    """

    __tablename__ = "posts"

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

    type: Mapped[PostType] = mapped_column(
        enum_column(PostType, "post_type"),
        nullable=False,
        index=True,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    # ═══════════════════════════════════════════════════════════════════════════
    # REFERENCES (cleared, not cascaded, when the referenced record is deleted)
    # ═══════════════════════════════════════════════════════════════════════════

    workout_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("workouts.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    meal_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("meals.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    progress_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("progress.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS (always loaded explicitly with selectinload)
    # ═══════════════════════════════════════════════════════════════════════════

    user: Mapped["User"] = relationship("User", back_populates="posts")

    workout: Mapped[Optional["Workout"]] = relationship("Workout")
    meal: Mapped[Optional["Meal"]] = relationship("Meal")
    progress: Mapped[Optional["Progress"]] = relationship("Progress")

    likes: Mapped[list["PostLike"]] = relationship(
        "PostLike",
        back_populates="post",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    comments: Mapped[list["Comment"]] = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[Comment.position, Comment.created_at]",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Post(id={self.id}, user_id={self.user_id}, type={self.type})>"


class PostLike(Base):
    """
    One user's like on one post.

    The composite primary key is the set-membership guarantee: a user can
    appear at most once in a post's likes.
    """

    __tablename__ = "post_likes"

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    post: Mapped["Post"] = relationship("Post", back_populates="likes")


class Comment(Base):
    """
    Comment on a post. Append-only: never edited or removed on its own.

    Attributes:
        id: Unique identifier; replies address the comment by this id alone
        post_id: Owning post
        user_id: Author
        text: 1-1000 chars, trimmed
        position: Insertion index among the post's comments
    """

    __tablename__ = "post_comments"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)

    # 1-based insertion index within the parent; created_at breaks ties
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    post: Mapped["Post"] = relationship("Post", back_populates="comments")
    user: Mapped["User"] = relationship("User")

    replies: Mapped[list["Reply"]] = relationship(
        "Reply",
        back_populates="comment",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[Reply.position, Reply.created_at]",
    )


class Reply(Base):
    """Reply to a comment. Same shape as Comment without nested replies."""

    __tablename__ = "comment_replies"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    comment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("post_comments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)

    # 1-based insertion index within the parent; created_at breaks ties
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    comment: Mapped["Comment"] = relationship("Comment", back_populates="replies")
    user: Mapped["User"] = relationship("User")
