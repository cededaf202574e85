"""
Post Schemas

Request/response models for the social feed: posts, likes, comments, replies.

Reference Rule:
===============
A post may carry at most one reference and it must match its `type`:

    {"type": "workout", "content": "Leg day", "workoutId": "..."}   ✓
    {"type": "workout", "content": "Leg day", "mealId": "..."}      ✗ 400
    {"type": "meal", "content": "Lunch"}                            ✓ (no reference)

Whether the referenced record exists and belongs to the author is checked by
PostService, not here.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import Field, computed_field, field_validator, model_validator

from fitshare.shared.models.enums import PostType
from fitshare.shared.schemas.common import BaseSchema, Page
from fitshare.shared.schemas.meal import MealResponse
from fitshare.shared.schemas.progress import ProgressResponse
from fitshare.shared.schemas.user import AuthorSummary
from fitshare.shared.schemas.workout import WorkoutResponse


REFERENCE_FIELDS: dict[PostType, str] = {
    PostType.WORKOUT: "workout_id",
    PostType.MEAL: "meal_id",
    PostType.PROGRESS: "progress_id",
}


def _strip(value: object) -> object:
    return value.strip() if isinstance(value, str) else value


# ═══════════════════════════════════════════════════════════════════════════════
# REQUESTS
# ═══════════════════════════════════════════════════════════════════════════════


class PostCreate(BaseSchema):
    """Schema for creating a post."""

    type: PostType
    content: str = Field(min_length=1, max_length=1000)
    workout_id: Optional[UUID] = None
    meal_id: Optional[UUID] = None
    progress_id: Optional[UUID] = None

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, value: object) -> object:
        return _strip(value)

    @model_validator(mode="after")
    def reference_matches_type(self) -> "PostCreate":
        allowed = REFERENCE_FIELDS[self.type]
        for field in REFERENCE_FIELDS.values():
            if field != allowed and getattr(self, field) is not None:
                raise ValueError(f"{field} is not allowed for {self.type.value} posts")
        return self

    @property
    def reference_id(self) -> Optional[UUID]:
        """The supplied reference, if any."""
        return getattr(self, REFERENCE_FIELDS[self.type])


class PostUpdate(BaseSchema):
    """Schema for editing a post's content. Type and reference are immutable."""

    content: str = Field(min_length=1, max_length=1000)

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, value: object) -> object:
        return _strip(value)


class CommentCreate(BaseSchema):
    """Schema for a comment or a reply."""

    text: str = Field(min_length=1, max_length=1000)

    @field_validator("text", mode="before")
    @classmethod
    def strip_text(cls, value: object) -> object:
        return _strip(value)


class PostFilters(BaseSchema):
    """Feed filters for GET /posts."""

    user_id: Optional[UUID] = None
    type: Optional[PostType] = None


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class ReplyResponse(BaseSchema):
    """Reply to a comment."""

    id: UUID
    user_id: UUID
    user: Optional[AuthorSummary] = None
    text: str
    created_at: datetime


class CommentResponse(BaseSchema):
    """Comment with its replies in insertion order."""

    id: UUID
    post_id: UUID
    user_id: UUID
    user: Optional[AuthorSummary] = None
    text: str
    created_at: datetime
    replies: list[ReplyResponse] = Field(default_factory=list)


class LikeResult(BaseSchema):
    """Outcome of a like toggle."""

    liked: bool
    likes_count: int


class PostResponse(BaseSchema):
    """
    Post with author, referenced record, likes and comment thread embedded.

    `likes` is the list of user ids; ORM PostLike rows are flattened on input.
    """

    id: UUID
    user_id: UUID
    user: Optional[AuthorSummary] = None
    type: PostType
    content: str
    workout_id: Optional[UUID] = None
    meal_id: Optional[UUID] = None
    progress_id: Optional[UUID] = None
    workout: Optional[WorkoutResponse] = None
    meal: Optional[MealResponse] = None
    progress: Optional[ProgressResponse] = None
    likes: list[UUID] = Field(default_factory=list)
    comments: list[CommentResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @field_validator("likes", mode="before")
    @classmethod
    def flatten_likes(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [getattr(item, "user_id", item) for item in value]
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def likes_count(self) -> int:
        return len(self.likes)


PostFeed = Page[PostResponse]
