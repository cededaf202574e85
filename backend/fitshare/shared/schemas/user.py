"""
User Schemas

Request/response models for user and authentication endpoints.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field, computed_field, field_validator

from fitshare.shared.schemas.common import BaseSchema
from fitshare.shared.utils.files import build_file_url


class UserCreate(BaseSchema):
    """Schema for user registration."""

    first_name: str = Field(min_length=2, max_length=50)
    last_name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(
        min_length=8,
        description="Password (minimum 8 characters)",
    )
    age: Optional[int] = Field(default=None, ge=16, le=120)
    height: Optional[float] = Field(default=None, ge=24, le=96, description="Inches")
    weight: Optional[float] = Field(default=None, ge=20, le=500)

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def strip_names(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class UserLogin(BaseSchema):
    """Schema for user login."""

    email: EmailStr
    password: str = Field(min_length=1)


class ProfileUpdate(BaseSchema):
    """Partial profile update; only provided fields change."""

    first_name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    age: Optional[int] = Field(default=None, ge=16, le=120)
    height: Optional[float] = Field(default=None, ge=24, le=96)
    weight: Optional[float] = Field(default=None, ge=20, le=500)

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def strip_names(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class GoalWeightUpdate(BaseSchema):
    """Schema for setting the goal weight."""

    goal_weight: float = Field(ge=20, le=500)


class ProfilePictureMixin(BaseSchema):
    """Stored profile picture key plus its public URL."""

    profile_picture: Optional[str] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def profile_picture_url(self) -> Optional[str]:
        return build_file_url(self.profile_picture) if self.profile_picture else None


class UserResponse(ProfilePictureMixin):
    """Full profile of the acting user."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    age: Optional[int] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    goal_weight: Optional[float] = None
    created_at: datetime


class PublicUserResponse(ProfilePictureMixin):
    """Profile visible to other users and anonymous readers."""

    id: UUID
    first_name: str
    last_name: str
    age: Optional[int] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    created_at: datetime


class AuthorSummary(ProfilePictureMixin):
    """Author embedded in posts, comments and replies."""

    id: UUID
    first_name: str
    last_name: str


class AuthResponse(BaseSchema):
    """Schema for authentication response."""

    user: UserResponse
    token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
