"""
Common Schemas

Shared schemas used across the application for consistent API responses.

Schema Types:
=============
- BaseSchema: camelCase on the wire, snake_case in Python, ORM-readable
- Pagination: Query parameters and response metadata
- Envelope: ApiResponse[T] → {success, message?, data?}
- Page[T]: {items, pagination}

Usage:
======
    from fitshare.shared.schemas.common import ApiResponse, Page, PaginationMeta

    page = Page[WorkoutResponse](
        items=workouts,
        pagination=PaginationMeta.create(page=1, limit=20, total=45, returned=20),
    )
    return ApiResponse(data=page)

    # JSON:
    # {"success": true, "message": null,
    #  "data": {"items": [...], "pagination": {"currentPage": 1, "totalPages": 3,
    #                                          "totalItems": 45, "hasMore": true, "limit": 20}}}
"""

from datetime import datetime, timezone
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from fitshare.shared.utils.files import build_file_url


DataT = TypeVar("DataT")


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    - alias_generator=to_camel: fields serialize as camelCase
    - populate_by_name: input may use either camelCase or snake_case
    - from_attributes: build directly from ORM models
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# PAGINATION
# ═══════════════════════════════════════════════════════════════════════════════


class PaginationParams(BaseModel):
    """
    Pagination query parameters shared by every list endpoint.

    Example:
        @router.get("/workouts")
        async def list_workouts(pagination: Pagination):
            ...
    """

    page: int = Field(default=1, ge=1, description="Page number (1-indexed)")
    limit: int = Field(default=20, ge=1, le=100, description="Items per page")

    @property
    def offset(self) -> int:
        """Calculate offset for database query."""
        return (self.page - 1) * self.limit


class PaginationMeta(BaseSchema):
    """
    Pagination metadata in response.

    Invariants:
        total_pages = ceil(total_items / limit)
        has_more    = offset + returned < total_items
    """

    current_page: int = Field(description="Current page number")
    total_pages: int = Field(description="Total number of pages")
    total_items: int = Field(description="Total number of matching items")
    has_more: bool = Field(description="Whether a later page has items")
    limit: int = Field(description="Items per page")

    @classmethod
    def create(cls, page: int, limit: int, total: int, returned: int) -> "PaginationMeta":
        """
        Create pagination meta from query parameters and result sizes.

        Args:
            page: Current page number
            limit: Items per page
            total: Total number of matching items
            returned: Number of items on this page
        """
        total_pages = (total + limit - 1) // limit if limit > 0 else 0
        offset = (page - 1) * limit
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_items=total,
            has_more=offset + returned < total,
            limit=limit,
        )


class Page(BaseSchema, Generic[DataT]):
    """
    Generic page of results.

    Example:
        Page[PostResponse](items=[post1, post2], pagination=meta)
    """

    items: list[DataT]
    pagination: PaginationMeta


# ═══════════════════════════════════════════════════════════════════════════════
# MIXINS
# ═══════════════════════════════════════════════════════════════════════════════


class PhotosMixin(BaseSchema):
    """
    Stored photo keys plus their public URLs.

    `photo_urls` is computed on serialization and ignored on input, so a
    cached response can be re-validated without double-prefixing URLs.
    """

    photos: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def photo_urls(self) -> list[str]:
        return [build_file_url(key) for key in self.photos]


class RemovedPhotosMixin(BaseSchema):
    """Keys of already-attached photos to detach on update."""

    removed_photos: list[str] = Field(default_factory=list)


# ═══════════════════════════════════════════════════════════════════════════════
# STANDARD RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class ApiResponse(BaseSchema, Generic[DataT]):
    """
    Success envelope returned by every endpoint.

    Example:
        ApiResponse(message="Post created successfully", data=post)
    """

    success: bool = True
    message: Optional[str] = None
    data: Optional[DataT] = None


class MessageResponse(BaseSchema):
    """Envelope without data, for confirmations like deletes."""

    success: bool = True
    message: str


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseSchema):
    """Health check response schema."""

    status: str = "healthy"
    service: str = "fitshare"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
