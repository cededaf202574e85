"""
Service Dependencies

FastAPI dependencies for service injection.

Services are created per-request, which is fine because:
- Services are stateless (only hold the session plus shared adapters)
- Each request gets its own db session
- The cache and object storage handles are shared via app.state

Usage:
======
    from fitshare.api.dependencies.services import PostServiceDep

    @router.get("")
    async def list_posts(post_service: PostServiceDep):
        ...
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fitshare.api.dependencies.database import get_db
from fitshare.shared.adapters.redis_adapter import Cache
from fitshare.shared.adapters.storage_adapter import ObjectStorage
from fitshare.shared.services.auth_service import AuthService
from fitshare.shared.services.media_service import MediaService
from fitshare.shared.services.personal_record_service import PersonalRecordService
from fitshare.shared.services.post_service import PostService
from fitshare.shared.services.resource_service import (
    MealService,
    ProgressService,
    WeightLogService,
    WorkoutService,
)
from fitshare.shared.services.user_service import UserService


def get_cache(request: Request) -> Cache:
    """Shared cache adapter (app.state.cache)."""
    return request.app.state.cache


def get_storage(request: Request) -> ObjectStorage:
    """Shared object storage adapter (app.state.storage)."""
    return request.app.state.storage


def get_media_service(
    storage: Annotated[ObjectStorage, Depends(get_storage)],
) -> MediaService:
    return MediaService(storage)


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
) -> AuthService:
    """
    Dependency to get AuthService instance.

    Creates a new service instance per request with the request's db session.
    """
    return AuthService(db)


async def get_user_service(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    media: MediaService = Depends(get_media_service),
) -> UserService:
    """Dependency to get UserService instance."""
    return UserService(db, cache, media)


async def get_workout_service(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    media: MediaService = Depends(get_media_service),
) -> WorkoutService:
    """Dependency to get WorkoutService instance."""
    return WorkoutService(db, cache, media)


async def get_meal_service(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    media: MediaService = Depends(get_media_service),
) -> MealService:
    """Dependency to get MealService instance."""
    return MealService(db, cache, media)


async def get_progress_service(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    media: MediaService = Depends(get_media_service),
) -> ProgressService:
    """Dependency to get ProgressService instance."""
    return ProgressService(db, cache, media)


async def get_weight_log_service(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    media: MediaService = Depends(get_media_service),
) -> WeightLogService:
    """Dependency to get WeightLogService instance."""
    return WeightLogService(db, cache, media)


async def get_personal_record_service(
    db: AsyncSession = Depends(get_db),
) -> PersonalRecordService:
    """Dependency to get PersonalRecordService instance."""
    return PersonalRecordService(db)


async def get_post_service(
    db: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
) -> PostService:
    """Dependency to get PostService instance."""
    return PostService(db, cache)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
WorkoutServiceDep = Annotated[WorkoutService, Depends(get_workout_service)]
MealServiceDep = Annotated[MealService, Depends(get_meal_service)]
ProgressServiceDep = Annotated[ProgressService, Depends(get_progress_service)]
WeightLogServiceDep = Annotated[WeightLogService, Depends(get_weight_log_service)]
PersonalRecordServiceDep = Annotated[PersonalRecordService, Depends(get_personal_record_service)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
MediaServiceDep = Annotated[MediaService, Depends(get_media_service)]
