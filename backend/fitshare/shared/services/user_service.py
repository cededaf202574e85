"""
User Service

Profiles and the user directory.

Cache Keys:
===========
    users:{"search":"ada"}:page:1:limit:20    ← directory pages (1 h)
    user:<id>                                 ← public profile (10 min)

Profile writes drop `user:<id>`, `users:*` and `posts:*` after commit (posts
embed the author's name and picture).
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fitshare.config.settings import settings
from fitshare.shared.adapters.redis_adapter import Cache, build_list_key
from fitshare.shared.core.exceptions import UserNotFoundError
from fitshare.shared.core.logging import get_logger
from fitshare.shared.db.session import after_commit
from fitshare.shared.models.user import User
from fitshare.shared.repositories.user_repository import UserRepository
from fitshare.shared.schemas.common import Page, PaginationMeta
from fitshare.shared.schemas.user import (
    GoalWeightUpdate,
    ProfileUpdate,
    PublicUserResponse,
    UserResponse,
)
from fitshare.shared.services.media_service import MediaService, UploadedFile

logger = get_logger("users")

UserDirectory = Page[PublicUserResponse]


class UserService:
    """
    Service for user profiles.

    Attributes:
        session: Database session
        cache: Read-through cache (advisory)
        media: Photo storage, used for profile pictures
        repo: UserRepository instance
    """

    def __init__(self, session: AsyncSession, cache: Cache, media: Optional[MediaService] = None) -> None:
        self.session = session
        self.cache = cache
        self.media = media
        self.repo = UserRepository(session)

    async def _load(self, user_id: UUID) -> User:
        user = await self.repo.get(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user

    def _invalidate(self, user_id: UUID) -> None:
        after_commit(self.session, self.cache.delete, f"user:{user_id}")
        after_commit(self.session, self.cache.delete_pattern, "users:*")
        after_commit(self.session, self.cache.delete_pattern, "posts:*")

    # ═══════════════════════════════════════════════════════════════════════════
    # READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_users(self, page: int, limit: int, search: Optional[str] = None) -> UserDirectory:
        """
        Paginated directory with optional name search, newest first.
        """
        search = search.strip() if search else None
        cache_key = build_list_key("users", {"search": search or None}, page, limit)

        cached = await self.cache.get_json(cache_key)
        if cached is not None:
            return UserDirectory.model_validate(cached)

        users, total = await self.repo.search(page=page, limit=limit, search=search)
        result = UserDirectory(
            items=[PublicUserResponse.model_validate(user) for user in users],
            pagination=PaginationMeta.create(page=page, limit=limit, total=total, returned=len(users)),
        )
        await self.cache.set_json(
            cache_key,
            result.model_dump(mode="json", by_alias=True),
            ttl=settings.USER_LIST_CACHE_TTL_SECONDS,
        )
        return result

    async def get_public_profile(self, user_id: UUID) -> PublicUserResponse:
        """
        Public view of any user. Cached.

        Raises:
            UserNotFoundError: No such user
        """
        cache_key = f"user:{user_id}"
        cached = await self.cache.get_json(cache_key)
        if cached is not None:
            return PublicUserResponse.model_validate(cached)

        profile = PublicUserResponse.model_validate(await self._load(user_id))
        await self.cache.set_json(
            cache_key,
            profile.model_dump(mode="json", by_alias=True),
            ttl=settings.PROFILE_CACHE_TTL_SECONDS,
        )
        return profile

    async def get_me(self, user_id: UUID) -> UserResponse:
        """
        Full profile of the acting user. Never cached.

        Raises:
            UserNotFoundError: Token names a user that no longer exists
        """
        return UserResponse.model_validate(await self._load(user_id))

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE
    # ═══════════════════════════════════════════════════════════════════════════

    async def update_profile(self, user_id: UUID, payload: ProfileUpdate) -> UserResponse:
        """Apply the provided profile fields."""
        user = await self._load(user_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)

        user = await self.repo.update(user, **changes)
        self._invalidate(user_id)

        logger.info("Profile updated", user_id=str(user_id), fields=sorted(changes))
        return UserResponse.model_validate(user)

    async def set_goal_weight(self, user_id: UUID, payload: GoalWeightUpdate) -> UserResponse:
        user = await self._load(user_id)
        user = await self.repo.update(user, goal_weight=payload.goal_weight)
        self._invalidate(user_id)
        return UserResponse.model_validate(user)

    async def update_profile_picture(self, user_id: UUID, upload: UploadedFile) -> UserResponse:
        """
        Store a new profile picture and release the previous one.

        Raises:
            InvalidFileTypeError / FileTooLargeError: Upload rejected
            StorageError: Upload failed
        """
        if self.media is None:
            raise RuntimeError("UserService was built without a MediaService")

        user = await self._load(user_id)
        previous = user.profile_picture

        key = await self.media.store(upload, user_id)
        user = await self.repo.update(user, profile_picture=key)
        if previous:
            await self.media.release(previous)

        self._invalidate(user_id)
        logger.info("Profile picture updated", user_id=str(user_id), key=key)
        return UserResponse.model_validate(user)
