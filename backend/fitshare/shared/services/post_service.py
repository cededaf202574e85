"""
Post Service

Business logic for the social feed.

Operations:
===========
    create        → reference (if any) must exist and belong to the author
    list          → cached feed page, newest first
    get           → one post with everything embedded
    toggle_like   → set semantics on (post, user)
    add_comment   → append
    add_reply     → append to a comment located by id alone
    edit          → author only, content only
    delete        → author only, likes/comments/replies go with it

Every write drops `posts:*` from the cache once its transaction commits. A
page cached by a reader racing the commit can outlive it by at most the feed
TTL.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fitshare.config.settings import settings
from fitshare.shared.adapters.redis_adapter import Cache, build_list_key
from fitshare.shared.core.exceptions import (
    CommentNotFoundError,
    NotFoundOrUnauthorizedError,
    PostNotFoundError,
)
from fitshare.shared.core.logging import get_logger
from fitshare.shared.db.session import after_commit
from fitshare.shared.models import Post
from fitshare.shared.models.enums import PostType
from fitshare.shared.repositories.activity_repository import (
    MealRepository,
    OwnedRepository,
    ProgressRepository,
    WorkoutRepository,
)
from fitshare.shared.repositories.post_repository import PostRepository
from fitshare.shared.schemas.common import PaginationMeta
from fitshare.shared.schemas.post import (
    REFERENCE_FIELDS,
    CommentResponse,
    LikeResult,
    PostCreate,
    PostFeed,
    PostFilters,
    PostResponse,
    ReplyResponse,
)
from fitshare.shared.services.ownership import assert_owner, is_owner

logger = get_logger("posts")

FEED_CACHE_PREFIX = "posts"


class PostService:
    """
    Service for posts, likes, comments and replies.

    Attributes:
        session: Database session
        cache: Read-through cache (advisory)
        repo: PostRepository instance
    """

    def __init__(self, session: AsyncSession, cache: Cache) -> None:
        """
        Initialize PostService.

        Args:
            session: Async database session
            cache: Cache adapter
        """
        self.session = session
        self.cache = cache
        self.repo = PostRepository(session)
        self._reference_repos: dict[PostType, OwnedRepository] = {
            PostType.WORKOUT: WorkoutRepository(session),
            PostType.MEAL: MealRepository(session),
            PostType.PROGRESS: ProgressRepository(session),
        }

    def _invalidate_feed(self) -> None:
        after_commit(self.session, self.cache.delete_pattern, f"{FEED_CACHE_PREFIX}:*")

    async def _load(self, post_id: UUID) -> Post:
        post = await self.repo.get(post_id)
        if post is None:
            raise PostNotFoundError(str(post_id))
        return post

    async def _render(self, post_id: UUID) -> PostResponse:
        post = await self.repo.get_with_relations(post_id)
        if post is None:
            raise PostNotFoundError(str(post_id))
        return PostResponse.model_validate(post)

    # ═══════════════════════════════════════════════════════════════════════════
    # POSTS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, actor_id: UUID, payload: PostCreate) -> PostResponse:
        """
        Create a post by the acting user.

        The payload schema already rejects references that do not match the
        post type. Here the supplied reference must exist and be owned by the
        author; a record owned by someone else is reported exactly like a
        missing one.

        Raises:
            NotFoundOrUnauthorizedError: Reference missing or not the author's
        """
        reference_id = payload.reference_id
        if reference_id is not None:
            record = await self._reference_repos[payload.type].get(reference_id)
            if record is None or not is_owner(record, actor_id):
                raise NotFoundOrUnauthorizedError(payload.type.value.capitalize())

        values = {"user_id": actor_id, "type": payload.type, "content": payload.content}
        if reference_id is not None:
            values[REFERENCE_FIELDS[payload.type]] = reference_id

        post = await self.repo.create(**values)
        self._invalidate_feed()

        logger.info("Post created", post_id=str(post.id), user_id=str(actor_id), type=payload.type.value)
        return await self._render(post.id)

    async def list(self, filters: PostFilters, page: int, limit: int) -> PostFeed:
        """
        One feed page, newest first, served from cache when present.

        Args:
            filters: Optional author and type filters
            page: 1-based page number
            limit: Page size (1..100)
        """
        cache_key = build_list_key(FEED_CACHE_PREFIX, filters.model_dump(mode="json"), page, limit)

        cached = await self.cache.get_json(cache_key)
        if cached is not None:
            return PostFeed.model_validate(cached)

        posts, total = await self.repo.feed(
            page=page,
            limit=limit,
            user_id=filters.user_id,
            post_type=filters.type,
        )
        result = PostFeed(
            items=[PostResponse.model_validate(post) for post in posts],
            pagination=PaginationMeta.create(page=page, limit=limit, total=total, returned=len(posts)),
        )

        await self.cache.set_json(
            cache_key,
            result.model_dump(mode="json", by_alias=True),
            ttl=settings.FEED_CACHE_TTL_SECONDS,
        )
        return result

    async def get(self, post_id: UUID) -> PostResponse:
        """
        Raises:
            PostNotFoundError: No such post
        """
        return await self._render(post_id)

    async def edit(self, post_id: UUID, actor_id: UUID, content: str) -> PostResponse:
        """
        Replace a post's content. Type and reference never change.

        Raises:
            PostNotFoundError: No such post
            AuthorizationError: Acting user is not the author
        """
        post = await self._load(post_id)
        assert_owner(post, actor_id, action="edit", resource_name="post")

        await self.repo.update(post, content=content)
        self._invalidate_feed()

        logger.info("Post edited", post_id=str(post_id))
        return await self._render(post_id)

    async def delete(self, post_id: UUID, actor_id: UUID) -> None:
        """
        Hard delete a post with its likes, comments and replies.

        Raises:
            PostNotFoundError: No such post
            AuthorizationError: Acting user is not the author
        """
        post = await self._load(post_id)
        assert_owner(post, actor_id, action="delete", resource_name="post")

        await self.repo.delete_post(post_id)
        self._invalidate_feed()

        logger.info("Post deleted", post_id=str(post_id), user_id=str(actor_id))

    # ═══════════════════════════════════════════════════════════════════════════
    # SOCIAL
    # ═══════════════════════════════════════════════════════════════════════════

    async def toggle_like(self, post_id: UUID, actor_id: UUID) -> LikeResult:
        """
        Like the post, or remove an existing like.

        Removal is tried first; only if nothing was removed is the like
        added. Both statements are atomic on the (post_id, user_id) key, so
        concurrent toggles never duplicate or lose a like.

        Returns:
            LikeResult(liked, likes_count)
        """
        if not await self.repo.exists(post_id):
            raise PostNotFoundError(str(post_id))

        removed = await self.repo.remove_like(post_id, actor_id)
        if not removed:
            await self.repo.add_like(post_id, actor_id)

        likes_count = await self.repo.count_likes(post_id)
        self._invalidate_feed()

        return LikeResult(liked=not removed, likes_count=likes_count)

    async def add_comment(self, post_id: UUID, actor_id: UUID, text: str) -> CommentResponse:
        """
        Append a comment. Any authenticated user may comment.

        Raises:
            PostNotFoundError: No such post
        """
        if not await self.repo.exists(post_id):
            raise PostNotFoundError(str(post_id))

        comment = await self.repo.add_comment(post_id, actor_id, text)
        self._invalidate_feed()

        logger.info("Comment added", post_id=str(post_id), comment_id=str(comment.id))
        return CommentResponse.model_validate(comment)

    async def add_reply(self, comment_id: UUID, actor_id: UUID, text: str) -> ReplyResponse:
        """
        Append a reply to a comment, whichever post it belongs to.

        Raises:
            CommentNotFoundError: No such comment
        """
        comment = await self.repo.get_comment(comment_id)
        if comment is None:
            raise CommentNotFoundError(str(comment_id))

        reply = await self.repo.add_reply(comment_id, actor_id, text)
        self._invalidate_feed()

        logger.info("Reply added", comment_id=str(comment_id), reply_id=str(reply.id))
        return ReplyResponse.model_validate(reply)

