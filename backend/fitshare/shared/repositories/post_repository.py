"""
Post Repository

Database operations for posts and their social sub-entities.

Every social mutation is a single statement against its own table:

    Like toggle   → DELETE FROM post_likes WHERE post_id=? AND user_id=?
                    (0 rows) → INSERT ... ON CONFLICT DO NOTHING
    Comment       → INSERT INTO post_comments (position = max + 1 per post)
    Reply         → INSERT INTO comment_replies (position = max + 1 per comment)

Nothing reads a list, mutates it in Python, and writes it back, so concurrent
likes and comments cannot overwrite each other.

Common Operations:
==================
- get_with_relations()   → Post with author, reference, likes, comments, replies
- feed()                 → One newest-first page with the same relations loaded
- remove_like() / add_like() / count_likes()
- add_comment() / get_comment() / add_reply()
- clear_reference()      → Null out post references to a deleted record
- delete_post()          → Hard delete a post and its likes/comments/replies
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.functions import count as sql_count

from fitshare.shared.models import Comment, Post, PostLike, Reply
from fitshare.shared.repositories.base import BaseRepository


def _post_loader_options() -> list[Any]:
    """Eager loads needed to render a post without lazy IO."""
    return [
        selectinload(Post.user),
        selectinload(Post.workout),
        selectinload(Post.meal),
        selectinload(Post.progress),
        selectinload(Post.likes),
        selectinload(Post.comments).selectinload(Comment.user),
        selectinload(Post.comments).selectinload(Comment.replies).selectinload(Reply.user),
    ]


class PostRepository(BaseRepository[Post]):
    """
    Repository for Post, PostLike, Comment and Reply operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Post, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_with_relations(self, post_id: UUID) -> Optional[Post]:
        """
        Load a post with everything the API renders.

        populate_existing refreshes collections already in the identity map
        (e.g. likes changed by a DELETE/INSERT earlier in the same session).
        """
        result = await self.session.execute(
            select(Post)
            .where(Post.id == post_id)
            .options(*_post_loader_options())
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def feed(
        self,
        *,
        page: int,
        limit: int,
        user_id: Optional[UUID] = None,
        post_type: Optional[str] = None,
    ) -> tuple[list[Post], int]:
        """
        One page of the feed, newest first.

        Args:
            user_id: Only posts by this author
            post_type: Only posts of this type

        Returns:
            (posts, total)
        """
        return await self.paginate(
            page=page,
            limit=limit,
            filters={"user_id": user_id, "type": post_type},
            options=_post_loader_options(),
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # LIKES (set semantics on the (post_id, user_id) primary key)
    # ═══════════════════════════════════════════════════════════════════════════

    async def remove_like(self, post_id: UUID, user_id: UUID) -> bool:
        """
        Remove the user from the post's likes.

        Returns:
            True if a like existed and was removed
        """
        result = await self.session.execute(
            delete(PostLike).where(PostLike.post_id == post_id, PostLike.user_id == user_id)
        )
        return (result.rowcount or 0) > 0

    async def add_like(self, post_id: UUID, user_id: UUID) -> None:
        """
        Add the user to the post's likes; a no-op if already present.

        SQL Generated:
            INSERT INTO post_likes (post_id, user_id, created_at) VALUES (...)
            ON CONFLICT (post_id, user_id) DO NOTHING
        """
        # Postgres in production, SQLite under test; both speak ON CONFLICT
        dialect = self.session.get_bind().dialect.name
        insert = pg_insert if dialect == "postgresql" else sqlite_insert

        await self.session.execute(
            insert(PostLike)
            .values(post_id=post_id, user_id=user_id)
            .on_conflict_do_nothing(index_elements=["post_id", "user_id"])
        )

    async def count_likes(self, post_id: UUID) -> int:
        """Number of users who currently like the post."""
        result = await self.session.execute(
            select(sql_count()).select_from(PostLike).where(PostLike.post_id == post_id)
        )
        return result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # COMMENTS & REPLIES (append-only inserts)
    # ═══════════════════════════════════════════════════════════════════════════

    async def _next_position(self, position: Any, parent: Any, parent_id: UUID) -> int:
        """One past the highest position under the parent (1 for the first child)."""
        result = await self.session.execute(
            select(func.coalesce(func.max(position), 0)).where(parent == parent_id)
        )
        return (result.scalar() or 0) + 1

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> Comment:
        """
        Append a comment to a post.

        Returns:
            The new comment with its author and (empty) replies loaded
        """
        position = await self._next_position(Comment.position, Comment.post_id, post_id)
        comment = Comment(post_id=post_id, user_id=user_id, text=text, position=position)
        self.session.add(comment)
        await self.session.flush()

        result = await self.session.execute(
            select(Comment)
            .where(Comment.id == comment.id)
            .options(selectinload(Comment.user), selectinload(Comment.replies))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def get_comment(self, comment_id: UUID) -> Optional[Comment]:
        """Locate a comment by id, whichever post owns it."""
        result = await self.session.execute(select(Comment).where(Comment.id == comment_id))
        return result.scalar_one_or_none()

    async def add_reply(self, comment_id: UUID, user_id: UUID, text: str) -> Reply:
        """
        Append a reply to a comment.

        Returns:
            The new reply with its author loaded
        """
        position = await self._next_position(Reply.position, Reply.comment_id, comment_id)
        reply = Reply(comment_id=comment_id, user_id=user_id, text=text, position=position)
        self.session.add(reply)
        await self.session.flush()

        result = await self.session.execute(
            select(Reply)
            .where(Reply.id == reply.id)
            .options(selectinload(Reply.user))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETES
    # ═══════════════════════════════════════════════════════════════════════════

    async def clear_reference(self, field: str, record_id: UUID) -> int:
        """
        Null out `posts.<field>` wherever it points at record_id.

        Called before a workout/meal/progress record is deleted so that posts
        sharing it survive without a dangling reference.

        Args:
            field: "workout_id", "meal_id" or "progress_id"

        Returns:
            Number of posts updated
        """
        column = getattr(Post, field)
        result = await self.session.execute(
            update(Post)
            .where(column == record_id)
            .values({field: None})
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0

    async def delete_post(self, post_id: UUID) -> None:
        """
        Hard delete a post together with its likes, comments and replies.

        Referenced workout/meal/progress records are left untouched.
        """
        comment_ids = select(Comment.id).where(Comment.post_id == post_id)
        await self.session.execute(
            delete(Reply)
            .where(Reply.comment_id.in_(comment_ids))
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(
            delete(Comment)
            .where(Comment.post_id == post_id)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(delete(PostLike).where(PostLike.post_id == post_id))
        await self.session.execute(delete(Post).where(Post.id == post_id))
