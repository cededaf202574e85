"""
User Repository

Database operations specific to the User model.
Extends BaseRepository with user-specific query methods.

Common Operations:
==================
- get_by_email()   → Find user by email address (case-insensitive)
- email_exists()   → Check if email is already registered
- search()         → Paginated directory with optional name search
"""

from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitshare.shared.repositories.base import BaseRepository
from fitshare.shared.models.user import User


class UserRepository(BaseRepository[User]):
    """
    Repository for User database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Emails are stored lowercase; the lookup lowercases its input.

        SQL Generated:
            SELECT * FROM users WHERE email = 'ada@example.com'
        """
        result = await self.session.execute(select(User).where(User.email == email.strip().lower()))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """
        Check if email already exists.

        Example:
            if await repo.email_exists("new@example.com"):
                raise DuplicateResourceError("User already exists with this email")
        """
        user = await self.get_by_email(email)
        return user is not None

    async def search(
        self,
        *,
        page: int,
        limit: int,
        search: Optional[str] = None,
    ) -> tuple[list[User], int]:
        """
        Paginated user directory, newest first.

        Args:
            search: Case-insensitive substring matched against first or last name

        SQL Generated:
            SELECT * FROM users
            WHERE lower(first_name) LIKE '%ada%' OR lower(last_name) LIKE '%ada%'
            ORDER BY created_at DESC OFFSET 0 LIMIT 20
        """
        conditions = []
        if search and search.strip():
            pattern = f"%{search.strip().lower()}%"
            conditions.append(
                or_(
                    func.lower(User.first_name).like(pattern),
                    func.lower(User.last_name).like(pattern),
                )
            )
        return await self.paginate(page=page, limit=limit, conditions=conditions)
