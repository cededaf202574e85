"""
Database Dependency

FastAPI dependency for database sessions.

The session comes from the `Database` handle stored on `app.state.database`
by the application lifespan (or injected by tests). It is committed when the
handler returns and rolled back when it raises.

Usage:
======
    from fitshare.api.dependencies.database import DbSession

    @router.get("/users")
    async def list_users(db: DbSession):
        repo = UserRepository(db)
        return await repo.search(page=1, limit=20)
"""

from typing import Annotated, AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fitshare.shared.db import Database


def get_database(request: Request) -> Database:
    """The application's Database handle."""
    return request.app.state.database


async def get_db(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency for database sessions.

    Yields:
        AsyncSession: Database session for the current request
    """
    async with database.session() as session:
        yield session


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
