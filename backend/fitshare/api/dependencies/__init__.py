"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: get_current_user(), CurrentUser, OptionalUser
- Pagination: Pagination
- Services: get_*_service() functions and *ServiceDep aliases

Type Aliases:
=============
Type aliases provide cleaner route signatures:

    # Instead of this:
    async def handler(
        db: AsyncSession = Depends(get_db),
        user: dict = Depends(get_current_user)
    ):

    # Write this:
    async def handler(db: DbSession, user: CurrentUser):

Usage:
======
    from fitshare.api.dependencies import CurrentUser, Pagination

    @router.get("/workouts")
    async def list_workouts(current_user: CurrentUser, pagination: Pagination):
        ...
"""

from fitshare.api.dependencies.database import (
    get_db,
    get_database,
    DbSession,
)
from fitshare.api.dependencies.auth import (
    get_current_user,
    get_current_user_token,
    get_optional_user,
    verify_token,
    CurrentUser,
    OptionalUser,
)
from fitshare.api.dependencies.pagination import (
    get_pagination,
    Pagination,
)

__all__ = [
    # Database
    "get_db",
    "get_database",
    "DbSession",
    # Authentication
    "get_current_user",
    "get_current_user_token",
    "get_optional_user",
    "verify_token",
    "CurrentUser",
    "OptionalUser",
    # Pagination
    "get_pagination",
    "Pagination",
]
