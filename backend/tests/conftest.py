"""
Test configuration and fixtures.

Every test gets a fresh in-memory SQLite database (aiosqlite + StaticPool so
all sessions share one connection), an in-memory cache and object storage,
and, for API tests, the application wired to those handles and driven
through httpx.
"""

from datetime import timedelta
from typing import Any, AsyncIterator, Callable, Awaitable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from fitshare.api.main import create_application
from fitshare.config.settings import settings
from fitshare.shared.db import Database
from fitshare.shared.models import User
from fitshare.shared.services.media_service import MediaService, UploadedFile
from fitshare.shared.utils.security import SecurityUtils

from tests.fakes import FakeCache, FakeStorage

# A valid 1x1 PNG
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00"
    b"\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00\x00\x01\x01\x00\x05\x18\xd8N\x00"
    b"\x00\x00\x00IEND\xaeB`\x82"
)


@pytest_asyncio.fixture
async def database() -> AsyncIterator[Database]:
    """Fresh in-memory database with every table created."""
    db = Database(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.create_all()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def session(database: Database):
    """One unit of work; committed when the test body finishes."""
    async with database.session() as s:
        yield s


@pytest.fixture
def cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def media(storage: FakeStorage) -> MediaService:
    return MediaService(storage)


@pytest.fixture
def png() -> Callable[..., UploadedFile]:
    """Factory for small valid image uploads."""

    def _make(name: str = "photo.png", content_type: str = "image/png", data: bytes = PNG_BYTES) -> UploadedFile:
        return UploadedFile(filename=name, content_type=content_type, data=data)

    return _make


@pytest.fixture
def make_user(database: Database) -> Callable[..., Awaitable[User]]:
    """Factory that inserts a user and returns it."""
    counter = {"n": 0}

    async def _make(first_name: str = "Ada", last_name: str = "Lovelace", **kwargs: Any) -> User:
        counter["n"] += 1
        async with database.session() as s:
            user = User(
                email=kwargs.pop("email", f"user{counter['n']}@example.com"),
                password_hash=SecurityUtils.hash_password("password123"),
                first_name=first_name,
                last_name=last_name,
                **kwargs,
            )
            s.add(user)
            await s.flush()
            await s.refresh(user)
        return user

    return _make


# ═══════════════════════════════════════════════════════════════════════════════
# API
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def app(database: Database, cache: FakeCache, storage: FakeStorage):
    return create_application(database=database, cache=cache, storage=storage)


@pytest_asyncio.fixture
async def client(app) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


def token_for(user: User, **kwargs: Any) -> str:
    return SecurityUtils.create_access_token(
        data={"user_id": str(user.id), "email": user.email},
        secret_key=settings.SECRET_KEY,
        expires_delta=kwargs.pop("expires_delta", timedelta(minutes=30)),
        algorithm=settings.JWT_ALGORITHM,
        **kwargs,
    )


def auth_headers(user: User, **kwargs: Any) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_for(user, **kwargs)}"}
