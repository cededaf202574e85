"""
FitShare API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
┌─────────────────────────────────────────────────────────────────────────────┐
│                           FITSHARE API                                      │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                    Middleware Stack                          │          │
│   │  ┌─────────────────────────────────────────────────────┐    │          │
│   │  │ CORS Middleware                                      │    │          │
│   │  │ Request Logging (request_id)                         │    │          │
│   │  │ Error Handlers                                       │    │          │
│   │  └─────────────────────────────────────────────────────┘    │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                       Routers                                │          │
│   │  Health · Auth · Users · Workouts · Meals · Progress        │          │
│   │  Posts · Files                                               │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │                app.state (built in lifespan)                 │          │
│   │  ┌──────────┐ ┌──────────┐ ┌──────────┐                    │          │
│   │  │ Database │ │  Cache   │ │ Storage  │                    │          │
│   │  └──────────┘ └──────────┘ └──────────┘                    │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. Application starts → lifespan startup
2. Database, cache and storage handles built (unless injected) and verified
3. started_at recorded; tokens issued earlier are rejected
4. Application serves requests
5. Application stops → handles closed

Usage:
======
    # Run with uvicorn
    uvicorn fitshare.api.main:app --host 0.0.0.0 --port 8000 --reload

    # Or programmatically (tests inject their own handles)
    from fitshare.api.main import create_application
    app = create_application(database=db, cache=cache, storage=storage)
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fitshare.api.middleware import RequestLoggingMiddleware, setup_exception_handlers
from fitshare.api.routes import register_routes
from fitshare.config.settings import settings
from fitshare.shared.adapters.redis_adapter import Cache, RedisCache
from fitshare.shared.adapters.storage_adapter import ObjectStorage, S3ObjectStorage
from fitshare.shared.core.logging import logger
from fitshare.shared.db import Database


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
    - Build the database, cache and storage handles not injected by the caller
    - Verify database connectivity and ensure the media bucket exists

    Shutdown:
    - Close every handle the lifespan built
    """
    # ═══════════════════════════════════════════════════════════════════════════
    # STARTUP
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info(
        "Starting FitShare API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )

    state = app.state
    owned = []

    if state.database is None:
        state.database = Database(settings.DATABASE_URL)
        owned.append(state.database)
    await state.database.init()

    if state.cache is None:
        state.cache = RedisCache(settings.REDIS_URL)
        owned.append(state.cache)
        if not await state.cache.ping():
            logger.warning("Redis unavailable, serving without cache", url=settings.REDIS_URL)

    if state.storage is None:
        state.storage = S3ObjectStorage()
        owned.append(state.storage)
        await state.storage.ensure_bucket()

    state.started_at = int(time.time())
    logger.info("FitShare API started successfully", started_at=state.started_at)

    yield

    # ═══════════════════════════════════════════════════════════════════════════
    # SHUTDOWN
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info("Shutting down FitShare API")

    for handle in reversed(owned):
        await handle.close()

    logger.info("FitShare API shutdown complete")


def create_application(
    *,
    database: Optional[Database] = None,
    cache: Optional[Cache] = None,
    storage: Optional[ObjectStorage] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Pre-built Database handle (tests); built in lifespan if None
        cache: Pre-built cache adapter; RedisCache if None
        storage: Pre-built object storage; S3ObjectStorage if None

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Fitness tracking and sharing API",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    app.state.database = database
    app.state.cache = cache
    app.state.storage = storage
    app.state.started_at = int(time.time())

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    app.add_middleware(RequestLoggingMiddleware)

    # CORS Middleware - added last so it wraps everything
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app)

    return app


# Create the application instance
app = create_application()
