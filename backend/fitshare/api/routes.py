"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live   → Health check endpoints (no prefix)
    /api/auth                → Registration, login, current user
    /api/users               → Profiles and directory
    /api/workouts            → Workouts (CRUD)
    /api/meals               → Meals (CRUD)
    /api/progress/weight     → Weight log (CRUD, owner only)
    /api/progress/pr         → PR exercises and history
    /api/progress            → Progress entries (CRUD)
    /api/posts               → Feed, likes, comments, replies
    /api/files               → Stored photos

Usage:
======
    from fitshare.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from fitshare.api.handlers import (
    auth_handler,
    file_handler,
    health_handler,
    meal_handler,
    post_handler,
    personal_record_handler,
    progress_handler,
    user_handler,
    weight_handler,
    workout_handler,
)
from fitshare.config.settings import settings


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    prefix = settings.API_PREFIX

    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    app.include_router(
        auth_handler.router,
        prefix=f"{prefix}/auth",
        tags=["Authentication"],
    )

    app.include_router(
        user_handler.router,
        prefix=f"{prefix}/users",
        tags=["Users"],
    )

    app.include_router(
        workout_handler.router,
        prefix=f"{prefix}/workouts",
        tags=["Workouts"],
    )

    app.include_router(
        meal_handler.router,
        prefix=f"{prefix}/meals",
        tags=["Meals"],
    )

    # Fixed sub-paths first: /progress/{progress_id} would otherwise claim them
    app.include_router(
        weight_handler.router,
        prefix=f"{prefix}/progress/weight",
        tags=["Weight Log"],
    )

    app.include_router(
        personal_record_handler.router,
        prefix=f"{prefix}/progress/pr",
        tags=["Personal Records"],
    )

    app.include_router(
        progress_handler.router,
        prefix=f"{prefix}/progress",
        tags=["Progress"],
    )

    app.include_router(
        post_handler.router,
        prefix=f"{prefix}/posts",
        tags=["Posts"],
    )

    app.include_router(
        file_handler.router,
        prefix=f"{prefix}/files",
        tags=["Files"],
    )
