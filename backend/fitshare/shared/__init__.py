"""
Shared Module

Everything below the HTTP layer. Handlers call services; services own the
rules and talk to repositories, the cache and object storage.

Package Structure:
==================
    shared/
    ├── core/           ← Structured logging, exception hierarchy
    ├── db/             ← Async engine and session lifecycle
    ├── models/         ← SQLAlchemy models (users, activity records, posts)
    ├── repositories/   ← Data access, one per aggregate
    ├── services/       ← Ownership, caching and media rules
    ├── schemas/        ← Pydantic request/response models (camelCase on the wire)
    ├── adapters/       ← Redis cache, S3-compatible object storage
    ├── migrations/     ← Alembic environment and revisions
    └── utils/          ← Password/JWT helpers, object key naming

Usage:
======
    from fitshare.shared.models import Workout, Post
    from fitshare.shared.services import WorkoutService, PostService
    from fitshare.shared.schemas import WorkoutCreate, PostResponse
    from fitshare.shared.core import get_logger, NotFoundError
"""
