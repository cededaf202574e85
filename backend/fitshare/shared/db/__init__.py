"""
Database Module

Database connectivity and session management for FitShare.

Architecture Overview:
======================
┌─────────────────────────────────────────────────────────────────────────────┐
│                        DATABASE LAYER                                       │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   FastAPI Route                                                             │
│       │                                                                     │
│       │  Dependency Injection: get_db() → app.state.database.session()      │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              AsyncSession (one per request)                 │          │
│   └─────────────────────────────────────────────────────────────┘          │
│       │                                                                     │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │  UserRepository · WorkoutRepository · MealRepository        │          │
│   │  ProgressRepository · PostRepository                        │          │
│   └─────────────────────────────────────────────────────────────┘          │
│       │                                                                     │
│       ▼                                                                     │
│   PostgreSQL                                                                │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Usage:
======
    from fitshare.shared.db import Database

    database = Database(settings.DATABASE_URL)
    await database.init()
"""

from fitshare.shared.db.session import Database, after_commit

__all__ = [
    "Database",
    "after_commit",
]
