"""
Repository Pattern Implementations

Repositories encapsulate database queries and provide a clean API for data access.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]           ← Generic CRUD + pagination
         │
         ├── UserRepository             ← Email lookup, directory search
         ├── OwnedRepository            ← Owner + date-range listing
         │      ├── WorkoutRepository
         │      ├── MealRepository
         │      ├── ProgressRepository
         │      └── WeightEntryRepository
         ├── PRExerciseRepository       ← Per-owner catalog, unique names
         ├── PRRecordRepository         ← PR history per exercise
         └── PostRepository             ← Feed, likes, comments, replies

Usage Example:
==============
    from fitshare.shared.repositories import PostRepository

    async def like(db: AsyncSession, post_id: UUID, user_id: UUID) -> bool:
        repo = PostRepository(db)
        if await repo.remove_like(post_id, user_id):
            return False
        await repo.add_like(post_id, user_id)
        return True
"""

from fitshare.shared.repositories.base import BaseRepository
from fitshare.shared.repositories.user_repository import UserRepository
from fitshare.shared.repositories.activity_repository import (
    OwnedRepository,
    WorkoutRepository,
    MealRepository,
    ProgressRepository,
    WeightEntryRepository,
)
from fitshare.shared.repositories.personal_record_repository import (
    PRExerciseRepository,
    PRRecordRepository,
)
from fitshare.shared.repositories.post_repository import PostRepository

__all__ = [
    # Base classes
    "BaseRepository",
    "OwnedRepository",
    # Entity-specific repositories
    "UserRepository",
    "WorkoutRepository",
    "MealRepository",
    "ProgressRepository",
    "WeightEntryRepository",
    "PRExerciseRepository",
    "PRRecordRepository",
    "PostRepository",
]
