"""
Activity Repositories

Owner-scoped repositories for the dated activity record types. They share
one query shape: filter by owner plus type-specific equality fields, bound
by an optional date range, newest first.

    OwnedRepository[ModelType]
         ├── WorkoutRepository    ← filter: split
         ├── MealRepository       ← filter: meal_type
         ├── ProgressRepository   ← filter: type
         └── WeightEntryRepository
"""

from datetime import datetime
from typing import Any, Optional, Type
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fitshare.shared.models import Meal, Progress, WeightEntry, Workout
from fitshare.shared.repositories.base import BaseRepository, ModelType


class OwnedRepository(BaseRepository[ModelType]):
    """
    Base for records carrying `user_id` and `date` columns.
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        super().__init__(model, session)

    async def list_for_owner(
        self,
        *,
        owner_id: UUID,
        page: int,
        limit: int,
        filters: Optional[dict[str, Any]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> tuple[list[ModelType], int]:
        """
        One page of an owner's records, newest first.

        Args:
            owner_id: Records owned by this user
            filters: Extra equality filters (None values ignored)
            start_date / end_date: Inclusive bounds on the record's `date`

        Returns:
            (items, total)
        """
        conditions = []
        if start_date is not None:
            conditions.append(self.model.date >= start_date)
        if end_date is not None:
            conditions.append(self.model.date <= end_date)

        return await self.paginate(
            page=page,
            limit=limit,
            filters={**(filters or {}), "user_id": owner_id},
            conditions=conditions,
        )


class WorkoutRepository(OwnedRepository[Workout]):
    """Repository for Workout records."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Workout, session)


class MealRepository(OwnedRepository[Meal]):
    """Repository for Meal records."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Meal, session)


class ProgressRepository(OwnedRepository[Progress]):
    """Repository for Progress records."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Progress, session)


class WeightEntryRepository(OwnedRepository[WeightEntry]):
    """Repository for the weight log."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(WeightEntry, session)
