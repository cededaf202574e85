"""
Personal Record Repositories

Database operations for the PR exercise catalog and its recorded values.

Common Operations:
==================
- PRExerciseRepository.list_by_name()   → An owner's catalog, A to Z
- PRExerciseRepository.name_taken()     → Per-owner name uniqueness check
- PRRecordRepository.history()          → An exercise's records, newest first
- PRRecordRepository.has_records()      → Whether the unit is still changeable
- PRRecordRepository.delete_for_exercise()
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from fitshare.shared.models import PRExercise, PRRecord
from fitshare.shared.repositories.base import BaseRepository


class PRExerciseRepository(BaseRepository[PRExercise]):
    """Repository for PRExercise records."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(PRExercise, session)

    async def list_by_name(self, owner_id: UUID) -> list[PRExercise]:
        """
        Every exercise the owner tracks, ordered by name.

        SQL Generated:
            SELECT * FROM pr_exercises WHERE user_id = '...' ORDER BY name
        """
        result = await self.session.execute(
            select(PRExercise).where(PRExercise.user_id == owner_id).order_by(PRExercise.name)
        )
        return list(result.scalars().all())

    async def name_taken(self, owner_id: UUID, name: str, exclude_id: Optional[UUID] = None) -> bool:
        """True when the owner already has an exercise with this exact name."""
        query = (
            select(sql_count())
            .select_from(PRExercise)
            .where(PRExercise.user_id == owner_id, PRExercise.name == name)
        )
        if exclude_id is not None:
            query = query.where(PRExercise.id != exclude_id)
        result = await self.session.execute(query)
        return (result.scalar() or 0) > 0


class PRRecordRepository(BaseRepository[PRRecord]):
    """Repository for PRRecord records."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(PRRecord, session)

    async def history(self, exercise_id: UUID) -> list[PRRecord]:
        """
        All records of one exercise, newest first.

        SQL Generated:
            SELECT * FROM pr_records WHERE exercise_id = '...'
            ORDER BY created_at DESC, id DESC
        """
        result = await self.session.execute(
            select(PRRecord)
            .where(PRRecord.exercise_id == exercise_id)
            .order_by(PRRecord.created_at.desc(), PRRecord.id.desc())
        )
        return list(result.scalars().all())

    async def has_records(self, exercise_id: UUID) -> bool:
        result = await self.session.execute(
            select(sql_count()).select_from(PRRecord).where(PRRecord.exercise_id == exercise_id)
        )
        return (result.scalar() or 0) > 0

    async def delete_for_exercise(self, exercise_id: UUID) -> int:
        """
        Delete every record of an exercise.

        Returns:
            Number of records deleted
        """
        result = await self.session.execute(delete(PRRecord).where(PRRecord.exercise_id == exercise_id))
        return result.rowcount or 0
