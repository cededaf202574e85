"""
Personal Record Service

Each user's PR exercise catalog and the history of values recorded for it.

Operations:
===========
    list_exercises    → the caller's catalog, A to Z
    create_exercise   → name unique per user (409), unit defaults to lbs
    update_exercise   → owner only; unit frozen once records exist (400)
    delete_exercise   → owner only; its records go with it
    history           → owner only; {exercise, prs newest first, current}
    record            → owner of the exercise only; value > 0, whole for reps/time
    delete_record     → owner only

Catalog and history reads are not cached: both are per-user, small, and
read right after the writes that change them.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fitshare.shared.core.exceptions import (
    DuplicateResourceError,
    ResourceNotFoundError,
    ValidationError,
)
from fitshare.shared.core.logging import get_logger
from fitshare.shared.models import PRExercise, PRRecord
from fitshare.shared.models.enums import PRUnit
from fitshare.shared.repositories.personal_record_repository import (
    PRExerciseRepository,
    PRRecordRepository,
)
from fitshare.shared.schemas.personal_record import (
    PRExerciseCreate,
    PRExerciseResponse,
    PRExerciseUpdate,
    PRHistory,
    PRRecordCreate,
    PRRecordResponse,
)
from fitshare.shared.services.ownership import assert_owner

logger = get_logger("personal_records")

# Units whose values are counts or seconds
_WHOLE_NUMBER_UNITS = {PRUnit.REPS, PRUnit.TIME}


class PersonalRecordService:
    """
    Service for PR exercises and their records.

    Attributes:
        session: Database session
        exercises: PRExerciseRepository instance
        records: PRRecordRepository instance
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.exercises = PRExerciseRepository(session)
        self.records = PRRecordRepository(session)

    async def _load_exercise(self, exercise_id: UUID, actor_id: UUID, action: str) -> PRExercise:
        exercise = await self.exercises.get(exercise_id)
        if exercise is None:
            raise ResourceNotFoundError("PR exercise")
        assert_owner(exercise, actor_id, action=action, resource_name="PR exercise")
        return exercise

    async def _ensure_name_free(self, owner_id: UUID, name: str, exclude_id: Optional[UUID] = None) -> None:
        if await self.exercises.name_taken(owner_id, name, exclude_id=exclude_id):
            raise DuplicateResourceError("Exercise already exists")

    # ═══════════════════════════════════════════════════════════════════════════
    # EXERCISE CATALOG
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_exercises(self, actor_id: UUID) -> list[PRExerciseResponse]:
        exercises = await self.exercises.list_by_name(actor_id)
        return [PRExerciseResponse.model_validate(exercise) for exercise in exercises]

    async def create_exercise(self, actor_id: UUID, payload: PRExerciseCreate) -> PRExerciseResponse:
        """
        Raises:
            DuplicateResourceError: The caller already tracks an exercise with this name
        """
        await self._ensure_name_free(actor_id, payload.name)
        try:
            exercise = await self.exercises.create(user_id=actor_id, name=payload.name, unit=payload.unit)
        except IntegrityError as e:
            raise DuplicateResourceError("Exercise already exists") from e

        logger.info("PR exercise created", exercise_id=str(exercise.id), user_id=str(actor_id))
        return PRExerciseResponse.model_validate(exercise)

    async def update_exercise(
        self,
        exercise_id: UUID,
        actor_id: UUID,
        payload: PRExerciseUpdate,
    ) -> PRExerciseResponse:
        """
        Rename an exercise or change its unit.

        Raises:
            ResourceNotFoundError: No such exercise
            AuthorizationError: Acting user is not the owner
            DuplicateResourceError: New name already used by another of the owner's exercises
            ValidationError: Unit change after records exist
        """
        exercise = await self._load_exercise(exercise_id, actor_id, "update")
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)

        if "unit" in changes and changes["unit"] != exercise.unit:
            if await self.records.has_records(exercise_id):
                raise ValidationError(
                    "Cannot change unit after PRs have been recorded",
                    errors=["unit: exercise already has recorded PRs"],
                )
        if "name" in changes and changes["name"] != exercise.name:
            await self._ensure_name_free(actor_id, changes["name"], exclude_id=exercise_id)

        try:
            exercise = await self.exercises.update(exercise, **changes)
        except IntegrityError as e:
            raise DuplicateResourceError("Exercise already exists") from e
        return PRExerciseResponse.model_validate(exercise)

    async def delete_exercise(self, exercise_id: UUID, actor_id: UUID) -> None:
        """
        Delete an exercise together with its records.

        Raises:
            ResourceNotFoundError: No such exercise
            AuthorizationError: Acting user is not the owner
        """
        exercise = await self._load_exercise(exercise_id, actor_id, "delete")

        removed = await self.records.delete_for_exercise(exercise_id)
        await self.exercises.delete(exercise)
        logger.info("PR exercise deleted", exercise_id=str(exercise_id), records_deleted=removed)

    # ═══════════════════════════════════════════════════════════════════════════
    # RECORDS
    # ═══════════════════════════════════════════════════════════════════════════

    async def history(self, exercise_id: UUID, actor_id: UUID) -> PRHistory:
        """
        An exercise with every recorded value, newest first.

        Raises:
            ResourceNotFoundError: No such exercise
            AuthorizationError: Acting user is not the owner
        """
        exercise = await self._load_exercise(exercise_id, actor_id, "view")
        prs = [PRRecordResponse.model_validate(pr) for pr in await self.records.history(exercise_id)]
        return PRHistory(
            exercise=PRExerciseResponse.model_validate(exercise),
            prs=prs,
            current=prs[0] if prs else None,
        )

    async def record(self, actor_id: UUID, payload: PRRecordCreate) -> PRRecordResponse:
        """
        Record a new value; it becomes the exercise's current PR.

        Raises:
            ResourceNotFoundError: No such exercise
            AuthorizationError: Exercise belongs to someone else
            ValidationError: Fractional value for a reps or time exercise
        """
        exercise = await self._load_exercise(payload.exercise_id, actor_id, "record PRs for")

        if exercise.unit in _WHOLE_NUMBER_UNITS and not float(payload.value).is_integer():
            raise ValidationError(
                "PR value must be a whole number",
                errors=[f"value: must be a whole number for {PRUnit(exercise.unit).value}"],
            )

        pr = await self.records.create(user_id=actor_id, exercise_id=exercise.id, value=payload.value)
        logger.info("PR recorded", exercise_id=str(exercise.id), record_id=str(pr.id), value=pr.value)
        return PRRecordResponse.model_validate(pr)

    async def delete_record(self, record_id: UUID, actor_id: UUID) -> None:
        """
        Raises:
            ResourceNotFoundError: No such record
            AuthorizationError: Acting user is not the owner
        """
        pr: Optional[PRRecord] = await self.records.get(record_id)
        if pr is None:
            raise ResourceNotFoundError("PR")
        assert_owner(pr, actor_id, action="delete", resource_name="PR")

        await self.records.delete(pr)
