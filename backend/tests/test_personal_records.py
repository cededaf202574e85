"""
Tests for PersonalRecordService: exercise catalog, recorded values, ownership.
"""

from datetime import datetime, timedelta, timezone
import uuid

import pydantic
import pytest
from sqlalchemy import select, update

from fitshare.shared.core.exceptions import (
    AuthorizationError,
    DuplicateResourceError,
    ResourceNotFoundError,
    ValidationError,
)
from fitshare.shared.models import PRRecord
from fitshare.shared.models.enums import PRUnit
from fitshare.shared.schemas.personal_record import (
    PRExerciseCreate,
    PRExerciseUpdate,
    PRRecordCreate,
)
from fitshare.shared.services import PersonalRecordService


async def _exercise(database, owner_id, name="Deadlift", unit=PRUnit.LBS):
    async with database.session() as s:
        return await PersonalRecordService(s).create_exercise(owner_id, PRExerciseCreate(name=name, unit=unit))


async def _record(database, owner_id, exercise_id, value):
    async with database.session() as s:
        return await PersonalRecordService(s).record(owner_id, PRRecordCreate(exercise_id=exercise_id, value=value))


class TestCatalog:
    async def test_catalog_is_per_user_and_sorted(self, database, make_user):
        owner = await make_user()
        other = await make_user("Grace", "Hopper")
        for name in ("Squat", "Bench Press", "Pull-ups"):
            await _exercise(database, owner.id, name)
        await _exercise(database, other.id, "Bench Press")

        async with database.session() as s:
            catalog = await PersonalRecordService(s).list_exercises(owner.id)

        assert [e.name for e in catalog] == ["Bench Press", "Pull-ups", "Squat"]
        assert {e.user_id for e in catalog} == {owner.id}

    async def test_defaults_to_lbs_and_strips_name(self, database, make_user):
        owner = await make_user()

        async with database.session() as s:
            exercise = await PersonalRecordService(s).create_exercise(owner.id, PRExerciseCreate(name="  Deadlift "))

        assert exercise.name == "Deadlift"
        assert exercise.unit == PRUnit.LBS

    async def test_duplicate_name_conflicts(self, database, make_user):
        owner = await make_user()
        await _exercise(database, owner.id, "Deadlift")

        async with database.session() as s:
            with pytest.raises(DuplicateResourceError) as exc:
                await PersonalRecordService(s).create_exercise(owner.id, PRExerciseCreate(name="Deadlift"))

        assert exc.value.message == "Exercise already exists"

    async def test_rename_onto_existing_name_conflicts(self, database, make_user):
        owner = await make_user()
        await _exercise(database, owner.id, "Deadlift")
        squat = await _exercise(database, owner.id, "Squat")

        async with database.session() as s:
            with pytest.raises(DuplicateResourceError):
                await PersonalRecordService(s).update_exercise(squat.id, owner.id, PRExerciseUpdate(name="Deadlift"))

    async def test_unit_change_allowed_until_first_record(self, database, make_user):
        owner = await make_user()
        exercise = await _exercise(database, owner.id, "Plank", unit=PRUnit.REPS)

        async with database.session() as s:
            changed = await PersonalRecordService(s).update_exercise(
                exercise.id, owner.id, PRExerciseUpdate(unit=PRUnit.TIME)
            )
        await _record(database, owner.id, exercise.id, 90)
        async with database.session() as s:
            with pytest.raises(ValidationError) as exc:
                await PersonalRecordService(s).update_exercise(
                    exercise.id, owner.id, PRExerciseUpdate(unit=PRUnit.LBS)
                )
            renamed = await PersonalRecordService(s).update_exercise(
                exercise.id, owner.id, PRExerciseUpdate(name="Front plank", unit=PRUnit.TIME)
            )

        assert changed.unit == PRUnit.TIME
        assert exc.value.message == "Cannot change unit after PRs have been recorded"
        assert (renamed.name, renamed.unit) == ("Front plank", PRUnit.TIME)

    async def test_only_owner_may_change_or_delete(self, database, make_user):
        owner = await make_user()
        other = await make_user("Grace", "Hopper")
        exercise = await _exercise(database, owner.id)

        async with database.session() as s:
            service = PersonalRecordService(s)
            with pytest.raises(AuthorizationError) as exc:
                await service.update_exercise(exercise.id, other.id, PRExerciseUpdate(name="Mine now"))
            with pytest.raises(AuthorizationError):
                await service.delete_exercise(exercise.id, other.id)
            with pytest.raises(AuthorizationError):
                await service.history(exercise.id, other.id)

        assert exc.value.message == "Not authorized to update this PR exercise"

    async def test_missing_exercise(self, database, make_user):
        owner = await make_user()

        async with database.session() as s:
            with pytest.raises(ResourceNotFoundError) as exc:
                await PersonalRecordService(s).history(uuid.uuid4(), owner.id)

        assert exc.value.message == "PR exercise not found"

    def test_name_length_is_bounded(self):
        with pytest.raises(pydantic.ValidationError):
            PRExerciseCreate(name="   ")
        with pytest.raises(pydantic.ValidationError):
            PRExerciseCreate(name="x" * 101)


class TestRecords:
    async def test_history_is_newest_first_with_current(self, database, make_user):
        owner = await make_user()
        exercise = await _exercise(database, owner.id)
        values = [315, 365, 405]
        for value in values:
            await _record(database, owner.id, exercise.id, value)

        # Pin timestamps so ordering does not depend on clock resolution
        base = datetime(2025, 1, 1, tzinfo=timezone.utc)
        async with database.session() as s:
            for days, value in enumerate(values):
                await s.execute(
                    update(PRRecord)
                    .where(PRRecord.exercise_id == exercise.id, PRRecord.value == value)
                    .values(created_at=base + timedelta(days=days))
                )

        async with database.session() as s:
            history = await PersonalRecordService(s).history(exercise.id, owner.id)

        assert history.exercise.name == "Deadlift"
        assert [pr.value for pr in history.prs] == [405, 365, 315]
        assert history.current.value == 405

    async def test_empty_history_has_no_current(self, database, make_user):
        owner = await make_user()
        exercise = await _exercise(database, owner.id)

        async with database.session() as s:
            history = await PersonalRecordService(s).history(exercise.id, owner.id)

        assert history.prs == []
        assert history.current is None

    async def test_whole_numbers_for_reps_and_time(self, database, make_user):
        owner = await make_user()
        pullups = await _exercise(database, owner.id, "Pull-ups", unit=PRUnit.REPS)
        bench = await _exercise(database, owner.id, "Bench Press")

        async with database.session() as s:
            with pytest.raises(ValidationError) as exc:
                await PersonalRecordService(s).record(owner.id, PRRecordCreate(exercise_id=pullups.id, value=12.5))
        whole = await _record(database, owner.id, pullups.id, 12)
        fractional = await _record(database, owner.id, bench.id, 227.5)

        assert exc.value.message == "PR value must be a whole number"
        assert whole.value == 12
        assert fractional.value == 227.5

    def test_value_must_be_positive_and_finite(self):
        for value in (0, -5, float("inf"), float("nan")):
            with pytest.raises(pydantic.ValidationError):
                PRRecordCreate(exercise_id=uuid.uuid4(), value=value)

    async def test_cannot_record_on_someone_elses_exercise(self, database, make_user):
        owner = await make_user()
        other = await make_user("Grace", "Hopper")
        exercise = await _exercise(database, owner.id)

        async with database.session() as s:
            with pytest.raises(AuthorizationError):
                await PersonalRecordService(s).record(other.id, PRRecordCreate(exercise_id=exercise.id, value=500))

    async def test_delete_record_is_owner_only(self, database, make_user):
        owner = await make_user()
        other = await make_user("Grace", "Hopper")
        exercise = await _exercise(database, owner.id)
        pr = await _record(database, owner.id, exercise.id, 405)

        async with database.session() as s:
            with pytest.raises(AuthorizationError):
                await PersonalRecordService(s).delete_record(pr.id, other.id)
        async with database.session() as s:
            await PersonalRecordService(s).delete_record(pr.id, owner.id)
        async with database.session() as s:
            with pytest.raises(ResourceNotFoundError) as exc:
                await PersonalRecordService(s).delete_record(pr.id, owner.id)

        assert exc.value.message == "PR not found"

    async def test_deleting_exercise_removes_its_records(self, database, make_user):
        owner = await make_user()
        deadlift = await _exercise(database, owner.id, "Deadlift")
        squat = await _exercise(database, owner.id, "Squat")
        await _record(database, owner.id, deadlift.id, 405)
        await _record(database, owner.id, deadlift.id, 415)
        await _record(database, owner.id, squat.id, 315)

        async with database.session() as s:
            await PersonalRecordService(s).delete_exercise(deadlift.id, owner.id)

        async with database.session() as s:
            remaining = (await s.execute(select(PRRecord.exercise_id))).scalars().all()
            catalog = await PersonalRecordService(s).list_exercises(owner.id)

        assert remaining == [squat.id]
        assert [e.name for e in catalog] == ["Squat"]
