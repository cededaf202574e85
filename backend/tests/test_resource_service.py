"""
Tests for the owner-scoped record services (workouts, meals, progress, weight log).
"""

from datetime import datetime, timezone
import uuid

import pydantic
import pytest

from fitshare.shared.core.exceptions import (
    AuthorizationError,
    InvalidFileTypeError,
    ResourceNotFoundError,
    ValidationError,
)
from fitshare.shared.models.enums import MealType, PostType, ProgressType, WorkoutSplit
from fitshare.shared.schemas.meal import MealCreate, MealFilters, Nutrition
from fitshare.shared.schemas.post import PostCreate
from fitshare.shared.schemas.progress import (
    PRProgressCreate,
    ProgressFilters,
    ProgressUpdate,
    parse_progress_payload,
)
from fitshare.shared.schemas.weight import WeightEntryCreate, WeightEntryFilters, WeightEntryUpdate
from fitshare.shared.schemas.workout import Exercise, WorkoutCreate, WorkoutFilters, WorkoutUpdate
from fitshare.shared.services import (
    MealService,
    PostService,
    ProgressService,
    WeightLogService,
    WorkoutService,
)


def _workout(title="Push day", split=WorkoutSplit.PUSH, date=None) -> WorkoutCreate:
    return WorkoutCreate(
        title=title,
        split=split,
        exercises=[Exercise(name="Bench", sets=3, reps=8, weight=185)],
        date=date,
    )


async def _create(database, service_cls, cache, media, owner_id, payload, uploads=()):
    async with database.session() as s:
        return await service_cls(s, cache, media).create(owner_id, payload, uploads)


class TestCreate:
    async def test_stores_photos_and_persists_keys(self, database, cache, media, storage, png, make_user):
        owner = await make_user()

        workout = await _create(database, WorkoutService, cache, media, owner.id, _workout(), [png(), png()])

        assert len(workout.photos) == 2
        assert set(workout.photos) == set(storage.objects)
        assert all(url.endswith(key) for url, key in zip(workout.photo_urls, workout.photos))
        assert workout.exercises[0].name == "Bench"
        assert workout.date is not None

    async def test_rejected_upload_stores_nothing(self, database, cache, media, storage, png, make_user):
        owner = await make_user()

        with pytest.raises(InvalidFileTypeError):
            await _create(
                database, WorkoutService, cache, media, owner.id, _workout(),
                [png(), png(name="a.txt", content_type="text/plain")],
            )

        assert storage.put_calls == 0
        async with database.session() as s:
            page = await WorkoutService(s, cache, media).list(owner.id, WorkoutFilters(), 1, 20)
        assert page.items == []

    async def test_meal(self, database, cache, media, make_user):
        owner = await make_user()
        payload = MealCreate(
            name=" Chicken bowl ",
            nutrition=Nutrition(calories=650, protein=45, carbs=70, fat=18),
            meal_type=MealType.LUNCH,
        )

        meal = await _create(database, MealService, cache, media, owner.id, payload)

        assert meal.name == "Chicken bowl"
        assert meal.meal_type == MealType.LUNCH
        assert meal.nutrition.calories == 650

    async def test_progress_variants(self, database, cache, media, make_user):
        owner = await make_user()

        entry = await _create(
            database, ProgressService, cache, media, owner.id,
            parse_progress_payload({"type": "pr", "exercise": "Deadlift", "prValue": 405}),
        )

        assert entry.type == ProgressType.PR
        assert entry.exercise == "Deadlift"
        assert entry.pr_value == 405
        assert entry.weight is None

    def test_progress_variant_requires_its_fields(self):
        with pytest.raises(pydantic.ValidationError):
            parse_progress_payload({"type": "weight"})
        with pytest.raises(pydantic.ValidationError):
            parse_progress_payload({"type": "measurement", "measurement": {}})
        with pytest.raises(pydantic.ValidationError):
            parse_progress_payload({"type": "height", "value": 1})
        assert isinstance(parse_progress_payload({"type": "pr", "exercise": "Row", "pr_value": 1}), PRProgressCreate)

    async def test_photo_progress_requires_a_photo(self, database, cache, media, make_user):
        owner = await make_user()

        with pytest.raises(ValidationError) as exc:
            await _create(
                database, ProgressService, cache, media, owner.id, parse_progress_payload({"type": "photo"})
            )

        assert exc.value.errors == ["photos: at least one photo is required for photo progress"]

    async def test_photo_progress_with_photo(self, database, cache, media, png, make_user):
        owner = await make_user()

        entry = await _create(
            database, ProgressService, cache, media, owner.id,
            parse_progress_payload({"type": "photo", "notes": "week 4"}), [png()],
        )

        assert entry.type == ProgressType.PHOTO
        assert len(entry.photos) == 1


class TestList:
    async def test_defaults_to_acting_user(self, database, cache, media, make_user):
        ada = await make_user()
        grace = await make_user("Grace", "Hopper")
        await _create(database, WorkoutService, cache, media, ada.id, _workout("Ada's"))
        await _create(database, WorkoutService, cache, media, grace.id, _workout("Grace's"))

        async with database.session() as s:
            service = WorkoutService(s, cache, media)
            own = await service.list(ada.id, WorkoutFilters(), 1, 20)
            other = await service.list(ada.id, WorkoutFilters(user_id=grace.id), 1, 20)

        assert [w.title for w in own.items] == ["Ada's"]
        assert [w.title for w in other.items] == ["Grace's"]

    async def test_equality_and_date_filters(self, database, cache, media, make_user):
        owner = await make_user()
        jan = datetime(2025, 1, 10, tzinfo=timezone.utc)
        feb = datetime(2025, 2, 10, tzinfo=timezone.utc)
        await _create(database, WorkoutService, cache, media, owner.id, _workout("Jan push", date=jan))
        await _create(database, WorkoutService, cache, media, owner.id, _workout("Feb push", date=feb))
        await _create(
            database, WorkoutService, cache, media, owner.id,
            _workout("Feb legs", split=WorkoutSplit.LEGS, date=feb),
        )

        async with database.session() as s:
            service = WorkoutService(s, cache, media)
            push = await service.list(owner.id, WorkoutFilters(split=WorkoutSplit.PUSH), 1, 20)
            february = await service.list(
                owner.id,
                WorkoutFilters(start_date=datetime(2025, 2, 1, tzinfo=timezone.utc)),
                1,
                20,
            )

        assert sorted(w.title for w in push.items) == ["Feb push", "Jan push"]
        assert sorted(w.title for w in february.items) == ["Feb legs", "Feb push"]

    async def test_cache_key_and_invalidation(self, database, cache, media, make_user):
        owner = await make_user()
        await _create(database, WorkoutService, cache, media, owner.id, _workout())

        async with database.session() as s:
            await WorkoutService(s, cache, media).list(owner.id, WorkoutFilters(split=WorkoutSplit.PUSH), 1, 20)

        key = f'workouts:user:{owner.id}:{{"split":"Push"}}:page:1:limit:20'
        assert cache.keys("workouts:*") == [key]

        await _create(database, WorkoutService, cache, media, owner.id, _workout("Another"))

        assert cache.keys("workouts:*") == []
        assert f"workouts:user:{owner.id}:*" in cache.deleted_patterns
        assert "posts:*" in cache.deleted_patterns

    async def test_meal_type_filter(self, database, cache, media, make_user):
        owner = await make_user()
        for meal_type in (MealType.BREAKFAST, MealType.DINNER):
            await _create(
                database, MealService, cache, media, owner.id,
                MealCreate(
                    name=meal_type.value,
                    nutrition=Nutrition(calories=400, protein=20, carbs=40, fat=10),
                    meal_type=meal_type,
                ),
            )

        async with database.session() as s:
            page = await MealService(s, cache, media).list(owner.id, MealFilters(meal_type=MealType.DINNER), 1, 20)

        assert [m.name for m in page.items] == ["dinner"]

    async def test_progress_type_filter(self, database, cache, media, make_user):
        owner = await make_user()
        await _create(
            database, ProgressService, cache, media, owner.id,
            parse_progress_payload({"type": "weight", "weight": 180.5}),
        )
        await _create(
            database, ProgressService, cache, media, owner.id,
            parse_progress_payload({"type": "measurement", "measurement": {"waist": 32}}),
        )

        async with database.session() as s:
            page = await ProgressService(s, cache, media).list(
                owner.id, ProgressFilters(type=ProgressType.WEIGHT), 1, 20
            )

        assert page.pagination.total_items == 1
        assert page.items[0].weight == 180.5


class TestUpdate:
    async def test_owner_updates_fields(self, database, cache, media, make_user):
        owner = await make_user()
        workout = await _create(database, WorkoutService, cache, media, owner.id, _workout())

        async with database.session() as s:
            updated = await WorkoutService(s, cache, media).update(
                workout.id, owner.id, WorkoutUpdate(title="Heavy push", duration=75)
            )

        assert updated.title == "Heavy push"
        assert updated.duration == 75
        assert updated.split == WorkoutSplit.PUSH

    async def test_non_owner_is_forbidden(self, database, cache, media, make_user):
        owner = await make_user()
        other = await make_user("Grace", "Hopper")
        workout = await _create(database, WorkoutService, cache, media, owner.id, _workout())

        async with database.session() as s:
            service = WorkoutService(s, cache, media)
            with pytest.raises(AuthorizationError):
                await service.update(workout.id, other.id, WorkoutUpdate(title="Mine now"))
            with pytest.raises(AuthorizationError):
                await service.delete(workout.id, other.id)

    async def test_missing_record(self, database, cache, media, make_user):
        owner = await make_user()

        async with database.session() as s:
            with pytest.raises(ResourceNotFoundError) as exc:
                await MealService(s, cache, media).get(uuid.uuid4())

        assert exc.value.message == "Meal not found"

    async def test_photos_are_added_and_removed(self, database, cache, media, storage, png, make_user):
        owner = await make_user()
        workout = await _create(database, WorkoutService, cache, media, owner.id, _workout(), [png(), png()])
        dropped, kept = workout.photos

        async with database.session() as s:
            updated = await WorkoutService(s, cache, media).update(
                workout.id,
                owner.id,
                WorkoutUpdate(removed_photos=[dropped, "not-attached.png"]),
                [png(name="new.png")],
            )

        assert updated.photos[0] == kept
        assert len(updated.photos) == 2
        assert dropped not in storage.objects
        assert storage.deleted == [dropped]

    async def test_photo_progress_keeps_at_least_one_photo(self, database, cache, media, png, make_user):
        owner = await make_user()
        entry = await _create(
            database, ProgressService, cache, media, owner.id,
            parse_progress_payload({"type": "photo"}), [png()],
        )

        async with database.session() as s:
            with pytest.raises(ValidationError):
                await ProgressService(s, cache, media).update(
                    entry.id, owner.id, ProgressUpdate(removed_photos=entry.photos)
                )

    async def test_progress_update_merges_onto_record(self, database, cache, media, make_user):
        owner = await make_user()
        entry = await _create(
            database, ProgressService, cache, media, owner.id,
            parse_progress_payload({"type": "weight", "weight": 182}),
        )

        async with database.session() as s:
            updated = await ProgressService(s, cache, media).update(
                entry.id, owner.id, ProgressUpdate(weight=179.5, notes="cut week 3")
            )

        assert updated.type == ProgressType.WEIGHT
        assert updated.weight == 179.5
        assert updated.notes == "cut week 3"


class TestDelete:
    async def test_releases_photos_best_effort(self, database, cache, media, storage, png, make_user):
        owner = await make_user()
        workout = await _create(
            database, WorkoutService, cache, media, owner.id, _workout(), [png(), png(), png()]
        )
        storage.fail_deletes.add(workout.photos[1])

        async with database.session() as s:
            await WorkoutService(s, cache, media).delete(workout.id, owner.id)

        assert set(storage.objects) == {workout.photos[1]}
        async with database.session() as s:
            with pytest.raises(ResourceNotFoundError):
                await WorkoutService(s, cache, media).get(workout.id)

    async def test_posts_survive_with_reference_cleared(self, database, cache, media, make_user):
        owner = await make_user()
        meal = await _create(
            database, MealService, cache, media, owner.id,
            MealCreate(
                name="Oats",
                nutrition=Nutrition(calories=300, protein=10, carbs=50, fat=5),
                meal_type=MealType.BREAKFAST,
            ),
        )
        async with database.session() as s:
            post = await PostService(s, cache).create(
                owner.id, PostCreate(type=PostType.MEAL, content="Breakfast", meal_id=meal.id)
            )

        async with database.session() as s:
            await MealService(s, cache, media).delete(meal.id, owner.id)

        async with database.session() as s:
            survivor = await PostService(s, cache).get(post.id)

        assert survivor.content == "Breakfast"
        assert survivor.meal_id is None
        assert survivor.meal is None


class TestWeightLog:
    async def test_log_lists_own_entries_newest_first(self, database, cache, media, make_user):
        owner = await make_user()
        other = await make_user("Grace", "Hopper")
        for day, weight in ((1, 182.0), (8, 180.5), (15, 179.2)):
            await _create(
                database, WeightLogService, cache, media, owner.id,
                WeightEntryCreate(weight=weight, date=datetime(2025, 3, day, tzinfo=timezone.utc)),
            )
        await _create(database, WeightLogService, cache, media, other.id, WeightEntryCreate(weight=150))

        async with database.session() as s:
            service = WeightLogService(s, cache, media)
            log = await service.list(owner.id, WeightEntryFilters(), 1, 20)
            since = await service.list(
                owner.id, WeightEntryFilters(start_date=datetime(2025, 3, 5, tzinfo=timezone.utc)), 1, 20
            )

        assert [e.weight for e in log.items] == [179.2, 180.5, 182.0]
        assert [e.weight for e in since.items] == [179.2, 180.5]
        assert cache.keys(f"weight:user:{owner.id}:*")

    async def test_entries_are_private(self, database, cache, media, make_user):
        owner = await make_user()
        other = await make_user("Grace", "Hopper")
        entry = await _create(database, WeightLogService, cache, media, owner.id, WeightEntryCreate(weight=181))

        async with database.session() as s:
            service = WeightLogService(s, cache, media)
            mine = await service.get(entry.id, owner.id)
            with pytest.raises(AuthorizationError) as exc:
                await service.get(entry.id, other.id)

        assert mine.weight == 181
        assert exc.value.message == "Not authorized to view this weight entry"

    async def test_update_and_delete(self, database, cache, media, storage, png, make_user):
        owner = await make_user()
        entry = await _create(
            database, WeightLogService, cache, media, owner.id, WeightEntryCreate(weight=181), [png()]
        )

        async with database.session() as s:
            updated = await WeightLogService(s, cache, media).update(
                entry.id, owner.id, WeightEntryUpdate(weight=179.5, notes="cut week 2")
            )
        async with database.session() as s:
            await WeightLogService(s, cache, media).delete(entry.id, owner.id)

        assert (updated.weight, updated.notes) == (179.5, "cut week 2")
        assert storage.objects == {}
        assert f"weight:user:{owner.id}:*" in cache.deleted_patterns
        assert "posts:*" not in cache.deleted_patterns
        async with database.session() as s:
            with pytest.raises(ResourceNotFoundError):
                await WeightLogService(s, cache, media).get(entry.id, owner.id)

    def test_weight_bounds(self):
        with pytest.raises(pydantic.ValidationError):
            WeightEntryCreate(weight=0)
        with pytest.raises(pydantic.ValidationError):
            WeightEntryCreate(weight=1101)
