"""
Owned Resource Services

Workouts, meals, progress entries and weigh-ins share one contract, implemented
once in OwnedResourceService and specialised by small subclasses.

    OwnedResourceService[Model, Create, Update, Response]
         ├── WorkoutService    cache prefix "workouts"
         ├── MealService       cache prefix "meals"
         ├── ProgressService   cache prefix "progress" + per-type rules
         └── WeightLogService  cache prefix "weight", owner-only reads

Contract:
=========
    create(owner_id, payload, uploads)   → photos stored, record persisted
    list(actor_id, filters, page, limit) → cached page, newest first
    get(record_id, actor_id)             → record or 404 (403 for private types)
    update(record_id, actor_id, ...)     → owner only (403), photos merged
    delete(record_id, actor_id)          → owner only (403), photos released,
                                           posts keep existing with the
                                           reference cleared

Cache Keys:
===========
    workouts:user:<owner>:{"split":"Push"}:page:1:limit:20

Every write drops `<prefix>:user:<owner>:*` after commit, plus `posts:*` for
types a post can reference, because the feed embeds the referenced records.
"""

from typing import Any, Generic, Optional, Sequence, Type, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fitshare.config.settings import settings
from fitshare.shared.adapters.redis_adapter import Cache, build_list_key
from fitshare.shared.core.exceptions import ResourceNotFoundError, ValidationError
from fitshare.shared.core.logging import get_logger
from fitshare.shared.db.session import after_commit
from fitshare.shared.models import Meal, Progress, WeightEntry, Workout
from fitshare.shared.models.enums import ProgressType
from fitshare.shared.repositories.activity_repository import (
    MealRepository,
    OwnedRepository,
    ProgressRepository,
    WeightEntryRepository,
    WorkoutRepository,
)
from fitshare.shared.repositories.post_repository import PostRepository
from fitshare.shared.schemas.common import BaseSchema, Page, PaginationMeta
from fitshare.shared.schemas.meal import MealCreate, MealResponse, MealUpdate
from fitshare.shared.schemas.progress import (
    ProgressResponse,
    ProgressUpdate,
    parse_progress_payload,
)
from fitshare.shared.schemas.weight import (
    WeightEntryCreate,
    WeightEntryResponse,
    WeightEntryUpdate,
)
from fitshare.shared.schemas.workout import (
    WorkoutCreate,
    WorkoutResponse,
    WorkoutUpdate,
)
from fitshare.shared.services.media_service import MediaService, UploadedFile
from fitshare.shared.services.ownership import assert_owner

logger = get_logger("resources")

ModelType = TypeVar("ModelType")
CreateT = TypeVar("CreateT", bound=BaseSchema)
UpdateT = TypeVar("UpdateT", bound=BaseSchema)
ResponseT = TypeVar("ResponseT", bound=BaseSchema)

# Filter fields that are not plain equality clauses on the model
_NON_EQUALITY_FILTERS = {"user_id", "start_date", "end_date"}


class OwnedResourceService(Generic[ModelType, CreateT, UpdateT, ResponseT]):
    """
    Create/list/get/update/delete for one owner-scoped record type.

    Subclasses set:
        resource_name: Display name used in errors ("Workout")
        cache_prefix: First segment of list cache keys ("workouts")
        reference_field: Post column that may point at this record ("workout_id"),
            empty when posts never reference this type
        private: Only the owner may read a single record
        response_schema: Pydantic model returned to callers
        repository_class: OwnedRepository subclass
    """

    resource_name: str = "Resource"
    cache_prefix: str = "resources"
    reference_field: str = ""
    private: bool = False
    response_schema: Type[BaseSchema] = BaseSchema
    repository_class: Type[OwnedRepository] = OwnedRepository

    def __init__(self, session: AsyncSession, cache: Cache, media: MediaService) -> None:
        """
        Initialize the service.

        Args:
            session: Async database session
            cache: Read-through cache (advisory)
            media: Photo storage service
        """
        self.session = session
        self.cache = cache
        self.media = media
        self.repo = self.repository_class(session)
        self.post_repo = PostRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # HOOKS
    # ═══════════════════════════════════════════════════════════════════════════

    def _check_create(self, payload: CreateT, uploads: Sequence[UploadedFile]) -> None:
        """Type-specific create rules beyond the payload schema."""

    def _check_update(self, record: ModelType, changes: dict[str, Any], photo_count: int) -> None:
        """Type-specific rules for the merged record after an update."""

    def _to_response(self, record: ModelType) -> ResponseT:
        return self.response_schema.model_validate(record)  # type: ignore[return-value]

    # ═══════════════════════════════════════════════════════════════════════════
    # CACHE
    # ═══════════════════════════════════════════════════════════════════════════

    def _owner_prefix(self, owner_id: UUID) -> str:
        return f"{self.cache_prefix}:user:{owner_id}"

    def _invalidate(self, owner_id: UUID) -> None:
        after_commit(self.session, self.cache.delete_pattern, f"{self._owner_prefix(owner_id)}:*")
        if self.reference_field:
            after_commit(self.session, self.cache.delete_pattern, "posts:*")

    # ═══════════════════════════════════════════════════════════════════════════
    # OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(
        self,
        owner_id: UUID,
        payload: CreateT,
        uploads: Sequence[UploadedFile] = (),
    ) -> ResponseT:
        """
        Persist a new record owned by owner_id.

        Uploads are validated as a batch before anything is stored. If the
        insert fails, the freshly stored photos are released again.

        Raises:
            ValidationError: Type-specific rule or upload rejected
            StorageError: Photo upload failed
        """
        self._check_create(payload, uploads)
        self.media.validate_many(uploads)

        photos = await self.media.store_many(uploads, owner_id)
        values = payload.model_dump(exclude_none=True)

        try:
            record = await self.repo.create(user_id=owner_id, photos=photos, **values)
        except Exception:
            await self.media.release_many(photos)
            raise

        self._invalidate(owner_id)
        logger.info(
            "Resource created",
            resource=self.cache_prefix,
            record_id=str(record.id),
            owner_id=str(owner_id),
            photos=len(photos),
        )
        return self._to_response(record)

    async def list(
        self,
        actor_id: UUID,
        filters: BaseSchema,
        page: int,
        limit: int,
    ) -> Page[Any]:
        """
        One page of an owner's records, newest first.

        The owner is `filters.user_id` when given, else the acting user.
        Pages are served from cache when present.
        """
        owner_id = getattr(filters, "user_id", None) or actor_id
        key_filters = filters.model_dump(mode="json", exclude={"user_id"})
        cache_key = build_list_key(self._owner_prefix(owner_id), key_filters, page, limit)
        page_type = Page[self.response_schema]  # type: ignore[name-defined]

        cached = await self.cache.get_json(cache_key)
        if cached is not None:
            return page_type.model_validate(cached)

        equality = filters.model_dump(exclude=_NON_EQUALITY_FILTERS)
        records, total = await self.repo.list_for_owner(
            owner_id=owner_id,
            page=page,
            limit=limit,
            filters=equality,
            start_date=getattr(filters, "start_date", None),
            end_date=getattr(filters, "end_date", None),
        )

        result = page_type(
            items=[self._to_response(record) for record in records],
            pagination=PaginationMeta.create(page=page, limit=limit, total=total, returned=len(records)),
        )
        await self.cache.set_json(
            cache_key,
            result.model_dump(mode="json", by_alias=True),
            ttl=settings.LIST_CACHE_TTL_SECONDS,
        )
        return result

    async def _load(self, record_id: UUID) -> ModelType:
        record = await self.repo.get(record_id)
        if record is None:
            raise ResourceNotFoundError(self.resource_name)
        return record

    async def get(self, record_id: UUID, actor_id: Optional[UUID] = None) -> ResponseT:
        """
        Raises:
            ResourceNotFoundError: No such record
            AuthorizationError: Private type read by someone other than the owner
        """
        record = await self._load(record_id)
        if self.private:
            assert_owner(record, actor_id, action="view", resource_name=self.resource_name.lower())
        return self._to_response(record)

    async def update(
        self,
        record_id: UUID,
        actor_id: UUID,
        payload: UpdateT,
        uploads: Sequence[UploadedFile] = (),
    ) -> ResponseT:
        """
        Apply a partial update by the record's owner.

        Photos: new uploads are appended, keys listed in `removed_photos`
        are detached and released (best-effort).

        Raises:
            ResourceNotFoundError: No such record
            AuthorizationError: Acting user is not the owner
        """
        record = await self._load(record_id)
        assert_owner(record, actor_id, action="update", resource_name=self.resource_name.lower())

        changes = payload.model_dump(exclude_unset=True, exclude_none=True, exclude={"removed_photos"})
        removed = [key for key in getattr(payload, "removed_photos", []) if key in record.photos]
        kept = [key for key in record.photos if key not in removed]

        self.media.validate_many(uploads)
        self._check_update(record, changes, len(kept) + len(uploads))

        added = await self.media.store_many(uploads, actor_id)
        try:
            record = await self.repo.update(record, photos=kept + added, **changes)
        except Exception:
            await self.media.release_many(added)
            raise

        await self.media.release_many(removed)
        self._invalidate(record.user_id)
        logger.info(
            "Resource updated",
            resource=self.cache_prefix,
            record_id=str(record_id),
            fields=sorted(changes),
            added_photos=len(added),
            removed_photos=len(removed),
        )
        return self._to_response(record)

    async def delete(self, record_id: UUID, actor_id: UUID) -> None:
        """
        Delete a record owned by the acting user.

        Posts referencing the record keep existing with the reference
        cleared. Attached photos are released best-effort; a failed release
        is logged and does not stop the delete.

        Raises:
            ResourceNotFoundError: No such record
            AuthorizationError: Acting user is not the owner
        """
        record = await self._load(record_id)
        assert_owner(record, actor_id, action="delete", resource_name=self.resource_name.lower())

        owner_id = record.user_id
        photos = list(record.photos or [])

        cleared = 0
        if self.reference_field:
            cleared = await self.post_repo.clear_reference(self.reference_field, record_id)
        await self.repo.delete(record)
        failures = await self.media.release_many(photos)

        self._invalidate(owner_id)
        logger.info(
            "Resource deleted",
            resource=self.cache_prefix,
            record_id=str(record_id),
            posts_cleared=cleared,
            photo_release_failures=failures,
        )


class WorkoutService(OwnedResourceService[Workout, WorkoutCreate, WorkoutUpdate, WorkoutResponse]):
    """Workouts logged by a user."""

    resource_name = "Workout"
    cache_prefix = "workouts"
    reference_field = "workout_id"
    response_schema = WorkoutResponse
    repository_class = WorkoutRepository


class MealService(OwnedResourceService[Meal, MealCreate, MealUpdate, MealResponse]):
    """Meals logged by a user."""

    resource_name = "Meal"
    cache_prefix = "meals"
    reference_field = "meal_id"
    response_schema = MealResponse
    repository_class = MealRepository


class ProgressService(OwnedResourceService[Progress, Any, ProgressUpdate, ProgressResponse]):
    """
    Progress entries (weight, pr, measurement, photo).

    The create payload is already one concrete variant (see
    parse_progress_payload). Updates are merged onto the stored record and
    the result is re-validated against the record's variant, so an update
    cannot leave a "pr" entry without an exercise.
    """

    resource_name = "Progress"
    cache_prefix = "progress"
    reference_field = "progress_id"
    response_schema = ProgressResponse
    repository_class = ProgressRepository

    _VARIANT_FIELDS = ("weight", "exercise", "pr_value", "measurement", "date", "notes")

    def _check_create(self, payload: Any, uploads: Sequence[UploadedFile]) -> None:
        if payload.type == ProgressType.PHOTO.value and not uploads:
            raise ValidationError(
                "Photo progress requires at least one photo",
                errors=["photos: at least one photo is required for photo progress"],
            )

    def _check_update(self, record: Progress, changes: dict[str, Any], photo_count: int) -> None:
        merged: dict[str, Any] = {"type": ProgressType(record.type).value}
        for field in self._VARIANT_FIELDS:
            merged[field] = changes.get(field, getattr(record, field))
        parse_progress_payload({k: v for k, v in merged.items() if v is not None})

        if record.type == ProgressType.PHOTO and photo_count == 0:
            raise ValidationError(
                "Photo progress requires at least one photo",
                errors=["photos: at least one photo is required for photo progress"],
            )


class WeightLogService(OwnedResourceService[WeightEntry, WeightEntryCreate, WeightEntryUpdate, WeightEntryResponse]):
    """
    The private weight log. Pages always list the caller's own entries and a
    single entry is readable by its owner only.
    """

    resource_name = "Weight entry"
    cache_prefix = "weight"
    response_schema = WeightEntryResponse
    repository_class = WeightEntryRepository
    private = True
