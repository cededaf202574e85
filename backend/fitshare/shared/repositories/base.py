"""
Base Repository

Generic base repository with the CRUD operations every entity shares.
All entity-specific repositories inherit from this class.

What This Provides:
===================
- get(id)        → Fetch single record by UUID
- list()         → List records with pagination, equality filters and extra conditions
- count()        → Count records with the same filtering as list()
- paginate()     → (items, total) for one page
- create()       → Create new record
- update()       → Apply field changes to a loaded record
- delete()       → Hard delete a loaded record

Generic Type Pattern:
=====================
    class WorkoutRepository(BaseRepository[Workout]):
        pass

    repo = WorkoutRepository(db)
    workout = await repo.get(id)  # Returns Workout, not Any

Filtering:
==========
`filters` is a dict of column=value equality clauses; keys with a None value
are skipped, so callers can pass optional query parameters straight through.
`conditions` takes arbitrary SQLAlchemy expressions (date ranges, ILIKE).

flush() vs commit():
====================
Repository methods only flush(). The request-scoped session commits once the
handler returns, so one request is one transaction.
"""

from typing import Any, Generic, Optional, Sequence, Type, TypeVar
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.functions import count as sql_count

from fitshare.shared.models.base import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class (e.g., User, Workout, Post)
            session: Async database session for the current request
        """
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # QUERY BUILDING
    # ═══════════════════════════════════════════════════════════════════════════

    def _filtered(
        self,
        query: Select,
        filters: Optional[dict[str, Any]] = None,
        conditions: Optional[Sequence[ColumnElement[bool]]] = None,
    ) -> Select:
        """Apply equality filters (None values skipped) and extra conditions."""
        if filters:
            for field, value in filters.items():
                if value is not None and hasattr(self.model, field):
                    query = query.where(getattr(self.model, field) == value)
        for condition in conditions or ():
            query = query.where(condition)
        return query

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """
        Get a single record by its UUID.

        Args:
            record_id: The UUID of the record to fetch

        Returns:
            The model instance if found, None otherwise

        SQL Generated:
            SELECT * FROM workouts WHERE id = '1f0e8400-...'
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def paginate(
        self,
        *,
        page: int,
        limit: int,
        filters: Optional[dict[str, Any]] = None,
        conditions: Optional[Sequence[ColumnElement[bool]]] = None,
        options: Sequence[Any] = (),
    ) -> tuple[list[ModelType], int]:
        """
        Fetch one newest-first page plus the total matching count.

        Args:
            page: 1-based page number
            limit: Page size

        Returns:
            (items, total)
        """
        total = await self.count(filters, conditions)
        items = await self.list(
            offset=(page - 1) * limit,
            limit=limit,
            filters=filters,
            conditions=conditions,
            options=options,
        )
        return items, total

    async def list(
        self,
        *,
        offset: int = 0,
        limit: int = 100,
        filters: Optional[dict[str, Any]] = None,
        conditions: Optional[Sequence[ColumnElement[bool]]] = None,
        order_by: str = "created_at",
        order_desc: bool = True,
        options: Sequence[Any] = (),
    ) -> list[ModelType]:
        """
        List records with pagination and optional filtering.

        Args:
            offset: Number of records to skip
            limit: Maximum records to return
            filters: Dict of field=value equality clauses
            conditions: Extra WHERE expressions
            order_by: Field name to order results by (default newest first)
            order_desc: If True, order descending
            options: Loader options (e.g. selectinload(...))

        SQL Generated:
            SELECT * FROM meals
            WHERE user_id = '...' AND meal_type = 'lunch'
            ORDER BY created_at DESC
            OFFSET 20 LIMIT 20
        """
        query = self._filtered(select(self.model), filters, conditions)

        if hasattr(self.model, order_by):
            order_field = getattr(self.model, order_by)
            # id breaks ties so page boundaries are stable
            query = query.order_by(
                order_field.desc() if order_desc else order_field.asc(),
                self.model.id.desc() if order_desc else self.model.id.asc(),
            )

        if options:
            query = query.options(*options)

        query = query.offset(offset).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(
        self,
        filters: Optional[dict[str, Any]] = None,
        conditions: Optional[Sequence[ColumnElement[bool]]] = None,
    ) -> int:
        """
        Count records with the same filtering semantics as list().

        SQL Generated:
            SELECT COUNT(*) FROM posts WHERE type = 'meal'
        """
        query = self._filtered(select(sql_count()).select_from(self.model), filters, conditions)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def exists(self, record_id: UUID) -> bool:
        """Check if a record exists without loading it."""
        result = await self.session.execute(
            select(sql_count()).select_from(self.model).where(self.model.id == record_id)
        )
        return (result.scalar() or 0) > 0

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Adds the instance to the session and flushes to get the generated
        ID and defaults.

        Example:
            workout = await repo.create(user_id=owner_id, title="Leg day", ...)
            workout.id  # generated UUID
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, instance: ModelType, **kwargs: Any) -> ModelType:
        """
        Apply field changes to an already-loaded record.

        Every provided key is written, including None, so callers decide what
        a partial update means (typically `model_dump(exclude_unset=True)`).

        Returns:
            The refreshed instance
        """
        for field, value in kwargs.items():
            if hasattr(instance, field):
                setattr(instance, field, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, instance: ModelType) -> None:
        """
        Hard delete a loaded record.

        SQL Generated:
            DELETE FROM posts WHERE id = '...'
        """
        await self.session.delete(instance)
        await self.session.flush()
