"""
Base CRUD operations for SQLAlchemy models.

Provides the entity-collection capability set (find by id, create, save,
remove, indexed queries) that model-specific CRUD classes inherit and
extend.

Dependencies: sqlalchemy, uuid
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


def coerce_uuid(value: UUID | str | None) -> UUID | None:
    """Convert a UUID-like value, returning None for anything malformed."""
    if value is None or isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Provides standard database operations that work with any SQLAlchemy model.
    Subclasses specify the model class and add indexed queries.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Create a new record in the database.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID and timestamps
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID | str) -> ModelT | None:
        """
        Retrieve a single record by primary key.

        Args:
            session: Async database session
            id: UUID primary key (malformed strings never match)

        Returns:
            Model instance if found, None otherwise
        """
        key = coerce_uuid(id)
        if key is None:
            return None
        stmt = select(self.model).where(self.model.id == key)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many_by_ids(
        self,
        session: AsyncSession,
        ids: Sequence[UUID | str],
    ) -> Sequence[ModelT]:
        """
        Retrieve every record whose id is in ids.

        Args:
            session: Async database session
            ids: Primary keys; malformed ones are ignored

        Returns:
            Sequence of found instances, in no particular order
        """
        keys = [key for key in (coerce_uuid(i) for i in ids) if key is not None]
        if not keys:
            return []
        stmt = select(self.model).where(self.model.id.in_(keys))
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_all(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """
        Retrieve all records with optional pagination.

        Args:
            session: Async database session
            limit: Maximum number of records to return (None for all)
            offset: Number of records to skip

        Returns:
            Sequence of model instances, oldest first
        """
        stmt = select(self.model).order_by(self.model.created_at).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def all_by(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
        **filters: Any,
    ) -> Sequence[ModelT]:
        """
        Retrieve records matching equality filters.

        Args:
            session: Async database session
            limit: Maximum number of records to return (None for all)
            offset: Number of records to skip
            **filters: column=value pairs combined with AND

        Returns:
            Sequence of model instances, oldest first
        """
        stmt = select(self.model).filter_by(**filters).order_by(self.model.created_at)
        stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def find_by(self, session: AsyncSession, **filters: Any) -> ModelT | None:
        """
        Retrieve the first record matching equality filters.

        Returns:
            Model instance if found, None otherwise
        """
        stmt = select(self.model).filter_by(**filters).order_by(self.model.created_at).limit(1)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def save(self, session: AsyncSession, instance: ModelT) -> ModelT:
        """
        Persist changes made to an instance.

        Args:
            session: Async database session
            instance: Modified model instance

        Returns:
            The refreshed instance (updated_at bumped)
        """
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def remove(self, session: AsyncSession, instance: ModelT) -> None:
        """
        Delete an instance.

        Args:
            session: Async database session
            instance: Model instance to delete
        """
        await session.delete(instance)
        await session.flush()
