"""
Base service class for owner-scoped entity CRUD operations.

Every bookmark, note, tag and category belongs to exactly one user. All reads
and writes go through this class so that each query carries the
`user_id == caller` predicate, and a record owned by someone else looks exactly
like a record that does not exist.
"""
from abc import ABC
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Generic, Protocol, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql import Select

from services.exceptions import ConflictError, NotFoundError


class OwnedEntity(Protocol):
    """Protocol for entities that carry an owner reference."""

    id: UUID
    user_id: UUID
    created_at: datetime


T = TypeVar("T", bound=OwnedEntity)


class OwnedEntityService(ABC, Generic[T]):
    """
    Abstract base class for owner-scoped CRUD.

    Subclasses must define:
    - model: The SQLAlchemy model class
    - entity_name: Human-readable name for error messages (e.g., "Bookmark")

    Subclasses may override:
    - _order_by(): List ordering
    - _load_options(): Eager-load options for get/list
    - _prepare_update(): Validate or transform changes before they are applied

    Note: create() is NOT in base class - each entity has its own checks
    (e.g., tag name uniqueness, category parent resolution).
    """

    model: type[T]
    entity_name: str

    # --- Hooks ---

    def _order_by(self) -> list[ColumnElement | InstrumentedAttribute]:
        """Default ordering for list()."""
        return [self.model.created_at.desc()]

    def _load_options(self) -> list:
        """Loader options applied to get() and list()."""
        return []

    async def _prepare_update(
        self,
        db: AsyncSession,  # noqa: ARG002
        user_id: UUID,  # noqa: ARG002
        entity: T,  # noqa: ARG002
        changes: dict[str, Any],
    ) -> dict[str, Any]:
        """Validate merged changes. Returns the column values to assign."""
        return changes

    # --- Helpers ---

    def _not_found(self) -> NotFoundError:
        return NotFoundError(f"{self.entity_name} not found")

    def _scoped(self, user_id: UUID) -> Select:
        """SELECT restricted to the owner's rows."""
        return (
            select(self.model)
            .options(*self._load_options())
            .where(self.model.user_id == user_id)
        )

    @staticmethod
    def merge_changes(data: BaseModel) -> dict[str, Any]:
        """
        Reduce an update payload to the fields that should change.

        Fields that are omitted or explicitly null keep their stored value.
        """
        return data.model_dump(exclude_none=True)

    @asynccontextmanager
    async def _unique_guard(self, db: AsyncSession) -> AsyncIterator[None]:
        """
        Run writes in a savepoint and turn unique-constraint violations into ConflictError.

        The name pre-checks give friendly errors; this catches the race where two
        requests pass the pre-check at the same time.
        """
        try:
            async with db.begin_nested():
                yield
        except IntegrityError as e:
            raise ConflictError(f"{self.entity_name} already exists") from e

    async def _refresh(self, db: AsyncSession, entity: T) -> None:
        """Reload server-generated columns after a write."""
        await db.refresh(entity)

    # --- Common CRUD Operations ---

    async def get(self, db: AsyncSession, user_id: UUID, entity_id: UUID) -> T:
        """
        Get an entity by ID, scoped to user.

        Raises:
            NotFoundError: If the entity does not exist or belongs to another user.
        """
        result = await db.execute(
            self._scoped(user_id).where(self.model.id == entity_id),
        )
        entity = result.scalar_one_or_none()
        if entity is None:
            raise self._not_found()
        return entity

    async def list(self, db: AsyncSession, user_id: UUID, *filters: ColumnElement) -> list[T]:
        """
        List the user's entities.

        Extra filters narrow the result; they can never widen it past the owner.
        """
        result = await db.execute(
            self._scoped(user_id).where(*filters).order_by(*self._order_by()),
        )
        return list(result.scalars().unique().all())

    async def update(
        self,
        db: AsyncSession,
        user_id: UUID,
        entity_id: UUID,
        data: BaseModel,
    ) -> T:
        """
        Merge an update payload into an owned entity.

        Raises:
            NotFoundError: If the entity does not exist or belongs to another user.
        """
        entity = await self.get(db, user_id, entity_id)
        changes = await self._prepare_update(db, user_id, entity, self.merge_changes(data))

        async with self._unique_guard(db):
            for field, value in changes.items():
                setattr(entity, field, value)
            if hasattr(self.model, "updated_at"):
                entity.updated_at = func.clock_timestamp()
        await self._refresh(db, entity)
        return entity

    async def delete(self, db: AsyncSession, user_id: UUID, entity_id: UUID) -> None:
        """
        Delete an owned entity with a single owner-conditioned statement.

        Raises:
            NotFoundError: If no row matched both the id and the owner.
        """
        result = await db.execute(
            delete(self.model)
            .where(self.model.id == entity_id, self.model.user_id == user_id)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            raise self._not_found()
