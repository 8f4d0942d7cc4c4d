"""Service layer for category operations."""
import logging
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from models.category import Category
from schemas.category import CategoryCreate
from services.base_entity_service import OwnedEntityService
from services.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class CategoryService(OwnedEntityService[Category]):
    """
    Category service with full CRUD operations.

    Categories form a per-user hierarchy through `parent_id`. A parent must be
    one of the caller's own categories, and a category may not name itself as
    its parent. Longer cycles (A -> B -> A) are not detected.
    """

    model = Category
    entity_name = "Category"

    def _order_by(self) -> list[ColumnElement | InstrumentedAttribute]:
        return [Category.name.asc()]

    async def _ensure_name_available(
        self,
        db: AsyncSession,
        user_id: UUID,
        name: str,
        exclude_id: UUID | None = None,
    ) -> None:
        query = select(Category.id).where(Category.user_id == user_id, Category.name == name)
        if exclude_id is not None:
            query = query.where(Category.id != exclude_id)
        result = await db.execute(query)
        if result.first() is not None:
            raise ConflictError("Category already exists")

    async def _check_parent(
        self,
        db: AsyncSession,
        user_id: UUID,
        category_id: UUID,
        parent_id: UUID,
    ) -> None:
        """
        Validate a parent reference for the given category.

        Raises:
            ValidationError: If the category would be its own parent.
            NotFoundError: If the parent does not exist or belongs to another user.
        """
        if parent_id == category_id:
            raise ValidationError("Category cannot be its own parent")
        try:
            await self.get(db, user_id, parent_id)
        except NotFoundError as e:
            raise NotFoundError("Parent category not found") from e

    async def create(self, db: AsyncSession, user_id: UUID, data: CategoryCreate) -> Category:
        """
        Create a new category for a user.

        The id is assigned before validation so the self-parent rule applies on
        creation too.

        Raises:
            ConflictError: If the user already has a category with this name.
            ValidationError: If parent_id equals the new category's id.
            NotFoundError: If parent_id is not one of the user's categories.
        """
        await self._ensure_name_available(db, user_id, data.name)

        category_id = uuid4()
        if data.parent_id is not None:
            await self._check_parent(db, user_id, category_id, data.parent_id)

        category = Category(
            id=category_id,
            user_id=user_id,
            name=data.name,
            description=data.description,
            parent_id=data.parent_id,
        )
        async with self._unique_guard(db):
            db.add(category)
        await db.refresh(category)
        logger.debug("Created category %s for user %s", category.id, user_id)
        return category

    async def _prepare_update(
        self,
        db: AsyncSession,
        user_id: UUID,
        entity: Category,
        changes: dict[str, Any],
    ) -> dict[str, Any]:
        if "parent_id" in changes:
            await self._check_parent(db, user_id, entity.id, changes["parent_id"])
        if "name" in changes:
            await self._ensure_name_available(db, user_id, changes["name"], exclude_id=entity.id)
        return changes
