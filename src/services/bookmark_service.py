"""Service layer for bookmark CRUD operations."""
import logging
from typing import Any
from uuid import UUID

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from models.bookmark import Bookmark
from models.tag import Tag
from schemas.bookmark import BookmarkCreate
from services.base_entity_service import OwnedEntityService
from services.category_service import CategoryService
from services.exceptions import NotFoundError
from services.tag_service import TagService

logger = logging.getLogger(__name__)

category_service = CategoryService()
tag_service = TagService()


class BookmarkService(OwnedEntityService[Bookmark]):
    """
    Bookmark service with full CRUD operations.

    A bookmark may reference one category and any number of tags. Every
    referenced id is resolved with the caller's user_id, so a bookmark can never
    point at another user's category or tag.
    """

    model = Bookmark
    entity_name = "Bookmark"

    def _load_options(self) -> list:
        return [selectinload(Bookmark.tag_objects)]

    async def _check_category(
        self,
        db: AsyncSession,
        user_id: UUID,
        category_id: UUID,
    ) -> None:
        """Raise NotFoundError unless the category belongs to the user."""
        try:
            await category_service.get(db, user_id, category_id)
        except NotFoundError as e:
            raise NotFoundError("Category not found") from e

    async def _refresh(self, db: AsyncSession, entity: Bookmark) -> None:
        await db.refresh(entity)
        await db.refresh(entity, attribute_names=["tag_objects"])

    async def create(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: BookmarkCreate,
    ) -> Bookmark:
        """
        Create a new bookmark for a user.

        Raises:
            NotFoundError: If category_id or any of tag_ids is not owned by the user.
        """
        if data.category_id is not None:
            await self._check_category(db, user_id, data.category_id)
        tags = await tag_service.get_many(db, user_id, data.tag_ids)

        bookmark = Bookmark(
            user_id=user_id,
            url=str(data.url),
            title=data.title,
            description=data.description,
            category_id=data.category_id,
        )
        bookmark.tag_objects = tags
        db.add(bookmark)
        await db.flush()
        await self._refresh(db, bookmark)
        logger.debug("Created bookmark %s for user %s", bookmark.id, user_id)
        return bookmark

    async def _prepare_update(
        self,
        db: AsyncSession,
        user_id: UUID,
        entity: Bookmark,  # noqa: ARG002
        changes: dict[str, Any],
    ) -> dict[str, Any]:
        if "url" in changes:
            changes["url"] = str(changes["url"])
        if "category_id" in changes:
            await self._check_category(db, user_id, changes["category_id"])
        if "tag_ids" in changes:
            changes["tag_objects"] = await tag_service.get_many(
                db, user_id, changes.pop("tag_ids"),
            )
        return changes

    async def list_filtered(
        self,
        db: AsyncSession,
        user_id: UUID,
        category_id: UUID | None = None,
        tag_id: UUID | None = None,
    ) -> list[Bookmark]:
        """List the user's bookmarks, newest first, optionally by category or tag."""
        filters: list[ColumnElement] = []
        if category_id is not None:
            filters.append(Bookmark.category_id == category_id)
        if tag_id is not None:
            filters.append(Bookmark.tag_objects.any(Tag.id == tag_id))
        return await self.list(db, user_id, *filters)
