"""Service layer for tag operations."""
from typing import Any
from uuid import UUID

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from models.tag import Tag
from schemas.tag import TagCreate
from services.base_entity_service import OwnedEntityService
from services.exceptions import ConflictError, NotFoundError


class TagService(OwnedEntityService[Tag]):
    """
    Tag service with full CRUD operations.

    Tag names are unique per user: the same name may exist for two different
    users, but a user cannot hold two tags with one name.
    """

    model = Tag
    entity_name = "Tag"

    def _order_by(self) -> list[ColumnElement | InstrumentedAttribute]:
        return [Tag.name.asc()]

    async def _ensure_name_available(
        self,
        db: AsyncSession,
        user_id: UUID,
        name: str,
        exclude_id: UUID | None = None,
    ) -> None:
        query = select(Tag.id).where(Tag.user_id == user_id, Tag.name == name)
        if exclude_id is not None:
            query = query.where(Tag.id != exclude_id)
        result = await db.execute(query)
        if result.first() is not None:
            raise ConflictError("Tag already exists")

    async def create(self, db: AsyncSession, user_id: UUID, data: TagCreate) -> Tag:
        """
        Create a new tag for a user.

        Raises:
            ConflictError: If the user already has a tag with this name.
        """
        await self._ensure_name_available(db, user_id, data.name)

        tag = Tag(user_id=user_id, name=data.name, color=data.color)
        async with self._unique_guard(db):
            db.add(tag)
        await db.refresh(tag)
        return tag

    async def _prepare_update(
        self,
        db: AsyncSession,
        user_id: UUID,
        entity: Tag,
        changes: dict[str, Any],
    ) -> dict[str, Any]:
        if "name" in changes:
            await self._ensure_name_available(db, user_id, changes["name"], exclude_id=entity.id)
        return changes

    async def get_many(
        self,
        db: AsyncSession,
        user_id: UUID,
        tag_ids: list[UUID],
    ) -> list[Tag]:
        """
        Resolve a list of tag ids, all of which must belong to the user.

        Raises:
            NotFoundError: If any id is unknown or owned by another user.
        """
        unique_ids = set(tag_ids)
        if not unique_ids:
            return []
        result = await db.execute(
            select(Tag).where(Tag.user_id == user_id, Tag.id.in_(list(unique_ids))),
        )
        tags = list(result.scalars().all())
        if len(tags) != len(unique_ids):
            raise NotFoundError("Tag not found")
        return tags
