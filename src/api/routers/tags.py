"""Tag management endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from core.auth import AuthenticatedUser
from models.tag import Tag
from schemas.tag import TagCreate, TagResponse, TagUpdate
from services.tag_service import TagService

router = APIRouter(prefix="/api/tags", tags=["tags"])

tag_service = TagService()


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    data: TagCreate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Tag:
    """
    Create a tag.

    Returns 409 if the caller already has a tag with this name.
    """
    return await tag_service.create(db, current_user.id, data)


@router.get("", response_model=list[TagResponse])
async def list_tags(
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[Tag]:
    """List the caller's tags in name order."""
    return await tag_service.list(db, current_user.id)


@router.get("/{tag_id}", response_model=TagResponse)
async def get_tag(
    tag_id: UUID,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Tag:
    """Get a single tag."""
    return await tag_service.get(db, current_user.id, tag_id)


@router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: UUID,
    data: TagUpdate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Tag:
    """Rename or recolor a tag. Omitted fields keep their value."""
    return await tag_service.update(db, current_user.id, tag_id, data)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: UUID,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a tag. It is removed from every bookmark that carried it."""
    await tag_service.delete(db, current_user.id, tag_id)
