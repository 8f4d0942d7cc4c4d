"""Bookmarks CRUD endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from core.auth import AuthenticatedUser
from models.bookmark import Bookmark
from schemas.bookmark import (
    BookmarkCreate,
    BookmarkPreview,
    BookmarkResponse,
    BookmarkUpdate,
    PreviewRequest,
)
from services.bookmark_service import BookmarkService
from services.url_scraper import fetch_preview

router = APIRouter(prefix="/api/bookmarks", tags=["bookmarks"])

bookmark_service = BookmarkService()


@router.post("", response_model=BookmarkResponse, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    data: BookmarkCreate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Bookmark:
    """
    Create a new bookmark.

    Returns 404 if category_id or any tag id does not belong to the caller.
    """
    return await bookmark_service.create(db, current_user.id, data)


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    category_id: UUID | None = Query(default=None, description="Only bookmarks in this category"),
    tag_id: UUID | None = Query(default=None, description="Only bookmarks carrying this tag"),
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[Bookmark]:
    """List the caller's bookmarks, newest first."""
    return await bookmark_service.list_filtered(
        db, current_user.id, category_id=category_id, tag_id=tag_id,
    )


@router.post("/preview", response_model=BookmarkPreview)
async def preview_bookmark(
    data: PreviewRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),  # noqa: ARG001
) -> BookmarkPreview:
    """
    Fetch title, description, image and favicon for a URL.

    Best-effort: unreachable or non-HTML pages yield empty fields, never an error.
    """
    return await fetch_preview(str(data.url))


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark_id: UUID,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Bookmark:
    """Get a single bookmark by ID."""
    return await bookmark_service.get(db, current_user.id, bookmark_id)


@router.put("/{bookmark_id}", response_model=BookmarkResponse)
async def update_bookmark(
    bookmark_id: UUID,
    data: BookmarkUpdate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Bookmark:
    """
    Update a bookmark.

    Omitted fields keep their value. A supplied `tag_ids` replaces the tag set.
    """
    return await bookmark_service.update(db, current_user.id, bookmark_id, data)


@router.delete("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark(
    bookmark_id: UUID,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a bookmark."""
    await bookmark_service.delete(db, current_user.id, bookmark_id)
