"""Category endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from core.auth import AuthenticatedUser
from models.category import Category
from schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from services.category_service import CategoryService

router = APIRouter(prefix="/api/categories", tags=["categories"])

category_service = CategoryService()


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Category:
    """
    Create a category, optionally under a parent.

    Returns 404 if the parent is not one of the caller's categories and 409 if
    the name is already taken.
    """
    return await category_service.create(db, current_user.id, data)


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[Category]:
    """List the caller's categories in name order."""
    return await category_service.list(db, current_user.id)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: UUID,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Category:
    """Get a single category."""
    return await category_service.get(db, current_user.id, category_id)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Category:
    """
    Update a category.

    Returns 400 if the category is made its own parent.
    """
    return await category_service.update(db, current_user.id, category_id, data)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a category. Children and bookmarks that referenced it are detached."""
    await category_service.delete(db, current_user.id, category_id)
