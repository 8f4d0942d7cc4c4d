"""Notes CRUD endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from core.auth import AuthenticatedUser
from models.note import Note
from schemas.note import NoteCreate, NoteResponse, NoteUpdate
from services.note_service import NoteService

router = APIRouter(prefix="/api/notes", tags=["notes"])

note_service = NoteService()


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    data: NoteCreate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Note:
    """Create a new note."""
    return await note_service.create(db, current_user.id, data)


@router.get("", response_model=list[NoteResponse])
async def list_notes(
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[Note]:
    """List the caller's notes, most recently updated first."""
    return await note_service.list(db, current_user.id)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: UUID,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Note:
    """Get a single note by ID."""
    return await note_service.get(db, current_user.id, note_id)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: UUID,
    data: NoteUpdate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Note:
    """Update a note. Omitted fields keep their value."""
    return await note_service.update(db, current_user.id, note_id, data)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: UUID,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a note."""
    await note_service.delete(db, current_user.id, note_id)
