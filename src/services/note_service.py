"""Service layer for note CRUD operations."""
from uuid import UUID

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from models.note import Note
from schemas.note import NoteCreate
from services.base_entity_service import OwnedEntityService


class NoteService(OwnedEntityService[Note]):
    """Note service - most recently edited notes are listed first."""

    model = Note
    entity_name = "Note"

    def _order_by(self) -> list[ColumnElement | InstrumentedAttribute]:
        return [Note.updated_at.desc()]

    async def create(self, db: AsyncSession, user_id: UUID, data: NoteCreate) -> Note:
        """Create a new note for a user."""
        note = Note(user_id=user_id, title=data.title, content=data.content)
        db.add(note)
        await db.flush()
        await db.refresh(note)
        return note
