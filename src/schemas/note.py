"""Pydantic schemas for note endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NoteCreate(BaseModel):
    """Schema for creating a new note."""

    title: str = Field(..., max_length=500)
    content: str

    @field_validator("title")
    @classmethod
    def check_title_not_empty(cls, v: str) -> str:
        """Validate title is not empty."""
        if not v or not v.strip():
            raise ValueError("Title cannot be empty")
        return v


class NoteUpdate(BaseModel):
    """Schema for updating an existing note."""

    title: str | None = Field(default=None, max_length=500)
    content: str | None = None

    @field_validator("title")
    @classmethod
    def check_title_not_empty(cls, v: str | None) -> str | None:
        """Validate title is not empty (if provided)."""
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty")
        return v


class NoteResponse(BaseModel):
    """Schema for note responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
