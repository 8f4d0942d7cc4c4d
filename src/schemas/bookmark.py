"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator, model_validator

from schemas.tag import TagResponse


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark."""

    url: HttpUrl
    title: str = Field(..., max_length=500)
    description: str | None = None
    category_id: UUID | None = None
    tag_ids: list[UUID] = []

    @field_validator("title")
    @classmethod
    def check_title_not_empty(cls, v: str) -> str:
        """Validate title is not empty."""
        if not v.strip():
            raise ValueError("Title is required")
        return v

    @field_validator("tag_ids", mode="before")
    @classmethod
    def default_tag_ids(cls, v: list[UUID] | None) -> list[UUID]:
        """Treat a null tag list as no tags."""
        return [] if v is None else v


class BookmarkUpdate(BaseModel):
    """
    Schema for updating an existing bookmark.

    Omitted or null fields keep their stored value. When `tag_ids` is given it
    replaces the bookmark's whole tag set; an empty list clears it.
    """

    url: HttpUrl | None = None
    title: str | None = Field(default=None, max_length=500)
    description: str | None = None
    category_id: UUID | None = None
    tag_ids: list[UUID] | None = None

    @field_validator("title")
    @classmethod
    def check_title_not_empty(cls, v: str | None) -> str | None:
        """Validate title is not empty (if provided)."""
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty")
        return v


class BookmarkResponse(BaseModel):
    """
    Schema for bookmark responses.

    Uses a model_validator to expose the eagerly loaded `tag_objects`
    relationship as `tags`.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    url: str
    title: str
    description: str | None
    category_id: UUID | None
    tags: list[TagResponse]
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def extract_tags(cls, data: Any) -> Any:
        """Map ORM tag_objects onto the tags field."""
        if hasattr(data, "tag_objects"):
            return {
                "id": data.id,
                "url": data.url,
                "title": data.title,
                "description": data.description,
                "category_id": data.category_id,
                "tags": sorted(data.tag_objects, key=lambda t: t.name),
                "created_at": data.created_at,
                "updated_at": data.updated_at,
            }
        return data


class PreviewRequest(BaseModel):
    """Schema for requesting a link preview."""

    url: HttpUrl


class BookmarkPreview(BaseModel):
    """Best-effort page metadata. Every field may be missing."""

    title: str | None = None
    description: str | None = None
    image: str | None = None
    favicon: str | None = None
