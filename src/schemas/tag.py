"""Pydantic schemas for tag endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.validators import validate_color, validate_name


class TagCreate(BaseModel):
    """Schema for creating a tag."""

    name: str = Field(..., min_length=1, max_length=255)
    color: str | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        """Strip whitespace and reject blank names."""
        return validate_name(v)

    @field_validator("color")
    @classmethod
    def check_color(cls, v: str | None) -> str | None:
        """Validate hex color format."""
        return validate_color(v)


class TagUpdate(BaseModel):
    """Schema for updating a tag. Omitted or null fields keep their stored value."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    color: str | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str | None) -> str | None:
        """Strip whitespace and reject blank names (if provided)."""
        return validate_name(v)

    @field_validator("color")
    @classmethod
    def check_color(cls, v: str | None) -> str | None:
        """Validate hex color format (if provided)."""
        return validate_color(v)


class TagResponse(BaseModel):
    """Schema for tag responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    color: str | None
    created_at: datetime
