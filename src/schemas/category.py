"""Pydantic schemas for category endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.validators import validate_name


class CategoryCreate(BaseModel):
    """Schema for creating a category, optionally under a parent."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    parent_id: UUID | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        """Strip whitespace and reject blank names."""
        return validate_name(v)


class CategoryUpdate(BaseModel):
    """
    Schema for updating a category.

    Omitted or null fields keep their stored value, so a category cannot be
    moved back to the top level through this schema.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    parent_id: UUID | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str | None) -> str | None:
        """Strip whitespace and reject blank names (if provided)."""
        return validate_name(v)


class CategoryResponse(BaseModel):
    """Schema for category responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    parent_id: UUID | None
    created_at: datetime
