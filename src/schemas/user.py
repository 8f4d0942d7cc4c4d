"""Pydantic schemas for registration, login and account endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    """Schema for registering a new account."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=1024)
    name: str = Field(..., min_length=1, max_length=255)


class UserLogin(BaseModel):
    """Schema for logging in."""

    email: EmailStr
    password: str = Field(..., max_length=1024)


class PasswordChange(BaseModel):
    """Schema for replacing the caller's password."""

    current_password: str = Field(..., max_length=1024)
    new_password: str = Field(..., min_length=8, max_length=1024)


class UserResponse(BaseModel):
    """Public view of an account. The password hash is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str
    created_at: datetime


class AuthResponse(BaseModel):
    """Returned by register and login: a bearer token plus the account."""

    token: str
    token_type: str = "bearer"
    user: UserResponse
