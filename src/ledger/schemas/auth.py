"""Pydantic schemas for account and session endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    """Request model for account creation."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="Account password")
    name: str | None = Field(None, max_length=255, description="Display name")


class LoginRequest(BaseModel):
    """Request model for session creation."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class UserResponse(BaseModel):
    """Response model for user data (without sensitive fields)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str | None
    created_at: datetime


class SessionResponse(BaseModel):
    """Response model for a successful login."""

    user: UserResponse
    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
