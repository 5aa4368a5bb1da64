"""Pydantic request/response schemas for the Users API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from techmarket.schemas import RequestModel


class RegisterUserRequest(RequestModel):
    username: str = Field(min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_]+$")
    email: str = Field(max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    first_name: str | None = Field(default=None, min_length=2, max_length=50)
    last_name: str | None = Field(default=None, min_length=2, max_length=50)


class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    is_active: bool = True
    created_at: datetime | None = None


class UserEnvelope(BaseModel):
    message: str
    user: UserResponse
