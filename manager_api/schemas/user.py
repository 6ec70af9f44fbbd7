"""Pydantic schemas for user API payloads."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import ConfigDict


class CreateUserViewModel(BaseModel):
    """Payload to create a user."""

    name: str
    email: str
    password: str


class UpdateUserViewModel(BaseModel):
    """Payload to replace an existing user's fields."""

    id: int
    name: str
    email: str
    password: str


class UserDTO(BaseModel):
    """Boundary object handed from the API layer to the user service."""

    id: int | None = None
    name: str
    email: str
    password: str


class UserView(BaseModel):
    """User response payload. The password never leaves the service."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
