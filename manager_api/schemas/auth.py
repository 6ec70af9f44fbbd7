"""Pydantic schemas for the login flow."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from manager_api.schemas.user import UserView


class LoginViewModel(BaseModel):
    """Credentials submitted to the login endpoint."""

    login: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class AuthResult(BaseModel):
    """Authenticated user plus the issued bearer token."""

    model_config = ConfigDict(populate_by_name=True)

    user: UserView
    token: str
    token_expiry: datetime = Field(alias="tokenExpiry")
