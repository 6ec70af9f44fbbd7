"""Result envelope schema shared across API handlers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ResultEnvelope(BaseModel):
    """Top-level wrapper returned by every endpoint, success or failure."""

    message: str
    success: bool
    data: Any = None
    errors: list[str] | None = None


def ok(message: str, data: Any = None) -> ResultEnvelope:
    """Build a successful envelope."""
    return ResultEnvelope(message=message, success=True, data=data)


def failure(message: str, errors: list[str] | None = None) -> ResultEnvelope:
    """Build a failed envelope; callers pick the HTTP status."""
    return ResultEnvelope(message=message, success=False, data=None, errors=list(errors) if errors else None)
