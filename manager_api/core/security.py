"""Bearer token issuance/verification and password hashing."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from datetime import timedelta
from datetime import timezone
from typing import Any

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from fastapi.security import HTTPBearer

from manager_api.core.config import AuthSettings
from manager_api.core.config import get_auth_settings
from manager_api.core.errors import MISSING_TOKEN_MESSAGE
from manager_api.core.errors import UnauthorizedError


@dataclass(frozen=True)
class IssuedToken:
    """Encoded token plus the instant it stops being accepted."""

    token: str
    expires_at: datetime


class TokenGenerator:
    """Issue and verify signed JWT bearer tokens."""

    def __init__(self, settings: AuthSettings) -> None:
        self._settings = settings

    def generate_token(self, subject: str, *, now: datetime | None = None) -> IssuedToken:
        issued_at = now or datetime.now(timezone.utc)
        expires_at = issued_at + timedelta(hours=self._settings.jwt_hours_to_expire)
        claims = {
            "sub": subject,
            "iss": self._settings.jwt_issuer,
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(claims, self._settings.jwt_secret, algorithm=self._settings.jwt_algorithm)
        return IssuedToken(token=token, expires_at=expires_at)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Return verified claims or raise `UnauthorizedError`."""
        try:
            return jwt.decode(
                token,
                self._settings.jwt_secret,
                algorithms=[self._settings.jwt_algorithm],
                issuer=self._settings.jwt_issuer,
                options={"require": ["exp", "sub"]},
            )
        except jwt.InvalidTokenError as exc:
            raise UnauthorizedError(MISSING_TOKEN_MESSAGE) from exc


def get_token_generator(settings: AuthSettings = Depends(get_auth_settings)) -> TokenGenerator:
    """Dependency provider for the token generator."""
    return TokenGenerator(settings)


_bearer_scheme = HTTPBearer(auto_error=False)


def require_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    token_generator: TokenGenerator = Depends(get_token_generator),
) -> dict[str, Any]:
    """Reject the request with 401 unless it carries a valid bearer token."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError(MISSING_TOKEN_MESSAGE)
    return token_generator.decode_token(credentials.credentials)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
