"""Authentication routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi import Depends

from manager_api.core.config import AuthSettings
from manager_api.core.config import get_auth_settings
from manager_api.core.errors import UnauthorizedError
from manager_api.core.security import TokenGenerator
from manager_api.core.security import get_token_generator
from manager_api.core.security import verify_password
from manager_api.schemas.auth import AuthResult
from manager_api.schemas.auth import LoginViewModel
from manager_api.schemas.envelope import ResultEnvelope
from manager_api.schemas.envelope import ok
from manager_api.services.users import UserService
from manager_api.services.users import get_user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=ResultEnvelope)
def login_endpoint(
    payload: LoginViewModel,
    service: UserService = Depends(get_user_service),
    token_generator: TokenGenerator = Depends(get_token_generator),
    settings: AuthSettings = Depends(get_auth_settings),
) -> ResultEnvelope:
    """Authenticate by email and issue a bearer token."""
    user = service.get_by_email(payload.email)
    if user is None or user.email.lower() != payload.email.lower():
        logger.info("Login rejected for email=%s", payload.email)
        raise UnauthorizedError()

    # Password checks stay off unless MANAGER_AUTH_VERIFY_PASSWORD is set.
    if settings.verify_password:
        password_hash = service.get_password_hash(user.id)
        if password_hash is None or not verify_password(payload.password, password_hash):
            logger.info("Login rejected for email=%s: password mismatch", payload.email)
            raise UnauthorizedError()

    logger.info("Issuing token for user id=%s with settings=%s", user.id, settings.safe_for_logging())
    issued = token_generator.generate_token(str(user.id))
    return ok(
        "User authenticated successfully!",
        AuthResult(user=user, token=issued.token, token_expiry=issued.expires_at),
    )
