"""User service: domain validation plus repository orchestration."""

from __future__ import annotations

import logging
import re

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from manager_api.core.errors import DomainValidationError
from manager_api.core.security import hash_password
from manager_api.db.base import get_db_session
from manager_api.db.models.user import EMAIL_MAX_LENGTH
from manager_api.db.models.user import NAME_MAX_LENGTH
from manager_api.db.models.user import User
from manager_api.db.repository.users import create_user
from manager_api.db.repository.users import delete_user
from manager_api.db.repository.users import get_user
from manager_api.db.repository.users import get_user_by_email
from manager_api.db.repository.users import list_users
from manager_api.db.repository.users import search_users_by_email
from manager_api.db.repository.users import search_users_by_name
from manager_api.db.repository.users import update_user
from manager_api.schemas.user import UserDTO
from manager_api.schemas.user import UserView

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 30

INVALID_FIELDS_MESSAGE = "Some fields are invalid, please correct them!"
EMAIL_TAKEN_MESSAGE = "A user with the given email already exists."
USER_NOT_FOUND_MESSAGE = "No user exists with the given id."

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_user(dto: UserDTO) -> list[str]:
    """Return one message per violated field rule, in field order."""
    errors: list[str] = []

    name = dto.name.strip()
    if not name:
        errors.append("The name cannot be empty.")
    elif len(name) < NAME_MIN_LENGTH:
        errors.append(f"The name must have at least {NAME_MIN_LENGTH} characters.")
    elif len(name) > NAME_MAX_LENGTH:
        errors.append(f"The name must have at most {NAME_MAX_LENGTH} characters.")

    email = dto.email.strip()
    if not email:
        errors.append("The email cannot be empty.")
    elif len(email) > EMAIL_MAX_LENGTH:
        errors.append(f"The email must have at most {EMAIL_MAX_LENGTH} characters.")
    elif not _EMAIL_PATTERN.match(email):
        errors.append("The email provided is not valid.")

    if not dto.password:
        errors.append("The password cannot be empty.")
    elif len(dto.password) < PASSWORD_MIN_LENGTH:
        errors.append(f"The password must have at least {PASSWORD_MIN_LENGTH} characters.")
    elif len(dto.password) > PASSWORD_MAX_LENGTH:
        errors.append(f"The password must have at most {PASSWORD_MAX_LENGTH} characters.")

    return errors


def _ensure_valid(dto: UserDTO) -> None:
    errors = validate_user(dto)
    if errors:
        raise DomainValidationError(INVALID_FIELDS_MESSAGE, errors)


def _to_view(user: User) -> UserView:
    return UserView.model_validate(user)


class UserService:
    """User operations over a single request-scoped session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, dto: UserDTO) -> UserView:
        _ensure_valid(dto)
        email = dto.email.strip()
        if get_user_by_email(self._session, email) is not None:
            raise DomainValidationError(EMAIL_TAKEN_MESSAGE)

        try:
            user = create_user(
                self._session,
                name=dto.name.strip(),
                email=email,
                password=hash_password(dto.password),
            )
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            raise DomainValidationError(EMAIL_TAKEN_MESSAGE) from exc

        logger.info("Created user id=%s", user.id)
        return _to_view(user)

    def update(self, dto: UserDTO) -> UserView:
        if dto.id is None:
            raise DomainValidationError(USER_NOT_FOUND_MESSAGE)
        user = get_user(self._session, dto.id)
        if user is None:
            raise DomainValidationError(USER_NOT_FOUND_MESSAGE)

        _ensure_valid(dto)
        email = dto.email.strip()
        existing = get_user_by_email(self._session, email)
        if existing is not None and existing.id != user.id:
            raise DomainValidationError(EMAIL_TAKEN_MESSAGE)

        try:
            user = update_user(
                self._session,
                user,
                name=dto.name.strip(),
                email=email,
                password=hash_password(dto.password),
            )
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            raise DomainValidationError(EMAIL_TAKEN_MESSAGE) from exc

        logger.info("Updated user id=%s", user.id)
        return _to_view(user)

    def remove(self, user_id: int) -> None:
        user = get_user(self._session, user_id)
        if user is None:
            raise DomainValidationError(USER_NOT_FOUND_MESSAGE)
        delete_user(self._session, user)
        self._session.commit()
        logger.info("Removed user id=%s", user_id)

    def get(self, user_id: int) -> UserView | None:
        user = get_user(self._session, user_id)
        return _to_view(user) if user is not None else None

    def get_all(self) -> list[UserView]:
        return [_to_view(user) for user in list_users(self._session)]

    def get_by_email(self, email: str) -> UserView | None:
        user = get_user_by_email(self._session, email)
        return _to_view(user) if user is not None else None

    def get_password_hash(self, user_id: int) -> str | None:
        """Stored password hash, used only when login password checks are enabled."""
        user = get_user(self._session, user_id)
        return user.password if user is not None else None

    def search_by_name(self, name: str) -> list[UserView]:
        return [_to_view(user) for user in search_users_by_name(self._session, name)]

    def search_by_email(self, email: str) -> list[UserView]:
        return [_to_view(user) for user in search_users_by_email(self._session, email)]


def get_user_service(session: Session = Depends(get_db_session)) -> UserService:
    """Dependency provider for the user service."""
    return UserService(session)
