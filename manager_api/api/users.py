"""User API routes. Every route requires a bearer token."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi import Depends

from manager_api.core.errors import APIError
from manager_api.core.errors import ApplicationError
from manager_api.core.security import require_bearer_token
from manager_api.schemas.envelope import ResultEnvelope
from manager_api.schemas.envelope import ok
from manager_api.schemas.user import CreateUserViewModel
from manager_api.schemas.user import UpdateUserViewModel
from manager_api.schemas.user import UserDTO
from manager_api.services.users import UserService
from manager_api.services.users import get_user_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/users",
    tags=["users"],
    dependencies=[Depends(require_bearer_token)],
)

USER_FOUND_MESSAGE = "User found successfully!"


@router.post("/create", response_model=ResultEnvelope)
def create_user_endpoint(
    payload: CreateUserViewModel,
    service: UserService = Depends(get_user_service),
) -> ResultEnvelope:
    """Create a user."""
    created = service.create(UserDTO.model_validate(payload.model_dump()))
    return ok("User created successfully!", created)


@router.put("/update", response_model=ResultEnvelope)
def update_user_endpoint(
    payload: UpdateUserViewModel,
    service: UserService = Depends(get_user_service),
) -> ResultEnvelope:
    """Replace a user's fields.

    Unlike the other routes, an unexpected failure here reports the raw
    exception text in the 500 envelope.
    """
    try:
        updated = service.update(UserDTO.model_validate(payload.model_dump()))
    except APIError:
        raise
    except Exception as exc:
        logger.exception("User update failed for id=%s", payload.id)
        raise ApplicationError(str(exc) or type(exc).__name__, [type(exc).__name__]) from exc
    return ok("User updated successfully!", updated)


@router.delete("/remove/{user_id}", response_model=ResultEnvelope)
def remove_user_endpoint(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> ResultEnvelope:
    """Delete a user by id."""
    service.remove(user_id)
    return ok("User removed successfully!")


@router.get("/get/{user_id}", response_model=ResultEnvelope)
def get_user_endpoint(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> ResultEnvelope:
    """Get a single user by id."""
    user = service.get(user_id)
    if user is None:
        return ok("No user was found with the given id.")
    return ok(USER_FOUND_MESSAGE, user)


@router.get("/get-all", response_model=ResultEnvelope)
def get_all_users_endpoint(
    service: UserService = Depends(get_user_service),
) -> ResultEnvelope:
    """List every user; an empty store yields an empty list."""
    return ok("Users found successfully!", service.get_all())


@router.get("/get-by-email", response_model=ResultEnvelope)
def get_user_by_email_endpoint(
    email: str,
    service: UserService = Depends(get_user_service),
) -> ResultEnvelope:
    """Get a single user by exact email, ignoring case."""
    user = service.get_by_email(email)
    if user is None:
        return ok("No user was found with the given email.")
    return ok(USER_FOUND_MESSAGE, user)


@router.get("/search-by-name", response_model=ResultEnvelope)
def search_users_by_name_endpoint(
    name: str,
    service: UserService = Depends(get_user_service),
) -> ResultEnvelope:
    """Search users by partial name. No match yields `data=null`."""
    users = service.search_by_name(name)
    if not users:
        return ok("No user was found with the given name.")
    return ok(USER_FOUND_MESSAGE, users)


@router.get("/search-by-email", response_model=ResultEnvelope)
def search_users_by_email_endpoint(
    email: str,
    service: UserService = Depends(get_user_service),
) -> ResultEnvelope:
    """Search users by partial email. No match yields `data=null`."""
    users = service.search_by_email(email)
    if not users:
        return ok("No user was found with the given email.")
    return ok(USER_FOUND_MESSAGE, users)
