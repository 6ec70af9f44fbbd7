"""Repository primitives for user entities."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy import select
from sqlalchemy.orm import Session

from manager_api.db.models.user import User


def create_user(session: Session, *, name: str, email: str, password: str) -> User:
    """Create and return a user row."""
    user = User(name=name, email=email, password=password)
    session.add(user)
    session.flush()
    session.refresh(user)
    return user


def get_user(session: Session, user_id: int) -> User | None:
    """Fetch a user by id."""
    return session.get(User, user_id)


def get_user_by_email(session: Session, email: str) -> User | None:
    """Fetch a user whose email matches ignoring case."""
    stmt = select(User).where(func.lower(User.email) == email.lower()).limit(1)
    return session.scalars(stmt).first()


def list_users(session: Session) -> list[User]:
    """List all users ordered by id."""
    stmt = select(User).order_by(User.id)
    return list(session.scalars(stmt))


def search_users_by_name(session: Session, name: str) -> list[User]:
    """List users whose name contains `name`, ignoring case."""
    stmt = select(User).where(func.lower(User.name).contains(name.lower(), autoescape=True)).order_by(User.id)
    return list(session.scalars(stmt))


def search_users_by_email(session: Session, email: str) -> list[User]:
    """List users whose email contains `email`, ignoring case."""
    stmt = select(User).where(func.lower(User.email).contains(email.lower(), autoescape=True)).order_by(User.id)
    return list(session.scalars(stmt))


def update_user(
    session: Session,
    user: User,
    *,
    name: str,
    email: str,
    password: str,
) -> User:
    """Overwrite mutable user fields."""
    user.name = name
    user.email = email
    user.password = password
    session.flush()
    session.refresh(user)
    return user


def delete_user(session: Session, user: User) -> None:
    """Delete a user row."""
    session.delete(user)
    session.flush()
