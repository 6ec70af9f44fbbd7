"""Model module imports for SQLAlchemy metadata registration."""

from manager_api.db.models.user import Base
from manager_api.db.models.user import User

__all__ = [
    "Base",
    "User",
]
