"""SQLAlchemy ORM models."""

from profilehub.models.base import Base
from profilehub.models.user import User

__all__ = ["Base", "User"]
