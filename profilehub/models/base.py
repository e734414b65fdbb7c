"""SQLAlchemy declarative Base and shared model configuration."""

from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase


class Base(AsyncAttrs, DeclarativeBase):
    """Declarative base for all ORM models."""

    pass
