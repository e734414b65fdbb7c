"""ORM model for application users (auth, RBAC and profile)."""

from sqlalchemy import JSON, Column, DateTime, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB

from profilehub.models.base import Base

_JSON = JSON().with_variant(JSONB(), "postgresql")


class User(Base):
    """
    User account for JWT authentication, role-based access control and profile data.

    role: 'admin' or 'user'
    pdf: list of CV URLs
    address: {city, district, state, ward}
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(20), nullable=False)
    email = Column(String(60), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")
    profile_pic = Column(String(2048), nullable=True)
    cover_photo = Column(String(2048), nullable=True)
    cover_photo_id = Column(String(255), nullable=True)
    pdf = Column(_JSON, nullable=True)
    address = Column(_JSON, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
