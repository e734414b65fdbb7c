"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from profilehub.core.roles import Role
from profilehub.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)
from profilehub.schemas.user import UserOut


class RegisterRequest(BaseModel):
    """New account details. role defaults to 'user' when omitted."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN, description="Display name")
    email: EmailStr = Field(..., description="Email")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )
    role: Role | None = Field(default=None, description="Role")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: str) -> str:
        if len(v) > EMAIL_MAX_LEN:
            raise ValueError(f"Email must be at most {EMAIL_MAX_LEN} characters")
        return v


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return v.strip().lower() if isinstance(v, str) else v


class LoginResponse(BaseModel):
    """Authenticated user and the JWT to send as: Bearer <token>."""

    user: UserOut
    token: str = Field(..., description="JWT access token")


class CurrentUser(BaseModel):
    """Authenticated identity (id, email, role), resolved from the store per request."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    email: str
    role: Role


class MessageResponse(BaseModel):
    message: str
