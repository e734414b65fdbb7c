"""Request/response schemas for user records and profile endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from profilehub.core.roles import Role
from profilehub.core.security import NAME_MAX_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN


class Address(BaseModel):
    """Structured postal address; unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore", from_attributes=True)

    city: str | None = None
    district: str | None = None
    state: str | None = None
    ward: str | None = None


class UserRecord(BaseModel):
    """Full stored user, including the password hash. Never returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    password_hash: str
    role: Role = Role.USER
    profile_pic: str | None = None
    cover_photo: str | None = None
    cover_photo_id: str | None = None
    pdf: list[str] = Field(default_factory=list)
    address: Address | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("pdf", mode="before")
    @classmethod
    def none_as_empty(cls, v: list[str] | None) -> list[str]:
        return v or []


class UserOut(BaseModel):
    """User as returned by the API (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role
    profile_pic: str | None = None
    cover_photo: str | None = None
    cover_photo_id: str | None = None
    pdf: list[str] = Field(default_factory=list)
    address: Address | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("pdf", mode="before")
    @classmethod
    def none_as_empty(cls, v: list[str] | None) -> list[str]:
        return v or []


class EditUserInput(BaseModel):
    """
    Partial profile update. email and role are not fields here, so any such keys
    in the request are discarded.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LEN)
    password: str | None = Field(
        default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )
    profile_pic: str | None = None
    address: Address | None = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class UserUpdateResponse(BaseModel):
    message: str
    user: UserOut


class CVUploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    pdf_url: list[str] = Field(alias="pdfUrl")
    user: UserOut


class CoverUploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    cover_photo: str = Field(alias="coverPhoto")
    user: UserOut
