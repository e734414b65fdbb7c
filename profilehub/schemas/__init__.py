"""Pydantic request/response schemas."""

from profilehub.schemas.admin import DashboardResponse
from profilehub.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
)
from profilehub.schemas.health import HealthResponse
from profilehub.schemas.user import (
    Address,
    CoverUploadResponse,
    CVUploadResponse,
    EditUserInput,
    UserOut,
    UserRecord,
    UserUpdateResponse,
)

__all__ = [
    "Address",
    "CoverUploadResponse",
    "CurrentUser",
    "CVUploadResponse",
    "DashboardResponse",
    "EditUserInput",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RegisterRequest",
    "UserOut",
    "UserRecord",
    "UserUpdateResponse",
]
