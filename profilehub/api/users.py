"""User endpoints: register, login, profile edit, CV and cover photo uploads."""

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from profilehub.api.auth import get_current_user
from profilehub.api.deps import CoverPhotos, CVFiles, ProfileImages, Users
from profilehub.core.roles import Role
from profilehub.core.security import create_access_token, hash_password, verify_password
from profilehub.repositories import EmailAlreadyExistsError
from profilehub.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
)
from profilehub.schemas.user import (
    CoverUploadResponse,
    CVUploadResponse,
    EditUserInput,
    UserOut,
    UserUpdateResponse,
)
from profilehub.services.storage import StorageError, StoredFile

logger = logging.getLogger(__name__)

router = APIRouter()

# Never accepted from clients on the edit path.
PROTECTED_FIELDS = ("email", "role")


def _is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


def _public_url(request: Request, stored: StoredFile) -> str:
    return f"{str(request.base_url).rstrip('/')}{stored.url_path}"


@asynccontextmanager
async def _edit_request(request: Request) -> AsyncIterator[tuple[dict[str, Any], UploadFile | None]]:
    """Yield (fields, profile_pic file) from a JSON, multipart or urlencoded body."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "application/json":
        try:
            body = await request.json()
        except json.JSONDecodeError as e:
            raise HTTPException(status_code=400, detail=f"Invalid JSON: {e!s}") from e
        if not isinstance(body, dict):
            raise HTTPException(status_code=400, detail="JSON body must be an object.")
        yield body, None
        return
    if content_type in ("multipart/form-data", "application/x-www-form-urlencoded"):
        async with request.form() as form:
            fields: dict[str, Any] = {}
            upload: UploadFile | None = None
            for key, value in form.multi_items():
                if _is_upload_file(value):
                    if key == "profile_pic" and getattr(value, "filename", None):
                        upload = value
                    continue
                fields[key] = value
            yield fields, upload
        return
    if not content_type:
        yield {}, None
        return
    raise HTTPException(
        status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
        detail="Content-Type must be application/json or multipart/form-data.",
    )


def _build_edit_updates(fields: dict[str, Any], has_file: bool) -> dict[str, Any]:
    """Strip protected fields, parse address, and validate the partial update."""
    for key in PROTECTED_FIELDS:
        fields.pop(key, None)

    candidate: dict[str, Any] = {}
    if not has_file and "profile_pic" in fields and fields["profile_pic"] in ("", None):
        candidate["profile_pic"] = None

    address = fields.get("address")
    if address:
        if isinstance(address, str):
            try:
                address = json.loads(address)
            except json.JSONDecodeError as e:
                raise HTTPException(
                    status_code=400, detail=f"Invalid address format: {e!s}"
                ) from e
        candidate["address"] = address

    if fields.get("name"):
        candidate["name"] = fields["name"]
    if fields.get("password"):
        candidate["password"] = fields["password"]

    try:
        validated = EditUserInput.model_validate(candidate)
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e
    return validated.model_dump(exclude_unset=True)


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(body: RegisterRequest, users: Users) -> MessageResponse:
    """Create an account. Password is stored as a bcrypt hash only."""
    if await users.get_by_email(body.email) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already exists")
    password_hash = await run_in_threadpool(hash_password, body.password)
    try:
        user = await users.create(
            name=body.name,
            email=body.email,
            password_hash=password_hash,
            role=body.role or Role.USER,
        )
    except EmailAlreadyExistsError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already exists")
    logger.info("Registered user id=%s role=%s", user.id, user.role.value)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, users: Users) -> LoginResponse:
    """
    Authenticate with email and password; returns the user and a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = await users.get_by_email(body.email)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if not await run_in_threadpool(verify_password, body.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect password")
    token = create_access_token(email=user.email, role=user.role)
    return LoginResponse(user=UserOut.model_validate(user), token=token)


@router.put(
    "/edit/{user_id}",
    response_model=UserUpdateResponse,
    dependencies=[Depends(get_current_user)],
)
async def edit_user(
    user_id: int,
    request: Request,
    users: Users,
    images: ProfileImages,
) -> UserUpdateResponse:
    """
    Partially update name, password, address or profile picture.

    email and role in the payload are ignored. Send profile_pic as a file to
    replace the picture, or as an empty string to clear it.
    """
    stored: StoredFile | None = None
    async with _edit_request(request) as (fields, upload):
        updates = _build_edit_updates(fields, has_file=upload is not None)
        if upload is not None:
            try:
                stored = await images.store(upload)
            except StorageError as e:
                raise HTTPException(status_code=400, detail=str(e)) from e
            updates["profile_pic"] = _public_url(request, stored)

    if "password" in updates:
        updates["password_hash"] = await run_in_threadpool(hash_password, updates.pop("password"))

    try:
        user = await users.update_fields(user_id, updates)
    except Exception:
        logger.exception("Error updating user id=%s", user_id)
        if stored is not None:
            await images.delete(stored.filename)
        raise HTTPException(status_code=500, detail="Failed to update user")

    if user is None:
        if stored is not None:
            await images.delete(stored.filename)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserUpdateResponse(message="User updated successfully", user=UserOut.model_validate(user))


@router.put(
    "/uploadCV/{user_id}",
    response_model=CVUploadResponse,
    dependencies=[Depends(get_current_user)],
)
async def upload_cv(
    user_id: int,
    request: Request,
    users: Users,
    cv_files: CVFiles,
) -> CVUploadResponse:
    """Upload up to MAX_CV_FILES PDFs in the 'pdf' field; replaces the stored CV list."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type != "multipart/form-data":
        raise HTTPException(status_code=400, detail="No CV files uploaded")
    async with request.form() as form:
        uploads = [f for f in form.getlist("pdf") if _is_upload_file(f) and f.filename]
        if not uploads:
            raise HTTPException(status_code=400, detail="No CV files uploaded")
        try:
            stored = await cv_files.store_all(uploads)
        except StorageError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

    pdf_urls = [_public_url(request, s) for s in stored]
    try:
        user = await users.update_fields(user_id, {"pdf": pdf_urls})
    except Exception:
        logger.exception("Error saving CV for user id=%s", user_id)
        await cv_files.cleanup(stored)
        raise HTTPException(status_code=500, detail="Failed to update user")

    if user is None:
        await cv_files.cleanup(stored)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return CVUploadResponse(
        message="CV uploaded successfully",
        pdf_url=pdf_urls,
        user=UserOut.model_validate(user),
    )


@router.put(
    "/uploadCover/{user_id}",
    response_model=CoverUploadResponse,
    dependencies=[Depends(get_current_user)],
)
async def upload_cover(
    user_id: int,
    request: Request,
    users: Users,
    covers: CoverPhotos,
) -> CoverUploadResponse:
    """Upload a cover photo in the 'coverPhoto' field; the previous cover is deleted."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type != "multipart/form-data":
        raise HTTPException(status_code=400, detail="No file uploaded")
    async with request.form() as form:
        upload = form.get("coverPhoto")
        if upload is None or not _is_upload_file(upload) or not upload.filename:
            raise HTTPException(status_code=400, detail="No file uploaded")
        try:
            stored = await covers.store(upload)
        except StorageError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

    cover_url = _public_url(request, stored)
    try:
        existing = await users.get_by_id(user_id)
        if existing is None:
            await covers.delete(stored.filename)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        user = await users.update_fields(
            user_id, {"cover_photo": cover_url, "cover_photo_id": stored.filename}
        )
        if user is None:
            await covers.delete(stored.filename)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    except HTTPException:
        raise
    except Exception:
        logger.exception("Cover upload failed for user id=%s", user_id)
        await covers.delete(stored.filename)
        raise HTTPException(status_code=500, detail="Upload failed")

    if existing.cover_photo_id and existing.cover_photo_id != stored.filename:
        await covers.delete(existing.cover_photo_id)

    return CoverUploadResponse(
        message="Cover photo uploaded successfully",
        cover_photo=cover_url,
        user=UserOut.model_validate(user),
    )
