"""Disk storage for uploaded profile pictures, CV PDFs and cover photos."""

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from profilehub.core.config import Settings

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
PDF_CONTENT_TYPES = frozenset({"application/pdf", "application/octet-stream"})
IMAGE_CONTENT_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})
_IMAGE_SUFFIXES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class StorageError(Exception):
    """Upload rejected (type, size) or could not be written."""


@dataclass(frozen=True)
class StoredFile:
    """A file written to disk. filename doubles as the storage handle."""

    filename: str
    path: Path
    url_path: str


def _safe_name(original: str | None) -> str:
    name = Path(original or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "upload"


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def _unique_stem() -> str:
    # Unique per call, even within one millisecond.
    return f"{_timestamp_ms()}-{uuid4().hex}"


class DiskStorage:
    """
    Writes uploads under one directory served statically at url_prefix.

    Each file is streamed in chunks so the size limit is enforced without
    buffering the whole upload; a partial file is removed on rejection.
    Filesystem calls run in the threadpool, never on the event loop.
    """

    def __init__(
        self,
        directory: str | Path,
        url_prefix: str,
        *,
        allowed_types: frozenset[str],
        max_bytes: int,
        type_error: str,
    ) -> None:
        self.directory = Path(directory)
        self.url_prefix = "/" + url_prefix.strip("/")
        self.allowed_types = allowed_types
        self.max_bytes = max_bytes
        self.type_error = type_error

    def check_type(self, upload: UploadFile) -> None:
        content_type = (upload.content_type or "").split(";")[0].strip().lower()
        if content_type not in self.allowed_types:
            raise StorageError(self.type_error)

    async def save(self, upload: UploadFile, filename: str) -> StoredFile:
        self.check_type(upload)
        await run_in_threadpool(self.directory.mkdir, parents=True, exist_ok=True)
        path = self.directory / filename
        # Exclusive create: never truncate a file another upload already owns.
        out = await run_in_threadpool(path.open, "xb")
        written = 0
        try:
            try:
                while chunk := await upload.read(CHUNK_SIZE):
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise StorageError(
                            f"File too large (max {self.max_bytes // (1024 * 1024)} MB)"
                        )
                    await run_in_threadpool(out.write, chunk)
            finally:
                await run_in_threadpool(out.close)
        except BaseException:
            await run_in_threadpool(path.unlink, missing_ok=True)
            raise
        logger.debug("Stored upload %s (%s bytes)", path, written)
        return StoredFile(filename=filename, path=path, url_path=f"{self.url_prefix}/{filename}")

    async def delete(self, filename: str) -> None:
        """Remove a stored file by handle; missing files are ignored, other errors logged."""
        path = self.directory / Path(filename).name
        try:
            await run_in_threadpool(path.unlink, missing_ok=True)
        except OSError as e:
            logger.error("Error deleting file %s: %s", path, e)

    async def cleanup(self, stored: list[StoredFile]) -> None:
        for item in stored:
            await self.delete(item.filename)


class ProfileImageStorage(DiskStorage):
    """Profile pictures under /uploads, named <ms>-<uuid>-<original name>."""

    def __init__(self, settings: Settings) -> None:
        super().__init__(
            settings.UPLOAD_DIR,
            "/uploads",
            allowed_types=IMAGE_CONTENT_TYPES,
            max_bytes=settings.MAX_IMAGE_FILE_BYTES,
            type_error="Only image files are allowed",
        )

    async def store(self, upload: UploadFile) -> StoredFile:
        return await self.save(upload, f"{_unique_stem()}-{_safe_name(upload.filename)}")


class CVStorage(DiskStorage):
    """CV PDFs under /files, named <ms>-<uuid>-<original name>."""

    def __init__(self, settings: Settings) -> None:
        super().__init__(
            settings.FILES_DIR,
            "/files",
            allowed_types=PDF_CONTENT_TYPES,
            max_bytes=settings.MAX_CV_FILE_BYTES,
            type_error="Only PDF files are allowed",
        )
        self.max_files = settings.MAX_CV_FILES

    async def store_all(self, uploads: list[UploadFile]) -> list[StoredFile]:
        """Store every file or none: types are checked up front, partial writes rolled back."""
        if len(uploads) > self.max_files:
            raise StorageError(f"At most {self.max_files} CV files allowed")
        for upload in uploads:
            self.check_type(upload)
        stored: list[StoredFile] = []
        try:
            for upload in uploads:
                stored.append(
                    await self.save(upload, f"{_unique_stem()}-{_safe_name(upload.filename)}")
                )
        except BaseException:
            await self.cleanup(stored)
            raise
        return stored


class CoverPhotoStorage(DiskStorage):
    """Cover photos under /covers, named cover_<ms>-<uuid><ext>; the filename is the storage handle."""

    def __init__(self, settings: Settings) -> None:
        super().__init__(
            settings.COVERS_DIR,
            "/covers",
            allowed_types=IMAGE_CONTENT_TYPES,
            max_bytes=settings.MAX_IMAGE_FILE_BYTES,
            type_error="Only image files are allowed",
        )

    async def store(self, upload: UploadFile) -> StoredFile:
        content_type = (upload.content_type or "").split(";")[0].strip().lower()
        suffix = _IMAGE_SUFFIXES.get(content_type, "")
        return await self.save(upload, f"cover_{_unique_stem()}{suffix}")


__all__ = [
    "CoverPhotoStorage",
    "CVStorage",
    "DiskStorage",
    "ProfileImageStorage",
    "StorageError",
    "StoredFile",
]
