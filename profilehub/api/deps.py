"""Shared request dependencies: credential store and upload storage."""

from typing import Annotated

from fastapi import Depends

from profilehub.core.config import settings
from profilehub.repositories import UserRepository, get_user_repository
from profilehub.services.storage import CoverPhotoStorage, CVStorage, ProfileImageStorage


def get_profile_image_storage() -> ProfileImageStorage:
    return ProfileImageStorage(settings)


def get_cv_storage() -> CVStorage:
    return CVStorage(settings)


def get_cover_storage() -> CoverPhotoStorage:
    return CoverPhotoStorage(settings)


Users = Annotated[UserRepository, Depends(get_user_repository)]
ProfileImages = Annotated[ProfileImageStorage, Depends(get_profile_image_storage)]
CVFiles = Annotated[CVStorage, Depends(get_cv_storage)]
CoverPhotos = Annotated[CoverPhotoStorage, Depends(get_cover_storage)]
