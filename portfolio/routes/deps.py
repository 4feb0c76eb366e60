"""Service factories shared by all routers.

Each request gets services wired around its own connection and the
process-wide storage client and invalidator.
"""
import aiosqlite
from fastapi import Depends

from ..application.services import AlbumService, ImageService, ProfileService
from ..dependencies import get_db, get_identity, get_object_storage, get_view_invalidator
from ..identity import RequestIdentity
from ..infrastructure.invalidation import ViewInvalidator
from ..infrastructure.repositories import AlbumRepository, ImageRepository, ProfileRepository
from ..infrastructure.storage import StorageInterface


def get_profile_service(
    db: aiosqlite.Connection = Depends(get_db),
    identity: RequestIdentity = Depends(get_identity),
    invalidator: ViewInvalidator = Depends(get_view_invalidator),
) -> ProfileService:
    """Create ProfileService with repositories."""
    return ProfileService(
        profile_repository=ProfileRepository(db),
        identity=identity,
        invalidator=invalidator,
    )


def get_album_service(
    db: aiosqlite.Connection = Depends(get_db),
    storage: StorageInterface = Depends(get_object_storage),
    identity: RequestIdentity = Depends(get_identity),
    invalidator: ViewInvalidator = Depends(get_view_invalidator),
) -> AlbumService:
    """Create AlbumService with repositories."""
    return AlbumService(
        album_repository=AlbumRepository(db),
        storage=storage,
        identity=identity,
        invalidator=invalidator,
    )


def get_image_service(
    db: aiosqlite.Connection = Depends(get_db),
    storage: StorageInterface = Depends(get_object_storage),
    identity: RequestIdentity = Depends(get_identity),
    invalidator: ViewInvalidator = Depends(get_view_invalidator),
) -> ImageService:
    """Create ImageService with repositories."""
    return ImageService(
        image_repository=ImageRepository(db),
        album_repository=AlbumRepository(db),
        storage=storage,
        identity=identity,
        invalidator=invalidator,
    )
