# Repository Pattern Implementation
"""
Repositories abstract database operations.
Each entity has its own repository.

Usage:
    repo = AlbumRepository(db)
    albums = await repo.get_by_owner(owner_id)
"""
from .base import AsyncRepository
from .profile_repository import ProfileRepository
from .album_repository import AlbumRepository
from .image_repository import ImageRepository

__all__ = [
    "AsyncRepository",
    "ProfileRepository",
    "AlbumRepository",
    "ImageRepository",
]
