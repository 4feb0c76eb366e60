"""Application layer - business logic services.

This layer contains application services that orchestrate domain operations.
Services are independent of HTTP routing and can be tested in isolation.
"""

from .services.profile_service import ProfileService
from .services.album_service import AlbumService
from .services.image_service import ImageService

__all__ = [
    "ProfileService",
    "AlbumService",
    "ImageService",
]
