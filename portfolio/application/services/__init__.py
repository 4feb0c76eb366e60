"""Application services - business logic layer."""

from .base import PortfolioService, operation
from .profile_service import ProfileService
from .album_service import AlbumService
from .image_service import ImageService

__all__ = [
    "PortfolioService",
    "operation",
    "ProfileService",
    "AlbumService",
    "ImageService",
]
