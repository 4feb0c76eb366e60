"""Routes package.

This module aggregates all API routes:
- profiles: Own profile and public profile pages
- albums: Album CRUD and dashboard listing
- images: Upload handshake and image CRUD
- hooks: Identity-provider webhooks
"""
from fastapi import APIRouter

from . import profiles, albums, images, hooks

# Create main router with all routes
router = APIRouter()

# Include all sub-routers
router.include_router(profiles.router)
router.include_router(albums.router)
router.include_router(images.router)
router.include_router(hooks.router)

__all__ = ["router"]
