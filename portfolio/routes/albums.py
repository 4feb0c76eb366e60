"""Album routes - CRUD and dashboard listing."""
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from ..application.services import AlbumService, ImageService
from ..dependencies import get_current_principal
from ..errors import Unauthenticated
from ..identity import Principal
from .deps import get_album_service, get_image_service

router = APIRouter()


@router.get("/api/dashboard/albums")
async def get_dashboard_albums(service: AlbumService = Depends(get_album_service)):
    """The caller's albums."""
    albums = await service.get_my_albums()
    return {"albums": albums}


@router.get("/api/dashboard/stats")
async def get_dashboard_stats(
    principal: Optional[Principal] = Depends(get_current_principal),
    album_service: AlbumService = Depends(get_album_service),
    image_service: ImageService = Depends(get_image_service),
):
    """Album and image counts for the caller."""
    if principal is None:
        raise Unauthenticated("User not authenticated.")

    albums = await album_service.get_my_albums()
    image_count = await image_service.count_images(principal.id)
    return {"album_count": len(albums), "image_count": image_count}


@router.post("/api/albums")
async def create_album_endpoint(
    data: dict = Body(...),
    service: AlbumService = Depends(get_album_service),
):
    """Create a new album."""
    album = await service.create_album(data)
    return {"status": "ok", "album": album}


@router.get("/api/albums/{album_id}")
async def get_album_data(album_id: str, service: AlbumService = Depends(get_album_service)):
    """Public album data."""
    album = await service.get_album(album_id)
    if not album:
        raise HTTPException(status_code=404, detail="Album not found")
    return {"album": album}


@router.put("/api/albums/{album_id}")
async def update_album_endpoint(
    album_id: str,
    data: dict = Body(...),
    service: AlbumService = Depends(get_album_service),
):
    """Update an album the caller owns."""
    album = await service.update_album(album_id, data)
    return {"status": "ok", "album": album}


@router.delete("/api/albums/{album_id}")
async def delete_album_endpoint(album_id: str, service: AlbumService = Depends(get_album_service)):
    """Delete an album, its images and its stored files."""
    removed = await service.delete_album(album_id)
    return {"status": "ok", "removed_objects": removed}
