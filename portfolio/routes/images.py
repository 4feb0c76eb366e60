"""Image routes - upload handshake and image CRUD."""
from dataclasses import asdict

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel

from ..application.services import ImageService
from .deps import get_image_service

router = APIRouter()


class DeleteImageRequest(BaseModel):
    image_url: str = ""
    delete_row: bool = True


@router.post("/api/albums/{album_id}/upload-url")
async def create_upload_url(
    album_id: str,
    data: dict = Body(...),
    service: ImageService = Depends(get_image_service),
):
    """Get a short-lived signed PUT URL for one file.

    The client uploads straight to storage, then registers the returned
    ``public_url`` via ``POST /api/albums/{album_id}/images``.
    """
    grant = await service.create_upload_grant(
        data.get("file_name"),
        data.get("content_type"),
        album_id,
    )
    return asdict(grant)


@router.get("/api/albums/{album_id}/images")
async def get_album_images(album_id: str, service: ImageService = Depends(get_image_service)):
    """Public list of an album's images in display order."""
    images = await service.get_images(album_id)
    return {"images": images}


@router.post("/api/albums/{album_id}/images")
async def create_image_endpoint(
    album_id: str,
    data: dict = Body(...),
    service: ImageService = Depends(get_image_service),
):
    """Register an uploaded image in an album."""
    image = await service.create_image(album_id, data)
    return {"status": "ok", "image": image}


@router.put("/api/images/{image_id}")
async def update_image_endpoint(
    image_id: str,
    data: dict = Body(...),
    service: ImageService = Depends(get_image_service),
):
    """Update an image's metadata."""
    image = await service.update_image(image_id, data)
    return {"status": "ok", "image": image}


@router.delete("/api/albums/{album_id}/images")
async def delete_image_endpoint(
    album_id: str,
    data: DeleteImageRequest,
    service: ImageService = Depends(get_image_service),
):
    """Delete an image's stored file and, unless ``delete_row`` is false, its row."""
    await service.delete_image(data.image_url, album_id, delete_row=data.delete_row)
    return {"status": "ok"}
