"""Profile routes - the caller's own profile and public profile pages."""
from fastapi import APIRouter, Body, Depends, HTTPException

from ..application.services import AlbumService, ProfileService
from .deps import get_album_service, get_profile_service

router = APIRouter()


@router.get("/api/profile")
async def get_own_profile(service: ProfileService = Depends(get_profile_service)):
    """Get the caller's profile (null until one is created)."""
    profile = await service.get_profile()
    return {"profile": profile}


@router.post("/api/profile")
async def create_profile_endpoint(
    data: dict = Body(...),
    service: ProfileService = Depends(get_profile_service),
):
    """Create the caller's profile."""
    profile = await service.create_profile(data)
    return {"status": "ok", "profile": profile}


@router.put("/api/profile")
async def update_profile_endpoint(
    data: dict = Body(...),
    service: ProfileService = Depends(get_profile_service),
):
    """Update the caller's profile."""
    profile = await service.update_profile(data)
    return {"status": "ok", "profile": profile}


@router.get("/api/u/{username}")
async def get_public_profile(
    username: str,
    service: ProfileService = Depends(get_profile_service),
):
    """Public profile page data."""
    profile = await service.get_profile_by_username(username)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return {"profile": profile}


@router.get("/api/u/{username}/albums")
async def get_public_albums(
    username: str,
    profile_service: ProfileService = Depends(get_profile_service),
    album_service: AlbumService = Depends(get_album_service),
):
    """Albums shown on a public profile, in display order."""
    profile = await profile_service.get_profile_by_username(username)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    albums = await album_service.get_albums(profile["owner_id"])
    return {"profile": profile, "albums": albums}
