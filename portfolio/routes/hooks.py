"""Identity-provider webhooks."""
from fastapi import APIRouter, Body, Depends, HTTPException

from ..application.services import ProfileService
from ..dependencies import get_db, get_view_invalidator, verify_api_key
from ..identity import FixedIdentity
from ..infrastructure.invalidation import ViewInvalidator
from ..infrastructure.repositories import ProfileRepository

router = APIRouter()


@router.post("/api/hooks/principal-deleted", dependencies=[Depends(verify_api_key)])
async def principal_deleted(
    data: dict = Body(...),
    db=Depends(get_db),
    invalidator: ViewInvalidator = Depends(get_view_invalidator),
):
    """Remove the profile of an account deleted at the identity provider."""
    principal_id = str(data.get("principal_id") or "").strip()
    if not principal_id:
        raise HTTPException(status_code=400, detail="principal_id required")

    # The caller is the provider itself, not a signed-in user
    service = ProfileService(
        profile_repository=ProfileRepository(db),
        identity=FixedIdentity(None),
        invalidator=invalidator,
    )
    await service.remove_profile(principal_id)
    return {"status": "ok"}
