"""Profile service - one public profile per principal.

Profiles are resolved publicly by username and privately by the owning
principal. Users never delete their profile here; removal follows account
deletion at the identity provider.
"""
from typing import Any, Optional

from ...config import DASHBOARD_PATH
from ...errors import NotFoundOrUnauthorized
from ...identity import IdentityOracle
from ...infrastructure.invalidation import ViewInvalidator
from ...infrastructure.repositories import ProfileRepository
from ..forms import ProfileForm, parse_form
from .base import PortfolioService


class ProfileService(PortfolioService):
    """Service for managing profiles.

    Responsibilities:
    - Create and update the caller's own profile
    - Resolve profiles by owner (private) and by username (public)
    - Remove a profile when its identity is deleted upstream
    """

    entity = "profile"

    def __init__(
        self,
        profile_repository: ProfileRepository,
        identity: IdentityOracle,
        invalidator: ViewInvalidator,
    ):
        super().__init__(identity, invalidator)
        self.profile_repo = profile_repository

    async def create_profile(self, data: Any) -> dict:
        """Create the caller's profile.

        The avatar comes from the identity provider, not from the payload.

        Returns:
            Created profile dict
        """
        async with self._operation("create profile", DASHBOARD_PATH):
            principal = await self._require_principal()
            form = parse_form(ProfileForm, data, self.entity)

            profile_id = await self.profile_repo.create(
                owner_id=principal.id,
                display_name=form.display_name,
                username=form.username,
                bio=form.bio,
                image_url=principal.avatar_url,
            )
            return await self.profile_repo.get_by_id(profile_id)

    async def update_profile(self, data: Any) -> dict:
        """Update the caller's profile.

        Raises:
            NotFoundOrUnauthorized: If the caller has no profile
        """
        async with self._operation("update profile", DASHBOARD_PATH):
            principal = await self._require_principal()
            form = parse_form(ProfileForm, data, self.entity)

            updated = await self.profile_repo.update_for_owner(
                principal.id,
                display_name=form.display_name,
                username=form.username,
                bio=form.bio,
                image_url=principal.avatar_url,
            )
            if updated == 0:
                raise NotFoundOrUnauthorized(
                    "Profile not found or user not authorized to update this profile."
                )
            return await self.profile_repo.get_by_owner(principal.id)

    async def get_profile(self) -> Optional[dict]:
        """Get the caller's own profile, or None if they have not made one."""
        async with self._read("get profile"):
            principal = await self._require_principal()
            return await self.profile_repo.get_by_owner(principal.id)

    async def get_profile_by_username(self, username: str) -> Optional[dict]:
        """Public lookup by username."""
        async with self._read("get profile"):
            return await self.profile_repo.get_by_username(username)

    async def remove_profile(self, owner_id: str) -> None:
        """Remove the profile of a principal deleted at the identity provider.

        Raises:
            NotFoundOrUnauthorized: If that principal has no profile
        """
        async with self._operation("delete profile", DASHBOARD_PATH):
            deleted = await self.profile_repo.delete_for_owner(owner_id)
            if deleted == 0:
                raise NotFoundOrUnauthorized("Profile not found.")
