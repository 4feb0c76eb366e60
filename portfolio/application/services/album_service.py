"""Album service - owner-scoped album management.

Deleting an album removes its rows and then the album's stored binaries.
The two stores are not coupled transactionally: if the storage step fails
the rows are already gone and the error propagates, leaving orphaned
objects under the album prefix.
"""
from typing import Any, List, Dict, Optional

from ...config import DASHBOARD_PATH, ALBUM_PATH
from ...errors import NotFoundOrUnauthorized
from ...identity import IdentityOracle
from ...infrastructure.invalidation import ViewInvalidator
from ...infrastructure.repositories import AlbumRepository
from ...infrastructure.storage import StorageInterface, album_prefix
from ..forms import AlbumForm, parse_form
from .base import PortfolioService


class AlbumService(PortfolioService):
    """Service for managing albums.

    Responsibilities:
    - Create/update/delete albums owned by the caller
    - Public album lookup and per-owner listing
    - Bulk removal of an album's stored images
    """

    entity = "album"

    def __init__(
        self,
        album_repository: AlbumRepository,
        storage: StorageInterface,
        identity: IdentityOracle,
        invalidator: ViewInvalidator,
    ):
        super().__init__(identity, invalidator)
        self.album_repo = album_repository
        self.storage = storage

    # ========================================================================
    # Album CRUD
    # ========================================================================

    async def create_album(self, data: Any) -> Dict:
        """Create an album owned by the caller.

        Returns:
            Created album dict
        """
        async with self._operation("create album", DASHBOARD_PATH):
            principal = await self._require_principal()
            form = parse_form(AlbumForm, data, self.entity)

            album_id = await self.album_repo.create(
                owner_id=principal.id,
                title=form.title,
                description=form.description,
                album_order=form.album_order,
                image_url=form.image_url,
            )
            return await self.album_repo.get_by_id(album_id)

    async def get_album(self, album_id: str) -> Optional[Dict]:
        """Public album lookup."""
        async with self._read("get album"):
            return await self.album_repo.get_by_id(album_id)

    async def get_albums(self, owner_id: str) -> List[Dict]:
        """Public listing of an owner's albums in display order."""
        async with self._read("get albums"):
            return await self.album_repo.get_by_owner(owner_id)

    async def get_my_albums(self) -> List[Dict]:
        """The caller's own albums, for the dashboard."""
        async with self._read("get albums"):
            principal = await self._require_principal()
            return await self.album_repo.get_by_owner(principal.id)

    async def update_album(self, album_id: str, data: Any) -> Dict:
        """Update an album the caller owns.

        Raises:
            NotFoundOrUnauthorized: If the album is missing or owned by someone else
        """
        async with self._operation("update album", DASHBOARD_PATH, ALBUM_PATH.format(album_id=album_id)):
            principal = await self._require_principal()
            form = parse_form(AlbumForm, data, self.entity)

            updated = await self.album_repo.update(album_id, principal.id, **form.model_dump())
            if updated == 0:
                raise NotFoundOrUnauthorized(
                    "Album not found or user not authorized to update this album."
                )
            return await self.album_repo.get_by_id(album_id)

    async def delete_album(self, album_id: str) -> int:
        """Delete an album the caller owns, its images, and its stored binaries.

        Returns:
            Number of stored objects removed

        Raises:
            NotFoundOrUnauthorized: If the album is missing or owned by someone else
            StorageProviderError: If bulk deletion fails after the rows are gone
        """
        async with self._operation("delete album", DASHBOARD_PATH, ALBUM_PATH.format(album_id=album_id)):
            principal = await self._require_principal()

            deleted = await self.album_repo.delete(album_id, principal.id)
            if deleted == 0:
                raise NotFoundOrUnauthorized(
                    "Album not found or user not authorized to delete this album."
                )

            return await self.storage.delete_prefix(album_prefix(album_id))
