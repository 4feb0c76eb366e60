"""Image service - photos inside albums and their upload handshake.

Uploads never pass through this app: the client asks for a presigned PUT
URL, sends the file straight to the object store, then registers the
resulting public URL as an image. Image ownership is derived from the
parent album, so every write checks the album's owner.
"""
from typing import Any, List, Dict

from ...config import DASHBOARD_PATH, ALBUM_PATH
from ...errors import NotFoundOrUnauthorized
from ...identity import IdentityOracle
from ...infrastructure.invalidation import ViewInvalidator
from ...infrastructure.repositories import AlbumRepository, ImageRepository
from ...infrastructure.storage import (
    StorageInterface,
    UploadGrant,
    InvalidObjectUrl,
    album_prefix,
)
from ..forms import ImageForm, UploadGrantRequest, parse_form
from .base import PortfolioService


class ImageService(PortfolioService):
    """Service for managing images.

    Responsibilities:
    - Issue upload grants for album-prefixed object keys
    - Register, update, list and delete images
    - Count images across an owner's albums
    """

    entity = "image"

    def __init__(
        self,
        image_repository: ImageRepository,
        album_repository: AlbumRepository,
        storage: StorageInterface,
        identity: IdentityOracle,
        invalidator: ViewInvalidator,
    ):
        super().__init__(identity, invalidator)
        self.image_repo = image_repository
        self.album_repo = album_repository
        self.storage = storage

    # ========================================================================
    # Upload handshake
    # ========================================================================

    async def create_upload_grant(self, file_name: str, content_type: str, album_id: str) -> UploadGrant:
        """Issue a 60-second signed PUT URL and the matching public URL.

        Args:
            file_name: Client file name; sanitized into the object key
            content_type: MIME type the client will upload with
            album_id: Album whose prefix the key gets

        Returns:
            UploadGrant
        """
        async with self._read("create upload URL"):
            await self._require_principal()
            form = parse_form(
                UploadGrantRequest,
                {"file_name": file_name, "content_type": content_type},
                self.entity,
            )
            return await self.storage.create_upload_grant(form.file_name, form.content_type, album_id)

    # ========================================================================
    # Image CRUD
    # ========================================================================

    async def create_image(self, album_id: str, data: Any) -> Dict:
        """Register an uploaded image in an album the caller owns.

        Raises:
            NotFoundOrUnauthorized: If the album is missing or owned by someone else
        """
        async with self._operation("create image", ALBUM_PATH.format(album_id=album_id)):
            principal = await self._require_principal()
            form = parse_form(ImageForm, data, self.entity)

            image_id = await self.image_repo.create_in_owned_album(
                album_id,
                principal.id,
                image_url=form.image_url,
                alt_text=form.alt_text,
                caption=form.caption,
                image_order=form.image_order,
            )
            if image_id is None:
                raise NotFoundOrUnauthorized(
                    "Album not found or user not authorized to add images to this album."
                )
            return await self.image_repo.get_by_id(image_id)

    async def get_images(self, album_id: str) -> List[Dict]:
        """Public listing of an album's images in display order."""
        async with self._read("get images"):
            return await self.image_repo.get_by_album(album_id)

    async def update_image(self, image_id: str, data: Any) -> Dict:
        """Update caption, alt text, order or URL of an image the caller owns.

        Raises:
            NotFoundOrUnauthorized: If the image is missing or its album is not the caller's
        """
        async with self._read("update image"):
            current = await self.image_repo.get_by_id(image_id)
        # Unknown images still signal, on the dashboard
        paths = [ALBUM_PATH.format(album_id=current["album_id"])] if current else [DASHBOARD_PATH]

        async with self._operation("update image", *paths):
            principal = await self._require_principal()
            form = parse_form(ImageForm, data, self.entity)

            updated = await self.image_repo.update_for_owner(image_id, principal.id, **form.model_dump())
            if updated == 0:
                raise NotFoundOrUnauthorized(
                    "Image not found or user not authorized to update this image."
                )
            return await self.image_repo.get_by_id(image_id)

    async def delete_image(self, image_url: str, album_id: str, delete_row: bool = True) -> None:
        """Delete an image's stored binary, then (optionally) its row.

        The object key must carry the album's prefix and the album must be
        the caller's before anything is deleted. The row is matched on
        ``(image_url, album_id)``, so a wrong album ID deletes nothing.

        Args:
            image_url: Public URL of the image
            album_id: Album the caller says the image belongs to
            delete_row: Also delete the database row

        Raises:
            NotFoundOrUnauthorized: If the checks or the row match fail
            StorageProviderError: If the binary could not be deleted
        """
        paths = (ALBUM_PATH.format(album_id=album_id), DASHBOARD_PATH)
        async with self._operation("delete image", *paths):
            principal = await self._require_principal()
            not_found = NotFoundOrUnauthorized(
                "Image not found or user not authorized to delete this image."
            )

            try:
                key = self.storage.key_from_url(image_url)
            except InvalidObjectUrl:
                raise not_found from None

            if not key.startswith(album_prefix(album_id)):
                raise not_found
            if not await self.album_repo.is_owned_by(album_id, principal.id):
                raise not_found

            await self.storage.delete(key)

            if delete_row:
                deleted = await self.image_repo.delete_by_url(image_url, album_id, principal.id)
                if deleted == 0:
                    raise not_found

    async def count_images(self, owner_id: str) -> int:
        """Number of images across all of an owner's albums."""
        async with self._read("count images"):
            return await self.image_repo.count_for_owner(owner_id)
