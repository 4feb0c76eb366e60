"""Image repository.

Images carry no owner column of their own. Every write joins through the
parent album so only the album's owner can change them.
"""
from typing import Optional, List, Dict

from .base import AsyncRepository


class ImageRepository(AsyncRepository):
    """Repository for images within albums."""

    UPDATABLE_FIELDS = {'image_url', 'alt_text', 'caption', 'image_order'}

    async def create_in_owned_album(
        self,
        album_id: str,
        owner_id: str,
        image_url: str,
        alt_text: str = None,
        caption: str = None,
        image_order: int = None,
    ) -> Optional[str]:
        """Insert an image if ``owner_id`` owns ``album_id``.

        Returns:
            New image UUID, or None when the album is missing or not owned
        """
        image_id = self._new_id()
        now = self._now()
        inserted = await self._write(
            """INSERT INTO images
               (id, image_url, alt_text, caption, created_at, updated_at, album_id, image_order)
               SELECT ?, ?, ?, ?, ?, ?, ?, ?
               WHERE EXISTS (SELECT 1 FROM albums WHERE id = ? AND owner_id = ?)""",
            (
                image_id, image_url, alt_text, caption, now, now, album_id, image_order,
                album_id, owner_id,
            )
        )
        return image_id if inserted else None

    async def get_by_id(self, image_id: str) -> Optional[Dict]:
        """Get image by ID."""
        return await self._fetchone("SELECT * FROM images WHERE id = ?", (image_id,))

    async def get_by_album(self, album_id: str) -> List[Dict]:
        """Get all images in an album ordered by position."""
        return await self._fetchall(
            """SELECT * FROM images
               WHERE album_id = ?
               ORDER BY image_order IS NULL, image_order, created_at""",
            (album_id,)
        )

    async def update_for_owner(self, image_id: str, owner_id: str, **kwargs) -> int:
        """Update image fields if its parent album belongs to ``owner_id``.

        Returns:
            Number of updated rows
        """
        updates = {k: v for k, v in kwargs.items() if k in self.UPDATABLE_FIELDS}
        updates['updated_at'] = self._now()

        set_clause = ", ".join(f"{k} = ?" for k in updates.keys())
        values = list(updates.values()) + [image_id, owner_id]

        return await self._write(
            f"""UPDATE images SET {set_clause}
                WHERE id = ?
                  AND album_id IN (SELECT id FROM albums WHERE owner_id = ?)""",
            tuple(values)
        )

    async def delete_by_url(self, image_url: str, album_id: str, owner_id: str) -> int:
        """Delete the image matched on ``(image_url, album_id)``.

        A mismatched album ID or an album owned by someone else matches
        nothing, so the wrong image can never be removed.

        Returns:
            Number of deleted rows
        """
        return await self._write(
            """DELETE FROM images
               WHERE image_url = ? AND album_id = ?
                 AND album_id IN (SELECT id FROM albums WHERE owner_id = ?)""",
            (image_url, album_id, owner_id)
        )

    async def count_for_owner(self, owner_id: str) -> int:
        """Count images across all albums of an owner."""
        row = await self._fetchone(
            """SELECT COUNT(*) as count
               FROM images i JOIN albums a ON i.album_id = a.id
               WHERE a.owner_id = ?""",
            (owner_id,)
        )
        return row["count"] if row else 0
