"""Album repository - owner-scoped album management.

Images reference albums through a cascading foreign key, so deleting an
album row removes its images as well.
"""
from typing import Optional, List, Dict

from .base import AsyncRepository


class AlbumRepository(AsyncRepository):
    """Repository for albums.

    Writes are always scoped by ``(id, owner_id)``; callers get the affected
    row count back and decide what a zero means.
    """

    UPDATABLE_FIELDS = {'title', 'description', 'album_order', 'image_url'}

    async def create(
        self,
        owner_id: str,
        title: str,
        description: str = None,
        album_order: int = None,
        image_url: str = None,
    ) -> str:
        """Create a new album.

        Args:
            owner_id: Owning principal ID
            title: Album title
            description: Optional description
            album_order: Optional display position
            image_url: Optional cover image URL

        Returns:
            New album UUID
        """
        album_id = self._new_id()
        now = self._now()
        await self._write(
            """INSERT INTO albums
               (id, title, description, owner_id, album_order, image_url, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (album_id, title, description, owner_id, album_order, image_url, now, now)
        )
        return album_id

    async def get_by_id(self, album_id: str) -> Optional[Dict]:
        """Get album by ID."""
        return await self._fetchone(
            """SELECT a.*,
                (SELECT COUNT(*) FROM images WHERE album_id = a.id) as image_count
               FROM albums a WHERE a.id = ?""",
            (album_id,)
        )

    async def get_by_owner(self, owner_id: str) -> List[Dict]:
        """Get albums of an owner in display order.

        Albums without an explicit order go last, oldest first.
        """
        return await self._fetchall(
            """SELECT a.*,
                (SELECT COUNT(*) FROM images WHERE album_id = a.id) as image_count
               FROM albums a
               WHERE a.owner_id = ?
               ORDER BY a.album_order IS NULL, a.album_order, a.created_at""",
            (owner_id,)
        )

    async def is_owned_by(self, album_id: str, owner_id: str) -> bool:
        """Check whether ``owner_id`` owns the album."""
        row = await self._fetchone(
            "SELECT 1 AS owned FROM albums WHERE id = ? AND owner_id = ?",
            (album_id, owner_id)
        )
        return row is not None

    async def update(self, album_id: str, owner_id: str, **kwargs) -> int:
        """Update album fields for its owner.

        Returns:
            Number of updated rows (0 when missing or not owned)
        """
        updates = {k: v for k, v in kwargs.items() if k in self.UPDATABLE_FIELDS}
        updates['updated_at'] = self._now()

        set_clause = ", ".join(f"{k} = ?" for k in updates.keys())
        values = list(updates.values()) + [album_id, owner_id]

        return await self._write(
            f"UPDATE albums SET {set_clause} WHERE id = ? AND owner_id = ?",
            tuple(values)
        )

    async def delete(self, album_id: str, owner_id: str) -> int:
        """Delete album for its owner (images deleted via CASCADE).

        Returns:
            Number of deleted rows (0 when missing or not owned)
        """
        return await self._write(
            "DELETE FROM albums WHERE id = ? AND owner_id = ?",
            (album_id, owner_id)
        )
