"""Profile repository - one public profile per external identity."""
from typing import Optional

from ...config import DEFAULT_BIO
from .base import AsyncRepository


class ProfileRepository(AsyncRepository):
    """Repository for profiles.

    Examples:
        >>> repo = ProfileRepository(db)
        >>> profile_id = await repo.create("user_123", "Ana", "ana", None, "https://...")
        >>> profile = await repo.get_by_username("ana")
    """

    async def create(
        self,
        owner_id: str,
        display_name: str,
        username: str,
        bio: Optional[str],
        image_url: str,
    ) -> str:
        """Create a new profile.

        Args:
            owner_id: External principal that owns the profile
            display_name: Name shown in the UI
            username: Unique public routing key (already normalized)
            bio: Biography text, default welcome message when None
            image_url: Avatar URL

        Returns:
            New profile UUID

        Raises:
            sqlite3.IntegrityError: If the username is taken
        """
        profile_id = self._new_id()
        now = self._now()
        await self._write(
            """INSERT INTO profiles
               (id, owner_id, display_name, username, bio, image_url, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                profile_id, owner_id, display_name, username,
                bio if bio is not None else DEFAULT_BIO,
                image_url or "", now, now,
            )
        )
        return profile_id

    async def get_by_id(self, profile_id: str) -> Optional[dict]:
        """Get profile by ID."""
        return await self._fetchone("SELECT * FROM profiles WHERE id = ?", (profile_id,))

    async def get_by_owner(self, owner_id: str) -> Optional[dict]:
        """Get the profile owned by a principal."""
        return await self._fetchone(
            "SELECT * FROM profiles WHERE owner_id = ?",
            (owner_id,)
        )

    async def get_by_username(self, username: str) -> Optional[dict]:
        """Get profile by username (case-insensitive).

        Args:
            username: Username to search

        Returns:
            Profile dict or None if not found
        """
        return await self._fetchone(
            "SELECT * FROM profiles WHERE username = ?",
            (username.strip().lower(),)
        )

    async def update_for_owner(
        self,
        owner_id: str,
        display_name: str,
        username: str,
        bio: Optional[str],
        image_url: str,
    ) -> int:
        """Update the profile owned by ``owner_id``.

        Returns:
            Number of updated rows (0 when the principal has no profile)
        """
        return await self._write(
            """UPDATE profiles
               SET display_name = ?, username = ?, bio = ?, image_url = ?, updated_at = ?
               WHERE owner_id = ?""",
            (
                display_name, username,
                bio if bio is not None else DEFAULT_BIO,
                image_url or "", self._now(), owner_id,
            )
        )

    async def delete_for_owner(self, owner_id: str) -> int:
        """Delete the profile owned by ``owner_id``.

        Returns:
            Number of deleted rows
        """
        return await self._write("DELETE FROM profiles WHERE owner_id = ?", (owner_id,))
