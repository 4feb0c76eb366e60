"""Abstract storage interface."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
import re
import time


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class UploadError(StorageError):
    """Failed to issue an upload grant."""
    pass


class DeleteError(StorageError):
    """Failed to delete one or more objects."""
    pass


class InvalidObjectUrl(StorageError):
    """URL does not point into the configured bucket."""
    pass


@dataclass
class StorageConfig:
    """Storage configuration."""
    backend: str  # 's3', 'minio'

    bucket_name: Optional[str] = None
    endpoint_url: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    region: str = "us-east-1"
    use_ssl: bool = True

    # Lifetime of presigned upload URLs, in seconds
    upload_expires: int = 60


@dataclass
class UploadGrant:
    """A short-lived write authorization for one object."""
    upload_url: str
    public_url: str
    key: str
    expires_in: int


_UNSAFE_CHARS = re.compile(r"[?#%\\/]")
_WHITESPACE = re.compile(r"\s+")


def sanitize_file_name(file_name: str) -> str:
    """Make a client file name safe to embed in an object key.

    Directory components are dropped, whitespace runs become ``_`` and
    URL-significant characters are removed.

    >>> sanitize_file_name("My Photo.png")
    'My_Photo.png'
    """
    base = re.split(r"[\\/]", file_name.strip())[-1]
    base = _WHITESPACE.sub("_", base)
    base = _UNSAFE_CHARS.sub("", base)
    return base or "upload"


def album_prefix(album_id: str) -> str:
    """Key prefix shared by every object uploaded into an album."""
    return f"{album_id}-"


def build_object_key(album_id: str, file_name: str, now_ms: Optional[int] = None) -> str:
    """Build ``{album_id}-{unix_millis}-{sanitized_name}``.

    The album prefix is how bulk album deletion finds the album's objects,
    so it must stay the first component.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{album_prefix(album_id)}{now_ms}-{sanitize_file_name(file_name)}"


class StorageInterface(ABC):
    """Abstract interface for object storage operations.

    Implementations:
    - S3Storage: AWS S3 / MinIO / any S3-compatible API
    """

    @abstractmethod
    async def create_upload_grant(
        self,
        file_name: str,
        content_type: str,
        album_id: str
    ) -> UploadGrant:
        """Issue a presigned PUT URL for a new object in an album.

        Args:
            file_name: Client file name (sanitized into the key)
            content_type: MIME type the upload must be sent with
            album_id: Album the object belongs to

        Returns:
            UploadGrant with the signed write URL and the public read URL

        Raises:
            UploadError: If signing fails
        """
        pass

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Long-lived public URL for an object key."""
        pass

    @abstractmethod
    def key_from_url(self, url: str) -> str:
        """Parse the object key back out of a public URL.

        Raises:
            InvalidObjectUrl: If the URL has no key
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete one object.

        Raises:
            DeleteError: If the provider rejects the deletion
        """
        pass

    @abstractmethod
    async def list_keys(self, prefix: str) -> list[str]:
        """List object keys starting with ``prefix``.

        Raises:
            StorageError: If listing fails
        """
        pass

    @abstractmethod
    async def delete_prefix(self, prefix: str) -> int:
        """Delete every object whose key starts with ``prefix``.

        Returns:
            Number of deleted objects (0 when nothing matched)

        Raises:
            DeleteError: If listing or deletion fails
        """
        pass
