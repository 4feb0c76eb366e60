"""S3-compatible storage implementation (AWS S3, MinIO, DigitalOcean Spaces)."""
from urllib.parse import urlparse, unquote
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .base import (
    StorageInterface,
    StorageConfig,
    StorageError,
    UploadError,
    DeleteError,
    InvalidObjectUrl,
    UploadGrant,
    build_object_key,
)

logger = logging.getLogger(__name__)

# DeleteObjects accepts at most this many keys per request
DELETE_BATCH_SIZE = 1000


class S3Storage(StorageInterface):
    """S3-compatible storage backend.

    Supports:
    - AWS S3 (virtual-hosted public URLs)
    - MinIO and other S3-compatible endpoints (path-style public URLs)
    """

    def __init__(self, config: StorageConfig, client=None):
        """Initialize S3 storage.

        Args:
            config: Storage configuration with S3 settings
            client: Prebuilt boto3 S3 client (built from config when None)
        """
        if config.backend not in ("s3", "minio"):
            raise ValueError(
                f"S3Storage requires backend='s3' or 'minio', got '{config.backend}'"
            )
        if not config.bucket_name:
            raise ValueError("S3Storage requires a bucket name")

        self.config = config
        self.bucket = config.bucket_name
        self.client = client if client is not None else self._build_client(config)

    @staticmethod
    def _build_client(config: StorageConfig):
        client_kwargs = {
            "service_name": "s3",
            "aws_access_key_id": config.access_key,
            "aws_secret_access_key": config.secret_key,
            "region_name": config.region,
        }

        # Custom endpoint for MinIO/DigitalOcean
        if config.endpoint_url:
            client_kwargs["endpoint_url"] = config.endpoint_url
            client_kwargs["use_ssl"] = config.use_ssl

        return boto3.client(**client_kwargs)

    async def create_upload_grant(
        self,
        file_name: str,
        content_type: str,
        album_id: str
    ) -> UploadGrant:
        """Presign a PUT for a fresh album-prefixed key."""
        key = build_object_key(album_id, file_name)

        try:
            upload_url = self.client.generate_presigned_url(
                'put_object',
                Params={'Bucket': self.bucket, 'Key': key, 'ContentType': content_type},
                ExpiresIn=self.config.upload_expires
            )
        except (ClientError, BotoCoreError) as e:
            raise UploadError(f"Failed to sign upload for {key}: {e}")

        return UploadGrant(
            upload_url=upload_url,
            public_url=self.public_url(key),
            key=key,
            expires_in=self.config.upload_expires,
        )

    def public_url(self, key: str) -> str:
        """Get direct URL for an object (bucket must allow public reads)."""
        if self.config.endpoint_url:
            return f"{self.config.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.config.region}.amazonaws.com/{key}"

    def key_from_url(self, url: str) -> str:
        """Get object key from a public URL."""
        path = unquote(urlparse(url).path).lstrip("/")

        # Path-style URLs carry the bucket as first segment
        if self.config.endpoint_url:
            bucket_prefix = f"{self.bucket}/"
            if not path.startswith(bucket_prefix):
                raise InvalidObjectUrl(f"URL is not in bucket {self.bucket}: {url}")
            path = path[len(bucket_prefix):]

        if not path:
            raise InvalidObjectUrl(f"URL has no object key: {url}")
        return path

    async def delete(self, key: str) -> None:
        """Delete object from S3."""
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise DeleteError(f"Failed to delete {key}: {e}")
        logger.info("Deleted s3://%s/%s", self.bucket, key)

    async def list_keys(self, prefix: str) -> list[str]:
        """List object keys under a prefix."""
        keys = []
        try:
            paginator = self.client.get_paginator('list_objects_v2')
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                for obj in page.get('Contents', []):
                    keys.append(obj['Key'])
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to list objects under {prefix}: {e}")
        return keys

    async def delete_prefix(self, prefix: str) -> int:
        """Bulk delete every object under a prefix."""
        try:
            keys = await self.list_keys(prefix)
        except StorageError as e:
            raise DeleteError(str(e))

        if not keys:
            return 0

        for start in range(0, len(keys), DELETE_BATCH_SIZE):
            batch = keys[start:start + DELETE_BATCH_SIZE]
            try:
                response = self.client.delete_objects(
                    Bucket=self.bucket,
                    Delete={'Objects': [{'Key': key} for key in batch], 'Quiet': True}
                )
            except (ClientError, BotoCoreError) as e:
                raise DeleteError(f"Failed to delete objects under {prefix}: {e}")

            errors = response.get('Errors', [])
            if errors:
                failed = ", ".join(err.get('Key', '?') for err in errors)
                raise DeleteError(f"Failed to delete {len(errors)} objects under {prefix}: {failed}")

        logger.info("Deleted %d objects under s3://%s/%s", len(keys), self.bucket, prefix)
        return len(keys)
