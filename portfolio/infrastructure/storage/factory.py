"""Factory for creating storage backends."""
import os
from typing import Optional

from ... import config as app_config

from .base import StorageConfig, StorageInterface


# Singleton instance
_storage_instance: Optional[StorageInterface] = None


def get_storage_config() -> StorageConfig:
    """Get storage configuration from environment variables.

    Environment variables:
    - STORAGE_BACKEND: 's3' (default) or 'minio'
    - S3_BUCKET: Bucket name (required)
    - S3_ENDPOINT: Custom endpoint (for MinIO)
    - S3_ACCESS_KEY: Access key
    - S3_SECRET_KEY: Secret key
    - S3_REGION: Region (default: us-east-1)
    - S3_USE_SSL: Use SSL (default: true)
    - UPLOAD_URL_EXPIRES: Presigned upload lifetime in seconds (default: 60)
    """
    backend = os.environ.get("STORAGE_BACKEND", "s3").lower()

    if backend not in ("s3", "minio"):
        raise ValueError(f"Unknown storage backend: {backend}")

    if not app_config.S3_BUCKET:
        raise ValueError("S3_BUCKET environment variable is required for S3 storage")

    return StorageConfig(
        backend=backend,
        bucket_name=app_config.S3_BUCKET,
        endpoint_url=app_config.S3_ENDPOINT,
        access_key=app_config.S3_ACCESS_KEY,
        secret_key=app_config.S3_SECRET_KEY,
        region=app_config.S3_REGION,
        use_ssl=os.environ.get("S3_USE_SSL", "true").lower() == "true",
        upload_expires=app_config.UPLOAD_URL_EXPIRES,
    )


def get_storage_from_config(config: StorageConfig) -> StorageInterface:
    """Create storage backend from configuration.

    Args:
        config: Storage configuration

    Returns:
        Storage backend instance
    """
    if config.backend in ("s3", "minio"):
        from .s3_storage import S3Storage
        return S3Storage(config)

    raise ValueError(f"Unknown storage backend: {config.backend}")


def get_storage() -> StorageInterface:
    """Get or create singleton storage instance.

    This is the main entry point for getting storage.
    The instance is built once per process and reused.

    Returns:
        Storage backend instance
    """
    global _storage_instance

    if _storage_instance is None:
        _storage_instance = get_storage_from_config(get_storage_config())

    return _storage_instance


def reset_storage():
    """Reset storage singleton (useful for testing)."""
    global _storage_instance
    _storage_instance = None
