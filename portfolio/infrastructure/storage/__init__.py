"""Object storage abstraction layer.

Supports S3 and S3-compatible backends (MinIO, etc.).
"""
from .base import (
    StorageInterface,
    StorageError,
    UploadError,
    DeleteError,
    InvalidObjectUrl,
    StorageConfig,
    UploadGrant,
    album_prefix,
    build_object_key,
    sanitize_file_name,
)
from .s3_storage import S3Storage
from .factory import get_storage, get_storage_from_config, reset_storage

__all__ = [
    "StorageInterface",
    "StorageError",
    "UploadError",
    "DeleteError",
    "InvalidObjectUrl",
    "StorageConfig",
    "UploadGrant",
    "album_prefix",
    "build_object_key",
    "sanitize_file_name",
    "S3Storage",
    "get_storage",
    "get_storage_from_config",
    "reset_storage",
]
