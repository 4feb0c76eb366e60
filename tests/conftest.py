"""Test configuration and fixtures for the photo portfolio.

This module provides isolated test environments:
- Temporary database (SQLite) per test
- S3 storage backed by a mock boto3 client
- A switchable identity so one test can act as several principals
"""
import os
import sys
from pathlib import Path
from typing import Dict, Generator, Optional
from unittest.mock import Mock

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Ensure the package is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment BEFORE importing app modules
os.environ.setdefault("S3_BUCKET", "test-bucket")
os.environ.setdefault("S3_REGION", "us-east-1")
os.environ.setdefault("PORTFOLIO_LOG_LEVEL", "WARNING")

from portfolio.application.services import AlbumService, ImageService, ProfileService
from portfolio.identity import Principal
from portfolio.infrastructure.database import connect, create_schema
from portfolio.infrastructure.invalidation import ViewInvalidator
from portfolio.infrastructure.repositories import AlbumRepository, ImageRepository, ProfileRepository
from portfolio.infrastructure.storage import S3Storage, StorageConfig

BUCKET = "test-bucket"
PUBLIC_BASE = f"https://{BUCKET}.s3.us-east-1.amazonaws.com"


class ActingAs:
    """Identity oracle whose principal a test can switch at will."""

    def __init__(self, principal: Optional[Principal] = None):
        self.principal = principal

    async def current_principal(self) -> Optional[Principal]:
        return self.principal


@pytest.fixture
def user_one() -> Principal:
    return Principal(id="user_1", avatar_url="https://img.example.com/u1.png")


@pytest.fixture
def user_two() -> Principal:
    return Principal(id="user_2", avatar_url="https://img.example.com/u2.png")


# =============================================================================
# Database
# =============================================================================

@pytest_asyncio.fixture
async def async_db(tmp_path: Path):
    """Create temporary async database with the full schema."""
    conn = await connect(tmp_path / "test.db")
    await create_schema(conn)

    yield conn

    await conn.close()


@pytest_asyncio.fixture
async def profile_repo(async_db):
    return ProfileRepository(async_db)


@pytest_asyncio.fixture
async def album_repo(async_db):
    return AlbumRepository(async_db)


@pytest_asyncio.fixture
async def image_repo(async_db):
    return ImageRepository(async_db)


# =============================================================================
# Storage, identity, invalidation
# =============================================================================

@pytest.fixture
def s3_client() -> Mock:
    """Mock boto3 S3 client with empty listings and successful deletes."""
    client = Mock()
    client.generate_presigned_url.return_value = "https://signed.example.com/put?X-Amz-Expires=60"
    client.get_paginator.return_value.paginate.return_value = [{}]
    client.delete_objects.return_value = {}
    client.delete_object.return_value = {}
    return client


@pytest.fixture
def storage(s3_client: Mock) -> S3Storage:
    config = StorageConfig(backend="s3", bucket_name=BUCKET, region="us-east-1")
    return S3Storage(config, client=s3_client)


@pytest.fixture
def identity(user_one: Principal) -> ActingAs:
    """Identity acting as user_one unless a test switches it."""
    return ActingAs(user_one)


@pytest.fixture
def invalidator() -> ViewInvalidator:
    return ViewInvalidator()


@pytest.fixture
def invalidated(invalidator: ViewInvalidator) -> list:
    """Paths invalidated during the test, in order."""
    paths = []
    invalidator.subscribe(paths.append)
    return paths


# =============================================================================
# Services
# =============================================================================

@pytest_asyncio.fixture
async def profile_service(async_db, identity, invalidator) -> ProfileService:
    return ProfileService(
        profile_repository=ProfileRepository(async_db),
        identity=identity,
        invalidator=invalidator,
    )


@pytest_asyncio.fixture
async def album_service(async_db, storage, identity, invalidator) -> AlbumService:
    return AlbumService(
        album_repository=AlbumRepository(async_db),
        storage=storage,
        identity=identity,
        invalidator=invalidator,
    )


@pytest_asyncio.fixture
async def image_service(async_db, storage, identity, invalidator) -> ImageService:
    return ImageService(
        image_repository=ImageRepository(async_db),
        album_repository=AlbumRepository(async_db),
        storage=storage,
        identity=identity,
        invalidator=invalidator,
    )


def image_payload(album_id: str, name: str = "photo.png", order: int = 1) -> Dict:
    """Valid image form data for an object uploaded into ``album_id``."""
    return {
        "image_url": f"{PUBLIC_BASE}/{album_id}-1700000000000-{name}",
        "alt_text": "A photo",
        "caption": "Taken on the coast",
        "image_order": order,
    }


# =============================================================================
# HTTP client
# =============================================================================

@pytest.fixture
def client(tmp_path: Path, monkeypatch, storage: S3Storage) -> Generator[TestClient, None, None]:
    """Test client with an isolated database and mocked S3.

    Usage:
        def test_something(client):
            response = client.get("/health")
            assert response.status_code == 200
    """
    import portfolio.config as config
    from portfolio.dependencies import get_object_storage
    from portfolio.infrastructure.invalidation import reset_invalidator
    from portfolio.main import app

    monkeypatch.setattr(config, "DATABASE_PATH", tmp_path / "api.db")
    monkeypatch.setattr(config, "HOOK_API_KEY", "hook-secret")
    reset_invalidator()

    app.dependency_overrides[get_object_storage] = lambda: storage
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
        reset_invalidator()


def auth_headers(principal: Principal) -> Dict[str, str]:
    """Headers the authenticating proxy would add for ``principal``."""
    return {"X-Principal-Id": principal.id, "X-Principal-Avatar": principal.avatar_url}
