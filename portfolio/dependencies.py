"""Shared FastAPI dependencies."""
from typing import AsyncIterator, Optional

import aiosqlite
from fastapi import Header, HTTPException, Request

from . import config
from .identity import Principal, RequestIdentity
from .infrastructure.database import get_async_db, release_async_db
from .infrastructure.invalidation import ViewInvalidator, get_invalidator
from .infrastructure.storage import StorageInterface, get_storage


async def get_db() -> AsyncIterator[aiosqlite.Connection]:
    """Yield a pooled connection for the duration of one request."""
    conn = await get_async_db()
    try:
        yield conn
    finally:
        await release_async_db(conn)


def get_object_storage() -> StorageInterface:
    """Process-wide object storage client."""
    return get_storage()


def get_view_invalidator() -> ViewInvalidator:
    """Process-wide view invalidation signal."""
    return get_invalidator()


def get_identity(request: Request) -> RequestIdentity:
    """Identity oracle for the current request."""
    return RequestIdentity(request)


def get_current_principal(request: Request) -> Optional[Principal]:
    """Get current principal from request state."""
    return getattr(request.state, "principal", None)


async def verify_api_key(x_api_key: Optional[str] = Header(None)) -> bool:
    """Verify API key for identity-provider webhooks.

    Returns True if API key is valid, raises HTTPException otherwise.
    """
    if not config.HOOK_API_KEY:
        raise HTTPException(
            status_code=500,
            detail="Webhook API key not configured. Set PORTFOLIO_HOOK_API_KEY environment variable."
        )

    if not x_api_key:
        raise HTTPException(
            status_code=401,
            detail="API key required. Provide X-API-Key header."
        )

    if x_api_key != config.HOOK_API_KEY:
        raise HTTPException(
            status_code=403,
            detail="Invalid API key"
        )

    return True
