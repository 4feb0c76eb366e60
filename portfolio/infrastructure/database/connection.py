"""Async database connection management.

Provides async database connectivity using aiosqlite.
"""
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional
import asyncio
import logging

import aiosqlite

from ... import config

logger = logging.getLogger(__name__)


# =============================================================================
# SQLite3 datetime adapter (Python 3.12 compatibility)
# =============================================================================
def _adapt_datetime(dt: datetime) -> str:
    """Adapt datetime to ISO 8601 string for SQLite."""
    return dt.isoformat()

def _convert_datetime(val: bytes) -> datetime:
    """Convert ISO 8601 string from SQLite to datetime."""
    return datetime.fromisoformat(val.decode())

sqlite3.register_adapter(datetime, _adapt_datetime)
sqlite3.register_converter("DATETIME", _convert_datetime)
sqlite3.register_converter("TIMESTAMP", _convert_datetime)


SCHEMA = (
    # One profile per external identity; username is the public routing key
    """
    CREATE TABLE IF NOT EXISTS profiles (
        id TEXT PRIMARY KEY,
        owner_id TEXT NOT NULL UNIQUE,
        display_name VARCHAR(50) NOT NULL,
        username VARCHAR(50) NOT NULL UNIQUE,
        bio VARCHAR(150) NOT NULL DEFAULT 'Welcome to my profile!',
        image_url VARCHAR(2000) NOT NULL DEFAULT '',
        created_at TIMESTAMP NOT NULL,
        updated_at TIMESTAMP NOT NULL
    )
    """,
    # Albums join profiles through owner_id only (no declared foreign key)
    """
    CREATE TABLE IF NOT EXISTS albums (
        id TEXT PRIMARY KEY,
        title VARCHAR(50) NOT NULL,
        description VARCHAR(150),
        owner_id TEXT NOT NULL,
        album_order INTEGER,
        image_url VARCHAR(2000),
        created_at TIMESTAMP NOT NULL,
        updated_at TIMESTAMP NOT NULL
    )
    """,
    # NULL orders never collide, so unordered albums are unrestricted
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_albums_owner_order ON albums(owner_id, album_order)",
    """
    CREATE TABLE IF NOT EXISTS images (
        id TEXT PRIMARY KEY,
        image_url VARCHAR(2000) NOT NULL,
        alt_text VARCHAR(50),
        caption VARCHAR(150),
        created_at TIMESTAMP NOT NULL,
        updated_at TIMESTAMP NOT NULL,
        album_id TEXT NOT NULL,
        image_order INTEGER,
        FOREIGN KEY (album_id) REFERENCES albums(id) ON DELETE CASCADE
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_images_album ON images(album_id, image_order)",
)


async def connect(db_path: Path | str) -> aiosqlite.Connection:
    """Open a connection with row access by name and cascading deletes enabled."""
    conn = await aiosqlite.connect(db_path, detect_types=sqlite3.PARSE_DECLTYPES)
    conn.row_factory = aiosqlite.Row
    # SQLite leaves foreign keys off per connection unless asked
    await conn.execute("PRAGMA foreign_keys = ON")
    return conn


async def create_schema(conn: aiosqlite.Connection) -> None:
    """Create tables and indexes on an open connection."""
    for statement in SCHEMA:
        await conn.execute(statement)
    await conn.commit()


class AsyncConnectionPool:
    """Idle aiosqlite connections to one database file, reused per request."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self._idle: list[aiosqlite.Connection] = []
        self._lock = asyncio.Lock()

    async def acquire(self) -> aiosqlite.Connection:
        async with self._lock:
            if self._idle:
                return self._idle.pop()
        return await connect(self.db_path)

    async def release(self, conn: aiosqlite.Connection) -> None:
        """Return a connection, discarding any transaction it left open."""
        if conn.in_transaction:
            logger.warning("Rolling back transaction left open on a released connection")
            await conn.rollback()
        async with self._lock:
            self._idle.append(conn)

    async def close_all(self) -> None:
        async with self._lock:
            for conn in self._idle:
                await conn.close()
            self._idle.clear()


_pool: Optional[AsyncConnectionPool] = None


async def get_async_db() -> aiosqlite.Connection:
    """Connection from the process pool, created on first use."""
    global _pool
    if _pool is None:
        _pool = AsyncConnectionPool(config.DATABASE_PATH)
    return await _pool.acquire()


async def release_async_db(conn: aiosqlite.Connection) -> None:
    if _pool:
        await _pool.release(conn)
    else:
        await conn.close()


async def init_async_db() -> None:
    """Initialize database schema using async connection."""
    conn = await get_async_db()
    try:
        await create_schema(conn)
        logger.info("Database ready at %s", config.DATABASE_PATH)
    finally:
        await release_async_db(conn)


async def close_async_db() -> None:
    """Close all async database connections."""
    global _pool
    if _pool:
        await _pool.close_all()
        _pool = None
