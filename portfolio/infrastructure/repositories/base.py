"""Base repository for the portfolio tables."""
from datetime import datetime, timezone
import uuid

import aiosqlite


class AsyncRepository:
    """Shared query helpers over one aiosqlite connection.

    Each write commits on its own. A failed write is rolled back before the
    error propagates, so a pooled connection never goes back to the pool
    holding SQLite's write lock.
    """

    def __init__(self, connection: aiosqlite.Connection):
        self._conn = connection

    @staticmethod
    def _new_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    async def _write(self, sql: str, parameters: tuple = ()) -> int:
        """Run one INSERT/UPDATE/DELETE and commit it.

        Returns:
            Number of affected rows
        """
        try:
            cursor = await self._conn.execute(sql, parameters)
            await self._conn.commit()
        except Exception:
            await self._conn.rollback()
            raise
        return cursor.rowcount

    async def _fetchone(self, sql: str, parameters: tuple = ()) -> dict | None:
        cursor = await self._conn.execute(sql, parameters)
        row = await cursor.fetchone()
        return dict(row) if row else None

    async def _fetchall(self, sql: str, parameters: tuple = ()) -> list[dict]:
        cursor = await self._conn.execute(sql, parameters)
        return [dict(row) for row in await cursor.fetchall()]
