"""
Database connection management
"""

import logging
from typing import Any, Dict, List, Optional

import asyncpg

logger = logging.getLogger(__name__)


def _parse_affected_rows(status: str) -> int:
    """Turn an asyncpg command tag ("UPDATE 1", "INSERT 0 1") into a row count"""
    if not status:
        return 0
    try:
        return int(status.split()[-1])
    except ValueError:
        return 0


class DatabaseConnection:
    """Owns the single long-lived session to PostgreSQL.

    The session is an asyncpg pool pinned to one connection, so concurrent
    requests queue on ``acquire()`` instead of colliding on the connection.
    """

    def __init__(self, dsn: str, command_timeout: float = 60):
        self.dsn = dsn
        self.command_timeout = command_timeout
        self._pool: Optional[asyncpg.Pool] = None

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> None:
        """Open the session and verify it with a round trip"""
        pool = await asyncpg.create_pool(
            self.dsn,
            min_size=1,
            max_size=1,
            command_timeout=self.command_timeout,
            statement_cache_size=0  # pgbouncer compatibility
        )

        try:
            async with pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except Exception:
            await pool.close()
            raise

        self._pool = pool
        logger.info("Connected to PostgreSQL database")

    async def close(self) -> None:
        """Release the session"""
        if self._pool is not None:
            pool, self._pool = self._pool, None
            await pool.close()
        logger.info("Database connection closed")

    def _require_pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("Database connection not initialized")
        return self._pool

    async def fetch(self, query: str, *params: Any) -> List[Dict[str, Any]]:
        async with self._require_pool().acquire() as conn:
            rows = await conn.fetch(query, *params)
        return [dict(row) for row in rows]

    async def fetchrow(self, query: str, *params: Any) -> Optional[Dict[str, Any]]:
        async with self._require_pool().acquire() as conn:
            row = await conn.fetchrow(query, *params)
        return dict(row) if row is not None else None

    async def execute(self, query: str, *params: Any) -> int:
        """Run a statement and return the number of affected rows"""
        async with self._require_pool().acquire() as conn:
            status = await conn.execute(query, *params)
        return _parse_affected_rows(status)

    async def ping(self) -> bool:
        async with self._require_pool().acquire() as conn:
            return await conn.fetchval("SELECT 1") == 1
