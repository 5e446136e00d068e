"""Shared asyncpg pool for the tour scoring database (read-only access)."""

import json
import os

import asyncpg
from loguru import logger
from typing import Optional


async def _init_connection(conn: asyncpg.Connection) -> None:
    """Decode json/jsonb columns (scores, pars, ratings, point structures) into Python values."""
    for type_name in ("json", "jsonb"):
        await conn.set_type_codec(
            type_name, encoder=json.dumps, decoder=json.loads, schema="pg_catalog"
        )


class DatabasePool:
    """Owns the pool the competition and tour repositories read through."""

    def __init__(self):
        self._pool: Optional[asyncpg.Pool] = None

    async def initialize(
        self,
        dsn: Optional[str] = None,
        *,
        database: str = "golf_tour",
        min_size: int = 2,
        max_size: int = 10,
    ) -> None:
        """Open the pool once at startup.

        Without an explicit DSN, DATABASE_URL is used, else a local
        ``golf_tour`` database with libpq defaults for host and user.
        """
        if self._pool is not None:
            return
        dsn = dsn or os.environ.get("DATABASE_URL")
        self._pool = await asyncpg.create_pool(
            dsn=dsn,
            database=None if dsn else database,
            min_size=min_size,
            max_size=max_size,
            init=_init_connection,
        )
        logger.info(f"Scoring database pool ready ({min_size}-{max_size} connections)")

    async def close(self) -> None:
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.info("Scoring database pool closed")

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("Scoring database is not connected; await db.initialize() at startup")
        return self._pool

    async def health_check(self) -> bool:
        """False when the pool is missing or the database does not answer."""
        try:
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return True
        except (OSError, RuntimeError, asyncpg.PostgresError) as e:
            logger.warning(f"Scoring database health check failed: {e}")
            return False


db = DatabasePool()
