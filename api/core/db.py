"""
Async relational access helpers (raw SQL) using asyncpg.

`RelationalPool` wraps one asyncpg pool. It is built by the connection
manager on startup and closed on shutdown (see `core/connections.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
- values are always passed as arguments, never formatted into the SQL text.

Pool behaviour:
- fixed capacity (`max_size`), connections opened on demand
- callers waiting for a connection queue without limit unless
  `acquire_timeout` is set
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import asyncpg

logger = logging.getLogger(__name__)

DRIVER_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    TimeoutError,
)


class RelationalPool:
    def __init__(
        self,
        dsn: str,
        *,
        max_size: int = 10,
        acquire_timeout: float | None = None,
    ) -> None:
        self._dsn = dsn
        self._max_size = max_size
        self._acquire_timeout = acquire_timeout
        self._pool: asyncpg.Pool | None = None
        self._open_lock = asyncio.Lock()

    @property
    def max_size(self) -> int:
        return self._max_size

    async def open(self) -> None:
        if self._pool is not None:
            return None
        # Concurrent first requests must share one pool.
        async with self._open_lock:
            if self._pool is not None:
                return None
            self._pool = await asyncpg.create_pool(
                dsn=self._dsn,
                min_size=0,
                max_size=self._max_size,
            )

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("Relational pool is not initialized. Call open() on startup.")
        return self._pool

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        """
        Borrow one pooled connection; it goes back to the pool on every exit path.
        """
        if self._pool is None:
            await self.open()
        async with self.pool().acquire(timeout=self._acquire_timeout) as conn:
            yield conn

    async def check_connection(self) -> bool:
        """
        Startup diagnostic: try one connection. Never raises.
        """
        try:
            async with self.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except Exception as exc:
            logger.error("relational_connect_failed error=%s", exc)
            return False
        logger.info("relational_connect_ok max_size=%s", self._max_size)
        return True

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        async with self.acquire() as conn:
            row = await conn.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        async with self.acquire() as conn:
            rows = await conn.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)
