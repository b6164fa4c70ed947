"""
Database connection factory utilities for the roster pager.

Provides the DSN builder, a dedicated sync connection for scripts, and a
managed async pool for the Postgres record source. The PoolManager singleton
owns the pool so repeated controller sessions share connections.

Connection acquisition is retried with tenacity for transient failures; query
failures are never retried here.
"""

from __future__ import annotations

import threading
from typing import Optional

import psycopg
from psycopg import Connection
from psycopg_pool import AsyncConnectionPool, PoolTimeout
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from roster.config import get_settings
from roster.utils.logging import get_logger

log = get_logger(__name__)


def build_dsn() -> str:
    """Compose a DSN string from settings."""
    settings = get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


class PoolManager:
    """
    Process-wide singleton owning the async connection pools, one per DSN.

    Pools are created closed and opened on first use from inside a running
    event loop, as psycopg_pool requires. Opening waits for the first
    connections so an unreachable server fails here rather than on first query.
    """

    _instance: Optional["PoolManager"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "PoolManager":
        """Create or return the singleton instance."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._async_pools = {}
            return cls._instance

    async def get_async_pool(
        self,
        dsn: Optional[str] = None,
        min_size: int = 1,
        max_size: int = 4,
        timeout: float = 10.0,
    ) -> AsyncConnectionPool:
        """
        Get or create the asynchronous connection pool for a DSN.

        Parameters
        ----------
        dsn : str, optional
            Connection string; defaults to the one built from settings.
        min_size : int
            Minimum number of idle connections to keep.
        max_size : int
            Maximum total connections in the pool.
        timeout : float
            Seconds to wait for the first `min_size` connections.

        Raises
        ------
        psycopg_pool.PoolTimeout
            If the pool cannot connect within `timeout`.
        """
        conninfo = dsn or build_dsn()
        pool = self._async_pools.get(conninfo)
        if pool is None:
            pool = AsyncConnectionPool(
                conninfo=conninfo, min_size=min_size, max_size=max_size, open=False
            )
            try:
                await pool.open(wait=True, timeout=timeout)
            except psycopg.Error:
                await pool.close()
                raise
            self._async_pools[conninfo] = pool
            log.info("Opened async pool", extra={"min_size": min_size, "max_size": max_size})
        return pool

    async def close_pool(self, dsn: Optional[str] = None) -> None:
        """Close the pool serving `dsn`, if one is open."""
        pool = self._async_pools.pop(dsn or build_dsn(), None)
        if pool is not None:
            await pool.close()
            log.info("Closed async pool")

    async def close_all(self) -> None:
        """Close every managed pool and release resources."""
        pools, self._async_pools = list(self._async_pools.values()), {}
        for pool in pools:
            await pool.close()
        if pools:
            log.info("Closed async pools", extra={"count": len(pools)})


def get_sync_connection(dsn: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated synchronous connection with automatic retry.

    Retries with exponential backoff for transient connection errors; the
    attempt count comes from `DB_CONNECT_RETRIES`. Used by the seeding script.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    attempts = max(1, get_settings().db_connect_retries)

    @retry(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
        reraise=True,
    )
    def _connect() -> Connection:
        return psycopg.connect(dsn or build_dsn())

    return _connect()


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, PoolTimeout, OSError)),
    reraise=True,
)
async def get_async_pool(
    dsn: Optional[str] = None, min_size: int = 1, max_size: int = 4
) -> AsyncConnectionPool:
    """
    Get or create the managed async pool, retrying transient open failures.
    """
    return await PoolManager().get_async_pool(dsn=dsn, min_size=min_size, max_size=max_size)


__all__ = [
    "PoolManager",
    "build_dsn",
    "get_sync_connection",
    "get_async_pool",
]
