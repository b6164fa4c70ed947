"""
Infrastructure package for the roster pager.

Centralizes database connectivity concerns (DSN, sync connection, async pool).
Keep this layer focused on I/O and resource management, decoupled from the
controller and view logic.
"""

from roster.infrastructure.db_factory import (
    PoolManager,
    build_dsn,
    get_async_pool,
    get_sync_connection,
)

__all__ = [
    "PoolManager",
    "build_dsn",
    "get_async_pool",
    "get_sync_connection",
]
