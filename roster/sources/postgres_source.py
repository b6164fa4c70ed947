"""
Postgres record source.

Serves pages with LIMIT/OFFSET ordered by id, and the total count with a
separate COUNT(*) in the same REPEATABLE READ transaction so both describe one
snapshot.
"""

from __future__ import annotations

from typing import Optional

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from roster.config import get_settings
from roster.domain.errors import SourceError
from roster.domain.models import PageResult
from roster.infrastructure.db_factory import PoolManager, get_async_pool
from roster.sources.abstract import AbstractRecordSource
from roster.utils.logging import get_logger

log = get_logger(__name__)

PAGE_SQL = (
    "SELECT id, name, birth_date FROM public.children ORDER BY id LIMIT %s OFFSET %s;"
)
ISOLATION_SQL = "SET TRANSACTION ISOLATION LEVEL REPEATABLE READ;"
COUNT_SQL = "SELECT COUNT(*) AS total FROM public.children;"
DELETE_SQL = "DELETE FROM public.children WHERE id::text = %s;"


class PostgresRecordSource(AbstractRecordSource):
    """
    Read children from `public.children` through the managed psycopg async pool.
    """

    name: str = "postgres"
    description: str = "psycopg async pool with LIMIT/OFFSET paging."

    def __init__(
        self,
        page_size: Optional[int] = None,
        dsn_override: Optional[str] = None,
        pool: Optional[AsyncConnectionPool] = None,
    ) -> None:
        self.page_size = page_size or get_settings().children_per_page
        self._dsn_override = dsn_override
        self._pool = pool
        self._owns_pool = pool is None

    async def _get_pool(self) -> AsyncConnectionPool:
        if self._pool is None:
            self._pool = await get_async_pool(dsn=self._dsn_override)
        return self._pool

    async def fetch_page(self, page: int) -> PageResult:
        offset = (page - 1) * self.page_size
        try:
            pool = await self._get_pool()
            async with pool.connection() as conn:
                async with conn.transaction():
                    async with conn.cursor(row_factory=dict_row) as cur:
                        await cur.execute(ISOLATION_SQL)
                        await cur.execute(PAGE_SQL, (self.page_size, offset))
                        rows = await cur.fetchall()
                        await cur.execute(COUNT_SQL)
                        count_row = await cur.fetchone()
        except psycopg.Error as exc:
            raise SourceError(f"Loading page {page} from Postgres failed: {exc}") from exc

        total = count_row["total"] if count_row else 0
        log.debug("Fetched page", extra={"page": page, "records": len(rows), "total_count": total})
        return PageResult.from_raw(rows, total)

    async def delete_record(self, record_id: str, page: int) -> None:
        try:
            pool = await self._get_pool()
            async with pool.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(DELETE_SQL, (str(record_id),))
                    deleted = cur.rowcount
        except psycopg.Error as exc:
            raise SourceError(f"Deleting child {record_id} failed: {exc}") from exc

        if deleted == 0:
            raise SourceError(f"Child {record_id!r} not found", status_code=404)
        log.debug("Deleted child", extra={"record_id": record_id, "page": page})

    async def aclose(self) -> None:
        if self._pool is not None and self._owns_pool:
            await PoolManager().close_pool(self._dsn_override)
        self._pool = None


__all__ = ["PostgresRecordSource"]
