"""
Pytest configuration for the roster pager.

Provides fixtures for:
- Settings override for tests
- Scripted and in-memory record sources for controller tests
- Database connection management and seeding for integration tests
"""

from __future__ import annotations

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Generator, List, Optional, Tuple

import psycopg
import pytest

from roster.config import Settings
from roster.domain.models import PageResult, Record
from roster.sources.memory import MemoryRecordSource, demo_entries

PAGE_SIZE = 10


class ScriptedSource:
    """
    Record source whose responses are resolved by the test.

    Every fetch parks on a future appended to `pending`; deletes optionally wait
    on `delete_gate` and raise `delete_error` when set.
    """

    name = "scripted"
    description = "test source resolved by hand"

    def __init__(self) -> None:
        self.pending: List[Tuple[int, asyncio.Future]] = []
        self.deleted: List[Tuple[str, int]] = []
        self.delete_gate: Optional[asyncio.Event] = None
        self.delete_error: Optional[Exception] = None

    async def fetch_page(self, page: int) -> PageResult:
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        self.pending.append((page, future))
        return await future

    async def delete_record(self, record_id: str, page: int) -> None:
        self.deleted.append((record_id, page))
        if self.delete_gate is not None:
            await self.delete_gate.wait()
        if self.delete_error is not None:
            raise self.delete_error

    def resolve(self, index: int, *records: Record, total_count: int = 0) -> None:
        self.pending[index][1].set_result(PageResult(records=records, total_count=total_count))

    def fail(self, index: int, error: Exception) -> None:
        self.pending[index][1].set_exception(error)

    async def wait_for_fetches(self, count: int) -> None:
        while len(self.pending) < count:
            await asyncio.sleep(0)


@pytest.fixture
def scripted_source() -> ScriptedSource:
    return ScriptedSource()


@pytest.fixture
def memory_source() -> MemoryRecordSource:
    return MemoryRecordSource(demo_entries(), page_size=PAGE_SIZE)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "roster"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection(test_dsn: str) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped database connection for integration tests.

    Skips tests if database is not available.
    """
    try:
        conn = psycopg.connect(test_dsn, connect_timeout=5)
    except psycopg.OperationalError:
        pytest.skip("Database not available for integration tests")

    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="session")
def db_schema_initialized(db_connection: psycopg.Connection) -> bool:
    """
    Ensure the children table exists by running db/init.sql.
    """
    init_sql_path = Path(__file__).parent.parent / "db" / "init.sql"
    with db_connection.cursor() as cur:
        cur.execute(init_sql_path.read_text(encoding="utf-8"))
    db_connection.commit()
    return True


@pytest.fixture
def seeded_children(
    db_connection: psycopg.Connection, db_schema_initialized: bool
) -> Generator[int, None, None]:
    """
    Seed 25 children into a truncated table and return the row count.
    """
    from scripts.generate_data import _copy_into_db, _generate_rows_csv

    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.children RESTART IDENTITY;")
    db_connection.commit()

    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "children.csv"
        _generate_rows_csv(csv_path, rows=25, seed=42)
        _copy_into_db(db_connection, csv_path)

    with db_connection.cursor() as cur:
        cur.execute("SELECT COUNT(*) FROM public.children;")
        count = cur.fetchone()[0]

    yield count

    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.children RESTART IDENTITY;")
    db_connection.commit()
