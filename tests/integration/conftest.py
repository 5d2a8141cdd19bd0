"""Integration test fixtures.

Provides a real PostgreSQL via testcontainers, started once per session.
Each test gets a fresh pool on an empty schema.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from testcontainers.postgres import PostgresContainer

import quotes_api.database.connection as db_module
from quotes_api.database.connection import close_database_pool, init_database_pool
from quotes_api.database.schema import ensure_schema


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator

    from asyncpg import Pool

    from quotes_api.core.config import Settings


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer]:
    """Start a PostgreSQL container for the test session."""
    with PostgresContainer("postgres:16-alpine") as postgres:
        yield postgres


@pytest.fixture
def postgres_settings(
    test_settings: Settings, postgres_container: PostgresContainer
) -> Settings:
    """Test settings pointing at the container."""
    test_settings.database.host = postgres_container.get_container_host_ip()
    test_settings.database.port = int(postgres_container.get_exposed_port(5432))
    test_settings.database.name = postgres_container.dbname
    test_settings.database.user = postgres_container.username
    test_settings.DATABASE_PASSWORD = postgres_container.password
    return test_settings


@pytest.fixture
async def pool(postgres_settings: Settings) -> AsyncGenerator[Pool]:
    """Connection pool on an empty schema."""
    db_module._pool = None
    db_pool = await init_database_pool(postgres_settings)
    await ensure_schema(db_pool)
    async with db_pool.acquire() as conn:
        await conn.execute("TRUNCATE quotes, authors RESTART IDENTITY CASCADE")
    try:
        yield db_pool
    finally:
        await close_database_pool()
