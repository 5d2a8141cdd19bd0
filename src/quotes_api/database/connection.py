"""PostgreSQL connection pool management.

This module provides:
- Async connection pool management via asyncpg
- Connection lifecycle management via lifespan events
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg

from quotes_api.core.config import get_settings
from quotes_api.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

    from quotes_api.core.config import Settings

logger = get_logger(__name__)

# Global connection pool
_pool: Pool | None = None


async def init_database_pool(settings: Settings | None = None) -> Pool:
    """Initialize the PostgreSQL connection pool.

    Should be called during application startup (lifespan) or by the
    import command before any repository is used.

    Args:
        settings: Settings to connect with. Defaults to get_settings().

    Returns:
        The initialized pool.
    """
    global _pool  # noqa: PLW0603

    settings = settings or get_settings()

    logger.info(
        "Initializing database connection pool",
        host=settings.database.host,
        port=settings.database.port,
        database=settings.database.name,
    )

    _pool = await asyncpg.create_pool(
        host=settings.database.host,
        port=settings.database.port,
        database=settings.database.name,
        user=settings.database.user,
        password=settings.DATABASE_PASSWORD or None,
        min_size=settings.database.min_pool_size,
        max_size=settings.database.max_pool_size,
        command_timeout=settings.database.command_timeout,
        ssl=settings.database.ssl if settings.database.ssl else None,
    )

    try:
        async with _pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
        logger.info("Database connection established successfully")
    except asyncpg.PostgresError:
        logger.exception("Failed to connect to database")
        raise

    return _pool


async def close_database_pool() -> None:
    """Close the PostgreSQL connection pool.

    Should be called during application shutdown (lifespan).
    """
    global _pool  # noqa: PLW0603

    if _pool is None:
        return

    logger.info("Closing database connection pool")
    await _pool.close()
    _pool = None
    logger.info("Database connection pool closed")


def get_database_pool() -> Pool:
    """Get the database connection pool.

    Raises:
        RuntimeError: If pool is not initialized.
    """
    if _pool is None:
        msg = "Database pool not initialized. Call init_database_pool() first."
        raise RuntimeError(msg)
    return _pool


async def check_database_health() -> dict[str, str]:
    """Check health of the database connection.

    Returns:
        ``{"database": "healthy" | "unhealthy" | "not_initialized"}``
    """
    if _pool is None:
        return {"database": "not_initialized"}

    try:
        async with _pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (asyncpg.PostgresError, OSError):
        logger.warning("Database health check failed")
        return {"database": "unhealthy"}

    return {"database": "healthy"}
