"""Idempotent DDL for the quotes schema."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quotes_api.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

logger = get_logger(__name__)

QUOTE_TEXT_MAX_LENGTH = 1000

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS authors (
        id BIGSERIAL PRIMARY KEY,
        name TEXT NOT NULL
    )
    """,
    """
    CREATE UNIQUE INDEX IF NOT EXISTS authors_name_lower_idx
        ON authors (LOWER(name))
    """,
    f"""
    CREATE TABLE IF NOT EXISTS quotes (
        id BIGSERIAL PRIMARY KEY,
        text VARCHAR({QUOTE_TEXT_MAX_LENGTH}) NOT NULL,
        author_id BIGINT REFERENCES authors (id) ON DELETE CASCADE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS quotes_text_length_idx
        ON quotes (LENGTH(text))
    """,
)


async def ensure_schema(pool: Pool) -> None:
    """Create the authors and quotes tables and their indexes if missing."""
    async with pool.acquire() as conn, conn.transaction():
        for statement in SCHEMA_STATEMENTS:
            await conn.execute(statement)
    logger.info("Database schema ensured", statements=len(SCHEMA_STATEMENTS))
