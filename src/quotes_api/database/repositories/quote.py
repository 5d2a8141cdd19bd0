"""Quote data repository.

Provides CRUD access to the ``quotes`` table (joined with its author), bulk
insertion for imports, and the two aggregate queries behind pair counting:
the length-frequency map and the fully pushed-down pair count.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel

from quotes_api.database.repositories.author import AuthorData, AuthorRepository
from quotes_api.database.repositories.base import BaseRepository
from quotes_api.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Sequence

    from asyncpg import Pool, Record

    from quotes_api.database.repositories.base import PageRequest

logger = get_logger(__name__)


# =============================================================================
# Data Transfer Objects
# =============================================================================


class QuoteData(BaseModel):
    """Data transfer object for a quote row and its author."""

    id: int
    text: str
    author: AuthorData | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NewQuote(BaseModel):
    """A quote to insert, with its author given by name."""

    text: str
    author: str


# =============================================================================
# Queries
# =============================================================================


_QUOTE_COLUMNS = """
    q.id,
    q.text,
    q.created_at,
    q.updated_at,
    a.id AS author_id,
    a.name AS author_name
"""

_SELECT_QUOTES = f"""
    SELECT {_QUOTE_COLUMNS}
    FROM quotes q
    LEFT JOIN authors a ON a.id = q.author_id
"""

_INSERT_QUOTE = f"""
    WITH q AS (
        INSERT INTO quotes (text, author_id) VALUES ($1, $2)
        RETURNING *
    )
    SELECT {_QUOTE_COLUMNS}
    FROM q
    LEFT JOIN authors a ON a.id = q.author_id
"""

_UPDATE_QUOTE = f"""
    WITH q AS (
        UPDATE quotes SET text = $2, author_id = $3, updated_at = now()
        WHERE id = $1
        RETURNING *
    )
    SELECT {_QUOTE_COLUMNS}
    FROM q
    LEFT JOIN authors a ON a.id = q.author_id
"""

_LENGTH_FREQUENCY_QUERY = """
    SELECT LENGTH(text) AS text_length, COUNT(*) AS frequency
    FROM quotes
    WHERE LENGTH(text) <= $1
    GROUP BY LENGTH(text)
"""

# Self-join of the frequency map on a.len <= b.len keeps each unordered
# pair of buckets once; equal buckets contribute C(f, 2).
_COUNT_POSSIBLE_PAIRS_QUERY = """
    WITH frequency_map AS (
        SELECT LENGTH(text) AS text_length, COUNT(*) AS frequency
        FROM quotes
        WHERE LENGTH(text) <= $1
        GROUP BY LENGTH(text)
    )
    SELECT SUM(
        CASE
            WHEN a.text_length = b.text_length
                THEN a.frequency * (a.frequency - 1) / 2
            ELSE a.frequency * b.frequency
        END
    ) AS total_possible_pairs
    FROM frequency_map a
    JOIN frequency_map b
        ON a.text_length <= b.text_length
        AND a.text_length + b.text_length <= $1
"""

_INSERT_QUOTE_ROW = "INSERT INTO quotes (text, author_id) VALUES ($1, $2)"


# =============================================================================
# Repository
# =============================================================================


class QuoteRepository(BaseRepository):
    """Repository for quote data access."""

    SORTABLE_COLUMNS = {
        "id": "q.id",
        "text": "q.text",
        "createdAt": "q.created_at",
        "created_at": "q.created_at",
        "updatedAt": "q.updated_at",
        "updated_at": "q.updated_at",
    }

    def __init__(
        self,
        pool: Pool | None = None,
        author_repository: AuthorRepository | None = None,
    ) -> None:
        """Initialize repository.

        Args:
            pool: asyncpg connection pool. If None, uses global pool.
            author_repository: Used to resolve authors during batch inserts.
        """
        super().__init__(pool)
        self._authors = author_repository or AuthorRepository(pool)

    async def find_all(self, page: PageRequest) -> list[QuoteData]:
        """Return one page of quotes with their authors."""
        query = f"{_SELECT_QUOTES} {self.order_by(page)} LIMIT $1 OFFSET $2"
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query, page.size, page.offset)
        return [self._row_to_quote_data(row) for row in rows]

    async def get(self, quote_id: int) -> QuoteData | None:
        """Return the quote with ``quote_id`` or None."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(f"{_SELECT_QUOTES} WHERE q.id = $1", quote_id)
        return self._row_to_quote_data(row) if row else None

    async def exists(self, quote_id: int) -> bool:
        """Check whether a quote row exists."""
        async with self.pool.acquire() as conn:
            found = await conn.fetchval(
                "SELECT EXISTS (SELECT 1 FROM quotes WHERE id = $1)", quote_id
            )
        return bool(found)

    async def create(self, text: str, author_id: int) -> QuoteData:
        """Insert a quote attributed to ``author_id``."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(_INSERT_QUOTE, text, author_id)
        return self._row_to_quote_data(row)

    async def update(
        self,
        quote_id: int,
        text: str,
        author_id: int,
    ) -> QuoteData | None:
        """Replace a quote's text and author; None when it does not exist."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(_UPDATE_QUOTE, quote_id, text, author_id)
        return self._row_to_quote_data(row) if row else None

    async def delete(self, quote_id: int) -> bool:
        """Delete a quote; returns whether a row was removed."""
        async with self.pool.acquire() as conn:
            deleted = await conn.fetchval(
                "DELETE FROM quotes WHERE id = $1 RETURNING id", quote_id
            )
        return deleted is not None

    async def create_batch(self, quotes: Sequence[NewQuote]) -> int:
        """Insert many quotes in one transaction.

        Authors are resolved case-insensitively and created on first sight;
        each distinct name hits the database once per batch.

        Returns:
            Number of quotes inserted.
        """
        if not quotes:
            return 0

        author_ids: dict[str, int] = {}
        rows: list[tuple[str, int]] = []

        async with self.pool.acquire() as conn, conn.transaction():
            for quote in quotes:
                key = quote.author.lower()
                if key not in author_ids:
                    author = await self._authors.find_or_create_by_name(
                        quote.author, conn=conn
                    )
                    author_ids[key] = author.id
                rows.append((quote.text, author_ids[key]))

            await conn.executemany(_INSERT_QUOTE_ROW, rows)

        logger.debug(
            "Inserted quote batch",
            quotes=len(rows),
            authors=len(author_ids),
        )
        return len(rows)

    async def get_length_frequency(self, max_length: int) -> dict[int, int]:
        """Count quotes per text length, for lengths up to ``max_length``."""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(_LENGTH_FREQUENCY_QUERY, max_length)
        return {int(row["text_length"]): int(row["frequency"]) for row in rows}

    async def count_possible_pairs(self, max_length: int) -> int:
        """Count quote pairs within ``max_length`` entirely in SQL."""
        async with self.pool.acquire() as conn:
            total = await conn.fetchval(_COUNT_POSSIBLE_PAIRS_QUERY, max_length)
        # SUM over an empty join is NULL; SUM(bigint) comes back as numeric
        return int(total) if total is not None else 0

    @staticmethod
    def _row_to_quote_data(row: Record) -> QuoteData:
        author = None
        if row["author_id"] is not None:
            author = AuthorData(id=row["author_id"], name=row["author_name"])
        return QuoteData(
            id=row["id"],
            text=row["text"],
            author=author,
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
