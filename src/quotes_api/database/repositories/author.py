"""Author data repository.

Raw asyncpg queries against the ``authors`` table. Author names are unique
case-insensitively (enforced by ``authors_name_lower_idx``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from quotes_api.database.repositories.base import BaseRepository
from quotes_api.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Connection, Record

    from quotes_api.database.repositories.base import PageRequest

logger = get_logger(__name__)


class AuthorData(BaseModel):
    """Data transfer object for an author row."""

    id: int
    name: str


_FIND_BY_NAME_QUERY = "SELECT id, name FROM authors WHERE LOWER(name) = LOWER($1)"

_INSERT_IF_ABSENT_QUERY = """
    INSERT INTO authors (name) VALUES ($1)
    ON CONFLICT ((LOWER(name))) DO NOTHING
    RETURNING id, name
"""


class AuthorRepository(BaseRepository):
    """Repository for author data access."""

    SORTABLE_COLUMNS = {"id": "id", "name": "name"}

    async def find_all(self, page: PageRequest) -> list[AuthorData]:
        """Return one page of authors."""
        query = (
            f"SELECT id, name FROM authors {self.order_by(page)} LIMIT $1 OFFSET $2"
        )
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query, page.size, page.offset)
        return [self._row_to_author_data(row) for row in rows]

    async def get(self, author_id: int) -> AuthorData | None:
        """Return the author with ``author_id`` or None."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT id, name FROM authors WHERE id = $1", author_id
            )
        return self._row_to_author_data(row) if row else None

    async def exists(self, author_id: int) -> bool:
        """Check whether an author row exists."""
        async with self.pool.acquire() as conn:
            found = await conn.fetchval(
                "SELECT EXISTS (SELECT 1 FROM authors WHERE id = $1)", author_id
            )
        return bool(found)

    async def create(self, name: str) -> AuthorData:
        """Insert a new author.

        Raises:
            asyncpg.UniqueViolationError: If the name is already taken.
        """
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "INSERT INTO authors (name) VALUES ($1) RETURNING id, name", name
            )
        return self._row_to_author_data(row)

    async def update(self, author_id: int, name: str) -> AuthorData | None:
        """Rename an author; returns None when the author does not exist."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "UPDATE authors SET name = $2 WHERE id = $1 RETURNING id, name",
                author_id,
                name,
            )
        return self._row_to_author_data(row) if row else None

    async def delete(self, author_id: int) -> bool:
        """Delete an author (and, by cascade, their quotes)."""
        async with self.pool.acquire() as conn:
            deleted = await conn.fetchval(
                "DELETE FROM authors WHERE id = $1 RETURNING id", author_id
            )
        return deleted is not None

    async def find_by_name_ignore_case(self, name: str) -> AuthorData | None:
        """Look an author up by name, ignoring case."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(_FIND_BY_NAME_QUERY, name)
        return self._row_to_author_data(row) if row else None

    async def find_or_create_by_name(
        self,
        name: str,
        conn: Connection | None = None,
    ) -> AuthorData:
        """Return the author named ``name``, inserting it when missing.

        Args:
            name: Author name, already trimmed and non-empty.
            conn: Connection to reuse, e.g. inside a batch transaction.
        """
        if conn is None:
            async with self.pool.acquire() as acquired:
                return await self._find_or_create(acquired, name)
        return await self._find_or_create(conn, name)

    async def _find_or_create(self, conn: Connection, name: str) -> AuthorData:
        row = await conn.fetchrow(_FIND_BY_NAME_QUERY, name)
        if row is None:
            row = await conn.fetchrow(_INSERT_IF_ABSENT_QUERY, name)
            if row is None:
                # Lost a race with a concurrent insert of the same name
                row = await conn.fetchrow(_FIND_BY_NAME_QUERY, name)
            else:
                logger.debug("Created author", author_id=row["id"], name=name)
        return self._row_to_author_data(row)

    @staticmethod
    def _row_to_author_data(row: Record) -> AuthorData:
        return AuthorData(id=row["id"], name=row["name"])
