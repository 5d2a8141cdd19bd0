"""Shared repository plumbing: pool access, paging and sorting."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from quotes_api.database.connection import get_database_pool


if TYPE_CHECKING:
    from collections.abc import Mapping

    from asyncpg import Pool


class SortDirection(StrEnum):
    """Sort direction for paged queries."""

    ASC = "asc"
    DESC = "desc"


class PageRequest(BaseModel):
    """Zero-based page request with a single sort key."""

    page: int = Field(default=0, ge=0)
    size: int = Field(default=10, gt=0)
    sort_field: str = "id"
    direction: SortDirection = SortDirection.DESC

    @property
    def offset(self) -> int:
        """Number of rows to skip."""
        return self.page * self.size


class InvalidSortFieldError(ValueError):
    """Raised when a page request sorts by a column that is not exposed."""

    def __init__(self, field: str, allowed: list[str]) -> None:
        self.field = field
        self.allowed = allowed
        super().__init__(
            f"Cannot sort by '{field}'. Allowed fields: {', '.join(allowed)}"
        )


class BaseRepository:
    """Repository base holding an optional explicit asyncpg pool.

    ``SORTABLE_COLUMNS`` maps public sort field names to SQL column
    expressions; it is the only way user input reaches an ORDER BY clause.
    """

    SORTABLE_COLUMNS: Mapping[str, str] = {}

    def __init__(self, pool: Pool | None = None) -> None:
        """Initialize repository with optional connection pool.

        Args:
            pool: asyncpg connection pool. If None, uses global pool.
        """
        self._pool = pool

    @property
    def pool(self) -> Pool:
        """Get the database connection pool."""
        if self._pool is not None:
            return self._pool
        return get_database_pool()

    def order_by(self, page: PageRequest) -> str:
        """Build a safe ORDER BY clause for ``page``.

        Raises:
            InvalidSortFieldError: If the sort field is not whitelisted.
        """
        column = self.SORTABLE_COLUMNS.get(page.sort_field)
        if column is None:
            raise InvalidSortFieldError(page.sort_field, sorted(self.SORTABLE_COLUMNS))
        direction = "ASC" if page.direction == SortDirection.ASC else "DESC"
        return f"ORDER BY {column} {direction}"
