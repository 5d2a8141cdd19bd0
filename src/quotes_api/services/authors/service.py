"""Author service: CRUD over authors plus find-or-create by name."""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg

from quotes_api.database.repositories.author import AuthorData, AuthorRepository
from quotes_api.observability.logging import get_logger
from quotes_api.services.authors.exceptions import (
    AuthorAlreadyExistsError,
    AuthorNotFoundError,
    InvalidAuthorNameError,
)


if TYPE_CHECKING:
    from quotes_api.database.repositories.base import PageRequest

logger = get_logger(__name__)


def normalize_author_name(name: str | None) -> str:
    """Trim an author name, rejecting blank ones.

    Raises:
        InvalidAuthorNameError: If the name is None, empty or whitespace.
    """
    if name is None or not name.strip():
        raise InvalidAuthorNameError
    return name.strip()


class AuthorService:
    """Service for managing authors."""

    def __init__(self, repository: AuthorRepository | None = None) -> None:
        self._repository = repository or AuthorRepository()

    async def find_all(self, page: PageRequest) -> list[AuthorData]:
        """Return one page of authors."""
        return await self._repository.find_all(page)

    async def find_by_id(self, author_id: int) -> AuthorData:
        """Return an author.

        Raises:
            AuthorNotFoundError: If the author does not exist.
        """
        author = await self._repository.get(author_id)
        if author is None:
            raise AuthorNotFoundError(author_id)
        return author

    async def create(self, name: str) -> AuthorData:
        """Create an author.

        Raises:
            InvalidAuthorNameError: If the name is blank.
            AuthorAlreadyExistsError: If the name is taken (ignoring case).
        """
        clean = normalize_author_name(name)
        try:
            author = await self._repository.create(clean)
        except asyncpg.UniqueViolationError:
            raise AuthorAlreadyExistsError(clean) from None
        logger.info("Author created", author_id=author.id)
        return author

    async def update(self, author_id: int, name: str) -> AuthorData:
        """Rename an author.

        Raises:
            InvalidAuthorNameError: If the name is blank.
            AuthorNotFoundError: If the author does not exist.
            AuthorAlreadyExistsError: If another author holds the name.
        """
        clean = normalize_author_name(name)
        try:
            author = await self._repository.update(author_id, clean)
        except asyncpg.UniqueViolationError:
            raise AuthorAlreadyExistsError(clean) from None
        if author is None:
            raise AuthorNotFoundError(author_id)
        return author

    async def delete(self, author_id: int) -> None:
        """Delete an author and their quotes.

        Raises:
            AuthorNotFoundError: If the author does not exist.
        """
        if not await self._repository.delete(author_id):
            raise AuthorNotFoundError(author_id)
        logger.info("Author deleted", author_id=author_id)

    async def find_or_create_by_name(self, name: str | None) -> AuthorData:
        """Return the author with this name (ignoring case), creating it if new.

        Raises:
            InvalidAuthorNameError: If the name is blank.
        """
        return await self._repository.find_or_create_by_name(
            normalize_author_name(name)
        )
