"""Quote service: CRUD over quotes, resolving authors by name."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quotes_api.database.repositories.quote import NewQuote, QuoteData, QuoteRepository
from quotes_api.observability.logging import get_logger
from quotes_api.services.authors.service import AuthorService, normalize_author_name
from quotes_api.services.quotes.exceptions import (
    InvalidQuoteTextError,
    QuoteNotFoundError,
)


if TYPE_CHECKING:
    from collections.abc import Sequence

    from quotes_api.database.repositories.base import PageRequest

logger = get_logger(__name__)


def _require_text(text: str | None) -> str:
    if text is None or not text.strip():
        raise InvalidQuoteTextError
    return text


class QuoteService:
    """Service for managing quotes.

    Authors are referenced by name; creating or updating a quote attaches it
    to the existing author with that name (ignoring case) or a new one.
    """

    def __init__(
        self,
        repository: QuoteRepository | None = None,
        author_service: AuthorService | None = None,
    ) -> None:
        self._repository = repository or QuoteRepository()
        self._authors = author_service or AuthorService()

    async def find_all(self, page: PageRequest) -> list[QuoteData]:
        """Return one page of quotes."""
        return await self._repository.find_all(page)

    async def find_by_id(self, quote_id: int) -> QuoteData:
        """Return a quote.

        Raises:
            QuoteNotFoundError: If the quote does not exist.
        """
        quote = await self._repository.get(quote_id)
        if quote is None:
            raise QuoteNotFoundError(quote_id)
        return quote

    async def create(self, text: str, author: str) -> QuoteData:
        """Create a quote.

        Raises:
            InvalidQuoteTextError: If the text is blank.
            InvalidAuthorNameError: If the author name is blank.
        """
        text = _require_text(text)
        author_data = await self._authors.find_or_create_by_name(author)
        quote = await self._repository.create(text, author_data.id)
        logger.info("Quote created", quote_id=quote.id, author_id=author_data.id)
        return quote

    async def update(self, quote_id: int, text: str, author: str) -> QuoteData:
        """Replace a quote's text and author.

        Raises:
            QuoteNotFoundError: If the quote does not exist.
            InvalidQuoteTextError: If the text is blank.
            InvalidAuthorNameError: If the author name is blank.
        """
        text = _require_text(text)
        if not await self._repository.exists(quote_id):
            raise QuoteNotFoundError(quote_id)

        author_data = await self._authors.find_or_create_by_name(author)
        quote = await self._repository.update(quote_id, text, author_data.id)
        if quote is None:
            # Deleted between the existence check and the update
            raise QuoteNotFoundError(quote_id)
        return quote

    async def delete(self, quote_id: int) -> None:
        """Delete a quote.

        Raises:
            QuoteNotFoundError: If the quote does not exist.
        """
        if not await self._repository.delete(quote_id):
            raise QuoteNotFoundError(quote_id)
        logger.info("Quote deleted", quote_id=quote_id)

    async def create_batch(self, quotes: Sequence[NewQuote]) -> int:
        """Insert many quotes in a single transaction.

        Text and author names must already be validated; author names are
        trimmed here.

        Returns:
            Number of quotes inserted.
        """
        cleaned = [
            NewQuote(text=quote.text, author=normalize_author_name(quote.author))
            for quote in quotes
        ]
        return await self._repository.create_batch(cleaned)
