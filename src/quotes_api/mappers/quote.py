"""Mappers from repository DTOs to API response schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quotes_api.schemas import AuthorResponse, PairsCountResponse, QuoteResponse


if TYPE_CHECKING:
    from quotes_api.database.repositories import AuthorData, QuoteData
    from quotes_api.services.pairs import PairsCount


def build_author_response(author: AuthorData) -> AuthorResponse:
    """Map an author row to its API representation."""
    return AuthorResponse(id=author.id, name=author.name)


def build_quote_response(quote: QuoteData) -> QuoteResponse:
    """Map a quote row (with its author, if any) to its API representation."""
    return QuoteResponse(
        id=quote.id,
        text=quote.text,
        author=build_author_response(quote.author) if quote.author else None,
    )


def build_pairs_count_response(result: PairsCount) -> PairsCountResponse:
    """Map a pair count result to the ``{count, maxLength}`` payload."""
    return PairsCountResponse(count=result.count, max_length=result.max_length)
