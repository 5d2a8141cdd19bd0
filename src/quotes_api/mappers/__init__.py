"""Data mappers from repository DTOs to API response schemas."""

from quotes_api.mappers.quote import (
    build_author_response,
    build_pairs_count_response,
    build_quote_response,
)


__all__ = [
    "build_author_response",
    "build_pairs_count_response",
    "build_quote_response",
]
