"""Database repositories."""

from quotes_api.database.repositories.author import AuthorData, AuthorRepository
from quotes_api.database.repositories.base import (
    InvalidSortFieldError,
    PageRequest,
    SortDirection,
)
from quotes_api.database.repositories.quote import NewQuote, QuoteData, QuoteRepository


__all__ = [
    "AuthorData",
    "AuthorRepository",
    "InvalidSortFieldError",
    "NewQuote",
    "PageRequest",
    "QuoteData",
    "QuoteRepository",
    "SortDirection",
]
