"""Quote service package."""

from quotes_api.services.quotes.exceptions import (
    InvalidQuoteTextError,
    QuoteError,
    QuoteNotFoundError,
)
from quotes_api.services.quotes.service import QuoteService


__all__ = [
    "InvalidQuoteTextError",
    "QuoteError",
    "QuoteNotFoundError",
    "QuoteService",
]
