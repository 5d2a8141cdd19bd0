"""Quote service exceptions."""

from __future__ import annotations


class QuoteError(Exception):
    """Base exception for quote service errors."""


class QuoteNotFoundError(QuoteError):
    """Raised when no quote exists with the requested id."""

    def __init__(self, quote_id: int) -> None:
        self.quote_id = quote_id
        super().__init__(f"Quote not found with id {quote_id}")


class InvalidQuoteTextError(QuoteError, ValueError):
    """Raised when quote text is blank."""

    def __init__(self) -> None:
        super().__init__("Quote text cannot be empty")
