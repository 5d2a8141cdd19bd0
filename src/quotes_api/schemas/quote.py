"""Quote request and response schemas."""

from __future__ import annotations

from pydantic import Field

from quotes_api.database.schema import QUOTE_TEXT_MAX_LENGTH
from quotes_api.schemas.author import AuthorResponse
from quotes_api.schemas.base import APIRequest, APIResponse


class QuoteRequest(APIRequest):
    """Body for creating or replacing a quote.

    The author is given by name and created on first use.
    """

    text: str = Field(
        ...,
        min_length=1,
        max_length=QUOTE_TEXT_MAX_LENGTH,
        description="Quote text",
        examples=["Imagination is more important than knowledge."],
    )
    author: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author name",
        examples=["Albert Einstein"],
    )


class QuoteResponse(APIResponse):
    """A quote with its author."""

    id: int = Field(..., description="Quote identifier")
    text: str = Field(..., description="Quote text")
    author: AuthorResponse | None = Field(default=None, description="Quote author")
