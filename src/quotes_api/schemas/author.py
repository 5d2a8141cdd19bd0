"""Author request and response schemas."""

from __future__ import annotations

from pydantic import Field

from quotes_api.schemas.base import APIRequest, APIResponse


class AuthorRequest(APIRequest):
    """Body for creating or renaming an author."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author name, unique ignoring case",
        examples=["Albert Einstein"],
    )


class AuthorResponse(APIResponse):
    """An author."""

    id: int = Field(..., description="Author identifier")
    name: str = Field(..., description="Author name")
