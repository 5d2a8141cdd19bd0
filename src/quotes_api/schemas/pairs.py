"""Pair count response schema."""

from __future__ import annotations

from pydantic import Field

from quotes_api.schemas.base import APIResponse


class PairsCountResponse(APIResponse):
    """Number of quote pairs whose combined text length fits ``max_length``."""

    count: int = Field(..., ge=0, description="Number of unordered quote pairs")
    max_length: int = Field(
        ...,
        description="Maximum combined text length the count was computed for",
    )
