"""Pydantic schemas for request/response validation."""

from quotes_api.schemas.author import AuthorRequest, AuthorResponse
from quotes_api.schemas.base import APIRequest, APIResponse
from quotes_api.schemas.health import HealthResponse, ReadinessResponse
from quotes_api.schemas.pairs import PairsCountResponse
from quotes_api.schemas.quote import QuoteRequest, QuoteResponse


__all__ = [
    "APIRequest",
    "APIResponse",
    "AuthorRequest",
    "AuthorResponse",
    "HealthResponse",
    "PairsCountResponse",
    "QuoteRequest",
    "QuoteResponse",
    "ReadinessResponse",
]
