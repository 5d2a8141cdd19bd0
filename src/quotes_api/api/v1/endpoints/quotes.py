"""Quote endpoints.

Provides:
- CRUD over quotes, with the author given by name
- GET /quotes/pairs/count/{max_length} counting quote pairs whose combined
  text length is at most max_length
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from starlette.responses import Response

from quotes_api.api.dependencies import (
    get_pair_service,
    get_quote_service,
    page_request_dependency,
)
from quotes_api.database.repositories.base import PageRequest  # noqa: TC001
from quotes_api.mappers import build_pairs_count_response, build_quote_response
from quotes_api.observability.logging import get_logger
from quotes_api.schemas import PairsCountResponse, QuoteRequest, QuoteResponse
from quotes_api.services.pairs.service import QuotePairService  # noqa: TC001
from quotes_api.services.quotes.service import QuoteService  # noqa: TC001


logger = get_logger(__name__)

router = APIRouter(prefix="/quotes", tags=["Quotes"])

_quote_page = page_request_dependency(
    lambda settings: settings.pagination.default_quote_page_size
)

QuoteId = Annotated[int, Path(description="Quote identifier")]


@router.get(
    "/pairs/count/{max_length}",
    response_model=PairsCountResponse,
    summary="Count quote pairs within a length",
    description=(
        "Count unordered pairs of distinct quotes whose text lengths add up "
        "to at most max_length characters. A negative bound yields 0."
    ),
)
async def count_quote_pairs(
    max_length: Annotated[
        int,
        Path(description="Maximum combined text length"),
    ],
    service: Annotated[QuotePairService, Depends(get_pair_service)],
) -> PairsCountResponse:
    """Count quote pairs whose combined text length fits ``max_length``."""
    result = await service.count_pairs_with_max_length(max_length)
    logger.info("Quote pairs counted", max_length=max_length, count=result.count)
    return build_pairs_count_response(result)


@router.get(
    "",
    response_model=list[QuoteResponse],
    summary="List quotes",
)
async def list_quotes(
    page: Annotated[PageRequest, Depends(_quote_page)],
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> list[QuoteResponse]:
    """Return one page of quotes with their authors."""
    quotes = await service.find_all(page)
    return [build_quote_response(quote) for quote in quotes]


@router.get(
    "/{quote_id}",
    response_model=QuoteResponse,
    summary="Get a quote",
    responses={404: {"description": "Quote not found"}},
)
async def get_quote(
    quote_id: QuoteId,
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> QuoteResponse:
    return build_quote_response(await service.find_by_id(quote_id))


@router.post(
    "",
    response_model=QuoteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a quote",
)
async def create_quote(
    body: QuoteRequest,
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> QuoteResponse:
    """Create a quote, creating its author if the name is new."""
    return build_quote_response(await service.create(body.text, body.author))


@router.put(
    "/{quote_id}",
    response_model=QuoteResponse,
    summary="Replace a quote",
    responses={404: {"description": "Quote not found"}},
)
async def update_quote(
    quote_id: QuoteId,
    body: QuoteRequest,
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> QuoteResponse:
    """Replace a quote's text and author."""
    return build_quote_response(
        await service.update(quote_id, body.text, body.author)
    )


@router.delete(
    "/{quote_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a quote",
    responses={404: {"description": "Quote not found"}},
)
async def delete_quote(
    quote_id: QuoteId,
    service: Annotated[QuoteService, Depends(get_quote_service)],
) -> Response:
    await service.delete(quote_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
