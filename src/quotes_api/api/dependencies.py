"""FastAPI dependencies for service access and pagination.

Services are built during application startup and stored in ``app.state``;
these dependencies hand them to route handlers and fail with 503 while
they are missing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Query, Request

from quotes_api.core.config import Settings, get_settings
from quotes_api.core.exceptions import BadRequestException, ServiceUnavailableException
from quotes_api.database.repositories.base import PageRequest, SortDirection


if TYPE_CHECKING:
    from collections.abc import Callable

    from quotes_api.services.authors.service import AuthorService
    from quotes_api.services.pairs.service import QuotePairService
    from quotes_api.services.quotes.service import QuoteService


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings or get_settings()


async def get_author_service(request: Request) -> AuthorService:
    """Get the author service from app state.

    Raises:
        ServiceUnavailableException: 503 if the service is not initialized.
    """
    service: AuthorService | None = getattr(request.app.state, "author_service", None)
    if service is None:
        raise ServiceUnavailableException("Author service not available")
    return service


async def get_quote_service(request: Request) -> QuoteService:
    """Get the quote service from app state.

    Raises:
        ServiceUnavailableException: 503 if the service is not initialized.
    """
    service: QuoteService | None = getattr(request.app.state, "quote_service", None)
    if service is None:
        raise ServiceUnavailableException("Quote service not available")
    return service


async def get_pair_service(request: Request) -> QuotePairService:
    """Get the quote pair counting service from app state."""
    service: QuotePairService | None = getattr(
        request.app.state, "pair_service", None
    )
    if service is None:
        raise ServiceUnavailableException("Quote pair service not available")
    return service


def parse_sort(sort: str) -> tuple[str, SortDirection]:
    """Parse ``field[,direction]``; any direction other than asc sorts descending."""
    parts = [part.strip() for part in sort.split(",")]
    field = parts[0] or "id"
    direction = SortDirection.DESC
    if len(parts) > 1 and parts[1].lower() == SortDirection.ASC:
        direction = SortDirection.ASC
    return field, direction


def page_request_dependency(
    default_size: Callable[[Settings], int],
) -> Callable[..., PageRequest]:
    """Build a dependency parsing ``page``, ``size`` and ``sort`` query params.

    Args:
        default_size: Picks the page size from settings when the client
            does not send one.
    """

    def _page_request(
        request: Request,
        page: Annotated[int, Query(ge=0, description="Zero-based page index")] = 0,
        size: Annotated[
            int | None, Query(ge=1, description="Number of items per page")
        ] = None,
        sort: Annotated[
            str,
            Query(
                description="Sorting criteria in the format property,direction",
                examples=["id,desc"],
            ),
        ] = "id,desc",
    ) -> PageRequest:
        settings = get_app_settings(request)
        if size is None:
            size = default_size(settings)
        max_size = settings.pagination.max_page_size
        if size > max_size:
            raise BadRequestException(
                f"Page size must not exceed {max_size}",
                error="INVALID_PAGE_SIZE",
            )
        field, direction = parse_sort(sort)
        return PageRequest(page=page, size=size, sort_field=field, direction=direction)

    return _page_request
