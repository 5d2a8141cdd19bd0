"""Author endpoints.

Provides CRUD over authors:
- GET /authors (paged, sortable by id or name)
- GET /authors/{author_id}
- POST /authors
- PUT /authors/{author_id}
- DELETE /authors/{author_id} (also removes the author's quotes)
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from starlette.responses import Response

from quotes_api.api.dependencies import get_author_service, page_request_dependency
from quotes_api.database.repositories.base import PageRequest  # noqa: TC001
from quotes_api.mappers import build_author_response
from quotes_api.schemas import AuthorRequest, AuthorResponse
from quotes_api.services.authors.service import AuthorService  # noqa: TC001


router = APIRouter(prefix="/authors", tags=["Authors"])

_author_page = page_request_dependency(
    lambda settings: settings.pagination.default_author_page_size
)

AuthorId = Annotated[int, Path(description="Author identifier")]


@router.get(
    "",
    response_model=list[AuthorResponse],
    summary="List authors",
)
async def list_authors(
    page: Annotated[PageRequest, Depends(_author_page)],
    service: Annotated[AuthorService, Depends(get_author_service)],
) -> list[AuthorResponse]:
    """Return one page of authors."""
    authors = await service.find_all(page)
    return [build_author_response(author) for author in authors]


@router.get(
    "/{author_id}",
    response_model=AuthorResponse,
    summary="Get an author",
    responses={404: {"description": "Author not found"}},
)
async def get_author(
    author_id: AuthorId,
    service: Annotated[AuthorService, Depends(get_author_service)],
) -> AuthorResponse:
    """Return a single author."""
    return build_author_response(await service.find_by_id(author_id))


@router.post(
    "",
    response_model=AuthorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an author",
    responses={409: {"description": "An author with this name already exists"}},
)
async def create_author(
    body: AuthorRequest,
    service: Annotated[AuthorService, Depends(get_author_service)],
) -> AuthorResponse:
    """Create an author."""
    return build_author_response(await service.create(body.name))


@router.put(
    "/{author_id}",
    response_model=AuthorResponse,
    summary="Rename an author",
    responses={
        404: {"description": "Author not found"},
        409: {"description": "An author with this name already exists"},
    },
)
async def update_author(
    author_id: AuthorId,
    body: AuthorRequest,
    service: Annotated[AuthorService, Depends(get_author_service)],
) -> AuthorResponse:
    """Rename an author."""
    return build_author_response(await service.update(author_id, body.name))


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an author",
    responses={404: {"description": "Author not found"}},
)
async def delete_author(
    author_id: AuthorId,
    service: Annotated[AuthorService, Depends(get_author_service)],
) -> Response:
    """Delete an author together with their quotes."""
    await service.delete(author_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
