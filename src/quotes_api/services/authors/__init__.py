"""Author service package."""

from quotes_api.services.authors.exceptions import (
    AuthorAlreadyExistsError,
    AuthorError,
    AuthorNotFoundError,
    InvalidAuthorNameError,
)
from quotes_api.services.authors.service import AuthorService, normalize_author_name


__all__ = [
    "AuthorAlreadyExistsError",
    "AuthorError",
    "AuthorNotFoundError",
    "AuthorService",
    "InvalidAuthorNameError",
    "normalize_author_name",
]
