"""Author service exceptions."""

from __future__ import annotations


class AuthorError(Exception):
    """Base exception for author service errors."""


class AuthorNotFoundError(AuthorError):
    """Raised when no author exists with the requested id."""

    def __init__(self, author_id: int) -> None:
        self.author_id = author_id
        super().__init__(f"Author not found with id {author_id}")


class AuthorAlreadyExistsError(AuthorError):
    """Raised when creating or renaming an author onto a taken name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Author '{name}' already exists")


class InvalidAuthorNameError(AuthorError, ValueError):
    """Raised when an author name is empty or only whitespace."""

    def __init__(self) -> None:
        super().__init__("Author name cannot be empty")
