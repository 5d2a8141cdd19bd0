"""Unit tests for API dependencies."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from quotes_api.api.dependencies import (
    get_app_settings,
    get_author_service,
    get_quote_service,
    parse_sort,
)
from quotes_api.core.config import Settings
from quotes_api.core.exceptions import ServiceUnavailableException
from quotes_api.database.repositories import SortDirection


pytestmark = pytest.mark.unit


def _request(**state: object) -> MagicMock:
    request = MagicMock()
    request.app.state = SimpleNamespace(**state)
    return request


class TestParseSort:
    """Tests for parse_sort."""

    @pytest.mark.parametrize(
        ("sort", "expected"),
        [
            ("id,desc", ("id", SortDirection.DESC)),
            ("name,asc", ("name", SortDirection.ASC)),
            ("name,ASC", ("name", SortDirection.ASC)),
            ("name", ("name", SortDirection.DESC)),
            ("text,up", ("text", SortDirection.DESC)),
            (" name , asc ", ("name", SortDirection.ASC)),
            ("", ("id", SortDirection.DESC)),
            (",asc", ("id", SortDirection.ASC)),
        ],
    )
    def test_parses(self, sort: str, expected: tuple[str, SortDirection]) -> None:
        """Should split field and direction, defaulting to descending."""
        assert parse_sort(sort) == expected


class TestServiceDependencies:
    """Tests for service lookups in app state."""

    async def test_returns_author_service(self) -> None:
        """Should return the service stored in app state."""
        service = MagicMock()

        assert await get_author_service(_request(author_service=service)) is service

    async def test_missing_quote_service(self) -> None:
        """Should raise 503 when the service is missing."""
        with pytest.raises(ServiceUnavailableException) as exc_info:
            await get_quote_service(_request())

        assert exc_info.value.status_code == 503


class TestGetAppSettings:
    """Tests for get_app_settings."""

    def test_prefers_app_state(self, test_settings: Settings) -> None:
        """Should use the settings the app was created with."""
        assert get_app_settings(_request(settings=test_settings)) is test_settings

    def test_falls_back_to_cached_settings(self) -> None:
        """Should load settings when app state has none."""
        assert isinstance(get_app_settings(_request()), Settings)
