"""Fixtures for API tests.

The app is created without running its lifespan, so no database pool is
opened; services are replaced with mocks in ``app.state``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest
from starlette.testclient import TestClient

from quotes_api.factory import create_app
from quotes_api.services.authors.service import AuthorService
from quotes_api.services.pairs.service import QuotePairService
from quotes_api.services.quotes.service import QuoteService


if TYPE_CHECKING:
    from fastapi import FastAPI

    from quotes_api.core.config import Settings


@pytest.fixture
def author_service() -> MagicMock:
    return MagicMock(spec=AuthorService)


@pytest.fixture
def quote_service() -> MagicMock:
    return MagicMock(spec=QuoteService)


@pytest.fixture
def pair_service() -> MagicMock:
    return MagicMock(spec=QuotePairService)


@pytest.fixture
def app(
    test_settings: Settings,
    author_service: MagicMock,
    quote_service: MagicMock,
    pair_service: MagicMock,
) -> FastAPI:
    application = create_app(test_settings)
    application.state.author_service = author_service
    application.state.quote_service = quote_service
    application.state.pair_service = pair_service
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
