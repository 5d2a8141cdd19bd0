"""Shared test fixtures and configuration for the quotes service tests.

APP_ENV is pinned to ``test`` before any settings are loaded so the
``config/environments/test`` overrides apply (metrics off, no chunk pause).
"""

from __future__ import annotations

import os


os.environ["APP_ENV"] = "test"

import contextlib  # noqa: E402
from typing import TYPE_CHECKING  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
from prometheus_client import REGISTRY  # noqa: E402

from quotes_api.core.config import Settings, get_settings  # noqa: E402


if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Drop cached settings so environment patches in a test take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Settings loaded from the test environment configuration."""
    return Settings()


@pytest.fixture
def mock_conn() -> AsyncMock:
    """Create a mock asyncpg connection.

    ``transaction()`` is a plain (sync) call returning an async context
    manager, as in asyncpg.
    """
    conn = AsyncMock()
    conn.fetchval = AsyncMock(return_value=1)
    conn.fetchrow = AsyncMock(return_value=None)
    conn.fetch = AsyncMock(return_value=[])
    conn.execute = AsyncMock(return_value="OK")
    conn.executemany = AsyncMock(return_value=None)

    transaction = MagicMock()
    transaction.__aenter__ = AsyncMock(return_value=None)
    transaction.__aexit__ = AsyncMock(return_value=None)
    conn.transaction = MagicMock(return_value=transaction)
    return conn


@pytest.fixture
def mock_pool(mock_conn: AsyncMock) -> MagicMock:
    """Create a mock asyncpg pool handing out ``mock_conn``."""
    pool = MagicMock()
    pool.close = AsyncMock()

    pool.acquire = MagicMock(return_value=AsyncMock())
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=mock_conn)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=None)

    return pool


@pytest.fixture(autouse=True)
def reset_prometheus_registry() -> Generator[None]:
    """Reset Prometheus registry between tests.

    This prevents 'Duplicated timeseries' errors when creating
    multiple app instances with metrics enabled.
    """
    collectors_before = set(REGISTRY._names_to_collectors.keys())

    yield

    collectors_to_remove = [
        collector
        for name, collector in list(REGISTRY._names_to_collectors.items())
        if name not in collectors_before
    ]
    for collector in collectors_to_remove:
        with contextlib.suppress(KeyError):
            REGISTRY.unregister(collector)
