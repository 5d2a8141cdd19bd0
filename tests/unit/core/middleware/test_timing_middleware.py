"""Unit tests for timing middleware."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from quotes_api.core.middleware import TimingMiddleware
from quotes_api.core.middleware.timing import SLOW_REQUEST_THRESHOLD


pytestmark = pytest.mark.unit


def _response() -> MagicMock:
    response = MagicMock()
    response.headers = {}
    return response


class TestTimingMiddleware:
    """Tests for TimingMiddleware."""

    def test_init_defaults(self) -> None:
        """Should use default header and threshold."""
        middleware = TimingMiddleware(MagicMock())

        assert middleware.header_name == "X-Process-Time"
        assert middleware.slow_threshold == SLOW_REQUEST_THRESHOLD

    async def test_adds_timing_header(self) -> None:
        """Should add the processing time in milliseconds."""
        middleware = TimingMiddleware(MagicMock())
        call_next = AsyncMock(return_value=_response())

        result = await middleware.dispatch(MagicMock(), call_next)

        assert result.headers["X-Process-Time"].endswith("ms")

    async def test_logs_slow_requests(self) -> None:
        """Should warn when a request exceeds the threshold."""
        middleware = TimingMiddleware(MagicMock(), slow_threshold=0.0)
        request = MagicMock()
        request.method = "GET"
        request.url.path = "/api/quotes/pairs/count/1000"
        call_next = AsyncMock(return_value=_response())

        with patch("quotes_api.core.middleware.timing.logger") as mock_logger:
            await middleware.dispatch(request, call_next)

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["path"] == (
            "/api/quotes/pairs/count/1000"
        )

    async def test_no_warning_for_fast_requests(self) -> None:
        """Should stay quiet under the threshold."""
        middleware = TimingMiddleware(MagicMock(), slow_threshold=60.0)
        call_next = AsyncMock(return_value=_response())

        with patch("quotes_api.core.middleware.timing.logger") as mock_logger:
            await middleware.dispatch(MagicMock(), call_next)

        mock_logger.warning.assert_not_called()
