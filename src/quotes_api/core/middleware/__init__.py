"""Custom middleware components."""

from quotes_api.core.middleware.logging import LoggingMiddleware
from quotes_api.core.middleware.request_id import RequestIDMiddleware
from quotes_api.core.middleware.timing import TimingMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "TimingMiddleware",
]
