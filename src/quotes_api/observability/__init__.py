"""Observability components: logging and metrics."""

from quotes_api.observability.logging import (
    bind_context,
    clear_context,
    get_context,
    get_logger,
    logger,
    setup_logging,
)
from quotes_api.observability.metrics import PAIR_COUNT_COMPUTATIONS, setup_metrics


__all__ = [
    "PAIR_COUNT_COMPUTATIONS",
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "logger",
    "setup_logging",
    "setup_metrics",
]
