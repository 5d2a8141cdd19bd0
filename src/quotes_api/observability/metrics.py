"""Prometheus metrics instrumentation.

This module provides:
- FastAPI automatic request metrics, labelled by route template
- A counter for quote pair computations, by strategy
- Metrics endpoint configuration under the API prefix
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from quotes_api.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from quotes_api.core.config import Settings

logger = get_logger(__name__)

METRIC_NAMESPACE = "quotes"

PAIR_COUNT_COMPUTATIONS = Counter(
    "pair_count_computations_total",
    "Quote pair counts computed, by strategy",
    labelnames=("strategy",),
    namespace=METRIC_NAMESPACE,
)


def setup_metrics(app: FastAPI, settings: Settings) -> Instrumentator:
    """Configure Prometheus metrics instrumentation.

    Sets up automatic HTTP request metrics collection including:
    - Request count by method, handler and grouped status code
    - Request duration histogram
    - Request/response size
    - Requests in progress gauge

    Args:
        app: The FastAPI application instance.
        settings: Application settings.

    Returns:
        Configured Instrumentator instance.
    """
    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return Instrumentator()

    prefix = settings.api.v1_prefix
    metrics_endpoint = f"{prefix}/metrics"

    # Enablement comes from settings, not from an environment variable
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_respect_env_var=False,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[
            f"{prefix}/health",
            f"{prefix}/ready",
            metrics_endpoint,
            "/openapi.json",
            "/docs",
            "/redoc",
        ],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
    )

    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            should_only_respect_2xx_for_highr=False,
        )
    )
    instrumentator.add(
        metrics.request_size(
            should_include_handler=True,
            should_include_method=True,
            should_include_status=True,
            metric_namespace=METRIC_NAMESPACE,
        )
    )
    instrumentator.add(
        metrics.response_size(
            should_include_handler=True,
            should_include_method=True,
            should_include_status=True,
            metric_namespace=METRIC_NAMESPACE,
        )
    )

    instrumentator.instrument(app)
    instrumentator.expose(
        app,
        endpoint=metrics_endpoint,
        include_in_schema=True,
        tags=["Monitoring"],
    )

    logger.info("Prometheus metrics configured", endpoint=metrics_endpoint)
    return instrumentator


__all__ = ["PAIR_COUNT_COMPUTATIONS", "setup_metrics"]
