"""Health check endpoints.

Provides liveness and readiness checks for orchestrators and load balancers.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from quotes_api.api.dependencies import get_app_settings
from quotes_api.core.config import Settings  # noqa: TC001
from quotes_api.database.connection import check_database_health
from quotes_api.schemas import HealthResponse, ReadinessResponse


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Basic health check to verify the service is running.",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """Check if the service is alive.

    Does not touch the database.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Readiness check verifying the database is reachable.",
)
async def readiness_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ReadinessResponse:
    """Check if the service is ready to handle requests.

    Reports "degraded" with the database status when it is unreachable.
    """
    dependencies = await check_database_health()
    ready = all(state == "healthy" for state in dependencies.values())

    return ReadinessResponse(
        status="ready" if ready else "degraded",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
    )
