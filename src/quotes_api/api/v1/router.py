"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under the configured ``api.v1_prefix`` (``/api``).
"""

from __future__ import annotations

from fastapi import APIRouter

from quotes_api.api.v1.endpoints import authors, health, quotes


router = APIRouter()

router.include_router(health.router)
router.include_router(authors.router)
router.include_router(quotes.router)
