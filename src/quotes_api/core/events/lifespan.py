"""Application lifespan event handlers.

Startup: configure logging, open the database pool, ensure the schema,
build the services and optionally kick off a bulk import.
Shutdown: stop a running import and close the pool.
"""

from __future__ import annotations

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from quotes_api.core.config import Settings, get_settings
from quotes_api.database.connection import close_database_pool, init_database_pool
from quotes_api.database.repositories.author import AuthorRepository
from quotes_api.database.repositories.quote import QuoteRepository
from quotes_api.database.schema import ensure_schema
from quotes_api.importer.service import QuoteImporter
from quotes_api.observability.logging import get_logger, setup_logging
from quotes_api.services.authors.service import AuthorService
from quotes_api.services.pairs.service import QuotePairService
from quotes_api.services.quotes.service import QuoteService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from asyncpg import Pool
    from fastapi import FastAPI

logger = get_logger(__name__)


def _init_services(app: FastAPI, pool: Pool, settings: Settings) -> None:
    """Build the services on top of ``pool`` and store them in app state."""
    author_repository = AuthorRepository(pool)
    quote_repository = QuoteRepository(pool, author_repository=author_repository)

    author_service = AuthorService(author_repository)
    app.state.author_service = author_service
    app.state.quote_service = QuoteService(quote_repository, author_service)
    app.state.pair_service = QuotePairService(
        quote_repository,
        strategy=settings.pairs.strategy,
    )
    logger.info("Services initialized", pair_strategy=settings.pairs.strategy.value)


async def _run_startup_import(quote_service: QuoteService, settings: Settings) -> int:
    importer = QuoteImporter(
        quote_service,
        chunk_size=settings.importer.chunk_size,
        chunk_pause_seconds=settings.importer.chunk_pause_seconds,
    )
    logger.info("Importing quotes at startup", path=settings.importer.file_path)
    return await importer.import_file(settings.importer.file_path or "")


async def _startup(app: FastAPI, settings: Settings) -> None:
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
    )

    # Database is critical - failures propagate and abort startup
    pool = await init_database_pool(settings)
    if settings.database.create_schema:
        await ensure_schema(pool)

    _init_services(app, pool, settings)

    app.state.import_task = None
    if settings.importer.run_on_startup and settings.importer.file_path:
        app.state.import_task = asyncio.create_task(
            _run_startup_import(app.state.quote_service, settings),
            name="startup-quote-import",
        )

    logger.info("Application startup complete")


async def _shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")

    task: asyncio.Task[int] | None = getattr(app.state, "import_task", None)
    if task is not None and not task.done():
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.warning("Startup import cancelled by shutdown")

    await close_database_pool()
    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown.

    Settings are taken from ``app.state.settings`` when the factory stored
    them there, so tests can inject their own.
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
