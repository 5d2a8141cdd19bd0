"""Command line entry point for importing a quotes dump.

Usage:
    quotes-import path/to/quotes.json [--chunk-size 5000] [--pause 0]
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from quotes_api.core.config import get_settings
from quotes_api.database.connection import close_database_pool, init_database_pool
from quotes_api.database.schema import ensure_schema
from quotes_api.importer.service import QuoteImporter
from quotes_api.observability.logging import get_logger, setup_logging
from quotes_api.services.quotes.service import QuoteService


logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for ``quotes-import``."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="quotes-import",
        description="Import quotes from a JSON array of {Id, Author, Text} objects.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=settings.importer.file_path,
        help="Path to the JSON dump (defaults to importer.file_path)",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=settings.importer.chunk_size,
        help="Quotes inserted per transaction",
    )
    parser.add_argument(
        "--pause",
        type=float,
        default=settings.importer.chunk_pause_seconds,
        help="Seconds to wait between full chunks",
    )
    return parser


async def run_import(path: str, chunk_size: int, pause: float) -> int:
    """Open the database, import ``path`` and close the pool again."""
    settings = get_settings()
    pool = await init_database_pool()
    try:
        if settings.database.create_schema:
            await ensure_schema(pool)
        importer = QuoteImporter(
            QuoteService(),
            chunk_size=chunk_size,
            chunk_pause_seconds=pause,
        )
        return await importer.import_file(path)
    finally:
        await close_database_pool()


def main(argv: list[str] | None = None) -> int:
    """Run the import; exits non-zero when no file was given."""
    settings = get_settings()
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.path:
        parser.error("no quotes file given and importer.file_path is not set")

    imported = asyncio.run(run_import(args.path, args.chunk_size, args.pause))
    logger.info("Importation completed", imported=imported)
    return 0


if __name__ == "__main__":
    sys.exit(main())
