"""Bulk import of quotes from a JSON dump.

The dump is a JSON array of objects shaped like
``{"Id": 1, "Author": "Albert Einstein", "Text": "..."}``. Records missing
an author or text, or with text too long for the database, are skipped.
Quotes are inserted in fixed-size chunks, one transaction per chunk,
pausing between chunks to keep the database responsive while the service
is also serving traffic. A chunk the database rejects is retried quote by
quote.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Any

import orjson

from quotes_api.database.repositories.quote import NewQuote
from quotes_api.database.schema import QUOTE_TEXT_MAX_LENGTH
from quotes_api.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Iterator

    from quotes_api.services.quotes.service import QuoteService

logger = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 10_000


def parse_quote_records(records: list[Any]) -> Iterator[NewQuote]:
    """Yield importable quotes from decoded dump records, skipping bad ones."""
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning("Skipping non-object quote record", index=index)
            continue

        author = record.get("Author")
        text = record.get("Text")
        if not isinstance(author, str) or not isinstance(text, str):
            logger.warning("Skipping quote record without author or text", index=index)
            continue
        if not author.strip() or not text.strip():
            logger.warning("Empty text or author in quote", index=index)
            continue
        if len(text) > QUOTE_TEXT_MAX_LENGTH:
            logger.warning(
                "Skipping quote longer than the text column",
                index=index,
                length=len(text),
                max_length=QUOTE_TEXT_MAX_LENGTH,
            )
            continue

        yield NewQuote(text=text, author=author.strip())


class QuoteImporter:
    """Import quotes from a JSON dump through ``QuoteService.create_batch``."""

    def __init__(
        self,
        quote_service: QuoteService,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_pause_seconds: float = 1.0,
    ) -> None:
        if chunk_size <= 0:
            msg = f"chunk_size must be positive, got {chunk_size}"
            raise ValueError(msg)
        self._quotes = quote_service
        self._chunk_size = chunk_size
        self._chunk_pause = chunk_pause_seconds

    async def import_file(self, path: str | Path) -> int:
        """Import every valid quote in the dump at ``path``.

        Returns:
            Number of quotes imported. An unreadable or malformed file
            imports nothing and returns 0.
        """
        path = Path(path)
        try:
            records = orjson.loads(await asyncio.to_thread(path.read_bytes))
        except OSError:
            logger.exception("Failed to read quotes file", path=str(path))
            return 0
        except orjson.JSONDecodeError:
            logger.exception("Quotes file is not valid JSON", path=str(path))
            return 0

        if not isinstance(records, list):
            logger.error("Quotes file must contain a JSON array", path=str(path))
            return 0

        logger.info("Importing quotes", path=str(path), records=len(records))
        imported = await self.import_quotes(parse_quote_records(records))
        logger.info("Import completed", path=str(path), imported=imported)
        return imported

    async def import_quotes(self, quotes: Iterator[NewQuote]) -> int:
        """Insert ``quotes`` chunk by chunk; returns how many were stored.

        A chunk that fails to insert is retried one quote at a time, so
        only the quotes the database rejects are lost.
        """
        imported = 0
        buffer: list[NewQuote] = []

        for quote in quotes:
            buffer.append(quote)
            if len(buffer) >= self._chunk_size:
                imported += await self._flush(buffer)
                buffer = []
                logger.info("Processed quote chunk", imported_so_far=imported)
                if self._chunk_pause:
                    await asyncio.sleep(self._chunk_pause)

        if buffer:
            imported += await self._flush(buffer)

        return imported

    async def _flush(self, chunk: list[NewQuote]) -> int:
        try:
            return await self._quotes.create_batch(chunk)
        except Exception:
            logger.exception("Failed to import quote chunk", size=len(chunk))

        if len(chunk) == 1:
            return 0
        logger.info("Retrying failed chunk quote by quote", size=len(chunk))
        imported = 0
        for quote in chunk:
            imported += await self._flush([quote])
        return imported
