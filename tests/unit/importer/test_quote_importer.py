"""Unit tests for the bulk quote importer.

Tests cover:
- Record parsing and skipping of unusable records
- Chunked insertion and pauses between chunks
- Unreadable and malformed files
- Failing chunks
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock, patch

import orjson
import pytest

from quotes_api.database.repositories import NewQuote
from quotes_api.database.schema import QUOTE_TEXT_MAX_LENGTH
from quotes_api.importer import QuoteImporter, parse_quote_records


if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_quote_service() -> MagicMock:
    """Create a quote service whose batches always succeed."""
    service = MagicMock()
    service.create_batch = AsyncMock(side_effect=lambda quotes: len(quotes))
    return service


def _write_dump(path: Path, records: object) -> Path:
    path.write_bytes(orjson.dumps(records))
    return path


def _records(count: int) -> list[dict[str, object]]:
    return [
        {"Id": index, "Author": f"Author {index % 3}", "Text": f"Quote {index}"}
        for index in range(count)
    ]


class TestParseQuoteRecords:
    """Tests for parse_quote_records."""

    def test_yields_valid_records(self) -> None:
        """Should turn dump objects into NewQuote items."""
        records = [{"Id": 1, "Author": " Rumi ", "Text": "Be a lamp."}]

        assert list(parse_quote_records(records)) == [
            NewQuote(text="Be a lamp.", author="Rumi")
        ]

    @pytest.mark.parametrize(
        "record",
        [
            {"Id": 1, "Author": "", "Text": "text"},
            {"Id": 1, "Author": "Rumi", "Text": "   "},
            {"Id": 1, "Text": "text"},
            {"Id": 1, "Author": "Rumi"},
            {"Id": 1, "Author": None, "Text": "text"},
            {"Id": 1, "Author": 7, "Text": "text"},
            "not an object",
            None,
        ],
    )
    def test_skips_unusable_records(self, record: object) -> None:
        """Should skip records without a usable author and text."""
        assert list(parse_quote_records([record])) == []

    def test_id_is_ignored(self) -> None:
        """Should not require or keep the dump id."""
        records = [{"Author": "Rumi", "Text": "Be a lamp."}]

        assert len(list(parse_quote_records(records))) == 1

    def test_skips_text_longer_than_column(self) -> None:
        """Should skip quotes the text column cannot hold."""
        records = [
            {"Author": "Rumi", "Text": "x" * QUOTE_TEXT_MAX_LENGTH},
            {"Author": "Rumi", "Text": "x" * (QUOTE_TEXT_MAX_LENGTH + 1)},
        ]

        quotes = list(parse_quote_records(records))

        assert [len(quote.text) for quote in quotes] == [QUOTE_TEXT_MAX_LENGTH]


class TestQuoteImporterInit:
    """Tests for importer construction."""

    @pytest.mark.parametrize("chunk_size", [0, -1])
    def test_rejects_non_positive_chunk_size(
        self, mock_quote_service: MagicMock, chunk_size: int
    ) -> None:
        """Should refuse chunk sizes that could never flush."""
        with pytest.raises(ValueError, match="chunk_size"):
            QuoteImporter(mock_quote_service, chunk_size=chunk_size)


class TestImportFile:
    """Tests for import_file."""

    async def test_imports_all_valid_records(
        self, tmp_path: Path, mock_quote_service: MagicMock
    ) -> None:
        """Should import every usable record and skip the rest."""
        records = [
            *_records(5),
            {"Id": 99, "Author": "", "Text": "orphan"},
        ]
        path = _write_dump(tmp_path / "quotes.json", records)
        importer = QuoteImporter(mock_quote_service, chunk_pause_seconds=0)

        imported = await importer.import_file(path)

        assert imported == 5
        mock_quote_service.create_batch.assert_awaited_once()

    async def test_accepts_string_path(
        self, tmp_path: Path, mock_quote_service: MagicMock
    ) -> None:
        """Should accept a plain string path."""
        path = _write_dump(tmp_path / "quotes.json", _records(2))
        importer = QuoteImporter(mock_quote_service, chunk_pause_seconds=0)

        assert await importer.import_file(str(path)) == 2

    async def test_splits_into_chunks(
        self, tmp_path: Path, mock_quote_service: MagicMock
    ) -> None:
        """Should insert one batch per chunk, the last one partial."""
        path = _write_dump(tmp_path / "quotes.json", _records(7))
        importer = QuoteImporter(
            mock_quote_service, chunk_size=3, chunk_pause_seconds=0
        )

        imported = await importer.import_file(path)

        assert imported == 7
        calls = mock_quote_service.create_batch.await_args_list
        sizes = [len(call.args[0]) for call in calls]
        assert sizes == [3, 3, 1]

    async def test_pauses_between_full_chunks(
        self, tmp_path: Path, mock_quote_service: MagicMock
    ) -> None:
        """Should sleep after each full chunk."""
        path = _write_dump(tmp_path / "quotes.json", _records(6))
        importer = QuoteImporter(
            mock_quote_service, chunk_size=3, chunk_pause_seconds=0.5
        )

        with patch(
            "quotes_api.importer.service.asyncio.sleep", new_callable=AsyncMock
        ) as mock_sleep:
            await importer.import_file(path)

        assert mock_sleep.await_count == 2
        mock_sleep.assert_awaited_with(0.5)

    async def test_missing_file_imports_nothing(
        self, tmp_path: Path, mock_quote_service: MagicMock
    ) -> None:
        """Should return 0 when the file cannot be read."""
        importer = QuoteImporter(mock_quote_service)

        assert await importer.import_file(tmp_path / "missing.json") == 0
        mock_quote_service.create_batch.assert_not_awaited()

    async def test_invalid_json_imports_nothing(
        self, tmp_path: Path, mock_quote_service: MagicMock
    ) -> None:
        """Should return 0 for a file that is not JSON."""
        path = tmp_path / "quotes.json"
        path.write_text("[{not json", encoding="utf-8")
        importer = QuoteImporter(mock_quote_service)

        assert await importer.import_file(path) == 0

    async def test_non_array_imports_nothing(
        self, tmp_path: Path, mock_quote_service: MagicMock
    ) -> None:
        """Should return 0 when the top level is not an array."""
        path = _write_dump(tmp_path / "quotes.json", {"Author": "Rumi", "Text": "x"})
        importer = QuoteImporter(mock_quote_service)

        assert await importer.import_file(path) == 0

    async def test_failed_chunk_is_retried_quote_by_quote(
        self, tmp_path: Path, mock_quote_service: MagicMock
    ) -> None:
        """Should keep the good quotes of a chunk the database rejects."""

        async def reject_poisoned(quotes: list[NewQuote]) -> int:
            if any(quote.text == "poisoned" for quote in quotes):
                msg = "value too long for type character varying(1000)"
                raise RuntimeError(msg)
            return len(quotes)

        mock_quote_service.create_batch.side_effect = reject_poisoned
        records = _records(4)
        records.insert(2, {"Id": 99, "Author": "Rumi", "Text": "poisoned"})
        path = _write_dump(tmp_path / "quotes.json", records)
        importer = QuoteImporter(
            mock_quote_service, chunk_size=10_000, chunk_pause_seconds=0
        )

        imported = await importer.import_file(path)

        assert imported == 4
        # One failed batch, then one call per quote
        assert mock_quote_service.create_batch.await_count == 6

    async def test_overlong_text_does_not_sink_its_chunk(
        self, tmp_path: Path, mock_quote_service: MagicMock
    ) -> None:
        """Should import every other quote when one text is too long."""
        records = _records(4)
        records.append(
            {"Id": 5, "Author": "Rumi", "Text": "x" * (QUOTE_TEXT_MAX_LENGTH + 1)}
        )
        path = _write_dump(tmp_path / "quotes.json", records)
        importer = QuoteImporter(
            mock_quote_service, chunk_size=10_000, chunk_pause_seconds=0
        )

        assert await importer.import_file(path) == 4
        mock_quote_service.create_batch.assert_awaited_once()

    async def test_failed_chunk_does_not_stop_import(
        self, tmp_path: Path, mock_quote_service: MagicMock
    ) -> None:
        """Should carry on with later chunks when a whole chunk fails."""
        mock_quote_service.create_batch.side_effect = [
            RuntimeError("connection lost"),
            RuntimeError("connection lost"),
            RuntimeError("connection lost"),
            2,
        ]
        path = _write_dump(tmp_path / "quotes.json", _records(4))
        importer = QuoteImporter(
            mock_quote_service, chunk_size=2, chunk_pause_seconds=0
        )

        imported = await importer.import_file(path)

        assert imported == 2
        assert mock_quote_service.create_batch.await_count == 4

    async def test_reads_file_off_the_event_loop(
        self, tmp_path: Path, mock_quote_service: MagicMock
    ) -> None:
        """Should read the dump in a worker thread."""
        path = tmp_path / "quotes.json"
        importer = QuoteImporter(mock_quote_service)

        with patch(
            "quotes_api.importer.service.asyncio.to_thread",
            new_callable=AsyncMock,
            return_value=orjson.dumps(_records(3)),
        ) as mock_to_thread:
            imported = await importer.import_file(path)

        assert imported == 3
        mock_to_thread.assert_awaited_once_with(path.read_bytes)
