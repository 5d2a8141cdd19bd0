"""Unit tests for the quotes-import command."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from quotes_api.importer import cli


pytestmark = pytest.mark.unit


class TestBuildParser:
    """Tests for build_parser."""

    def test_defaults_come_from_settings(self) -> None:
        """Should default chunking options to the importer settings."""
        args = cli.build_parser().parse_args(["quotes.json"])

        assert args.path == "quotes.json"
        assert args.chunk_size == 10_000
        # test environment disables the pause
        assert args.pause == 0

    def test_overrides(self) -> None:
        """Should accept explicit chunk size and pause."""
        args = cli.build_parser().parse_args(
            ["dump.json", "--chunk-size", "500", "--pause", "2.5"]
        )

        assert args.chunk_size == 500
        assert args.pause == 2.5


class TestMain:
    """Tests for main."""

    def test_requires_a_path(self) -> None:
        """Should exit with a usage error when no file is configured."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        assert exc_info.value.code == 2

    def test_runs_import(self) -> None:
        """Should run the import with the parsed options."""
        with patch.object(
            cli, "run_import", new_callable=AsyncMock, return_value=3
        ) as mock_run:
            assert cli.main(["dump.json", "--chunk-size", "5", "--pause", "0"]) == 0

        mock_run.assert_awaited_once_with("dump.json", 5, 0.0)


class TestRunImport:
    """Tests for run_import."""

    async def test_opens_and_closes_pool(self) -> None:
        """Should ensure the schema, import and close the pool."""
        pool = MagicMock()
        importer = MagicMock()
        importer.import_file = AsyncMock(return_value=4)

        with (
            patch.object(
                cli, "init_database_pool", new_callable=AsyncMock, return_value=pool
            ),
            patch.object(cli, "ensure_schema", new_callable=AsyncMock) as mock_schema,
            patch.object(
                cli, "close_database_pool", new_callable=AsyncMock
            ) as mock_close,
            patch.object(
                cli, "QuoteImporter", return_value=importer
            ) as mock_importer,
        ):
            imported = await cli.run_import("dump.json", 100, 0.0)

        assert imported == 4
        mock_schema.assert_awaited_once_with(pool)
        mock_importer.assert_called_once()
        assert mock_importer.call_args.kwargs == {
            "chunk_size": 100,
            "chunk_pause_seconds": 0.0,
        }
        mock_close.assert_awaited_once()

    async def test_closes_pool_on_failure(self) -> None:
        """Should close the pool when schema creation fails."""
        with (
            patch.object(
                cli,
                "init_database_pool",
                new_callable=AsyncMock,
                return_value=MagicMock(),
            ),
            patch.object(
                cli,
                "ensure_schema",
                new_callable=AsyncMock,
                side_effect=OSError("down"),
            ),
            patch.object(
                cli, "close_database_pool", new_callable=AsyncMock
            ) as mock_close,
            pytest.raises(OSError, match="down"),
        ):
            await cli.run_import("dump.json", 100, 0.0)

        mock_close.assert_awaited_once()
