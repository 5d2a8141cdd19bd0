"""Bulk quote import."""

from quotes_api.importer.service import QuoteImporter, parse_quote_records


__all__ = ["QuoteImporter", "parse_quote_records"]
