"""Quotes service: CRUD API for quotes and authors with pair analytics."""

__version__ = "0.1.0"
