"""PostgreSQL database layer.

This module provides:
- Connection pool management
- Schema bootstrap
- Repository classes for data access
"""

from quotes_api.database.connection import (
    check_database_health,
    close_database_pool,
    get_database_pool,
    init_database_pool,
)
from quotes_api.database.schema import ensure_schema


__all__ = [
    "check_database_health",
    "close_database_pool",
    "ensure_schema",
    "get_database_pool",
    "init_database_pool",
]
