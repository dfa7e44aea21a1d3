"""Database provisioning for festival_finder: schema and search indexes."""

from festival_finder.database.schema import (
    SEARCH_INDEXES,
    create_database_schema,
    create_search_indexes,
    ensure_database_exists,
)

__all__ = [
    "SEARCH_INDEXES",
    "create_database_schema",
    "create_search_indexes",
    "ensure_database_exists",
]
