# src/festival_finder/config.py

"""Centralized configuration for festival_finder.

This module provides all configuration settings including the database URL,
pool limits, pagination bounds and public URLs used throughout the
application. Every value can be overridden through an environment variable.
"""

import os


class Config:
    """Application-wide configuration settings."""

    DATABASE_URL: str = os.getenv(
        "FESTIVAL_FINDER_DATABASE_URL",
        "postgresql+asyncpg://localhost:5432/festival_finder",
    )
    """Async SQLAlchemy database URL for the events database.

    Can be overridden with FESTIVAL_FINDER_DATABASE_URL environment variable.
    """

    POOL_SIZE: int = int(os.getenv("FESTIVAL_FINDER_POOL_SIZE", "5"))
    """Number of pooled connections kept open against the database."""

    POOL_TIMEOUT: float = float(os.getenv("FESTIVAL_FINDER_POOL_TIMEOUT", "10"))
    """Seconds to wait for a free pooled connection before giving up."""

    QUERY_TIMEOUT: float = float(os.getenv("FESTIVAL_FINDER_QUERY_TIMEOUT", "15"))
    """Seconds a single count or page read may take."""

    DEFAULT_PAGE_SIZE: int = 20
    """Page size used for event search when no limit is given."""

    MAX_PAGE_SIZE: int = 100
    """Upper bound for the event search page size."""

    PEOPLE_PAGE_SIZE: int = 10
    """Page size used for teacher and musician search."""

    MAX_PEOPLE_PAGE_SIZE: int = 50
    """Upper bound for the teacher and musician search page size."""

    DEFAULT_SUGGESTION_LIMIT: int = 8
    """Number of suggestions returned per category by default."""

    MAX_SUGGESTION_LIMIT: int = 20
    """Upper bound for suggestions per category."""

    MIN_QUERY_LENGTH: int = 2
    """Shortest query accepted by people search and suggestions."""

    STORAGE_PUBLIC_URL: str = os.getenv("FESTIVAL_FINDER_STORAGE_PUBLIC_URL", "")
    """Public base URL of the image bucket.

    Stored image paths under /uploads/ are rewritten onto this base. When empty,
    stored paths are returned unchanged.
    """

    API_BASE_URL: str = os.getenv(
        "FESTIVAL_FINDER_API_URL", "http://localhost:8000/api"
    )
    """Base URL of the Festival Finder HTTP API (used by the CLI client)."""
