"""Schema creation and search index setup for the events database."""

import logging

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from festival_finder.models import Base

logger = logging.getLogger(__name__)

SEARCH_INDEXES: dict[str, str] = {
    "idx_events_fulltext_search": (
        "CREATE INDEX IF NOT EXISTS idx_events_fulltext_search ON events "
        "USING GIN (to_tsvector('english', "
        "COALESCE(name, '') || ' ' || COALESCE(description, '') || ' ' || "
        "COALESCE(city, '') || ' ' || COALESCE(country, '') || ' ' || "
        "COALESCE(style, '')))"
    ),
    "idx_events_city_lower": (
        "CREATE INDEX IF NOT EXISTS idx_events_city_lower ON events (LOWER(city))"
    ),
    "idx_events_country_lower": (
        "CREATE INDEX IF NOT EXISTS idx_events_country_lower "
        "ON events (LOWER(country))"
    ),
    "idx_events_from_date": (
        "CREATE INDEX IF NOT EXISTS idx_events_from_date ON events (from_date)"
    ),
}
"""PostgreSQL indexes backing event search, keyed by index name."""


async def ensure_database_exists(database_url: str) -> None:
    """Ensure the PostgreSQL database exists, creating it if necessary.

    Args:
        database_url: Full async database URL.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "postgresql":
        return

    database_name = url.database
    test_engine = create_async_engine(url, echo=False)
    try:
        async with test_engine.connect():
            logger.info(f"Database {database_name} already exists")
    except Exception as e:
        if "does not exist" not in str(e):
            raise
        logger.info(f"Database {database_name} does not exist, creating it...")

        maintenance_engine = create_async_engine(
            url.set(database="postgres"), isolation_level="AUTOCOMMIT", echo=False
        )
        try:
            async with maintenance_engine.connect() as connection:
                await connection.execute(text(f'CREATE DATABASE "{database_name}"'))
        finally:
            await maintenance_engine.dispose()
        logger.info(f"Database {database_name} created successfully")
    finally:
        await test_engine.dispose()


async def create_database_schema(engine: AsyncEngine) -> None:
    """Create database tables if they don't exist.

    Args:
        engine: SQLAlchemy async engine instance.
    """
    logger.info("Creating database schema...")
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    logger.info("Database schema created successfully")


async def create_search_indexes(engine: AsyncEngine) -> list[str]:
    """Create the event search indexes on PostgreSQL.

    Other backends are skipped since the expression indexes are
    PostgreSQL-specific.

    Args:
        engine: SQLAlchemy async engine instance.

    Returns:
        Names of the indexes that were ensured.
    """
    if engine.dialect.name != "postgresql":
        logger.info(f"Skipping search indexes on {engine.dialect.name}")
        return []

    created = []
    async with engine.begin() as connection:
        for name, statement in SEARCH_INDEXES.items():
            logger.info(f"Ensuring index {name}")
            await connection.execute(text(statement))
            created.append(name)
    return created
