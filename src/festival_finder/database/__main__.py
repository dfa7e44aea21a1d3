"""Provision the events database used by the search API.

Run with `python -m festival_finder.database`:
1. Create the database if it does not exist (PostgreSQL)
2. Create tables for events, teachers, musicians and their links
3. Create the search indexes
"""

import asyncio
import logging

import click
from sqlalchemy.ext.asyncio import create_async_engine

from festival_finder.config import Config
from festival_finder.database.schema import (
    create_database_schema,
    create_search_indexes,
    ensure_database_exists,
)
from festival_finder.util import setup_logging

logger = logging.getLogger(__name__)


async def run_setup(database_url: str, indexes: bool = True) -> None:
    """Create the database, schema and indexes.

    Args:
        database_url: Async SQLAlchemy URL of the target database.
        indexes: Also create the search indexes.
    """
    await ensure_database_exists(database_url)

    engine = create_async_engine(database_url)
    try:
        await create_database_schema(engine)
        if indexes:
            created = await create_search_indexes(engine)
            logger.info(f"Ensured {len(created)} search indexes")
    finally:
        await engine.dispose()


@click.command()
@click.option(
    "--database-url",
    default=None,
    help="Database URL (defaults to FESTIVAL_FINDER_DATABASE_URL)",
)
@click.option(
    "--indexes/--no-indexes", default=True, help="Create the search indexes"
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging")
def main(database_url: str | None, indexes: bool, verbose: bool) -> None:
    """Create the Festival Finder database schema and search indexes."""
    setup_logging(verbose)
    asyncio.run(run_setup(database_url or Config.DATABASE_URL, indexes=indexes))


if __name__ == "__main__":
    main()
