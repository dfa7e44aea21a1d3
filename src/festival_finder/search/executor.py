"""Paginated query execution.

Runs the count and page reads for a search, each bounded by a timeout, and
translates database failures into festival_finder.errors types.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator

from sqlalchemy import ColumnElement, Row, Select, func, select
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from festival_finder.errors import SearchError, SearchUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class PageResult:
    """Total match count and the rows of one page."""

    total: int
    rows: list[Row] = field(default_factory=list)


@asynccontextmanager
async def translate_errors() -> AsyncIterator[None]:
    """Re-raise database failures as SearchUnavailableError or SearchError.

    Database exceptions are translated here and nowhere else. Cancellation and
    non-database exceptions propagate unchanged; the HTTP layer answers the
    latter with a generic 500 error envelope (see api.app).
    """
    try:
        yield
    except (asyncio.TimeoutError, sa_exc.TimeoutError) as e:
        logger.warning(f"Database read timed out: {e!r}")
        raise SearchUnavailableError("Database did not respond in time") from e
    except (sa_exc.OperationalError, sa_exc.InterfaceError) as e:
        logger.warning(f"Database unavailable: {e}")
        raise SearchUnavailableError("Database is unavailable") from e
    except sa_exc.DBAPIError as e:
        if e.connection_invalidated:
            logger.warning(f"Database connection lost: {e}")
            raise SearchUnavailableError("Database connection was lost") from e
        logger.error(f"Database error: {e}")
        raise SearchError(str(e)) from e
    except sa_exc.SQLAlchemyError as e:
        logger.error(f"Query failed: {e}")
        raise SearchError(str(e)) from e
    except (ConnectionError, OSError) as e:
        logger.warning(f"Could not connect to database: {e}")
        raise SearchUnavailableError("Database is unreachable") from e


def count_statement(entity: Any, predicate: ColumnElement[bool]) -> Select:
    """Build SELECT count(*) FROM entity WHERE predicate."""
    return select(func.count()).select_from(entity).where(predicate)


async def fetch_page(
    sessionmaker: async_sessionmaker[AsyncSession],
    statement: Select,
    count: Select,
    limit: int,
    offset: int,
    timeout: float | None = None,
) -> PageResult:
    """Count matching rows and fetch one page of them.

    The count and page are independent reads in one short-lived session; no
    snapshot is shared between them. The page read is skipped when nothing
    matches or the offset lies past the last row.

    Args:
        sessionmaker: Factory for the session used by this call.
        statement: Filtered and ordered SELECT without LIMIT/OFFSET.
        count: Matching count statement.
        limit: Maximum rows to return.
        offset: Rows to skip.
        timeout: Seconds each read may take. None disables the bound.

    Returns:
        PageResult with the total and at most `limit` rows.

    Raises:
        SearchUnavailableError: If the database is unreachable or too slow.
        SearchError: For any other database failure.
    """
    async with translate_errors():
        async with sessionmaker() as session:
            total = await asyncio.wait_for(session.scalar(count), timeout)
            total = int(total or 0)
            if total == 0 or offset >= total:
                return PageResult(total=total)

            paged = statement.limit(limit).offset(offset)
            result = await asyncio.wait_for(session.execute(paged), timeout)
            return PageResult(total=total, rows=list(result.all()))
