"""Failures surfaced by the search core.

The executor translates database exceptions into these two types exactly once.
Callers decide whether to retry; the HTTP layer maps them to 503 and 500.
"""


class SearchError(Exception):
    """A search request failed for an unexpected reason."""


class SearchUnavailableError(SearchError):
    """The database could not be reached in time.

    Retriable: the same request may succeed once the database or its
    connection pool recovers.
    """


class InvalidQueryError(ValueError):
    """A search query was rejected before reaching the database."""
