"""Logging configuration for festival_finder entry points."""

import logging

from rich.logging import RichHandler


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger with a Rich handler.

    Args:
        verbose: Log at DEBUG level instead of INFO.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # SQL echo is only useful when explicitly debugging queries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
