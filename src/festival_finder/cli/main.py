"""Command-Line Interface for Festival Finder.

Provides commands to search festivals through the HTTP API and to run the
API server.
"""

import asyncio

import httpx
import typer
import uvicorn
from rich.console import Console

from festival_finder.api import ApiClient, create_app
from festival_finder.cli.display import display_search_results
from festival_finder.errors import SearchUnavailableError
from festival_finder.util import setup_logging

app = typer.Typer(
    name="festival-finder",
    help="Find blues and swing dance festivals, teachers and musicians.",
    add_completion=False,
    rich_markup_mode="markdown",
)


def _get_console(use_stderr: bool = False) -> Console:
    """Create a Rich console writing to stdout or stderr."""
    return Console(stderr=use_stderr)


async def _search_async(
    query_string: str,
    city: str | None,
    country: str | None,
    page: int,
    limit: int,
    sort_by: str,
    sort_order: str,
) -> None:
    """Run a search against the API and print the results."""
    console = _get_console()
    error_console = _get_console(use_stderr=True)
    client = ApiClient()

    console.print(f"Searching for: '{query_string}'...")
    try:
        response = await client.search_events(
            query=query_string,
            city=city,
            country=country,
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    except SearchUnavailableError as e:
        error_console.print(f"[bold red]Search unavailable, try again: {e}[/bold red]")
        raise typer.Exit(code=2)
    except httpx.HTTPError as e:
        error_console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(code=1)

    display_search_results(response, query=query_string)


@app.command("search")
def search_command(
    query_string: str = typer.Argument("", help="The search query string."),
    city: str | None = typer.Option(None, "--city", help="Filter by city."),
    country: str | None = typer.Option(None, "--country", help="Filter by country."),
    page: int = typer.Option(1, "--page", "-p", help="Page of results to show."),
    limit: int = typer.Option(
        10, "--limit", "-n", help="Number of events per page."
    ),
    sort_by: str = typer.Option(
        "relevance", "--sort-by", help="Sort by 'relevance' or 'date'."
    ),
    sort_order: str = typer.Option(
        "desc", "--sort-order", help="Date sort direction: 'asc' or 'desc'."
    ),
):
    """Search for festivals using the Festival Finder API."""
    asyncio.run(
        _search_async(
            query_string=query_string,
            city=city,
            country=country,
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    )


@app.command("serve")
def serve_command(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: int = typer.Option(8000, "--port", help="Port to listen on."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
):
    """Run the Festival Finder HTTP API."""
    setup_logging(verbose)
    uvicorn.run(create_app(), host=host, port=port, log_config=None)


if __name__ == "__main__":
    app()
