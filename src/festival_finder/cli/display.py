# src/festival_finder/cli/display.py

"""Display and formatting utilities for CLI output."""

import textwrap

from rich.console import Console
from rich.panel import Panel

from festival_finder.api.responses import EventSearchPayload, SearchEventPayload


def format_text_for_panel(text_content: str | None, width: int = 80) -> str:
    """Wraps text and pads lines to ensure fixed content width for a Panel.

    Args:
        text_content: The text to format.
        width: The target width for wrapped text.

    Returns:
        Formatted text with proper line wrapping and padding.
    """
    if not text_content or not text_content.strip():
        return " " * width

    final_output_lines = []
    for paragraph in text_content.split("\n\n"):
        if final_output_lines:
            final_output_lines.append(" " * width)
        for line in paragraph.splitlines():
            wrapped_segments = textwrap.wrap(line, width=width) or [""]
            final_output_lines.extend(
                segment.ljust(width) for segment in wrapped_segments
            )

    return "\n".join(final_output_lines)


def format_date_range(event: SearchEventPayload) -> str:
    """Render an event's dates as 'YYYY-MM-DD' or 'YYYY-MM-DD to YYYY-MM-DD'."""
    start = event.start_date.isoformat()
    if event.end_date and event.end_date != event.start_date:
        return f"{start} to {event.end_date.isoformat()}"
    return start


def format_location(event: SearchEventPayload) -> str:
    """Render 'City, Country', whichever parts are known."""
    return ", ".join(part for part in (event.city, event.country) if part) or "Unknown"


def display_search_results(
    response: EventSearchPayload, query: str = "", console: Console | None = None
) -> None:
    """Displays event search results, one section per event.

    Args:
        response: The parsed event search response.
        query: The query string the user searched for.
        console: Rich console to print to. A new one is created when omitted.
    """
    if console is None:
        console = Console()

    if query:
        console.print(
            Panel(
                f"[bold cyan]Search Query:[/bold cyan] {query}",
                expand=False,
                border_style="dim",
            )
        )

    pagination = response.pagination
    time_ms = response.search_meta.get("processingTimeMs")
    time_info = f"Time: {time_ms}ms" if time_ms is not None else ""
    console.print(
        f"Page {pagination.page} of {pagination.total_pages}, "
        f"{len(response.events)} of {pagination.total} events. {time_info}"
    )

    if not response.events:
        console.print("[yellow]No events found.[/yellow]")
        return

    console.print("")

    for i, event in enumerate(response.events):
        console.rule(f"[bold]{event.name}[/bold]", style="dim")
        console.print(f"[bold cyan]ID:[/bold cyan] [dim]{event.id}[/dim]")
        console.print(f"[bold cyan]Dates:[/bold cyan] {format_date_range(event)}")
        console.print(
            f"[bold cyan]Location:[/bold cyan] [green]{format_location(event)}[/green]"
        )
        if event.style:
            console.print(f"[bold cyan]Style:[/bold cyan] {event.style}")
        if event.website:
            console.print(
                f"[bold cyan]Website:[/bold cyan] "
                f"[link={event.website}]{event.website}[/link]"
            )
        if event.search_rank:
            console.print(f"[bold cyan]Relevance:[/bold cyan] {event.search_rank:.1f}")

        if event.description:
            console.print(
                Panel(
                    format_text_for_panel(event.description),
                    title="[bold blue]Description[/bold blue]",
                    border_style="blue",
                    expand=False,
                    padding=(0, 1),
                )
            )

        if i < len(response.events) - 1:
            console.print("")

    console.rule(style="dim")
    if pagination.has_next:
        console.print(
            f"More results available: use --page {pagination.page + 1} to continue."
        )
