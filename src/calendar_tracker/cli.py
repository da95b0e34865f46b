import logging
import typer
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn

from calendar_tracker.categorization import CategorizationEngine
from calendar_tracker.categorization.categories import display_name
from calendar_tracker.formatting import PLACEHOLDER, format_total, format_unrecognized_event
from calendar_tracker.services.statistics_service import StatisticsService
from calendar_tracker.sources.base import EventSource
from calendar_tracker.sources.cache import CachedEventSource
from calendar_tracker.sources.google_calendar import GoogleCalendarSource

NOTICE = (
    "This program comes with ABSOLUTELY NO WARRANTY. "
    "Google Calendar is a trademark of Google LLC."
)

app = typer.Typer(
    name="calendar-tracker",
    help="Compute time-spent statistics from your calendar",
    add_completion=False,
    epilog=NOTICE,
)

console = Console()


class State:
    verbose: bool = False


state = State()


def configure_logging(verbose: bool) -> None:
    """Route log records through rich, warnings only unless verbose"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def build_source(calendar_id: str, cache_file: Optional[Path]) -> EventSource:
    """Google Calendar source, optionally behind a JSON cache file"""
    source: EventSource = GoogleCalendarSource(calendar_id)
    if cache_file is not None:
        source = CachedEventSource(cache_file, source)
    return source


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output",
    )
):
    """
    Calendar Tracker - Categorize calendar events and total the time spent.
    """
    state.verbose = verbose
    configure_logging(verbose)


@app.command(name="report")
def report(
    config: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Category rules file (default: config/categories.json, then the bundled sample)",
        dir_okay=False,
    ),
    source: str = typer.Option(
        "primary",
        "--source", "-s",
        help="Name of the Google Calendar to read",
    ),
    weeks: int = typer.Option(
        0,
        "--weeks", "-w",
        help="How many weeks before the current one to look at",
        min=0,
    ),
    cache: Optional[Path] = typer.Option(
        None,
        "--cache",
        help=(
            "JSON event cache. If the file does not exist, fetched events are stored there; "
            "otherwise events are loaded from it instead of Google Calendar."
        ),
        dir_okay=False,
    ),
    decimal_output: bool = typer.Option(
        False,
        "--decimal-output",
        help="Print totals as decimal hours rather than XhYmZs",
    ),
):
    """
    Report time spent per day and per category.

    Examples:
        calendar-tracker report
        calendar-tracker report --weeks 2 --config my_rules.json
        calendar-tracker report --cache events.json --decimal-output
    """
    try:
        engine = CategorizationEngine(config_path=config)
        service = StatisticsService(build_source(source, cache), engine)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Retrieving events...", total=None)
            events = service.get_events(weeks=weeks)
            progress.update(task, completed=True)

        if not events:
            console.print("[yellow]No events found.[/yellow]")
            return

        result = service.compute(events)

        # Time spent per day
        if result.days:
            console.print("\n[bold]Time spent per day:[/bold]")
            for day in result.days:
                console.print(f"{day}: {format_total(result.day_totals[day], decimal_output)}")

        # Time spent per category, in configured order
        console.print("\n[bold]Time spent per category:[/bold]")
        if not result.has_data:
            console.print("[yellow]No time recorded.[/yellow]")
        else:
            category_table = Table(show_header=False, box=None, padding=(0, 1))
            category_table.add_column("Share", justify="right")
            category_table.add_column("Category", style="cyan")
            category_table.add_column("Total", justify="right", style="dim")

            for category, percent in result.category_percentages():
                category_table.add_row(
                    f"{percent:2d}%",
                    display_name(category),
                    format_total(result.category_total(category), decimal_output),
                )

            console.print(category_table)

        if result.unrecognized:
            console.print("\n[bold]Unrecognized:[/bold]")
            for event in result.unrecognized:
                console.print(format_unrecognized_event(event), markup=False, highlight=False)

        if result.skipped:
            console.print("\n[bold]Skipped (no usable start/end):[/bold]")
            for event in result.skipped:
                console.print(f"{PLACEHOLDER} {event.summary}", markup=False, highlight=False)

        if state.verbose:
            console.print(f"\n[dim]→ {len(events)} events processed[/dim]")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        if state.verbose:
            console.print_exception()
        raise typer.Exit(code=1)


@app.command(name="rules")
def rules(
    config: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Category rules file (default: config/categories.json, then the bundled sample)",
        dir_okay=False,
    ),
):
    """
    Show the category rules in the order they are tried.
    """
    try:
        engine = CategorizationEngine(config_path=config)
        console.print(engine.get_rule_chain_info(), markup=False, highlight=False)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        if state.verbose:
            console.print_exception()
        raise typer.Exit(code=1)


def cli_main():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    cli_main()
