"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, List, Optional

import pendulum
import typer
from pendulum import DateTime
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.memory_event_source import InMemoryEventSource
from ..config import AppConfig, get_default_config_path
from ..domain.models import Event, WorkPeriod
from ..services.availability import AvailabilityService

app = typer.Typer(
    name="worktime",
    help="Find the time left for work once calendar events are cut out",
    add_completion=False
)

console = Console()

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the given config file, or the default one if it exists.

    An explicitly given file must exist; a missing default file falls back
    to the built-in defaults.
    """
    if config_file:
        return AppConfig.load_from_yaml(config_file)

    config_path = get_default_config_path()
    if config_path.exists():
        return AppConfig.load_from_yaml(config_path)
    return AppConfig()


def _parse_instant(text: str, tz: str) -> DateTime:
    """Parse a date and time; anything else pendulum understands, such as a duration, is rejected."""
    parsed = pendulum.parse(text.strip(), tz=tz)
    if not isinstance(parsed, DateTime):
        raise ValueError(f"Expected a date and time such as 2024-11-25T09:00, got '{text.strip()}'")
    return parsed


def _parse_event(value: str, tz: str) -> Event:
    """Parse 'START,END[,DESCRIPTION]' into an event in the given timezone."""
    parts = value.split(",", 2)
    if len(parts) < 2:
        raise ValueError(f"Event must look like 'START,END[,DESCRIPTION]', got '{value}'")

    description = parts[2].strip() if len(parts) == 3 else ""
    return Event(
        start=_parse_instant(parts[0], tz),
        end=_parse_instant(parts[1], tz),
        description=description,
    )


def _parse_work_period(value: str, tz: str) -> WorkPeriod:
    """Parse 'START,END' into a work period in the given timezone's wall-clock time."""
    parts = value.split(",")
    if len(parts) != 2:
        raise ValueError(f"Work period must look like 'START,END', got '{value}'")

    start, end = (_parse_instant(part, tz).in_timezone(tz).naive() for part in parts)
    return WorkPeriod(start=start, end=end)


def _print_periods(periods: List[WorkPeriod]) -> None:
    console.print()
    if not periods:
        console.print("[yellow]⚠ No time left for work: every work period is taken by events.[/yellow]")
        console.print()
        return

    console.print(f"[bold green]✓ {len(periods)} available period(s):[/bold green]\n")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Day", style="bold yellow")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Minutes", justify="right", style="dim")

    for period in periods:
        table.add_row(
            f"{WEEKDAY_NAMES[period.start.weekday()]}, {period.start:%d.%m.%Y}",
            f"{period.start:%H:%M}",
            f"{period.end:%d.%m.%Y %H:%M}" if period.end.date() != period.start.date() else f"{period.end:%H:%M}",
            str(period.duration_minutes()),
        )

    console.print(table)
    console.print()


@app.command()
def available(
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    timezone: Annotated[Optional[str], typer.Option("--timezone", "-z", help="Timezone of the output. Defaults to the configured one.")] = None,
    start: Annotated[Optional[str], typer.Option("--start", help="First day of generated work periods (YYYY-MM-DD). Defaults to today.")] = None,
    days: Annotated[Optional[int], typer.Option("--days", "-d", help="Number of working days to generate work periods for")] = None,
    event: Annotated[Optional[List[str]], typer.Option("--event", "-e", help="Busy event as 'START,END[,DESCRIPTION]'. Repeatable.")] = None,
    work_period: Annotated[Optional[List[str]], typer.Option("--work-period", "-w", help="Work period as 'START,END'. Repeatable; replaces the weekly pattern.")] = None,
    merge: Annotated[bool, typer.Option("--merge", help="Merge results of overlapping work periods.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Show the time available for work once events are cut out.

    Examples:

        # Default weekly pattern, next five working days
        worktime available --event "2024-11-25T10:00,2024-11-25T11:30,Standup"

        # Explicit work periods
        worktime available -w "2024-11-25T09:00,2024-11-25T17:00" -e "2024-11-25T12:00,2024-11-25T13:00"
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file)
        if timezone:
            config = AppConfig.model_validate({**config.model_dump(), "timezone": timezone})
        tz = config.timezone

        events = [_parse_event(value, tz) for value in event or []]
        service = AvailabilityService(
            event_source=InMemoryEventSource(events),
            pattern=config.work_pattern.to_pattern(),
        )

        if work_period:
            periods = [_parse_work_period(value, tz) for value in work_period]
            result = asyncio.run(
                service.find_available_in(work_periods=periods, timezone=tz, merge_overlapping=merge)
            )
        else:
            if start:
                start_date = pendulum.from_format(start, "YYYY-MM-DD", tz=tz).date()
            else:
                start_date = pendulum.now(tz).date()
            working_days = days if days is not None else config.defaults.working_days
            result = asyncio.run(
                service.find_available(
                    start_date=start_date,
                    working_days=working_days,
                    timezone=tz,
                    merge_overlapping=merge,
                )
            )

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"\n[bold cyan]🗓️  {len(events)} event(s) in {tz}[/bold cyan]")
    _print_periods(result)


@app.command()
def pattern(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    Show the configured weekly work pattern.
    """
    try:
        config = _load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    table = Table(
        title=f"Weekly work pattern ({config.timezone})",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Weekday", style="bold yellow")
    table.add_column("Hours", style="dim")

    hours = ", ".join(
        f"{block.start:%H:%M} - {block.end:%H:%M}" for block in config.work_pattern.blocks
    )
    for day in sorted(config.work_pattern.weekdays):
        table.add_row(WEEKDAY_NAMES[day], hours)

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]worktime[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
