"""Error and waiting display panels."""

from rich.panel import Panel
from rich.text import Text

from ..stations import is_valid_station, station_name


def build_error_panel(error: str) -> Panel:
    """Build an error display panel."""
    return Panel(
        Text(f"Error: {error}", style="bold red"),
        title="[bold red]Error[/]",
        border_style="red"
    )


def build_waiting_panel(station: str) -> Panel:
    """Shown while the first request for a station is in flight."""
    name = station_name(station) if is_valid_station(station) else station
    content = Text()
    content.append(f"Fetching departures for {name}...\n\n", style="bold yellow")
    content.append("The board appears once BART answers.", style="dim")

    return Panel(
        content,
        title="[bold yellow]Waiting[/]",
        border_style="yellow"
    )
