"""Station directory table."""

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..stations import STATIONS


def build_station_table(highlight: str | None = None) -> Panel:
    """Build a table of every station name and code."""
    table = Table(
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
        expand=True,
    )
    table.add_column("Code", width=6, justify="center")
    table.add_column("Station", min_width=20)

    for name, code in sorted(STATIONS.items()):
        style = "cyan bold" if highlight and code == highlight.upper() else ""
        table.add_row(Text(code, style=style or "bold"), Text(name, style=style))

    return Panel(
        table,
        title="[bold]Stations[/]",
        border_style="magenta"
    )
