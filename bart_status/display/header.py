"""Banner, summary line and status subtitle for the departure board."""

from datetime import datetime

from rich.panel import Panel
from rich.text import Text

from ..models import DepartureBoard

BANNER = "BART Real-Time Departures"
MAIN_TITLE = "[bold cyan]BART Status[/]"


def build_banner() -> Text:
    """The fixed first line of every rendered board."""
    return Text(BANNER, style="bold cyan")


def build_summary_line(board: DepartureBoard) -> Text:
    """Station name and the as-of time reported by the API."""
    summary = Text()
    summary.append(board.station_name, style="bold white")
    if board.station_code:
        summary.append(f" ({board.station_code})", style="dim")
    summary.append("  as of ", style="dim")
    summary.append(board.as_of)
    return summary


def build_status_subtitle(
    last_fetch_time: datetime | None = None,
    last_error: str | None = None,
    refresh_interval: int = 60,
) -> str:
    """Status line shown under the live board."""
    if last_fetch_time:
        status_parts = [f"Updated: {last_fetch_time.strftime('%H:%M:%S')}"]
    else:
        status_parts = ["Updated: —"]
    if last_error:
        status_parts.append(f"[yellow]⚠ {last_error}[/]")
    status_parts.append(f"Refresh: {refresh_interval}s")
    status_parts.append("Press Ctrl+C to quit")
    return f"[dim]{' | '.join(status_parts)}[/]"


def apply_main_title(panel: Panel, last_fetch_time=None, last_error=None, refresh_interval=60) -> None:
    """Add the main title and status subtitle to a panel."""
    panel.title = MAIN_TITLE
    panel.subtitle = build_status_subtitle(last_fetch_time, last_error, refresh_interval)
