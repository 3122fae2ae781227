"""Single-line compact display mode."""

from datetime import datetime

from rich.text import Text

from ..models import LEAVING, DepartureBoard, next_departure
from .board import estimate_color


def build_compact_display(
    board: DepartureBoard,
    abbreviate: bool = True,
    last_fetch_time: datetime | None = None,
) -> Text:
    """Build a single-line summary: the next train to each destination."""
    compact = Text()
    compact.append(f"🚆 {board.station_name}", style="bold")

    if not board.destinations:
        compact.append(f" | {board.message or 'No departures'}", style="dim")

    for destination in board.destinations:
        label = destination.abbreviation if abbreviate and destination.abbreviation else destination.destination
        compact.append(" | ")
        estimate = next_departure(destination)
        if estimate is None:
            compact.append(f"{label} —")
            continue
        compact.append("■", style=estimate_color(estimate.hex_color))
        compact.append(f" {label} ")
        if estimate.minutes is LEAVING:
            compact.append("now", style="bold red")
        else:
            compact.append(f"{estimate.minutes}m")

    if last_fetch_time:
        compact.append(f" | Updated {last_fetch_time.strftime('%H:%M:%S')}", style="dim")

    return compact
