"""Departure board rendering: one styled line per destination."""

from datetime import datetime

from rich.color import Color, ColorParseError
from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from ..models import DepartureBoard, DepartureEstimate, DestinationBoard, format_minutes
from .header import apply_main_title, build_banner, build_summary_line

# Column widths
ABBREVIATION_WIDTH = 5
DESTINATION_WIDTH = 24
MINUTES_WIDTH = len("Leaving")
LENGTH_WIDTH = len("(10 car)")

GLYPH = "■"
SEGMENT_GAP = "  "


def estimate_color(hex_color: str) -> str:
    """Style for the colour block. Unparseable colours render unstyled."""
    if not hex_color:
        return ""
    try:
        Color.parse(hex_color)
    except ColorParseError:
        return ""
    return hex_color


def destination_label(destination: DestinationBoard, abbreviate: bool = False) -> str:
    """Right-justified, fixed-width destination label."""
    if abbreviate:
        text = destination.abbreviation or destination.destination
        width = ABBREVIATION_WIDTH
    else:
        text = destination.destination
        width = DESTINATION_WIDTH
    return text[:width].rjust(width)


def build_estimate_segment(estimate: DepartureEstimate) -> Text:
    """Colour block, minutes and car count, padded to a fixed width."""
    if estimate.is_leaving:
        minutes_style = "bold red"
    elif estimate.delay:
        minutes_style = "yellow"
    else:
        minutes_style = ""

    segment = Text()
    segment.append(GLYPH, style=estimate_color(estimate.hex_color))
    segment.append(" ")
    segment.append(format_minutes(estimate.minutes).ljust(MINUTES_WIDTH), style=minutes_style)
    segment.append(" ")
    segment.append(f"({estimate.length} car)".ljust(LENGTH_WIDTH), style="dim")
    return segment


def build_destination_line(destination: DestinationBoard, abbreviate: bool = False) -> Text:
    line = Text()
    line.append(destination_label(destination, abbreviate), style="bold")
    for estimate in destination.estimates:
        line.append(SEGMENT_GAP)
        line.append_text(build_estimate_segment(estimate))
    return line


def render_board(board: DepartureBoard, abbreviate: bool = False) -> list[Text]:
    """
    Render a board as styled lines: banner, summary, then one line per destination.

    The full list is rebuilt on every call, so rendering the same board with
    the same flag always gives the same lines.
    """
    lines = [build_banner(), build_summary_line(board)]

    if not board.destinations:
        lines.append(Text(board.message or "No departures reported", style="dim italic"))
        return lines

    for destination in board.destinations:
        lines.append(build_destination_line(destination, abbreviate))
    return lines


def build_board_panel(
    lines: list[Text],
    last_fetch_time: datetime | None = None,
    last_error: str | None = None,
    refresh_interval: int = 60,
) -> Panel:
    """Wrap rendered lines in the live-screen panel with a status subtitle."""
    panel = Panel(Group(*lines), border_style="cyan")
    apply_main_title(panel, last_fetch_time, last_error, refresh_interval)
    return panel
