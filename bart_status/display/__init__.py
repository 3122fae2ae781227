"""Display rendering components for bart-status."""

from .header import build_banner, build_summary_line, build_status_subtitle, apply_main_title
from .board import render_board, build_board_panel, destination_label
from .compact import build_compact_display
from .errors import build_error_panel, build_waiting_panel
from .stations import build_station_table

__all__ = [
    "build_banner",
    "build_summary_line",
    "build_status_subtitle",
    "apply_main_title",
    "render_board",
    "build_board_panel",
    "destination_label",
    "build_compact_display",
    "build_error_panel",
    "build_waiting_panel",
    "build_station_table",
]
