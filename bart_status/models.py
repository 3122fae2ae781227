"""Departure board data model and small formatting helpers."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


def _now():
    """Current local time. Extracted for test patching."""
    return datetime.now()


class Sentinel(Enum):
    """Non-numeric minutes values reported by the ETD API."""
    LEAVING = "Leaving"


# The train is at the platform and departing now
LEAVING = Sentinel.LEAVING


@dataclass(frozen=True)
class DepartureEstimate:
    """One upcoming train for a destination."""
    minutes: int | Sentinel
    length: int
    hex_color: str
    platform: str = ""
    direction: str = ""
    color: str = ""
    bike_flag: bool = False
    delay: int = 0  # seconds

    @property
    def is_leaving(self) -> bool:
        return self.minutes is LEAVING


@dataclass(frozen=True)
class DestinationBoard:
    """All estimates for one destination, soonest first."""
    destination: str
    abbreviation: str
    estimates: tuple[DepartureEstimate, ...] = ()


@dataclass(frozen=True)
class DepartureBoard:
    """Parsed ETD response for a single station."""
    station_name: str
    as_of: str
    destinations: tuple[DestinationBoard, ...] = ()
    station_code: str = ""
    message: str = ""


def format_minutes(minutes: int | Sentinel) -> str:
    """Format a minutes value for display ("Leaving" or "N min")."""
    if minutes is LEAVING:
        return "Leaving"
    return f"{minutes} min"


def next_departure(destination: DestinationBoard) -> DepartureEstimate | None:
    """Soonest estimate for a destination, or None if there are none."""
    return destination.estimates[0] if destination.estimates else None
