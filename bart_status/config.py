"""Configuration constants and dataclass for bart-status."""

import os
from dataclasses import dataclass, field

from .exceptions import ConfigError
from .stations import is_valid_station

# API constants
API_BASE = "http://api.bart.gov/api"
ETD_ENDPOINT = f"{API_BASE}/etd.aspx"
DEFAULT_API_KEY = "MW9S-E7SL-26DU-VV8V"  # BART's shared public key
REQUEST_TIMEOUT = 10.0  # seconds

DEFAULT_STATION = "MONT"
REFRESH_INTERVAL = 60  # seconds
DIRECTIONS = ("n", "s")


def default_api_key() -> str:
    """API key from the environment, falling back to the public key."""
    return os.environ.get("BART_API_KEY") or DEFAULT_API_KEY


@dataclass
class Config:
    """Runtime configuration built from CLI arguments."""
    api_key: str = field(default_factory=default_api_key)
    station: str = DEFAULT_STATION
    abbreviate: bool = False
    refresh_interval: int = REFRESH_INTERVAL
    direction: str | None = None
    compact_mode: bool = False

    def __post_init__(self):
        if not is_valid_station(self.station):
            raise ConfigError(f"Unknown station code: {self.station!r}")
        self.station = self.station.upper()

        if isinstance(self.refresh_interval, bool) or not isinstance(self.refresh_interval, int):
            raise ConfigError(f"Refresh interval must be an integer, got {self.refresh_interval!r}")
        if self.refresh_interval <= 0:
            raise ConfigError("Refresh interval must be at least 1 second")

        if self.direction is not None:
            self.direction = self.direction.lower()
            if self.direction not in DIRECTIONS:
                raise ConfigError(f"Direction must be 'n' or 's', got {self.direction!r}")

        if not self.api_key:
            raise ConfigError("API key must not be empty")
