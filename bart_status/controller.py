"""Poll loop: fetch, parse and render the departure board on a timer."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from rich.console import RenderableType
from rich.text import Text

from .api import EtdRequest, FetchCallback, HttpFetcher, build_etd_request
from .config import Config
from .display import (
    build_board_panel, build_compact_display, build_error_panel,
    build_waiting_panel, render_board,
)
from .exceptions import ConfigError, ParseError
from .models import DepartureBoard, _now
from .parser import parse_etd
from .stations import is_valid_station
from .surface import DisplaySurface

logger = logging.getLogger(__name__)

# Longest single sleep in run(), so a closed surface is noticed promptly
MAX_SLEEP = 1.0

Fetcher = Callable[[EtdRequest, FetchCallback], None]


class PollState(Enum):
    IDLE = "idle"
    POLLING = "polling"
    ACTIVE = "active"
    STOPPED = "stopped"


class RepeatingTimer:
    """Cancellable fixed-interval timer, checked cooperatively by the poll loop."""

    def __init__(self, interval: float, clock: Callable[[], float] = time.monotonic):
        self.interval = interval
        self._clock = clock
        self._deadline: float | None = None

    @property
    def active(self) -> bool:
        return self._deadline is not None

    def arm(self) -> None:
        self._deadline = self._clock() + self.interval

    def cancel(self) -> None:
        self._deadline = None

    def remaining(self) -> float | None:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self._clock())

    def due(self) -> bool:
        return self._deadline is not None and self._clock() >= self._deadline


@dataclass
class PollResources:
    """The display surface and timer owned by one running controller."""
    surface: DisplaySurface
    timer: RepeatingTimer

    def release(self) -> None:
        self.timer.cancel()
        self.surface.destroy()


class PollController:
    """
    Owns the poll cycle for one station.

    States move IDLE -> POLLING -> ACTIVE, back to POLLING on every timer tick
    or manual refresh, and to STOPPED on stop() or when the surface goes away.
    Failed polls never stop the cycle: the last good board stays up and the
    next tick retries.

    Every request carries a generation id; a response that is not for the
    latest request (e.g. one still in flight when the station changed) is
    dropped instead of rendered.
    """

    def __init__(
        self,
        config: Config,
        surface_factory: Callable[[], DisplaySurface],
        fetcher: Fetcher | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        show_waiting: bool = True,
    ):
        self.config = config
        self.surface_factory = surface_factory
        self.fetcher = fetcher or HttpFetcher()
        self.show_waiting = show_waiting
        self.state = PollState.IDLE
        self.resources: PollResources | None = None
        self.board: DepartureBoard | None = None
        self.lines: list[Text] = []
        self.last_fetch_time: datetime | None = None
        self.last_error: str | None = None
        self._clock = clock
        self._sleep = sleep
        self._generation = 0

    @property
    def station(self) -> str:
        return self.config.station

    @property
    def running(self) -> bool:
        return self.state in (PollState.POLLING, PollState.ACTIVE)

    def start(self) -> None:
        """Create the surface and timer, then fire the first request immediately."""
        if self.running:
            logger.warning("Poller for %s already running", self.station)
            return

        self.resources = PollResources(
            surface=self.surface_factory(),
            timer=RepeatingTimer(self.config.refresh_interval, clock=self._clock),
        )
        self.board = None
        self.lines = []
        self.last_error = None
        self.state = PollState.ACTIVE
        logger.info("Started polling %s every %ss", self.station, self.config.refresh_interval)

        if self.show_waiting:
            self.resources.surface.replace(build_waiting_panel(self.station))
        self.poll()

    def poll(self) -> None:
        """Issue a request for the current station."""
        if not self.running:
            logger.warning("Ignoring poll while %s", self.state.value)
            return

        self.state = PollState.POLLING
        self.resources.timer.cancel()
        self._generation += 1
        generation = self._generation
        request = build_etd_request(self.config.station, self.config.api_key, self.config.direction)
        logger.debug("Poll #%d for %s", generation, request.station)

        def on_response(payload: str | None, error: Exception | None) -> None:
            self._handle_response(generation, payload, error)

        self.fetcher(request, on_response)

    def refresh(self) -> None:
        """Manual refresh: poll now, outside the timer schedule."""
        self.poll()

    def select_station(self, code: str) -> None:
        """Switch to another station and poll it immediately."""
        if not is_valid_station(code):
            raise ConfigError(f"Unknown station code: {code!r}")

        self.config = replace(self.config, station=code.upper())
        self.board = None
        self.lines = []
        self.last_error = None
        logger.info("Switched station to %s", self.station)

        if self.running:
            if self.show_waiting:
                self.resources.surface.replace(build_waiting_panel(self.station))
            self.poll()

    def toggle_abbreviation(self) -> bool:
        """Flip between full and abbreviated destination names and re-render."""
        self.config = replace(self.config, abbreviate=not self.config.abbreviate)
        if self.running and self.board is not None:
            self._render()
        return self.config.abbreviate

    def stop(self) -> None:
        """Cancel the timer and tear down the surface. Calling it again is a no-op."""
        if self.state is PollState.STOPPED:
            return
        if self.resources is not None:
            self.resources.release()
            self.resources = None
        self.state = PollState.STOPPED
        logger.info("Stopped polling %s", self.station)

    def tick(self) -> bool:
        """
        Run one step of the loop: notice a closed surface, poll when the timer
        is due. Returns False once the controller has stopped.
        """
        if not self.running:
            return False

        if not self.resources.surface.is_alive():
            logger.info("Display closed, stopping poller")
            self.stop()
            return False

        # While POLLING the outstanding response re-arms the timer
        if self.state is PollState.ACTIVE and self.resources.timer.due():
            self.poll()

        return self.running

    def run(self) -> None:
        """Start and keep polling until stopped or interrupted."""
        self.start()
        try:
            while self.tick():
                self._sleep(self._next_sleep())
        finally:
            self.stop()

    def _next_sleep(self) -> float:
        remaining = self.resources.timer.remaining() if self.resources else None
        if remaining is None:
            return MAX_SLEEP
        return min(remaining, MAX_SLEEP)

    def _handle_response(self, generation: int, payload: str | None, error: Exception | None) -> None:
        if not self.running:
            logger.debug("Dropping response #%d after stop", generation)
            return
        if generation != self._generation:
            logger.info("Dropping stale response #%d (latest is #%d)", generation, self._generation)
            return

        board = None
        if error is None:
            try:
                board = parse_etd(payload)
            except ParseError as e:
                error = e

        if error is not None:
            self._handle_failure(error)
        else:
            self.board = board
            self.last_fetch_time = _now()
            self.last_error = None
            self._render()

        self.state = PollState.ACTIVE
        self.resources.timer.arm()

    def _handle_failure(self, error: Exception) -> None:
        self.last_error = str(error) or error.__class__.__name__
        logger.warning("Poll for %s failed: %s", self.station, self.last_error)

        if self.board is None:
            self.resources.surface.replace(build_error_panel(self.last_error))
        else:
            # Board content stays as it was; only the status note changes
            self._render()

    def _render(self) -> None:
        self.lines = render_board(self.board, self.config.abbreviate)
        self.resources.surface.replace(self._build_renderable())

    def _build_renderable(self) -> RenderableType:
        if self.config.compact_mode:
            return build_compact_display(
                self.board, abbreviate=self.config.abbreviate, last_fetch_time=self.last_fetch_time,
            )
        return build_board_panel(
            self.lines,
            last_fetch_time=self.last_fetch_time,
            last_error=self.last_error,
            refresh_interval=self.config.refresh_interval,
        )
