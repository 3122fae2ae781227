"""Display surfaces the poll controller renders into."""

import logging
from typing import Protocol

from rich.console import Console, RenderableType
from rich.live import Live
from rich.text import Text

logger = logging.getLogger(__name__)


class DisplaySurface(Protocol):
    """Anything that can show a board and be torn down."""

    def replace(self, renderable: RenderableType) -> None:
        """Replace everything on the surface with renderable."""
        ...

    def is_alive(self) -> bool:
        ...

    def destroy(self) -> None:
        """Tear the surface down. Safe to call more than once."""
        ...


class LiveSurface:
    """Full-screen auto-refreshing surface backed by rich.live.Live."""

    def __init__(self, console: Console, screen: bool = True, refresh_per_second: float = 1):
        self.live = Live(
            Text(""),
            console=console,
            refresh_per_second=refresh_per_second,
            screen=screen,
        )
        self._destroyed = False
        self.live.start()

    def replace(self, renderable: RenderableType) -> None:
        if not self.is_alive():
            logger.debug("Ignoring update for a closed live surface")
            return
        self.live.update(renderable, refresh=True)

    def is_alive(self) -> bool:
        return not self._destroyed and self.live.is_started

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        self.live.stop()


class ConsoleSurface:
    """Prints each update to the console. Used for --once and --compact."""

    def __init__(self, console: Console, clear: bool = False):
        self.console = console
        self.clear = clear
        self._destroyed = False

    def replace(self, renderable: RenderableType) -> None:
        if self._destroyed:
            return
        if self.clear:
            self.console.clear()
        self.console.print(renderable)

    def is_alive(self) -> bool:
        return not self._destroyed

    def destroy(self) -> None:
        self._destroyed = True
