"""Tests for the live and console display surfaces."""

from rich.console import Console
from rich.text import Text

from bart_status.surface import ConsoleSurface, LiveSurface


def recording_console():
    return Console(record=True, width=80, force_terminal=False)


class TestConsoleSurface:
    def test_replace_prints(self):
        console = recording_console()
        surface = ConsoleSurface(console)
        surface.replace(Text("Antioch 7 min"))
        assert "Antioch 7 min" in console.export_text()

    def test_destroy_is_idempotent(self):
        surface = ConsoleSurface(recording_console())
        surface.destroy()
        surface.destroy()
        assert not surface.is_alive()

    def test_no_output_after_destroy(self):
        console = recording_console()
        surface = ConsoleSurface(console)
        surface.destroy()
        surface.replace(Text("late update"))
        assert "late update" not in console.export_text()


class TestLiveSurface:
    def test_lifecycle(self):
        surface = LiveSurface(recording_console(), screen=False)
        try:
            assert surface.is_alive()
            surface.replace(Text("Richmond 3 min"))
        finally:
            surface.destroy()
        assert not surface.is_alive()

    def test_destroy_twice(self):
        surface = LiveSurface(recording_console(), screen=False)
        surface.destroy()
        surface.destroy()
        assert not surface.is_alive()

    def test_external_stop_detected(self):
        surface = LiveSurface(recording_console(), screen=False)
        surface.live.stop()
        assert not surface.is_alive()
        surface.destroy()

    def test_replace_after_destroy_is_ignored(self):
        surface = LiveSurface(recording_console(), screen=False)
        surface.destroy()
        surface.replace(Text("ignored"))
        assert not surface.is_alive()
