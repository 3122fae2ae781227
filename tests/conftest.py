"""Shared test fixtures and helpers for bart-status tests."""

from datetime import datetime
from pathlib import Path
from unittest.mock import patch, MagicMock

import httpx
import pytest
from rich.console import Console

from bart_status.config import Config
from bart_status.exceptions import NetworkError
from bart_status.models import LEAVING, DepartureBoard, DepartureEstimate, DestinationBoard


# =============================================================================
# Constants
# =============================================================================


# A fixed "now" for deterministic time-based tests
FIXED_NOW = datetime(2026, 10, 18, 9, 15, 30)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def freeze_time():
    """Patch the controller's _now to return FIXED_NOW for deterministic tests."""
    with patch("bart_status.controller._now", return_value=FIXED_NOW):
        yield


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's BART_API_KEY out of the tests."""
    monkeypatch.delenv("BART_API_KEY", raising=False)


@pytest.fixture
def config():
    return Config(station="MONT", refresh_interval=60)


# =============================================================================
# Test data helpers
# =============================================================================


def make_estimate(minutes=5, length=8, hex_color="#ffff33", **kwargs):
    """Build a DepartureEstimate with sensible defaults."""
    return DepartureEstimate(minutes=minutes, length=length, hex_color=hex_color, **kwargs)


def make_destination(destination="Antioch", abbreviation="ANTC", estimates=None):
    """Build a DestinationBoard."""
    if estimates is None:
        estimates = [make_estimate()]
    return DestinationBoard(
        destination=destination,
        abbreviation=abbreviation,
        estimates=tuple(estimates),
    )


def make_board(
    station_name="Montgomery St.",
    as_of="10/18/2026 09:15:04 AM PDT",
    destinations=None,
    station_code="MONT",
    message="",
):
    """Build a DepartureBoard."""
    if destinations is None:
        destinations = []
    return DepartureBoard(
        station_name=station_name,
        as_of=as_of,
        destinations=tuple(destinations),
        station_code=station_code,
        message=message,
    )


def sample_board():
    """Two destinations, one numeric estimate and one leaving train."""
    return make_board(destinations=[
        make_destination("Antioch", "ANTC", [
            make_estimate(7, 10, "#ffff33"),
            make_estimate(22, 8, "#ffff33"),
        ]),
        make_destination("SF Airport", "SFIA", [
            make_estimate(LEAVING, 6, "#ffff33"),
            make_estimate(15, 9, "#ffff33"),
        ]),
    ])


def etd_xml(station_name="Montgomery St.", abbr="MONT", time="09:15:04 AM PDT",
            date="10/18/2026", destinations=()):
    """
    Build an ETD XML payload.

    destinations is a sequence of (name, abbreviation, [(minutes, length, hexcolor), ...]).
    """
    etds = []
    for name, dest_abbr, estimates in destinations:
        estimate_xml = "".join(
            f"<estimate><minutes>{m}</minutes><length>{length}</length>"
            f"<hexcolor>{color}</hexcolor></estimate>"
            for m, length, color in estimates
        )
        etds.append(
            f"<etd><destination>{name}</destination>"
            f"<abbreviation>{dest_abbr}</abbreviation>{estimate_xml}</etd>"
        )
    date_xml = f"<date>{date}</date>" if date else ""
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f"<root>{date_xml}<time>{time}</time>"
        f"<station><name>{station_name}</name><abbr>{abbr}</abbr>{''.join(etds)}</station>"
        "<message /></root>"
    )


def render_to_text(renderable, width=120) -> str:
    """Capture a Rich renderable as plain text for assertion."""
    console = Console(record=True, width=width, force_terminal=False)
    console.print(renderable)
    return console.export_text()


def load_fixture(name: str) -> str:
    """Load an XML fixture file from tests/fixtures/."""
    fixture_path = Path(__file__).parent / "fixtures" / name
    return fixture_path.read_text(encoding="utf-8")


def make_mock_httpx_client(text_response="", status_code=200, exc=None):
    """Create a mock httpx.Client whose .get() returns the given body, or raises exc."""
    request = httpx.Request("GET", "http://api.bart.gov/api/etd.aspx")
    mock_response = MagicMock()
    mock_response.text = text_response
    mock_response.status_code = status_code
    if status_code >= 400:
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            f"HTTP {status_code}",
            request=request,
            response=httpx.Response(status_code, request=request),
        )
    else:
        mock_response.raise_for_status.return_value = None

    mock_client = MagicMock()
    mock_client.__enter__ = MagicMock(return_value=mock_client)
    mock_client.__exit__ = MagicMock(return_value=False)
    if exc is not None:
        mock_client.get.side_effect = exc
    else:
        mock_client.get.return_value = mock_response
    return mock_client


# =============================================================================
# Controller doubles
# =============================================================================


class FakeSurface:
    """Records what the controller puts on screen."""

    def __init__(self):
        self.updates = []
        self.alive = True
        self.destroy_calls = 0

    def replace(self, renderable):
        self.updates.append(renderable)

    def is_alive(self):
        return self.alive

    def destroy(self):
        self.destroy_calls += 1
        self.alive = False

    @property
    def last_text(self):
        return render_to_text(self.updates[-1]) if self.updates else ""


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class ScriptedFetcher:
    """Answers requests synchronously from a list of payloads or exceptions."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request, callback):
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            callback(None, response)
        else:
            callback(response, None)


class DeferredFetcher:
    """Holds callbacks until the test decides to answer them."""

    def __init__(self):
        self.pending = []

    def __call__(self, request, callback):
        self.pending.append((request, callback))

    def answer(self, index, payload=None, error=None):
        _, callback = self.pending[index]
        callback(payload, error)


def network_error(message="Connection refused"):
    return NetworkError(message)
