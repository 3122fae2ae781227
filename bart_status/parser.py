"""Parse BART ETD XML responses into DepartureBoard values."""

import logging
import xml.etree.ElementTree as ET

from .exceptions import ParseError
from .models import LEAVING, DepartureBoard, DepartureEstimate, DestinationBoard, Sentinel

logger = logging.getLogger(__name__)


def _text(element: ET.Element, path: str) -> str | None:
    """Stripped text of the first element at path, or None if it is absent."""
    value = element.findtext(path)
    if value is None:
        return None
    return value.strip()


def _required(element: ET.Element, path: str, what: str) -> str:
    value = _text(element, path)
    if value is None:
        raise ParseError(f"ETD response has no {what} ({path})")
    return value


def _int(value: str | None, what: str, default: int | None = None) -> int:
    if value is None or value == "":
        if default is None:
            raise ParseError(f"Estimate is missing {what}")
        return default
    try:
        return int(value)
    except ValueError:
        raise ParseError(f"Estimate has non-numeric {what}: {value!r}") from None


def parse_minutes(value: str | None) -> int | Sentinel:
    """Parse an estimate's minutes field. "Leaving" stays a sentinel."""
    if value is not None and value.lower() == LEAVING.value.lower():
        return LEAVING
    return _int(value, "minutes")


def _api_error_message(root: ET.Element) -> str | None:
    """
    Extract the error text from an API error body.

    Error bodies look like <root><message><error><text>Invalid orig</text>
    <details>...</details></error></message></root>.
    """
    text = _text(root, "message/error/text")
    details = _text(root, "message/error/details")
    parts = [p for p in (text, details) if p]
    return ": ".join(parts) if parts else None


def _parse_estimate(element: ET.Element) -> DepartureEstimate:
    bike_flag = _text(element, "bikeflag")
    return DepartureEstimate(
        minutes=parse_minutes(_text(element, "minutes")),
        length=_int(_text(element, "length"), "length"),
        hex_color=_text(element, "hexcolor") or "",
        platform=_text(element, "platform") or "",
        direction=_text(element, "direction") or "",
        color=_text(element, "color") or "",
        bike_flag=bike_flag == "1",
        delay=_int(_text(element, "delay"), "delay", default=0),
    )


def _parse_destination(element: ET.Element) -> DestinationBoard:
    return DestinationBoard(
        destination=_text(element, "destination") or "",
        abbreviation=_text(element, "abbreviation") or "",
        estimates=tuple(_parse_estimate(e) for e in element.findall("estimate")),
    )


def parse_etd(payload: str | bytes) -> DepartureBoard:
    """
    Convert a raw ETD XML payload into a DepartureBoard.

    Scalars are looked up by tag name, so the parse does not depend on the
    order of child elements. Raises ParseError for anything that is not a
    station departure board, including the API's own error bodies.
    """
    if payload is None or (isinstance(payload, (str, bytes)) and not payload.strip()):
        raise ParseError("Empty ETD response")

    try:
        root = ET.fromstring(payload)
    except ET.ParseError as e:
        raise ParseError(f"ETD response is not valid XML: {e}") from e

    if root.tag != "root":
        raise ParseError(f"Unexpected ETD root element <{root.tag}>")

    station = root.find("station")
    if station is None:
        api_error = _api_error_message(root)
        if api_error:
            raise ParseError(f"API error: {api_error}")
        raise ParseError("ETD response has no station element")

    name = _required(station, "name", "station name")
    time = _required(root, "time", "as-of time")
    date = _text(root, "date")
    as_of = f"{date} {time}" if date else time

    board = DepartureBoard(
        station_name=name,
        as_of=as_of,
        destinations=tuple(_parse_destination(etd) for etd in station.findall("etd")),
        station_code=(_text(station, "abbr") or "").upper(),
        message=_text(root, "message/warning") or _text(root, "message") or "",
    )
    logger.debug(
        "Parsed ETD board for %s: %d destination(s)",
        board.station_name, len(board.destinations),
    )
    return board
