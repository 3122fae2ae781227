"""ETD request construction and HTTP fetching for the BART API."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from urllib.parse import urlencode

import httpx

from .config import DEFAULT_API_KEY, DEFAULT_STATION, ETD_ENDPOINT, REQUEST_TIMEOUT
from .exceptions import NetworkError

logger = logging.getLogger(__name__)

# callback(payload, error): exactly one of the two is None
FetchCallback = Callable[[str | None, Exception | None], None]


@dataclass(frozen=True)
class EtdRequest:
    """A fully specified query for the ETD resource."""
    url: str
    params: dict[str, str] = field(default_factory=dict)

    @property
    def station(self) -> str:
        return self.params.get("orig", "")

    @property
    def full_url(self) -> str:
        return f"{self.url}?{urlencode(self.params)}"


def build_etd_request(
    station: str | None = None,
    api_key: str = DEFAULT_API_KEY,
    direction: str | None = None,
) -> EtdRequest:
    """
    Build the estimated-departure query for a station.

    Station codes are not validated here; Config only lets codes from the
    station directory through.
    """
    params = {
        "key": api_key,
        "orig": station or DEFAULT_STATION,
        "cmd": "etd",
    }
    if direction:
        params["dir"] = direction
    return EtdRequest(url=ETD_ENDPOINT, params=params)


def fetch_etd(
    request: EtdRequest,
    client: httpx.Client | None = None,
    timeout: float = REQUEST_TIMEOUT,
) -> str:
    """Fetch the raw ETD XML. Raises NetworkError on any HTTP failure."""
    try:
        if client is not None:
            response = client.get(request.url, params=request.params)
            response.raise_for_status()
            return response.text

        with httpx.Client(timeout=timeout) as own_client:
            response = own_client.get(request.url, params=request.params)
            response.raise_for_status()
            return response.text

    except httpx.HTTPStatusError as e:
        raise NetworkError(f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise NetworkError(str(e) or e.__class__.__name__) from e


class HttpFetcher:
    """
    Callback-style fetch capability used by the poll controller.

    The request runs synchronously and the callback fires before __call__
    returns. Deferred fetchers can implement the same signature and call back
    later.
    """

    def __init__(self, timeout: float = REQUEST_TIMEOUT):
        self.timeout = timeout

    def __call__(self, request: EtdRequest, callback: FetchCallback) -> None:
        logger.info("Fetching ETD for %s", request.station)
        try:
            payload = fetch_etd(request, timeout=self.timeout)
        except NetworkError as e:
            callback(None, e)
            return
        callback(payload, None)
