"""Error types raised by bart-status."""


class BartStatusError(Exception):
    """Base class for all bart-status errors."""


class NetworkError(BartStatusError):
    """The ETD request could not be completed."""


class ParseError(BartStatusError):
    """The ETD response was not shaped like a departure board."""


class ConfigError(BartStatusError):
    """Invalid configuration, e.g. an unknown station code."""
