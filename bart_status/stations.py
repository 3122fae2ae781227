"""Static directory of BART stations and their short codes."""

from .exceptions import ConfigError

# Station name -> station code, as published by the BART API (cmd=stns)
STATIONS: dict[str, str] = {
    "12th St. Oakland City Center": "12TH",
    "16th St. Mission": "16TH",
    "19th St. Oakland": "19TH",
    "24th St. Mission": "24TH",
    "Antioch": "ANTC",
    "Ashby": "ASHB",
    "Balboa Park": "BALB",
    "Bay Fair": "BAYF",
    "Berryessa/North San Jose": "BERY",
    "Castro Valley": "CAST",
    "Civic Center/UN Plaza": "CIVC",
    "Coliseum": "COLS",
    "Colma": "COLM",
    "Concord": "CONC",
    "Daly City": "DALY",
    "Downtown Berkeley": "DBRK",
    "Dublin/Pleasanton": "DUBL",
    "El Cerrito del Norte": "DELN",
    "El Cerrito Plaza": "PLZA",
    "Embarcadero": "EMBR",
    "Fremont": "FRMT",
    "Fruitvale": "FTVL",
    "Glen Park": "GLEN",
    "Hayward": "HAYW",
    "Lafayette": "LAFY",
    "Lake Merritt": "LAKE",
    "MacArthur": "MCAR",
    "Millbrae": "MLBR",
    "Milpitas": "MLPT",
    "Montgomery St.": "MONT",
    "North Berkeley": "NBRK",
    "North Concord/Martinez": "NCON",
    "Oakland International Airport": "OAKL",
    "Orinda": "ORIN",
    "Pittsburg/Bay Point": "PITT",
    "Pittsburg Center": "PCTR",
    "Pleasant Hill/Contra Costa Centre": "PHIL",
    "Powell St.": "POWL",
    "Richmond": "RICH",
    "Rockridge": "ROCK",
    "San Bruno": "SBRN",
    "San Francisco International Airport": "SFIA",
    "San Leandro": "SANL",
    "South Hayward": "SHAY",
    "South San Francisco": "SSAN",
    "Union City": "UCTY",
    "Walnut Creek": "WCRK",
    "Warm Springs/South Fremont": "WARM",
    "West Dublin/Pleasanton": "WDUB",
    "West Oakland": "WOAK",
}

_NAMES_BY_CODE: dict[str, str] = {code: name for name, code in STATIONS.items()}


def is_valid_station(code: str | None) -> bool:
    """Check whether a station code exists in the directory (case-insensitive)."""
    if not code or not isinstance(code, str):
        return False
    return code.upper() in _NAMES_BY_CODE


def station_name(code: str) -> str:
    """Return the full station name for a code."""
    try:
        return _NAMES_BY_CODE[code.upper()]
    except (KeyError, AttributeError):
        raise ConfigError(f"Unknown station code: {code!r}") from None


def lookup_station(text: str) -> str:
    """
    Resolve user input to a station code.

    Accepts a station code in any case, an exact station name, or a prefix of a
    station name that matches exactly one station.
    """
    query = (text or "").strip()
    if not query:
        raise ConfigError("No station given")

    if is_valid_station(query):
        return query.upper()

    lowered = query.lower()
    for name, code in STATIONS.items():
        if name.lower() == lowered:
            return code

    matches = [code for name, code in STATIONS.items() if name.lower().startswith(lowered)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        options = ", ".join(sorted(matches))
        raise ConfigError(f"Ambiguous station {query!r}: could be {options}")

    raise ConfigError(f"Unknown station: {query!r}")


def station_choices() -> list[tuple[str, str]]:
    """Return (label, code) pairs sorted by station name."""
    return [(f"{name} ({code})", code) for name, code in sorted(STATIONS.items())]
