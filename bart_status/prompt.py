"""Interactive station selection."""

from rich.console import Console
from rich.prompt import Prompt

from .exceptions import ConfigError
from .stations import lookup_station, station_choices


def select_option(
    console: Console,
    options: list[tuple[str, str]],
    prompt: str = "Select an option",
    default: str | None = None,
) -> str:
    """
    Ask the user to pick one of a list of labelled options.

    Accepts the option number or anything lookup_station understands (a code
    or an unambiguous station name). Returns the option's code.
    """
    if not options:
        raise ConfigError("Nothing to select from")

    codes = {code for _, code in options}
    for i, (label, _) in enumerate(options, 1):
        console.print(f"  {i:>2}. {label}")
    console.print()

    kwargs = {"default": default} if default else {}
    while True:
        choice = Prompt.ask(prompt, console=console, **kwargs).strip()

        # Handle numeric choice
        if choice.isdigit():
            idx = int(choice) - 1
            if 0 <= idx < len(options):
                return options[idx][1]
        else:
            try:
                code = lookup_station(choice)
            except ConfigError as e:
                console.print(f"[red]{e}[/]")
                continue
            if code in codes:
                return code

        console.print("[red]Invalid selection. Try again.[/]")


def select_station_interactively(console: Console, current: str | None = None) -> str:
    """Prompt for a station from the full directory."""
    console.print("\n[bold yellow]Select a BART station:[/]\n")
    return select_option(
        console,
        station_choices(),
        prompt="Station number, code or name",
        default=current,
    )
