"""
Parses the ``s=<season> e=<episode> l=<lang>+<lang>`` episode selection parameters.
"""

from dataclasses import dataclass, field

from southpark_dl.exceptions import ConfigurationError


@dataclass
class EpisodeSelection:
    """Season, episode (0 = whole season) and ordered languages from the command line."""

    season: int = 0
    episode: int = 0
    languages: list[str] = field(default_factory=list)


def _parse_number(value: str, name: str, minimum: int = 1) -> int:
    try:
        number = int(value)
    except ValueError:
        number = minimum - 1
    if number < minimum:
        raise ConfigurationError(f'"{value}" is not a valid {name} number.')
    return number


def parse_episode_params(params: list[str]) -> EpisodeSelection:
    """
    Parses ``key=value`` tokens. Keys are case-insensitive.

    Raises:
        ConfigurationError: For malformed tokens, unknown keys, bad numbers or a
        missing season or language.
    """
    selection = EpisodeSelection()
    for param in params:
        parts = param.split("=")
        if len(parts) != 2:
            raise ConfigurationError(f'Invalid parameter format used for "{param}".')
        key, value = parts
        key = key.strip().lower()
        if key == "s":
            selection.season = _parse_number(value, "season")
        elif key == "e":
            selection.episode = _parse_number(value, "episode", minimum=0)
        elif key == "l":
            selection.languages = [code for code in value.split("+") if code]
        else:
            raise ConfigurationError(f'Unknown parameter "{key}" used.')

    if selection.season < 1:
        raise ConfigurationError("No season parameter given.")
    if not selection.languages:
        raise ConfigurationError("No language parameter given.")
    return selection
