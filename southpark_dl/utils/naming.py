"""
The file naming scheme every stage uses to locate its inputs and outputs.
"""

from collections.abc import Iterable


def build_filename(
    season: int,
    episode: int,
    languages: str | Iterable[str] | None = None,
    extension: str | None = None,
    act: str | int | None = None,
    title: str | None = None,
) -> str:
    """
    Builds the canonical file name for an episode artifact.

    The layout is ``S{season:02}E{episode:02}[A{act}][ {title} ][LANGS][.ext]``
    where LANGS is the upper-cased language codes joined by ``+``.

    Examples:
        >>> build_filename(2, 1, ["en"], "mp4", 3)
        'S02E01A3EN.mp4'
        >>> build_filename(2, 1, ["de", "en"], "mkv")
        'S02E01DE+EN.mkv'
        >>> build_filename(2, 1, [], "mkv", title="Title")
        'S02E01 Title .mkv'
    """
    if languages is None:
        languages = []
    elif isinstance(languages, str):
        languages = [languages]
    language_tag = "+".join(code for code in languages if code).upper()

    name = f"S{season:02}E{episode:02}"
    if act is not None and str(act) != "":
        name += f"A{act}"
    if title:
        name += f" {title} "
    name += language_tag
    if extension:
        name += f".{extension}"
    return name


def build_product_filename(
    product_label: str,
    season: int,
    episode: int,
    languages: Iterable[str],
    title: str,
    extension: str = "mkv",
) -> str:
    """The final, user-facing name of an assembled episode."""
    name = build_filename(season, episode, languages, extension, title=title)
    return f"{product_label} {name}" if product_label else name
