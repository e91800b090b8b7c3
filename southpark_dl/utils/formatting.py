"""
Helper functions for formatting data into human-readable strings.
"""


def format_size(bytes_size: int) -> str:
    """Formats bytes into a human-readable size string (e.g., '145.3 MB')."""
    if bytes_size <= 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    while bytes_size >= 1024 and i < len(units) - 1:
        bytes_size /= 1024
        i += 1
    return f"{bytes_size:.1f} {units[i]}"


def format_duration(seconds: float) -> str:
    """
    Formats a duration in seconds into a human-readable string (e.g., '2h 34m 12s').
    """
    s = int(seconds)
    hours, remainder = divmod(s, 3600)
    minutes, secs = divmod(remainder, 60)
    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def format_languages(languages: list[str]) -> str:
    """Formats language codes the way they appear in file names (e.g. 'DE+EN')."""
    return "+".join(languages).upper()


def compose_title(titles: list[str]) -> str:
    """
    Joins per-language titles: the first bare, every other one parenthesized.

    ``["Titel", "Title"]`` becomes ``"Titel (Title)"``.
    """
    if not titles:
        return ""
    head, *rest = titles
    return " ".join([head, *(f"({title})" for title in rest)])
