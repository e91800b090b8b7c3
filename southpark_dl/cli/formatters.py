"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from southpark_dl.core.pipeline import RunSummary
from southpark_dl.models.config import AssemblerConfig
from southpark_dl.utils.formatting import format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConfigurationError": [
            "• Check the s=, e= and l= parameters (e.g. s=2 e=1 l=de+en).",
            "• Run `southpark-dl validate` to check the configuration file.",
        ],
        "UnknownReferenceError": [
            "• The episode database may not list this season, episode or language.",
            "• The player URL may have changed; update the players database.",
        ],
        "FileAlreadyExistsError": [
            "• A previous run left this file behind.",
            "• Remove or move it, then run the command again.",
        ],
        "FileDoesNotExistError": [
            "• An earlier stage did not produce this file.",
            "• Check the output of the external program above.",
        ],
        "ChecksumMismatchError": [
            "• The download is corrupt or the stream has changed.",
            "• Delete the file and download it again.",
        ],
        "ExternalToolError": [
            "• Run `southpark-dl diagnose` to check the external programs.",
            "• Files of the failed episode were kept for inspection.",
        ],
        "FileIntegrityError": [
            "• The download is not a readable MP4 file.",
            "• Delete the file and download it again.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the configuration file's values."""
    console = Console()
    content = "\n".join(f"{key} = {value}" for key, value in sorted(config_data.items()))
    console.print(
        Panel(
            content,
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def _enabled(flag: bool) -> str:
    return "✓ Enabled" if flag else "✗ Disabled"


def print_validation_table(config: AssemblerConfig):
    """Displays a summary of the current settings."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("Streaming Client:", config.stream_client)
    table.add_row("Transcoder:", config.transcoder)
    table.add_row("Muxer:", config.muxer)
    table.add_row("Download Folder:", f"[dim]{config.download_folder}[/dim]")
    table.add_row("Temp Folder:", f"[dim]{config.temp_folder}[/dim]")
    table.add_row("Output Folder:", f"[dim]{config.output_folder}[/dim]")
    table.add_row("Episode Database:", f"[dim]{config.episode_db}[/dim]")
    table.add_row("Player Database:", f"[dim]{config.player_db}[/dim]")
    table.add_row("Player URL:", config.player_url or "[yellow]not set[/yellow]")
    table.add_row("Resolution:", config.resolution)
    table.add_row("Verify Checksums:", _enabled(config.verify_checksums))
    table.add_row("Integrity Check:", _enabled(config.check_integrity))
    table.add_row("Remove Temp Files:", _enabled(config.remove_temp_files))
    table.add_row("Remove Downloads:", _enabled(config.remove_downloaded_files))
    table.add_row(
        "Max Resume Attempts:",
        str(config.max_resume_attempts) if config.max_resume_attempts else "unlimited",
    )

    console.print(
        Panel(
            table,
            title="[bold green]✓ Validated Settings[/bold green]",
            border_style="green",
        )
    )


def print_episode_table(season: int, rows: list[tuple[int, str, int]]):
    """Displays the episodes of a season: id, title and number of acts."""
    console = Console()
    table = Table(title=f"Season {season}", header_style="bold cyan")
    table.add_column("Episode", justify="right")
    table.add_column("Title")
    table.add_column("Acts", justify="right")
    for episode, title, acts in rows:
        table.add_row(f"{episode:02}", title, str(acts))
    console.print(table)


def print_summary_panel(summary: RunSummary):
    """Displays what a finished run produced."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    total_size = sum(p.stat().st_size for p in summary.outputs if p.exists())
    table.add_row("Episodes Assembled:", str(len(summary.episodes)))
    table.add_row("Total Size:", format_size(total_size))
    table.add_row("Duration:", format_duration(summary.duration_seconds))
    for path in summary.outputs:
        table.add_row("", f"[dim]{path.name}[/dim]")

    console.print(
        Panel(
            table,
            title="[bold green]✓ Session Complete[/bold green]",
            border_style="green",
            expand=False,
        )
    )
