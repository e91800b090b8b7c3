"""
Defines the command-line interface for the application using Typer.
"""

import logging
import os
import shutil
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from southpark_dl import __version__
from southpark_dl.core.pipeline import Pipeline
from southpark_dl.exceptions import ConfigurationError, SouthParkDlError
from southpark_dl.storage.config_manager import ConfigManager
from southpark_dl.storage.episode_database import EpisodeDatabase
from southpark_dl.storage.player_database import PlayerDatabase

from .formatters import (
    format_error_with_suggestions,
    print_config,
    print_episode_table,
    print_summary_panel,
    print_validation_table,
)
from .params import parse_episode_params

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("southpark_dl")

app = typer.Typer(
    name="southpark-dl",
    help=(
        "Downloads South Park episodes in several languages and assembles them into"
        " one MKV per episode. Use 'southpark-dl <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)

PARAMS_METAVAR = "s=<season> [e=<episode>] l=<lang>[+<lang>...]"


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "southpark-dl"


CONFIG_FILE = get_config_dir() / "config.ini"


def _config_file(ctx: typer.Context) -> Path:
    return (ctx.obj or {}).get("config_file", CONFIG_FILE)


def _fail(error: Exception) -> None:
    console.print(f"\n{format_error_with_suggestions(error)}")
    raise typer.Exit(code=1) from error


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    config_file: Path | None = typer.Option(  # noqa: B008
        None, "--config", "-c", help="Use this configuration file."
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """South Park Downloader CLI"""
    if version:
        console.print(f"[bold]southpark-dl[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("southpark_dl").setLevel(log_level)

    ctx.obj = {"config_file": config_file or CONFIG_FILE}

    if show_config:
        path = _config_file(ctx)
        if not path.is_file():
            console.print(
                "[red]✗ Config file not found.[/] Run [cyan]southpark-dl init[/cyan]"
                " first."
            )
            raise typer.Exit(code=1)
        config_manager = ConfigManager(path)
        config_manager.load_config()
        print_config(path, config_manager.get_config_as_dict())
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    ctx: typer.Context,
    player_url: str = typer.Option(
        "", "--player-url", help="SWF player URL to look up in the players database."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration file."
    ),
):
    """Create a configuration file with default settings."""
    path = _config_file(ctx)
    if (
        path.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    settings = {"player_url": player_url} if player_url else {}
    try:
        ConfigManager(path).save_new_config(settings)
    except SouthParkDlError as e:
        _fail(e)
    console.print(f"\n[bold green]✓ Configuration saved to '{path}'[/bold green]")
    if not player_url:
        console.print(
            "[yellow]Set 'player_url' in the configuration before downloading."
            "[/yellow]"
        )


@app.command(name="download")
def download_command(
    ctx: typer.Context,
    params: list[str] = typer.Argument(  # noqa: B008
        ..., help="Season, optional episode and languages.", metavar=PARAMS_METAVAR
    ),
    remove_temp: bool | None = typer.Option(
        None,
        "--remove-temp/--keep-temp",
        help="Delete intermediate files after an episode is assembled.",
    ),
    remove_downloads: bool | None = typer.Option(
        None,
        "--remove-downloads/--keep-downloads",
        help="Delete downloaded acts after an episode is assembled.",
    ),
    verify: bool | None = typer.Option(
        None,
        "--verify/--no-verify",
        help="Verify downloaded acts against the checksums of the episode database.",
    ),
    max_resumes: int | None = typer.Option(
        None,
        "--max-resumes",
        help="Give up after this many resumed transfers per act (0 = unlimited).",
    ),
):
    """Download and assemble one episode or a whole season."""
    try:
        selection = parse_episode_params(params)
        cli_options = {
            key: value
            for key, value in {
                "season": selection.season,
                "episode": selection.episode,
                "languages": selection.languages,
                "remove_temp_files": remove_temp,
                "remove_downloaded_files": remove_downloads,
                "verify_checksums": verify,
                "max_resume_attempts": max_resumes,
            }.items()
            if value is not None
        }
        config = ConfigManager(_config_file(ctx)).load_config(cli_options)

        console.print("[bold cyan]📺 Starting assembly session...[/bold cyan]")
        summary = Pipeline(config).run()
    except SouthParkDlError as e:
        _fail(e)

    print_summary_panel(summary)


@app.command()
def episodes(
    ctx: typer.Context,
    params: list[str] = typer.Argument(  # noqa: B008
        ..., help="Season and language.", metavar="s=<season> l=<lang>"
    ),
):
    """List the episodes of a season known to the episode database."""
    try:
        selection = parse_episode_params(params)
        config = ConfigManager(_config_file(ctx)).load_config()
        episode_db = EpisodeDatabase(config.episode_db)
        language = selection.languages[0]
        rows = []
        for episode in episode_db.get_episode_ids(selection.season, language):
            rows.append(
                (
                    episode,
                    episode_db.get_title(selection.season, episode, language),
                    len(episode_db.get_acts(selection.season, episode, language)),
                )
            )
    except SouthParkDlError as e:
        _fail(e)

    print_episode_table(selection.season, rows)


@app.command()
def validate(ctx: typer.Context):
    """Validate the current configuration."""
    try:
        config = ConfigManager(_config_file(ctx)).load_config()
        print_validation_table(config)
    except SouthParkDlError as e:
        console.print(f"[red]✗ Configuration is invalid: {e}[/red]")
        raise typer.Exit(code=1) from e


@app.command()
def diagnose(ctx: typer.Context):
    """Diagnose common configuration and tool issues."""
    console.print("\n[bold cyan]Running diagnostics...[/bold cyan]\n")
    path = _config_file(ctx)
    if path.is_file():
        console.print(f"[green]✓[/] Config file exists at: [dim]{path}[/dim]")
    else:
        console.print(
            "[red]✗ Config file not found.[/] Run [cyan]southpark-dl init[/cyan]."
        )
        raise typer.Exit(code=1)

    try:
        config = ConfigManager(path).load_config()
    except SouthParkDlError as e:
        console.print(f"[red]✗ Configuration validation failed: {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print("[green]✓[/] Configuration file is valid and can be loaded.")

    issues_found = False
    try:
        EpisodeDatabase(config.episode_db)
        console.print(f"[green]✓[/] Episode database: [dim]{config.episode_db}[/dim]")
        if not config.player_url:
            raise ConfigurationError("No player_url configured.")
        PlayerDatabase(config.player_db).find_player(config.player_url)
        console.print(f"[green]✓[/] Player found: [dim]{config.player_url}[/dim]")
    except SouthParkDlError as e:
        console.print(f"[red]✗ {e}[/red]")
        issues_found = True

    for label, program in (
        ("Streaming client", config.stream_client),
        ("Transcoder", config.transcoder),
        ("Muxer", config.muxer),
    ):
        if shutil.which(program):
            console.print(f"[green]✓[/] {label} found: [dim]{program}[/dim]")
        else:
            console.print(f"[red]✗ {label} '{program}' not found on PATH.[/red]")
            issues_found = True

    console.print()
    if not issues_found:
        console.print(
            "[bold green]✓ All checks passed! Your setup looks good.[/bold green]\n"
        )
    else:
        console.print(
            "[bold red]✗ Some issues were found. "
            "Please review the messages above.[/bold red]\n"
        )
        raise typer.Exit(code=1)
