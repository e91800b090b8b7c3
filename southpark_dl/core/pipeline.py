"""
The main orchestrator: resolves the episodes to process and drives download,
merge, rename and cleanup for each of them.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from southpark_dl.exceptions import ConfigurationError
from southpark_dl.media import Downloader, Merger, Renamer, ToolRunner
from southpark_dl.models.config import AssemblerConfig
from southpark_dl.models.run_state import RunState
from southpark_dl.storage.episode_database import EpisodeDatabase
from southpark_dl.storage.player_database import PlayerDatabase, PlayerDescriptor
from southpark_dl.utils.formatting import format_languages
from southpark_dl.utils.path import create_dir

log = logging.getLogger(__name__)


class PipelineState(Enum):
    """States of the pipeline controller."""

    IDLE = "idle"
    RESOLVING = "resolving"
    DOWNLOADING = "downloading"
    MERGING = "merging"
    RENAMING = "renaming"
    CLEANING_UP = "cleaning_up"
    ABORTED = "aborted"


@dataclass
class RunSummary:
    """What a completed run produced."""

    episodes: list[int] = field(default_factory=list)
    outputs: list[Path] = field(default_factory=list)
    duration_seconds: float = 0.0


class Pipeline:
    """
    Assembles the configured episodes one after the other.

    Any stage error aborts the whole run: earlier episodes stay finished, the
    failing episode's files are left on disk and later episodes are not started.
    """

    def __init__(
        self,
        config: AssemblerConfig,
        episode_db: EpisodeDatabase | None = None,
        player: PlayerDescriptor | None = None,
        runner: ToolRunner | None = None,
    ):
        if config.season < 1:
            raise ConfigurationError("No season parameter given.")
        if not config.languages:
            raise ConfigurationError("No language parameter given.")

        self.config = config
        if player is None and not config.player_url:
            raise ConfigurationError(
                "No player_url configured. Set it in the configuration file."
            )

        self.episode_db = episode_db or EpisodeDatabase(config.episode_db)
        self.player = player or PlayerDatabase(config.player_db).find_player(
            config.player_url
        )
        self.runner = runner or ToolRunner()
        self.run_state = RunState()
        self.state = PipelineState.IDLE
        self.history: list[PipelineState] = [self.state]

        self.downloader = Downloader(config, self.episode_db, self.player, self.runner)
        self.merger = Merger(config, self.episode_db, self.runner)
        self.renamer = Renamer(config, self.episode_db)

    def _enter(self, state: PipelineState) -> None:
        log.debug(f"Pipeline state: {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def resolve_episodes(self) -> list[int]:
        """The explicit episode, or every episode of the season in the main language."""
        if self.config.episode > 0:
            return [self.config.episode]
        return self.episode_db.get_episode_ids(
            self.config.season, self.config.main_language
        )

    def run(self) -> RunSummary:
        summary = RunSummary()
        start_time = time.monotonic()
        try:
            self._enter(PipelineState.RESOLVING)
            episodes = self.resolve_episodes()
            if not episodes:
                log.warning(
                    f"[yellow]No episodes found for season {self.config.season} "
                    f"in '{self.config.main_language}'.[/yellow]"
                )
            for episode in episodes:
                summary.outputs.append(self.process_episode(episode))
                summary.episodes.append(episode)
        except BaseException:
            # Interrupts abort the run too.
            self._enter(PipelineState.ABORTED)
            raise
        finally:
            summary.duration_seconds = time.monotonic() - start_time

        self._enter(PipelineState.IDLE)
        return summary

    def process_episode(self, episode: int) -> Path:
        """Runs every stage for one episode and returns the final file."""
        log.info(
            f"\n[bold cyan]▶ Episode:[/] S{self.config.season:02}E{episode:02} "
            f"({format_languages(self.config.languages)})"
        )
        for folder in (
            self.config.download_folder,
            self.config.temp_folder,
            self.config.output_folder,
        ):
            create_dir(folder)

        self.run_state = RunState()

        self._enter(PipelineState.DOWNLOADING)
        self.downloader.download_episode(episode, self.run_state)

        self._enter(PipelineState.MERGING)
        merged = self.merger.merge_episode(episode, self.run_state)

        self._enter(PipelineState.RENAMING)
        final_path = self.renamer.rename(merged, episode)

        self._enter(PipelineState.CLEANING_UP)
        self.clean_up()
        return final_path

    def clean_up(self) -> None:
        """Deletes tracked files as configured, then forgets them either way."""
        if self.config.remove_temp_files:
            self._remove_files(self.run_state.temp_files)
        if self.config.remove_downloaded_files:
            self._remove_files(self.run_state.downloaded_files)
        self.run_state.clear()

    @staticmethod
    def _remove_files(paths: list[Path]) -> None:
        for path in paths:
            log.debug(f"Removing '{path}'")
            path.unlink(missing_ok=True)
