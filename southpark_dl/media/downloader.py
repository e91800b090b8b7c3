"""
Downloads every act of an episode in every requested language through the
streaming client, resuming incomplete transfers and verifying checksums.
"""

import logging
from pathlib import Path

from southpark_dl.exceptions import (
    ChecksumMismatchError,
    ExternalToolError,
    FileAlreadyExistsError,
    FileIntegrityError,
)
from southpark_dl.models.config import AssemblerConfig
from southpark_dl.models.run_state import RunState
from southpark_dl.storage.episode_database import EpisodeDatabase
from southpark_dl.storage.player_database import PlayerDescriptor
from southpark_dl.utils.naming import build_filename

from .integrity import FileIntegrityChecker
from .runner import Command, Tool, ToolOutcome, ToolRunner, classify

log = logging.getLogger(__name__)

RESUME_FLAG = "--resume"


class Downloader:
    """Fetches the raw per-language, per-act MP4 files of an episode."""

    def __init__(
        self,
        config: AssemblerConfig,
        episode_db: EpisodeDatabase,
        player: PlayerDescriptor,
        runner: ToolRunner,
    ):
        self.config = config
        self.episode_db = episode_db
        self.player = player
        self.runner = runner

    def download_episode(self, episode: int, run_state: RunState) -> list[Path]:
        """Downloads all acts of `episode` for every language, in language order."""
        season = self.config.season
        downloaded = []
        for language in self.config.languages:
            for act in self.episode_db.get_acts(season, episode, language):
                downloaded.append(self.download_act(episode, language, act, run_state))
        return downloaded

    def download_act(
        self, episode: int, language: str, act: str, run_state: RunState
    ) -> Path:
        season = self.config.season
        target = self.config.download_folder / build_filename(
            season, episode, language, "mp4", act
        )
        if target.exists():
            raise FileAlreadyExistsError(target)

        url = self.episode_db.get_url(
            season, episode, language, act, self.config.resolution
        )

        # Tracked before downloading so a partial file is cleaned up as well.
        run_state.track_download(target)
        log.info(f"  [cyan]↓ Downloading[/] [dim]{target.name}[/dim]")
        self._fetch(url, target)

        if self.config.check_integrity and not FileIntegrityChecker.check_mp4(target):
            raise FileIntegrityError(f"Downloaded file '{target}' is not a valid MP4.")
        if self.config.verify_checksums:
            self.verify_checksum(episode, language, act, target)
        return target

    def build_command(self, url: str, target: Path, resume: bool = False) -> Command:
        args = [
            "-o",
            str(target),
            "-r",
            url,
            "--swfUrl",
            self.player.url,
            "--swfsize",
            self.player.size,
            "--swfhash",
            self.player.hash,
        ]
        if resume:
            args.append(RESUME_FLAG)
        return Command(Tool.STREAM_CLIENT, self.config.stream_client, tuple(args))

    def _fetch(self, url: str, target: Path) -> None:
        """
        Runs the streaming client until it stops reporting an incomplete transfer.

        Without `max_resume_attempts` the loop is unbounded.
        """
        max_resumes = self.config.max_resume_attempts
        resumes = 0
        exit_status = self.runner.run(self.build_command(url, target))
        outcome = classify(Tool.STREAM_CLIENT, exit_status)
        while outcome is ToolOutcome.RETRYABLE_INCOMPLETE:
            if max_resumes and resumes >= max_resumes:
                raise ExternalToolError(
                    self.config.stream_client,
                    exit_status,
                    f"transfer of '{target.name}' still incomplete after "
                    f"{resumes} resume attempts",
                )
            resumes += 1
            log.warning(
                f"  [yellow]⟳ Transfer of '{target.name}' incomplete, resuming "
                f"(attempt {resumes}).[/yellow]"
            )
            exit_status = self.runner.run(self.build_command(url, target, resume=True))
            outcome = classify(Tool.STREAM_CLIENT, exit_status)

        if outcome is not ToolOutcome.SUCCESS:
            raise ExternalToolError(self.config.stream_client, exit_status)

    def verify_checksum(
        self, episode: int, language: str, act: str, target: Path
    ) -> None:
        """Compares the file's MD5 with the database value, if there is one."""
        expected = self.episode_db.get_checksum(
            self.config.season, episode, language, act, self.config.resolution
        )
        if expected is None:
            log.debug(f"No checksum known for '{target.name}', skipping verification.")
            return
        actual = FileIntegrityChecker.md5sum(target)
        if actual != expected:
            raise ChecksumMismatchError(target, expected, actual)
        log.debug(f"Checksum of '{target.name}' verified.")
