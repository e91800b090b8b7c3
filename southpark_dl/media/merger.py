"""
Turns the downloaded acts into one multi-audio MKV: extracts video and audio
streams, merges each act's audio tracks into its video and finally joins all acts.
"""

import logging
from pathlib import Path

from southpark_dl.exceptions import FileAlreadyExistsError, FileDoesNotExistError
from southpark_dl.models.config import AssemblerConfig
from southpark_dl.models.run_state import RunState
from southpark_dl.storage.episode_database import EpisodeDatabase
from southpark_dl.utils.naming import build_filename

from .runner import Command, Tool, ToolRunner

log = logging.getLogger(__name__)

# Languages the muxer gets an explicit track language for.
LANGUAGE_TAGS = {"de": "ger", "en": "eng"}

# Track 0 is the video stream; audio tracks follow in language order.
FIRST_AUDIO_TRACK = 2


def _require_exists(path: Path) -> None:
    if not path.exists():
        raise FileDoesNotExistError(path)


def _require_absent(path: Path) -> None:
    if path.exists():
        raise FileAlreadyExistsError(path)


class Merger:
    """Runs the four merge sub-stages for one episode."""

    def __init__(
        self, config: AssemblerConfig, episode_db: EpisodeDatabase, runner: ToolRunner
    ):
        self.config = config
        self.episode_db = episode_db
        self.runner = runner

    def merge_episode(self, episode: int, run_state: RunState) -> Path:
        """Runs all sub-stages in order and returns the merged output file."""
        self.extract_video_parts(episode, run_state)
        self.extract_audio_parts(episode, run_state)
        self.merge_video_with_audio_parts(episode, run_state)
        return self.merge_all_final_parts(episode)

    def _main_acts(self, episode: int) -> list[str]:
        return self.episode_db.get_acts(
            self.config.season, episode, self.config.main_language
        )

    def _download_path(self, episode: int, language: str, act: str) -> Path:
        return self.config.download_folder / build_filename(
            self.config.season, episode, language, "mp4", act
        )

    def _video_part_path(self, episode: int, act: str) -> Path:
        return self.config.temp_folder / build_filename(
            self.config.season, episode, None, "mkv", act
        )

    def _audio_part_path(self, episode: int, language: str, act: str) -> Path:
        return self.config.temp_folder / build_filename(
            self.config.season, episode, language, "aac", act
        )

    def _act_part_path(self, episode: int, act: str) -> Path:
        return self.config.temp_folder / build_filename(
            self.config.season, episode, self.config.languages, "mkv", act
        )

    def merged_path(self, episode: int) -> Path:
        return self.config.output_folder / build_filename(
            self.config.season, episode, self.config.languages, "mkv"
        )

    def _transcode(self, source: Path, target: Path, stream_args: list[str]) -> Command:
        args = ["-hide_banner", "-nostdin", "-loglevel", "error", "-i", str(source)]
        args += stream_args
        args.append(str(target))
        return Command(Tool.TRANSCODER, self.config.transcoder, tuple(args))

    def extract_video_parts(self, episode: int, run_state: RunState) -> list[Path]:
        """Copies the video stream of each main-language act into a silent MKV."""
        log.info("  [cyan]⚙ Extracting video parts[/]")
        targets = []
        for act in self._main_acts(episode):
            source = self._download_path(episode, self.config.main_language, act)
            target = self._video_part_path(episode, act)
            _require_exists(source)
            _require_absent(target)

            run_state.track_temp(target)
            self.runner.run_checked(
                self._transcode(source, target, ["-vcodec", "copy", "-an"])
            )
            targets.append(target)
        return targets

    def extract_audio_parts(self, episode: int, run_state: RunState) -> list[Path]:
        """Copies the audio stream of every act in every language into an AAC file."""
        log.info("  [cyan]⚙ Extracting audio parts[/]")
        targets = []
        for language in self.config.languages:
            # Acts are enumerated per language; segmentations may differ.
            for act in self.episode_db.get_acts(self.config.season, episode, language):
                source = self._download_path(episode, language, act)
                target = self._audio_part_path(episode, language, act)
                _require_exists(source)
                _require_absent(target)

                run_state.track_temp(target)
                self.runner.run_checked(
                    self._transcode(source, target, ["-vn", "-acodec", "copy"])
                )
                targets.append(target)
        return targets

    def merge_video_with_audio_parts(
        self, episode: int, run_state: RunState
    ) -> list[Path]:
        """Muxes each act's video with the audio of all languages, in language order."""
        log.info("  [cyan]⚙ Merging audio into video parts[/]")
        season = self.config.season
        targets = []
        for act in self._main_acts(episode):
            video_source = self._video_part_path(episode, act)
            _require_exists(video_source)
            target = self._act_part_path(episode, act)
            _require_absent(target)

            args = ["-o", str(target), str(video_source)]
            for language in self.config.languages:
                # A language without this act has no audio part to merge.
                audio_source = self._audio_part_path(episode, language, act)
                _require_exists(audio_source)
                delay = self.episode_db.get_act_audio_delay(
                    season, episode, language, act
                )
                if delay > 0:
                    args += ["--sync", f"0:{delay}"]
                args.append(str(audio_source))

            run_state.track_temp(target)
            self.runner.run_checked(Command(Tool.MUXER, self.config.muxer, tuple(args)))
            targets.append(target)
        return targets

    def language_args(self) -> list[str]:
        """Track language options for every recognized requested language."""
        args = []
        for index, language in enumerate(self.config.languages):
            tag = LANGUAGE_TAGS.get(language.lower())
            if tag:
                args += ["--language", f"{index + FIRST_AUDIO_TRACK}:{tag}"]
        return args

    def merge_all_final_parts(self, episode: int) -> Path:
        """Appends all merged acts into the final output file."""
        log.info("  [cyan]⚙ Merging all acts[/]")
        target = self.merged_path(episode)
        _require_absent(target)

        args = ["-o", str(target), "--default-track", str(FIRST_AUDIO_TRACK)]
        args += self.language_args()
        for position, act in enumerate(self._main_acts(episode)):
            part = self._act_part_path(episode, act)
            _require_exists(part)
            if position > 0:
                args.append("+")
            args.append(str(part))

        self.runner.run_checked(Command(Tool.MUXER, self.config.muxer, tuple(args)))
        return target
