"""Shared fixtures and test doubles for southpark_dl tests.

The fake runner stands in for rtmpdump, ffmpeg and mkvmerge: it records every
command, creates the file the real program would have written and returns a
scripted exit status.
"""

import os

os.environ["TERM"] = "dumb"  # Disable rich terminal features

from collections.abc import Callable
from pathlib import Path

import pytest

from southpark_dl.media.runner import Command, Tool, ToolRunner
from southpark_dl.models.config import AssemblerConfig
from southpark_dl.storage.episode_database import EpisodeDatabase
from southpark_dl.storage.player_database import PlayerDatabase, PlayerDescriptor

FIXTURES_DIR = Path(__file__).parent / "fixtures"
EPISODE_DB_PATH = FIXTURES_DIR / "episodes.xml"
PLAYER_DB_PATH = FIXTURES_DIR / "players.xml"

TEST_PLAYER_URL = "http://media.example.com/player/2011.swf"
DOWNLOAD_CONTENT = b"\x00\x00\x00\x18ftypmp42 fake act payload"


def output_of(command: Command) -> Path:
    """The file a command writes: the value after -o, or the last argument."""
    args = list(command.args)
    if "-o" in args:
        return Path(args[args.index("-o") + 1])
    return Path(args[-1])


class FakeRunner(ToolRunner):
    """Records commands instead of spawning processes."""

    def __init__(
        self,
        statuses: dict[Tool, list[int]] | None = None,
        status_for: Callable[[Command], int] | None = None,
        create_outputs: bool = True,
    ):
        self.commands: list[Command] = []
        self.statuses = {tool: list(codes) for tool, codes in (statuses or {}).items()}
        self.status_for = status_for
        self.create_outputs = create_outputs

    def run(self, command: Command) -> int:
        self.commands.append(command)
        if self.status_for is not None:
            status = self.status_for(command)
        else:
            queue = self.statuses.get(command.tool)
            status = queue.pop(0) if queue else 0
        if self.create_outputs:
            target = output_of(command)
            if command.tool is Tool.STREAM_CLIENT:
                target.write_bytes(DOWNLOAD_CONTENT)
            else:
                target.write_bytes(command.program.encode())
        return status

    def outputs(self, tool: Tool | None = None) -> list[str]:
        return [
            output_of(c).name for c in self.commands if tool is None or c.tool is tool
        ]


@pytest.fixture
def folders(tmp_path: Path) -> dict[str, Path]:
    result = {
        "download_folder": tmp_path / "downloads",
        "temp_folder": tmp_path / "tmp",
        "output_folder": tmp_path / "output",
    }
    for folder in result.values():
        folder.mkdir()
    return result


@pytest.fixture
def make_config(folders: dict[str, Path]) -> Callable[..., AssemblerConfig]:
    def _make(**overrides) -> AssemblerConfig:
        values = {
            **folders,
            "episode_db": EPISODE_DB_PATH,
            "player_db": PLAYER_DB_PATH,
            "player_url": TEST_PLAYER_URL,
            "resolution": "high",
            "verify_checksums": False,
            "season": 2,
            "episode": 1,
            "languages": ["de", "en"],
        }
        values.update(overrides)
        return AssemblerConfig(**values)

    return _make


@pytest.fixture
def config(make_config) -> AssemblerConfig:
    return make_config()


@pytest.fixture
def episode_db() -> EpisodeDatabase:
    return EpisodeDatabase(EPISODE_DB_PATH)


@pytest.fixture
def player() -> PlayerDescriptor:
    return PlayerDatabase(PLAYER_DB_PATH).find_player(TEST_PLAYER_URL)


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


def write_single_act_db(path: Path, checksum: str | None) -> Path:
    """Writes an episode database with one act in German, optionally with a checksum."""
    checksum_attr = f' checksum="{checksum}"' if checksum is not None else ""
    path.write_text(
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<episodes><season id=\"2\"><episode id=\"1\"><language code=\"de\">"
        "<title>TitleDE</title><act id=\"1\">"
        f"<stream resolution=\"high\"{checksum_attr}>rtmpe://cdn.example.com/a1</stream>"
        "</act></language></episode></season></episodes>\n",
        encoding="utf-8",
    )
    return path


def write_uneven_acts_db(path: Path) -> Path:
    """Writes an episode database where German has two acts and English only one."""
    path.write_text(
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<episodes><season id=\"2\"><episode id=\"1\">"
        "<language code=\"de\"><title>TitleDE</title>"
        "<act id=\"1\"><stream resolution=\"high\">rtmpe://cdn.example.com/de1</stream></act>"
        "<act id=\"2\"><stream resolution=\"high\">rtmpe://cdn.example.com/de2</stream></act>"
        "</language>"
        "<language code=\"en\"><title>TitleEN</title>"
        "<act id=\"1\" delay=\"870\">"
        "<stream resolution=\"high\">rtmpe://cdn.example.com/en1</stream></act>"
        "</language>"
        "</episode></season></episodes>\n",
        encoding="utf-8",
    )
    return path
