"""
Runs the external download, transcode and mux programs and classifies their exit
statuses.
"""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from enum import Enum

from southpark_dl.exceptions import ExternalToolError

log = logging.getLogger(__name__)


class Tool(Enum):
    """The kinds of external programs the pipeline drives."""

    STREAM_CLIENT = "stream_client"
    TRANSCODER = "transcoder"
    MUXER = "muxer"


class ToolOutcome(Enum):
    """What an exit status means for the caller."""

    SUCCESS = "success"
    RETRYABLE_INCOMPLETE = "retryable_incomplete"
    ACCEPTABLE_WARNING = "acceptable_warning"
    FATAL = "fatal"

    @property
    def is_accepted(self) -> bool:
        return self in (ToolOutcome.SUCCESS, ToolOutcome.ACCEPTABLE_WARNING)


# Exit status -> outcome, per tool. Anything not listed is fatal.
OUTCOME_TABLE: dict[Tool, dict[int, ToolOutcome]] = {
    # rtmpdump: 2 means the transfer stopped early and can be resumed
    Tool.STREAM_CLIENT: {0: ToolOutcome.SUCCESS, 2: ToolOutcome.RETRYABLE_INCOMPLETE},
    Tool.TRANSCODER: {0: ToolOutcome.SUCCESS},
    # mkvmerge: 1 means warnings only
    Tool.MUXER: {0: ToolOutcome.SUCCESS, 1: ToolOutcome.ACCEPTABLE_WARNING},
}


def classify(tool: Tool, exit_status: int) -> ToolOutcome:
    """Maps a raw exit status of `tool` to a named outcome."""
    return OUTCOME_TABLE[tool].get(exit_status, ToolOutcome.FATAL)


@dataclass(frozen=True)
class Command:
    """A single external program invocation: program plus literal arguments."""

    tool: Tool
    program: str
    args: tuple[str, ...]

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv)


class ToolRunner:
    """
    Executes commands synchronously, letting the child write straight to the
    terminal. Never inspects output and never raises on a non-zero status.
    """

    def run(self, command: Command) -> int:
        """Runs `command` and returns its exit status."""
        log.debug(f"Running: {command}")
        try:
            completed = subprocess.run(command.argv, check=False)
        except OSError as e:
            raise ExternalToolError(command.program, None, str(e)) from e
        log.debug(f"'{command.program}' exited with status {completed.returncode}")
        return completed.returncode

    def run_checked(self, command: Command) -> ToolOutcome:
        """
        Runs `command` and raises ExternalToolError unless the outcome is accepted
        for its tool.
        """
        exit_status = self.run(command)
        outcome = classify(command.tool, exit_status)
        if not outcome.is_accepted:
            raise ExternalToolError(command.program, exit_status)
        if outcome is ToolOutcome.ACCEPTABLE_WARNING:
            log.warning(
                f"[yellow]'{command.program}' finished with warnings "
                f"(exit status {exit_status}).[/yellow]"
            )
        return outcome
