"""Tests for the subprocess runner and the exit status table."""

import subprocess
import sys

import pytest

from southpark_dl.exceptions import ExternalToolError
from southpark_dl.media.runner import Command, Tool, ToolOutcome, ToolRunner, classify


@pytest.mark.parametrize(
    ("tool", "status", "expected"),
    [
        (Tool.STREAM_CLIENT, 0, ToolOutcome.SUCCESS),
        (Tool.STREAM_CLIENT, 2, ToolOutcome.RETRYABLE_INCOMPLETE),
        (Tool.STREAM_CLIENT, 1, ToolOutcome.FATAL),
        (Tool.TRANSCODER, 0, ToolOutcome.SUCCESS),
        (Tool.TRANSCODER, 1, ToolOutcome.FATAL),
        (Tool.TRANSCODER, 2, ToolOutcome.FATAL),
        (Tool.MUXER, 0, ToolOutcome.SUCCESS),
        (Tool.MUXER, 1, ToolOutcome.ACCEPTABLE_WARNING),
        (Tool.MUXER, 2, ToolOutcome.FATAL),
        (Tool.MUXER, -9, ToolOutcome.FATAL),
    ],
)
def test_classify(tool, status, expected):
    assert classify(tool, status) is expected


def test_command_argv_and_display():
    command = Command(Tool.MUXER, "mkvmerge", ("-o", "/tmp/my file.mkv"))
    assert command.argv == ["mkvmerge", "-o", "/tmp/my file.mkv"]
    assert str(command) == "mkvmerge -o '/tmp/my file.mkv'"


def test_run_passes_argv_without_shell(monkeypatch):
    calls = []

    def fake_run(argv, **kwargs):
        calls.append((argv, kwargs))
        return subprocess.CompletedProcess(argv, 3)

    monkeypatch.setattr("southpark_dl.media.runner.subprocess.run", fake_run)
    command = Command(Tool.TRANSCODER, "ffmpeg", ("-i", "a b.mp4", "out; rm -rf x"))

    assert ToolRunner().run(command) == 3
    argv, kwargs = calls[0]
    assert argv == ["ffmpeg", "-i", "a b.mp4", "out; rm -rf x"]
    assert not kwargs.get("shell", False)
    assert "stdout" not in kwargs and "capture_output" not in kwargs


def test_run_keeps_arguments_literal():
    command = Command(
        Tool.TRANSCODER,
        sys.executable,
        ("-c", "import sys; sys.exit(len(sys.argv))", "a b; echo $HOME", "*"),
    )
    assert ToolRunner().run(command) == 3


def test_missing_program_raises_external_tool_error():
    command = Command(Tool.MUXER, "/nonexistent/southpark-dl-muxer", ())
    with pytest.raises(ExternalToolError) as exc_info:
        ToolRunner().run(command)
    assert exc_info.value.exit_status is None
    assert exc_info.value.program == "/nonexistent/southpark-dl-muxer"


class ScriptedRunner(ToolRunner):
    def __init__(self, status):
        self.status = status

    def run(self, command):
        return self.status


def test_run_checked_accepts_muxer_warnings():
    command = Command(Tool.MUXER, "mkvmerge", ())
    assert ScriptedRunner(1).run_checked(command) is ToolOutcome.ACCEPTABLE_WARNING


@pytest.mark.parametrize(
    ("tool", "status"), [(Tool.MUXER, 2), (Tool.TRANSCODER, 1), (Tool.STREAM_CLIENT, 2)]
)
def test_run_checked_raises_on_rejected_status(tool, status):
    with pytest.raises(ExternalToolError) as exc_info:
        ScriptedRunner(status).run_checked(Command(tool, "tool", ()))
    assert exc_info.value.exit_status == status
