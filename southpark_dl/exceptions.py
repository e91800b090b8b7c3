"""
Defines custom exceptions for the application to allow for more specific error handling.
"""

from pathlib import Path


class SouthParkDlError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(SouthParkDlError):
    """Raised for bad command-line parameters or an invalid configuration file."""


class UnknownReferenceError(SouthParkDlError):
    """Raised when a metadata lookup finds no season, episode, language, act or player."""

    def __init__(self, value: str, source: str | Path, kind: str = "reference"):
        self.value = value
        self.source = str(source)
        self.kind = kind
        super().__init__(
            f'Invalid or unknown {kind} "{value}". '
            f'Verify it and update "{self.source}" if necessary.'
        )


class FileAlreadyExistsError(SouthParkDlError):
    """Raised when a stage would overwrite an existing file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(f"File '{self.path}' already exists.")


class FileDoesNotExistError(SouthParkDlError):
    """Raised when a stage input is missing."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(f"File '{self.path}' does not exist.")


class ChecksumMismatchError(SouthParkDlError):
    """Raised when a downloaded file's hash differs from the one in the episode database."""

    def __init__(self, path: str | Path, expected: str, actual: str):
        self.path = Path(path)
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Checksum mismatch for '{self.path.name}': expected {expected}, got {actual}."
        )


class ExternalToolError(SouthParkDlError):
    """
    Raised when an external program fails or cannot be started.

    `exit_status` is None when the program could not be launched at all.
    """

    def __init__(self, program: str, exit_status: int | None, detail: str = ""):
        self.program = program
        self.exit_status = exit_status
        if exit_status is None:
            message = f"Could not run '{program}'"
        else:
            message = f"'{program}' failed with exit status {exit_status}"
        super().__init__(f"{message}{': ' + detail if detail else '.'}")


class FileIntegrityError(SouthParkDlError):
    """Raised when a downloaded file fails a post-download integrity check."""
