"""
Tracks the files produced while assembling one episode.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class RunState:
    """
    Files created during the current episode, in creation order.

    Temporary intermediates live in the temp folder, raw per-language, per-act
    downloads in the download folder. Both lists are emptied at the end of every
    episode whether or not the files were deleted.
    """

    temp_files: list[Path] = field(default_factory=list)
    downloaded_files: list[Path] = field(default_factory=list)

    def track_temp(self, path: Path) -> None:
        if path not in self.temp_files:
            self.temp_files.append(path)

    def track_download(self, path: Path) -> None:
        if path not in self.downloaded_files:
            self.downloaded_files.append(path)

    def clear(self) -> None:
        self.temp_files.clear()
        self.downloaded_files.clear()

    @property
    def is_empty(self) -> bool:
        return not self.temp_files and not self.downloaded_files
