"""
Media Processing Layer.

This package is responsible for all media file operations: running the external
programs, downloading acts, merging streams, renaming and integrity validation.
"""

from .downloader import Downloader
from .integrity import FileIntegrityChecker
from .merger import Merger
from .renamer import Renamer
from .runner import Command, Tool, ToolOutcome, ToolRunner, classify

__all__ = [
    "Command",
    "Downloader",
    "FileIntegrityChecker",
    "Merger",
    "Renamer",
    "Tool",
    "ToolOutcome",
    "ToolRunner",
    "classify",
]
