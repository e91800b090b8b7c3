"""
Provides methods for checking the integrity of downloaded media files.
"""

import hashlib
import logging
from pathlib import Path

from mutagen import MutagenError
from mutagen.mp4 import MP4, MP4StreamInfoError

log = logging.getLogger(__name__)

_CHUNK_SIZE = 1048576  # 1 MB


class FileIntegrityChecker:
    """A collection of static methods for validating media file integrity."""

    @staticmethod
    def md5sum(filepath: Path) -> str:
        """Returns the hex MD5 digest of a file's content."""
        digest = hashlib.md5()  # noqa: S324
        with open(filepath, "rb") as f:
            for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
        return digest.hexdigest()

    @staticmethod
    def check_mp4(filepath: Path) -> bool:
        """
        Checks that a downloaded act is a readable MP4 container with a
        non-zero playable duration. A stream cut off by the server usually
        fails here before it reaches the transcoder.
        """
        try:
            act = MP4(filepath)
        except MP4StreamInfoError:
            log.warning(f"Act '{filepath.name}' has no readable movie header.")
            return False
        except MutagenError as e:
            log.warning(f"Act '{filepath.name}' is not an MP4 container: {e}")
            return False
        if act.info is None or act.info.length <= 0:
            log.warning(f"Act '{filepath.name}' has no playable duration.")
            return False
        log.debug(f"Act '{filepath.name}' plays for {act.info.length:.1f}s.")
        return True
