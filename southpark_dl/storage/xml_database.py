"""
Base class for the read-only XML metadata files.
"""

import logging
from pathlib import Path

from bs4 import BeautifulSoup, FeatureNotFound

from southpark_dl.exceptions import ConfigurationError

log = logging.getLogger(__name__)


class XmlDatabase:
    """Loads an XML document once and exposes it as a BeautifulSoup tree."""

    def __init__(self, source: Path):
        self.source = Path(source)
        if not self.source.is_file():
            raise ConfigurationError(f"Metadata file not found at '{self.source}'.")
        try:
            with open(self.source, "rb") as f:
                self.data = BeautifulSoup(f, "xml")
        except (OSError, FeatureNotFound) as e:
            raise ConfigurationError(
                f"Could not read metadata file '{self.source}': {e}"
            ) from e
        log.debug(f"Loaded metadata from '{self.source}'.")
