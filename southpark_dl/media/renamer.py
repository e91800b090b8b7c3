"""
Gives a merged episode its final name, containing the titles of all languages.
"""

import logging
import os
from pathlib import Path

from pathvalidate import sanitize_filename

from southpark_dl.exceptions import FileAlreadyExistsError, FileDoesNotExistError
from southpark_dl.models.config import AssemblerConfig
from southpark_dl.storage.episode_database import EpisodeDatabase
from southpark_dl.utils.formatting import compose_title
from southpark_dl.utils.naming import build_product_filename

log = logging.getLogger(__name__)


class Renamer:
    """Renames the merged output to '<label> SxxEyy Title (Title2) LANGS.mkv'."""

    def __init__(self, config: AssemblerConfig, episode_db: EpisodeDatabase):
        self.config = config
        self.episode_db = episode_db

    def build_title(self, episode: int) -> str:
        titles = [
            self.episode_db.get_title(self.config.season, episode, language)
            for language in self.config.languages
        ]
        return sanitize_filename(compose_title(titles))

    def rename(self, source: Path, episode: int) -> Path:
        if not source.exists():
            raise FileDoesNotExistError(source)

        target = self.config.output_folder / build_product_filename(
            self.config.product_label,
            self.config.season,
            episode,
            self.config.languages,
            self.build_title(episode),
        )
        if target.exists():
            raise FileAlreadyExistsError(target)

        os.rename(source, target)
        log.info(f"  [green]✓ Saved[/] [bold]{target.name}[/bold]")
        return target
