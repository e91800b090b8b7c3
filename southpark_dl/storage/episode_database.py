"""
Read-only access to the episode database: seasons, episodes, acts, stream URLs,
checksums, audio delays and localized titles.

Expected layout::

    <episodes>
      <season id="2">
        <episode id="1">
          <language code="de">
            <title>...</title>
            <act id="1" delay="870">
              <stream resolution="high" checksum="md5...">rtmpe://...</stream>
            </act>
          </language>
        </episode>
      </season>
    </episodes>
"""

import logging

from bs4 import Tag

from southpark_dl.exceptions import UnknownReferenceError

from .xml_database import XmlDatabase

log = logging.getLogger(__name__)


class EpisodeDatabase(XmlDatabase):
    """Answers structured queries about the episodes of each season."""

    def get_episode_ids(self, season: int, language: str) -> list[int]:
        """All episodes of `season` available in `language`, in document order."""
        season_tag = self._season(season)
        episode_ids = []
        for episode_tag in season_tag.find_all("episode", recursive=False):
            if self._find_language(episode_tag, language) is not None:
                episode_ids.append(int(episode_tag["id"]))
        return episode_ids

    def get_acts(self, season: int, episode: int, language: str) -> list[str]:
        """Ordered act ids of an episode in one language."""
        language_tag = self._language(season, episode, language)
        return [act["id"] for act in language_tag.find_all("act", recursive=False)]

    def get_url(
        self, season: int, episode: int, language: str, act: str, resolution: str
    ) -> str:
        stream = self._stream(season, episode, language, act, resolution)
        url = stream.get_text(strip=True)
        if not url:
            raise UnknownReferenceError(
                f"S{season:02}E{episode:02}A{act} {language} {resolution}",
                self.source,
                kind="stream URL",
            )
        return url

    def get_checksum(
        self, season: int, episode: int, language: str, act: str, resolution: str
    ) -> str | None:
        """The expected MD5 of an act download, or None if the database has none."""
        stream = self._stream(season, episode, language, act, resolution)
        checksum = stream.get("checksum", "").strip()
        return checksum or None

    def get_act_audio_delay(
        self, season: int, episode: int, language: str, act: str
    ) -> int:
        """Audio delay of an act in milliseconds; 0 when not given."""
        act_tag = self._act(season, episode, language, act)
        delay = act_tag.get("delay", "").strip()
        if not delay:
            return 0
        try:
            return int(delay)
        except ValueError:
            log.warning(
                f"[yellow]Ignoring invalid audio delay '{delay}' for act {act} "
                f"({language}).[/yellow]"
            )
            return 0

    def get_title(self, season: int, episode: int, language: str) -> str:
        language_tag = self._language(season, episode, language)
        title = language_tag.find("title", recursive=False)
        if title is None or not title.get_text(strip=True):
            raise UnknownReferenceError(
                f"S{season:02}E{episode:02} {language}", self.source, kind="title"
            )
        return title.get_text(strip=True)

    def _season(self, season: int) -> Tag:
        root = self.data.find("episodes")
        season_tag = (
            root.find("season", attrs={"id": str(season)}, recursive=False)
            if root is not None
            else None
        )
        if season_tag is None:
            raise UnknownReferenceError(str(season), self.source, kind="season")
        return season_tag

    def _episode(self, season: int, episode: int) -> Tag:
        episode_tag = self._season(season).find(
            "episode", attrs={"id": str(episode)}, recursive=False
        )
        if episode_tag is None:
            raise UnknownReferenceError(
                f"S{season:02}E{episode:02}", self.source, kind="episode"
            )
        return episode_tag

    @staticmethod
    def _find_language(episode_tag: Tag, language: str) -> Tag | None:
        for language_tag in episode_tag.find_all("language", recursive=False):
            if language_tag.get("code", "").lower() == language.lower():
                return language_tag
        return None

    def _language(self, season: int, episode: int, language: str) -> Tag:
        language_tag = self._find_language(self._episode(season, episode), language)
        if language_tag is None:
            raise UnknownReferenceError(
                f"S{season:02}E{episode:02} {language}", self.source, kind="language"
            )
        return language_tag

    def _act(self, season: int, episode: int, language: str, act: str) -> Tag:
        act_tag = self._language(season, episode, language).find(
            "act", attrs={"id": str(act)}, recursive=False
        )
        if act_tag is None:
            raise UnknownReferenceError(
                f"S{season:02}E{episode:02}A{act} {language}", self.source, kind="act"
            )
        return act_tag

    def _stream(
        self, season: int, episode: int, language: str, act: str, resolution: str
    ) -> Tag:
        stream = self._act(season, episode, language, act).find(
            "stream", attrs={"resolution": resolution}, recursive=False
        )
        if stream is None:
            raise UnknownReferenceError(
                f"S{season:02}E{episode:02}A{act} {language} {resolution}",
                self.source,
                kind="resolution",
            )
        return stream
