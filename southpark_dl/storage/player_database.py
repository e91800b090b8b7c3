"""
Lookup of the player descriptor the streaming client needs for its handshake.
"""

from dataclasses import dataclass

from southpark_dl.exceptions import UnknownReferenceError

from .xml_database import XmlDatabase


@dataclass(frozen=True)
class PlayerDescriptor:
    """The SWF player fields passed to the streaming client."""

    url: str
    size: str
    hash: str


class PlayerDatabase(XmlDatabase):
    """Handling of the players database."""

    def get_players(self) -> list[PlayerDescriptor]:
        players = []
        for player in self.data.find_all("player"):
            players.append(self._to_descriptor(player))
        return players

    def find_player(self, player_url: str) -> PlayerDescriptor:
        """Finds the player whose SWF URL matches `player_url` exactly."""
        for player in self.data.find_all("player"):
            swfurl = player.find("swfurl")
            if swfurl is not None and swfurl.get_text(strip=True) == player_url:
                return self._to_descriptor(player)
        raise UnknownReferenceError(player_url, self.source, kind="player URL")

    def _to_descriptor(self, player) -> PlayerDescriptor:
        def text(name: str) -> str:
            tag = player.find(name)
            return tag.get_text(strip=True) if tag is not None else ""

        return PlayerDescriptor(
            url=text("swfurl"), size=text("swfsize"), hash=text("swfhash")
        )
