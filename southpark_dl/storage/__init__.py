"""
Storage Layer.

This package handles configuration files and the read-only episode and player
metadata databases.
"""

from .config_manager import ConfigManager
from .episode_database import EpisodeDatabase
from .player_database import PlayerDatabase, PlayerDescriptor

__all__ = ["ConfigManager", "EpisodeDatabase", "PlayerDatabase", "PlayerDescriptor"]
