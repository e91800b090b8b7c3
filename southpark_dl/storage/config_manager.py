"""
Manages loading, validation, and migration of the INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from southpark_dl.exceptions import ConfigurationError
from southpark_dl.models.config import AssemblerConfig

log = logging.getLogger(__name__)

BOOLEAN_KEYS = {
    "remove_temp_files",
    "remove_downloaded_files",
    "verify_checksums",
    "check_integrity",
}
INTEGER_KEYS = {"max_resume_attempts"}


def default_settings(config_dir: Path) -> dict[str, Any]:
    """Default values for every INI key, with folders placed next to the config."""
    defaults = AssemblerConfig.model_construct()
    settings = {key: getattr(defaults, key) for key in AssemblerConfig.get_ini_keys()}
    settings.update(
        {
            "download_folder": config_dir / "downloads",
            "temp_folder": config_dir / "tmp",
            "output_folder": config_dir / "output",
            "episode_db": config_dir / "episodes.xml",
            "player_db": config_dir / "players.xml",
        }
    )
    return settings


def _to_ini_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(
        self, cli_options: dict[str, Any] | None = None
    ) -> AssemblerConfig:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        Args:
            cli_options: A dictionary of options provided via the command line.

        Returns:
            A validated AssemblerConfig object.

        Raises:
            ConfigurationError: If the config file is missing, invalid, or validation
            fails.
        """
        if not self.config_file_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found at '{self.config_file_path}'. "
                "Please run 'southpark-dl init' first."
            )

        try:
            self._parser.read(self.config_file_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigurationError(f"Error parsing configuration file: {e}") from e

        if self._migrate_if_needed():
            log.info(
                "[yellow]Configuration file was updated with new default values."
                "[/yellow]"
            )

        config_from_file = self.get_config_as_dict()

        # Override with CLI options
        if cli_options:
            config_from_file.update(cli_options)

        try:
            config_dir = self.config_file_path.parent
            return AssemblerConfig(**config_from_file, config_path=str(config_dir))
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_new_config(self, settings: dict[str, Any] | None = None) -> None:
        """
        Creates and saves a new configuration file.

        Args:
            settings: Values that replace the defaults.
        """
        config = configparser.ConfigParser(interpolation=None)
        values = default_settings(self.config_file_path.parent)
        if settings:
            values.update(settings)

        config["DEFAULT"] = {
            key: _to_ini_value(values[key]) for key in sorted(values)
        }

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                config.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def get_config_as_dict(self) -> dict[str, Any]:
        """Reads the 'DEFAULT' section of the INI file into a dictionary."""
        section = self._parser["DEFAULT"]
        result: dict[str, Any] = {}
        for key in AssemblerConfig.get_ini_keys():
            if key not in section:
                continue
            try:
                if key in BOOLEAN_KEYS:
                    result[key] = section.getboolean(key)
                elif key in INTEGER_KEYS:
                    result[key] = section.getint(key)
                else:
                    result[key] = section.get(key)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid value for '{key}' in '{self.config_file_path}': {e}"
                ) from e
        return result

    def _migrate_if_needed(self) -> bool:
        """Adds missing default values to an existing config file."""
        defaults = default_settings(self.config_file_path.parent)
        needs_saving = False

        config_section = self._parser["DEFAULT"]

        for key, default_value in defaults.items():
            if key not in config_section:
                config_section[key] = _to_ini_value(default_value)
                needs_saving = True
                log.debug(
                    f"Migrating config: added missing key '{key}' with "
                    f"value '{config_section[key]}'."
                )

        if needs_saving:
            try:
                with open(self.config_file_path, "w", encoding="utf-8") as f:
                    self._parser.write(f)
            except OSError as e:
                log.error(f"Could not save migrated configuration file: {e}")
                return False

        return needs_saving
