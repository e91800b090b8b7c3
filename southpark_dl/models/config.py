"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_PRODUCT_LABEL = "South Park"


class AssemblerConfig(BaseModel):
    """A validated configuration model for the application."""

    # External programs
    stream_client: str = "rtmpdump"
    transcoder: str = "ffmpeg"
    muxer: str = "mkvmerge"

    # Folders
    download_folder: Path = Path("downloads")
    temp_folder: Path = Path("tmp")
    output_folder: Path = Path("output")

    # Metadata
    episode_db: Path = Path("data/episodes.xml")
    player_db: Path = Path("data/players.xml")
    player_url: str = ""
    resolution: str = "high"

    # Behavior
    remove_temp_files: bool = True
    remove_downloaded_files: bool = True
    verify_checksums: bool = True
    check_integrity: bool = False
    max_resume_attempts: int = 0
    product_label: str = DEFAULT_PRODUCT_LABEL

    # Internal fields not loaded from INI file
    season: int = Field(0, repr=False)
    episode: int = Field(0, repr=False)
    languages: list[str] = Field(default_factory=list, repr=False)
    config_path: str = Field("", repr=False)

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @property
    def main_language(self) -> str:
        """The first requested language; its acts and video stream are authoritative."""
        if not self.languages:
            raise ValueError("No language configured.")
        return self.languages[0]

    @field_validator("stream_client", "transcoder", "muxer")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        if not v:
            raise ValueError(f"'{info.field_name}' cannot be empty.")
        return v

    @field_validator(
        "download_folder", "temp_folder", "output_folder", "episode_db", "player_db"
    )
    @classmethod
    def expand_paths(cls, v: Path) -> Path:
        return Path(v).expanduser()

    @field_validator("max_resume_attempts")
    @classmethod
    def validate_resume_attempts(cls, v: int) -> int:
        """0 means the download resume loop is unbounded."""
        if v < 0:
            raise ValueError("Max resume attempts cannot be negative (0 = unlimited).")
        return v

    @field_validator("season", "episode")
    @classmethod
    def validate_numbers(cls, v: int, info) -> int:
        if v < 0:
            raise ValueError(f'"{v}" is not a valid {info.field_name} number.')
        return v

    @field_validator("languages")
    @classmethod
    def validate_languages(cls, v: list[str]) -> list[str]:
        """Normalizes language codes to lower case and rejects bad or repeated codes."""
        normalized = [code.strip().lower() for code in v]
        for code in normalized:
            if not code.isalnum():
                raise ValueError(f'"{code}" is not a valid language code.')
        if len(set(normalized)) != len(normalized):
            raise ValueError("Each language may only be requested once.")
        return normalized

    @model_validator(mode="after")
    def validate_folders(self) -> "AssemblerConfig":
        """Checks that the three working folders are distinct."""
        folders = {
            self.download_folder.resolve(),
            self.temp_folder.resolve(),
            self.output_folder.resolve(),
        }
        if len(folders) != 3:
            raise ValueError(
                "Download, temp and output folders must be different directories."
            )
        return self

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"season", "episode", "languages", "config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
