"""wpslim configuration and settings.

Configuration is stored in ~/.config/wpslim/config.toml and split into
one section per command:

    [purge]
    uploads_subdir = "wp-content/uploads"
    purge_file = "images_to_purge.txt"

    [convert]
    max_dimension = 1500
    quality = 75
    speed = 0
    jobs = "all"
    workers = 4

    [ratio]
    top_n = 30

A missing file yields the defaults.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from wpslim.core.paths import DEFAULT_UPLOADS_SUBDIR, get_config_path


def _default_workers() -> int:
    return max(1, min(4, os.cpu_count() or 1))


class PurgeSettings(BaseModel):
    """Settings for purge list generation."""

    model_config = ConfigDict(extra="forbid")

    uploads_subdir: str = DEFAULT_UPLOADS_SUBDIR
    purge_file: str = "images_to_purge.txt"


class ConvertSettings(BaseModel):
    """Settings for AVIF conversion.

    Attributes:
        max_dimension: Bounding box (pixels) for width and height.
        quality: avifenc quality (0-100).
        speed: avifenc speed (0 = slowest, smallest output).
        jobs: avifenc thread count, or "all".
        workers: Number of images converted concurrently.
    """

    model_config = ConfigDict(extra="forbid")

    max_dimension: Annotated[int, Field(ge=1, description="Max width/height in pixels")] = 1500
    quality: Annotated[int, Field(ge=0, le=100, description="avifenc quality (0-100)")] = 75
    speed: Annotated[int, Field(ge=0, le=10, description="avifenc speed (0-10)")] = 0
    jobs: Annotated[str, Field(description="avifenc --jobs value")] = "all"
    workers: int = Field(
        default_factory=_default_workers,
        ge=1,
        le=64,
        description="Concurrent conversions (1-64)",
    )

    @field_validator("jobs", mode="before")
    @classmethod
    def validate_jobs(cls, v: object) -> str:
        """Accept "all" or a positive integer."""
        value = str(v).strip()
        if value == "all":
            return value
        if not value.isdigit() or int(value) < 1:
            msg = f"jobs must be 'all' or a positive integer, got '{v}'"
            raise ValueError(msg)
        return value


class RatioSettings(BaseModel):
    """Settings for the compression ratio report."""

    model_config = ConfigDict(extra="forbid")

    top_n: Annotated[int, Field(ge=1, description="Rows in the top images table")] = 30


class WpslimConfig(BaseModel):
    """Top-level wpslim configuration."""

    model_config = ConfigDict(extra="forbid")

    purge: PurgeSettings = Field(default_factory=PurgeSettings)
    convert: ConvertSettings = Field(default_factory=ConvertSettings)
    ratio: RatioSettings = Field(default_factory=RatioSettings)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> WpslimConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated WpslimConfig. Defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return WpslimConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return WpslimConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: WpslimConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The configuration to save.
        path: Destination path. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config_to_dict(config), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: WpslimConfig) -> dict[str, Any]:
    """Convert a WpslimConfig to a dictionary for TOML serialization."""
    return config.model_dump(mode="json")
