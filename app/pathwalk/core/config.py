"""Walk configuration and settings.

This module provides the configuration model and I/O functions for the
defaults used by the CLI: link following, read buffer size, the extensions
to look for, and whether zip/jar archives are searched.

Configuration is stored in ~/.config/pathwalk/config.toml
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pathwalk.buffer import DEFAULT_BUFFER_SIZE, MAX_CAPACITY
from pathwalk.core.errors import ConfigError, ConfigNotFoundError, ConfigParseError
from pathwalk.core.paths import get_config_path

DEFAULT_EXTENSIONS: tuple[str, ...] = ("java", "class")


class WalkConfig(BaseModel):
    """Configuration for walks started from the CLI.

    Attributes:
        follow_symlinks: Follow symbolic links while walking (loops are suppressed).
        buffer_size: Initial buffer size for reads of unknown length.
        extensions: File extensions (without leading dot) to search for.
        include_archives: Also search entries inside .jar and .zip files.
    """

    model_config = ConfigDict(extra="forbid")

    follow_symlinks: Annotated[
        bool,
        Field(description="Follow symbolic links while walking"),
    ] = True
    buffer_size: Annotated[
        int,
        Field(ge=1, le=MAX_CAPACITY, description="Initial read buffer size in bytes"),
    ] = DEFAULT_BUFFER_SIZE
    extensions: Annotated[
        list[str],
        Field(
            default_factory=lambda: list(DEFAULT_EXTENSIONS),
            min_length=1,
            description="Extensions to search for",
        ),
    ]
    include_archives: Annotated[
        bool,
        Field(description="Search inside .jar and .zip archives"),
    ] = True

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        """Validate that extensions are non-empty and carry no leading dot."""
        for ext in v:
            if not ext:
                msg = "Extension cannot be empty"
                raise ValueError(msg)
            if ext.startswith("."):
                msg = f"Extension must not start with '.': {ext}"
                raise ValueError(msg)
        return v


def load_config(path: Path | None = None) -> WalkConfig:
    """Load walk configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated WalkConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return WalkConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> WalkConfig:
    """Load the configuration, falling back to defaults if none exists.

    Parse and validation errors still propagate.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        return WalkConfig()


def save_config(config: WalkConfig, path: Path | None = None) -> Path:
    """Save walk configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The WalkConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
