"""Application configuration model and TOML loading.

Configuration is read from the ``[filecast]`` table of a TOML file and
then overridden by environment variables:

    FILECAST_TEMP_DIR     directory for temporary files
    FILECAST_SEARCH_PATH  PATH-style string for locating converters
    FILECAST_LOG_LEVEL    logging level name
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ValidationError, field_validator

from filecast.domain.exceptions import ConfigurationError

__all__ = ["AppConfig", "DEFAULT_CONFIG_PATH", "ENV_OVERRIDES", "load_config"]

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/filecast/config.toml")

ENV_OVERRIDES: dict[str, str] = {
    "FILECAST_TEMP_DIR": "temp_dir",
    "FILECAST_SEARCH_PATH": "search_path",
    "FILECAST_LOG_LEVEL": "log_level",
}

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class AppConfig(BaseModel):
    """Settings shared by the processor, CLI and logging setup."""

    temp_dir: Path | None = None
    search_path: str | None = None
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    @field_validator("temp_dir", mode="before")
    @classmethod
    def _expand_temp_dir(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str) and not value.strip():
            raise ValueError("temp_dir must be set to a directory path or omitted")
        return Path(value).expanduser().resolve()

    @field_validator("search_path")
    @classmethod
    def _blank_search_path(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def load_config(path: Path | None = None, environ: Mapping[str, str] | None = None) -> AppConfig:
    """Load configuration from ``path`` (default ``~/.config/filecast/config.toml``).

    A missing file yields defaults. Environment overrides win over the file.

    Raises:
        ConfigurationError: If the file is not valid TOML or a value is invalid
    """
    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    environ = os.environ if environ is None else environ

    data: dict[str, Any] = {}
    if config_path.is_file():
        try:
            with open(config_path, "rb") as f:
                data = dict(tomllib.load(f).get("filecast", {}))
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError.invalid_config_file(config_path, exc) from exc
        logger.debug("Loaded config from %s", config_path)
    elif path is not None:
        logger.warning("Config file %s not found, using defaults", config_path)

    for env_name, field_name in ENV_OVERRIDES.items():
        if env_name in environ:
            data[field_name] = environ[env_name]

    try:
        return AppConfig(**data)
    except ValidationError as exc:
        raise ConfigurationError.invalid_config_file(config_path, exc) from exc
